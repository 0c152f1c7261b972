# どこで: `src/loopix/sketches/demoivre_lissajous.py`。
# 何を: De Moivre の n 乗回転で配置した 12 層の点群と、4 本の 3D リサージュ曲線を描くモノクロ 3D スケッチ。
# なぜ: 層ごとに冪 n を 2..8 へ写した複素回転と、周期曲線の位相ずらしを同じ t で動かすため。

from __future__ import annotations

import math

import numpy as np

from loopix.core.camera import Camera
from loopix.core.curves.lissajous import LissajousSpec, de_moivre, lissajous3d
from loopix.core.entities import Entity
from loopix.core.marks import Dot, Stroke
from loopix.core.motion import map_range
from loopix.core.palette import MONOCHROME
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

NUM_LAYERS = 12
POINTS_PER_LAYER = 60

LISSAJOUS_CURVES = (
    LissajousSpec(a=3, b=2, c=5, delta=0.0, scale=350.0),
    LissajousSpec(a=5, b=4, c=3, delta=math.pi / 4, scale=400.0),
    LissajousSpec(a=3, b=4, c=7, delta=math.pi / 2, scale=450.0),
    LissajousSpec(a=5, b=6, c=4, delta=math.pi / 3, scale=380.0),
)


def _camera(t: float) -> Camera:
    return Camera(yaw=0.15 * t, pitch=0.3 * math.sin(0.1 * t), focal=1000.0, zoom=0.8)


def demoivre_points() -> list[Entity]:
    """12 層 × 60 点。angle = θ、speed = 冪 n、color_index = 層番号。"""

    out: list[Entity] = []
    for layer in range(NUM_LAYERS):
        n = map_range(layer, 0, NUM_LAYERS, 2.0, 8.0)
        for i in range(POINTS_PER_LAYER):
            theta = map_range(i, 0, POINTS_PER_LAYER, 0.0, 2.0 * math.pi)
            out.append(Entity(angle=theta, speed=n, color_index=layer, seed=layer * POINTS_PER_LAYER + i))
    return out


@sketch(
    canvas_size=(720, 1280),
    increment=1.0 / 60.0,
    background=(0, 0, 0),
    palette=MONOCHROME,
    camera=_camera,
    fps=60.0,
    container="webm",
    export_name="demoivre_lissajous",
)
def demoivre_lissajous(scene: SceneState, rng: np.random.Generator) -> None:
    """De Moivre 構造とリサージュ曲線。"""

    def render_point(e: Entity, t: float) -> Dot:
        layer = e.color_index
        n = e.speed + 2.0 * math.sin(0.5 * t + 0.5 * layer)
        radius = 200.0 + 30.0 * layer + 50.0 * math.sin(0.8 * t + 0.1 * e.seed)
        x, y = de_moivre(e.angle + 0.25 * t, n, radius)
        z = map_range(layer, 0, NUM_LAYERS, -400.0, 400.0) + 100.0 * math.sin(0.5 * t + e.angle)
        b = int(map_range(z, -500.0, 500.0, 80.0, 255.0))
        return Dot(
            (x, y, z),
            8.0 + 6.0 * math.sin(1.2 * t + 0.2 * e.seed),
            (b, b, b),
            map_range(abs(z), 0.0, 500.0, 255.0, 150.0),
        )

    def render_curve(e: Entity, t: float) -> Stroke:
        spec = LISSAJOUS_CURVES[e.seed]
        pts = lissajous3d(spec, samples=360, t=0.2 * t, turns=2.0)
        b = int(map_range(e.seed, 0, len(LISSAJOUS_CURVES), 180.0, 255.0))
        return Stroke(pts, (b, b, b), weight=1.0, alpha=60.0)

    scene.add_layer("lissajous", [Entity(seed=k) for k in range(len(LISSAJOUS_CURVES))], render_curve)
    scene.add_layer("demoivre", demoivre_points(), render_point)
