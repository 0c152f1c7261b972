# どこで: `src/loopix/sketches/cosmic_dust.py`。
# 何を: 折り返しで漂う塵・明滅する星・周回するエネルギー粒子・回転マンダラを重ねる 2D スケッチ。
# なぜ: WRAP 境界と残像（半透明の背景重ね）の組み合わせを使うため。

from __future__ import annotations

import numpy as np

from loopix.core.boundary import BoundaryPolicy, Box
from loopix.core.curves.sacred import flower_of_life, regular_polygon
from loopix.core.entities import Entity, EntityConfig, create_entities
from loopix.core.marks import Dot, Ring, Stroke
from loopix.core.motion import breathe, drift_position, orbit_position, twinkle_alpha
from loopix.core.palette import TWILIGHT
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

BOX = Box.centered(360.0, 640.0)

STARS = EntityConfig(
    speed_range=(0.5, 2.0),
    size_range=(0.5, 2.0),
    bounds=(360.0, 640.0, 0.0),
    palette_size=len(TWILIGHT),
)
# 1 フレーム ±0.2 px を t 単位（1 フレーム = 0.008）に換算した速度
DUST = EntityConfig(
    size_range=(1.0, 3.0),
    velocity_range=(-25.0, 25.0),
    bounds=(360.0, 640.0, 0.0),
    palette_size=len(TWILIGHT),
)
ENERGY = EntityConfig(
    radius_range=(50.0, 300.0),
    speed_range=(0.5, 2.0),
    size_range=(2.0, 5.0),
    palette_size=len(TWILIGHT),
)


@sketch(
    canvas_size=(720, 1280),
    increment=0.008,
    background=(26, 21, 37),
    fade=20.0,
    export_name="cosmic_dust",
)
def cosmic_dust(scene: SceneState, rng: np.random.Generator) -> None:
    """漂う塵と星、エネルギーの渦。"""

    palette = scene.palette

    def render_star(e: Entity, t: float) -> Dot:
        return Dot(e.position, e.size, palette[e.color_index], twinkle_alpha(e, t, lo=50.0, hi=255.0))

    def render_dust(e: Entity, t: float) -> Dot:
        pos = drift_position(e, t, box=BOX, policy=BoundaryPolicy.WRAP)
        return Dot(pos, e.size, palette[e.color_index], 40.0)

    def render_mandala(layer: Entity, t: float) -> Stroke:
        i = layer.color_index
        direction = 1.0 if i % 2 == 0 else -1.0
        radius = (60.0 + i * 50.0) * breathe(t, 0.0, amount=0.05, rate=0.5)
        pts = regular_polygon(5 + i, radius, rotation=direction * 0.15 * t)
        return Stroke(pts, palette[i], weight=1.0 + 0.125 * i, alpha=160.0, closed=True)

    def render_flower(_e: Entity, t: float) -> list[Ring]:
        return [
            Ring((x, y, 0.0), 40.0, palette[k], weight=1.0, alpha=90.0)
            for k, (x, y) in enumerate(flower_of_life(40.0, rings=2, rotation=0.1 * t))
        ]

    def render_energy(e: Entity, t: float) -> Dot:
        # XZ 平面の周回を画面平面へ写す
        x, _y, z = orbit_position(e, t)
        return Dot((x, z, 0.0), e.size, palette[e.color_index], 200.0)

    scene.add_layer("stars", create_entities(200, STARS, rng=rng), render_star)
    scene.add_layer("dust", create_entities(300, DUST, rng=rng), render_dust)
    scene.add_layer("mandala", [Entity(color_index=i) for i in range(1, 9)], render_mandala)
    scene.add_layer("flower", [Entity()], render_flower)
    scene.add_layer("energy", create_entities(100, ENERGY, rng=rng), render_energy)
