# どこで: `src/loopix/sketches/metallic_ratios.py`。
# 何を: 黄金比の冪乗螺旋・白銀比の塔・青銅比の輪を 3D で重ねるスケッチ。
# なぜ: 金属比（x² = n·x + 1 の正根）による成長則を、上限で打ち切る冪乗螺旋として見せるため。

from __future__ import annotations

import math

import numpy as np

from loopix.core.camera import Camera
from loopix.core.curves.spiral import (
    BRONZE_RATIO,
    GOLDEN_ANGLE,
    GOLDEN_RATIO,
    SILVER_RATIO,
    metallic_angle,
    power_spiral,
)
from loopix.core.entities import Entity, seed_ring
from loopix.core.marks import Dot, Ring, Stroke
from loopix.core.motion import breathe, orbit_position
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

SPIRAL_POINTS = 400
SPIRAL_BOUND = 520.0
TOWER_COUNT = 8
RING_COUNT = 6


def _camera(t: float) -> Camera:
    return Camera(yaw=0.2 * t, pitch=0.55 + 0.15 * math.sin(0.3 * t), focal=900.0)


@sketch(
    canvas_size=(720, 1280),
    increment=1.0 / 60.0,
    background=(5, 5, 12),
    fade=60.0,
    camera=_camera,
    fps=60.0,
    bitrate=8_000_000,
    export_name="metallic_ratios_3d",
)
def metallic_ratios(scene: SceneState, rng: np.random.Generator) -> None:
    """黄金・白銀・青銅比の幾何。"""

    palette = scene.palette

    def render_golden(_e: Entity, t: float) -> list[Dot]:
        pts = power_spiral(
            SPIRAL_POINTS,
            k=50.0,
            base=GOLDEN_RATIO,
            exponent=0.03,
            angle_step=GOLDEN_ANGLE,
            t=0.2 * t,
            bound=SPIRAL_BOUND,
        )
        n = max(pts.shape[0], 1)
        return [
            Dot(tuple(p), 2.0 + 4.0 * i / n, palette[2 + i % 4], 220.0)
            for i, p in enumerate(pts)
        ]

    def render_tower(e: Entity, t: float) -> Stroke:
        x, _y, z = orbit_position(e, t, rate=0.3)
        grow = 0.6 + 0.4 * math.sin(0.8 * t + e.phase)
        h = 60.0 * SILVER_RATIO**grow
        return Stroke(np.array([[x, 0.0, z], [x, -h, z]]), palette[5], weight=3.0, alpha=200.0)

    def render_ring(e: Entity, t: float) -> Ring:
        k = e.color_index
        r = 20.0 * BRONZE_RATIO ** (0.6 * k) * breathe(t, e.phase, amount=0.05, rate=0.9)
        y = 40.0 * math.sin(metallic_angle(3) * k + 0.5 * t)
        return Ring((0.0, y, 0.0), r, palette[k], weight=1.5, alpha=160.0)

    towers = seed_ring(TOWER_COUNT, radius=300.0, speed=1.0, color_index=5)
    rings = [Entity(phase=0.7 * k, color_index=k) for k in range(RING_COUNT)]
    scene.add_layer("bronze", rings, render_ring)
    scene.add_layer("silver", towers, render_tower)
    scene.add_layer("golden", [Entity()], render_golden)
