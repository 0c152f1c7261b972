# どこで: `src/loopix/sketches/harmonic_bloom.py`。
# 何を: フィボナッチ球の殻・球面調和 / supershape の芯・黄金角の種子盤を重ねるスケッチ。
# なぜ: 黄金角による均等配置と、球面調和・superformula の曲面を 1 枚に並べて見せるため。

from __future__ import annotations

import math

import numpy as np

from loopix.core.camera import Camera
from loopix.core.curves.harmonics import spherical_harmonic_lines, supershape_lines
from loopix.core.curves.spiral import sqrt_spiral
from loopix.core.entities import Entity, seed_fibonacci_sphere, seed_phyllotaxis
from loopix.core.marks import Dot, Stroke
from loopix.core.motion import breathe
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

SHELL_COUNT = 240
SHELL_RADIUS = 380.0
SEED_COUNT = 180
SEED_SPACING = 14.0
DISC_DEPTH = 420.0
MODE_COUNT = 2


def _camera(t: float) -> Camera:
    return Camera(yaw=0.15 * t, pitch=0.35 * math.sin(0.1 * t), focal=900.0)


@sketch(
    canvas_size=(720, 1280),
    increment=1.0 / 60.0,
    background=(4, 4, 10),
    fade=50.0,
    camera=_camera,
    fps=60.0,
    bitrate=8_000_000,
    modes=MODE_COUNT,
)
def harmonic_bloom(scene: SceneState, rng: np.random.Generator) -> None:
    """球面調和の芯とフィボナッチ球の殻。M で芯を supershape に切り替える。"""

    palette = scene.palette
    controls = scene.controls
    # l=3 の m は 1..3 から選ぶ
    m_order = int(rng.integers(1, 4))

    def render_shell(e: Entity, t: float) -> Dot:
        s = breathe(t, e.angle, amount=0.04, rate=0.7)
        x, y, z = e.position
        alpha = 120.0 + 100.0 * math.sin(0.9 * t + e.angle) ** 2
        return Dot((x * s, y * s, z * s), e.size, palette[e.color_index], alpha)

    def render_core(_e: Entity, t: float) -> list[Stroke]:
        if int(controls.get("mode", 0.0)) == 1:
            lines = supershape_lines(
                m1=5.0 + 2.0 * math.sin(0.2 * t),
                m2=3.0,
                n1=1.0,
                scale=160.0,
            )
        else:
            lines = spherical_harmonic_lines(3, m_order, scale=220.0 * breathe(t, amount=0.1, rate=0.5))
        n = max(len(lines), 1)
        return [
            Stroke(line, palette[2 + i * 4 // n], weight=1.0, alpha=150.0)
            for i, line in enumerate(lines)
        ]

    def render_seed(e: Entity, t: float) -> Dot:
        a = e.angle + 0.1 * t
        return Dot(
            (e.radius * math.cos(a), DISC_DEPTH, e.radius * math.sin(a)),
            e.size * breathe(t, e.angle, amount=0.3, rate=1.2),
            palette[e.color_index],
            200.0,
        )

    def render_trace(_e: Entity, t: float) -> Stroke:
        pts = sqrt_spiral(SEED_COUNT, spacing=SEED_SPACING, t=0.1 * t)
        # XY 平面の螺旋を種子盤と同じ y = DISC_DEPTH の XZ 平面へ移す
        disc = np.stack([pts[:, 0], np.full(pts.shape[0], DISC_DEPTH), pts[:, 1]], axis=1)
        return Stroke(disc, palette[1], weight=0.8, alpha=90.0)

    shell = seed_fibonacci_sphere(SHELL_COUNT, radius=SHELL_RADIUS, size=2.5, palette_size=len(palette))
    seeds = seed_phyllotaxis(SEED_COUNT, spacing=SEED_SPACING, size=3.0, palette_size=len(palette))
    scene.add_layer("shell", shell, render_shell)
    scene.add_layer("core", [Entity()], render_core)
    scene.add_layer("trace", [Entity()], render_trace)
    scene.add_layer("seeds", seeds, render_seed)
