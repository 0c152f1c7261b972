# どこで: `src/loopix/sketches/aizawa_flow.py`。
# 何を: 事前積分した Aizawa アトラクタの軌跡を窓で再生し、光の玉と花弁球面を添える 3D スケッチ。
# なぜ: ODE をフレームごとに積分し直さず、固定バッファの循環 index だけで流れを見せるため。

from __future__ import annotations

import math

import numpy as np

from loopix.core.camera import Camera
from loopix.core.curves.attractor import AttractorBuffer, aizawa_buffer
from loopix.core.curves.harmonics import spherical_flower
from loopix.core.entities import Entity
from loopix.core.marks import Dot, Stroke
from loopix.core.motion import map_range
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

TRAIL_LENGTH = 3500
TRAIL_STEP = 2
# 1 フレーム（t += 0.01）あたり 1.8 点進む
REPLAY_SPEED = 180.0
ORB_COUNT = 20
ORB_SPACING = 175
SEGMENTS = 10


def _camera(t: float) -> Camera:
    return Camera(yaw=0.2 * t, pitch=0.1 * math.sin(0.12 * t) + 0.1, focal=700.0)


@sketch(
    canvas_size=(720, 1280),
    increment=0.01,
    background=(4, 3, 10),
    camera=_camera,
    export_name="aizawa_flow",
)
def aizawa_flow(scene: SceneState, rng: np.random.Generator) -> None:
    """Aizawa アトラクタの流れ。"""

    palette = scene.palette
    buffer = aizawa_buffer(6000, dt=0.01, scale=95.0)

    def render_trail(buf: AttractorBuffer, t: float) -> list[Stroke]:
        start = buf.start_index(t, REPLAY_SPEED)
        pts = buf.window(start, TRAIL_LENGTH, step=TRAIL_STEP)
        # 先端ほど明るくするため区間ごとに alpha を変える
        chunks = np.array_split(pts, SEGMENTS)
        out: list[Stroke] = []
        for k, chunk in enumerate(chunks):
            if chunk.shape[0] < 2:
                continue
            out.append(
                Stroke(
                    chunk,
                    palette[3 + k % 3],
                    weight=1.2,
                    alpha=map_range(k, 0, SEGMENTS - 1, 80.0, 220.0),
                )
            )
        return out

    def render_orb(e: Entity, t: float) -> Dot:
        start = buffer.start_index(t, REPLAY_SPEED)
        p = buffer.points[buffer.index(start, e.seed * ORB_SPACING)]
        size = 12.0 + 4.0 * math.sin(1.5 * t + 0.4 * e.seed)
        return Dot((float(p[0]), float(p[1]), float(p[2])), size, palette[e.color_index], 200.0)

    def render_flower(e: Entity, t: float) -> list[Stroke]:
        lines = spherical_flower(petals=5 + e.color_index, waves=3, size=120.0, t=t, detail=24)
        return [Stroke(line, palette[e.color_index], weight=0.6, alpha=60.0) for line in lines]

    scene.add_layer("flower", [Entity(color_index=0)], render_flower)
    scene.add_layer("trail", [buffer], render_trail)
    scene.add_layer("orbs", [Entity(seed=i, color_index=i % 4 + 4) for i in range(ORB_COUNT)], render_orb)
