# どこで: `src/loopix/sketches/falling_sparks.py`。
# 何を: 上から降り続ける火花と、回転する Flower of Life / Metatron's Cube を描く 2D スケッチ。
# なぜ: 画面下端を越えた粒子を上端から再出発させる RESPAWN 境界を使うため。

from __future__ import annotations

import math
from dataclasses import replace

import numpy as np

from loopix.core.boundary import BoundaryPolicy, Box
from loopix.core.curves.sacred import flower_of_life, metatron_edges, metatron_points
from loopix.core.entities import Entity, EntityConfig, create_entities
from loopix.core.marks import Dot, Ring, Stroke
from loopix.core.motion import breathe, drift_position
from loopix.core.palette import TWILIGHT
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

SPARK_COUNT = 150
BOX = Box.centered(360.0, 660.0)
SPARKS = EntityConfig(
    size_range=(1.0, 3.0),
    speed_range=(1.0, 3.0),
    bounds=(360.0, 640.0, 0.0),
    palette_size=len(TWILIGHT),
)
# 1 フレーム 0.5..2 px を t 単位へ換算した落下速度
FALL_SPEED = (62.5, 250.0)


def create_sparks(count: int, *, rng: np.random.Generator) -> list[Entity]:
    """y 方向にだけ落下する火花を作る。speed は奥行き倍率（1..3）として使う。"""

    base = create_entities(count, SPARKS, rng=rng)
    fall = rng.uniform(*FALL_SPEED, size=len(base))
    return [replace(e, velocity=(0.0, float(v) * e.speed, 0.0)) for e, v in zip(base, fall)]


@sketch(
    canvas_size=(720, 1280),
    increment=0.01,
    background=(14, 10, 24),
    fade=40.0,
    export_name="falling_sparks",
)
def falling_sparks(scene: SceneState, rng: np.random.Generator) -> None:
    """降り注ぐ火花と神聖幾何。"""

    palette = scene.palette

    def render_flower(_e: Entity, t: float) -> list[Ring]:
        r = 55.0 * breathe(t, 0.0, amount=0.05, rate=0.8)
        return [
            Ring((x, y, 0.0), r, palette[2 + k % 4], weight=1.0, alpha=80.0)
            for k, (x, y) in enumerate(flower_of_life(r, rings=2, rotation=0.05 * t))
        ]

    def render_metatron(_e: Entity, t: float) -> list[Stroke | Dot]:
        pts = metatron_points(420.0, rotation=-0.08 * t)
        out: list[Stroke | Dot] = [
            Stroke(np.stack([pts[i], pts[j]]), palette[5], weight=0.6, alpha=50.0)
            for i, j in metatron_edges()
        ]
        out.extend(Dot(tuple(p), 6.0, palette[4], 200.0) for p in pts)
        return out

    def render_spark(e: Entity, t: float) -> Dot:
        x, y, _z = drift_position(e, t, box=BOX, policy=BoundaryPolicy.RESPAWN)
        sway = 6.0 * math.sin(t + y * 0.01)
        return Dot((x + sway, y, 0.0), e.size * e.speed, palette[e.color_index], 100.0 + 50.0 * e.speed)

    scene.add_layer("flower", [Entity()], render_flower)
    scene.add_layer("metatron", [Entity()], render_metatron)
    scene.add_layer("sparks", create_sparks(SPARK_COUNT, rng=rng), render_spark)
