# どこで: `src/loopix/sketches/orbit_dust.py`。
# 何を: 半径 280..450 を周回する 30 粒子と、近接粒子間の接続線・オーラ輪を描く 3D スケッチ。
# なぜ: 周回（半径不変・角度のみ t で進む）エンティティの基本形として使うため。

from __future__ import annotations

import math

import numpy as np

from loopix.core.camera import Camera
from loopix.core.entities import Entity, EntityConfig, create_entities
from loopix.core.marks import Dot, Ring, Stroke
from loopix.core.motion import breathe, map_range, orbit_position, twinkle_alpha
from loopix.core.palette import TWILIGHT
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

PARTICLE_COUNT = 30
CONNECTION_DISTANCE = 120.0
ORBIT_RATE = 0.8
BOB = 24.0

DUST = EntityConfig(
    radius_range=(280.0, 450.0),
    speed_range=(0.1, 0.4),
    size_range=(3.0, 6.0),
    height_range=(-400.0, 400.0),
    palette_size=len(TWILIGHT),
)


def dust_position(entity: Entity, t: float) -> tuple[float, float, float]:
    return orbit_position(entity, t, rate=ORBIT_RATE, bob=BOB)


def _camera(t: float) -> Camera:
    # 原点を中心にゆっくり揺れる視点
    return Camera(
        yaw=0.6 * math.sin(t * 0.15) + 0.2 * math.cos(t * 0.08),
        pitch=0.25 * math.cos(t * 0.1),
        focal=800.0,
    )


@sketch(
    canvas_size=(720, 1280),
    increment=0.008,
    background=(8, 6, 18),
    camera=_camera,
    export_name="orbit_dust",
)
def orbit_dust(scene: SceneState, rng: np.random.Generator) -> None:
    """周回する宇宙塵と接続線。"""

    palette = scene.palette
    dust = create_entities(PARTICLE_COUNT, DUST, rng=rng)

    def render_aura(ring: Entity, t: float) -> Ring:
        return Ring(
            center=(0.0, 0.0, 0.0),
            radius=ring.radius * breathe(t, ring.phase, amount=0.08, rate=1.2),
            color=palette[ring.color_index],
            weight=1.0,
            alpha=70.0,
        )

    def render_links(group: tuple[Entity, ...], t: float) -> list[Stroke]:
        pts = np.asarray([dust_position(e, t) for e in group], dtype=np.float64)
        out: list[Stroke] = []
        for i in range(len(group)):
            d = np.linalg.norm(pts[i + 1 :] - pts[i], axis=1)
            for k in np.nonzero(d < CONNECTION_DISTANCE)[0]:
                j = i + 1 + int(k)
                out.append(
                    Stroke(
                        points=np.stack([pts[i], pts[j]]),
                        color=palette[group[i].color_index],
                        weight=0.8,
                        alpha=map_range(float(d[k]), 0.0, CONNECTION_DISTANCE, 160.0, 0.0),
                    )
                )
        return out

    def render_dust(entity: Entity, t: float) -> Dot:
        return Dot(
            center=dust_position(entity, t),
            size=entity.size * breathe(t, entity.phase),
            color=palette[entity.color_index],
            alpha=twinkle_alpha(entity, t, lo=140.0, hi=255.0),
        )

    aura = [Entity(radius=160.0 + 35.0 * i, phase=float(i), color_index=i) for i in range(5)]
    scene.add_layer("aura", aura, render_aura)
    scene.add_layer("links", [tuple(dust)], render_links)
    scene.add_layer("dust", dust, render_dust)
