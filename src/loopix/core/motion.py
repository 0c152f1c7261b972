# どこで: `src/loopix/core/motion.py`。
# 何を: エンティティの固定パラメータと t から位置・明滅・脈動を求める更新規則を提供する。
# なぜ: 更新をエンティティごとに独立した純関数へ寄せ、描画順や並列化に依存しないようにするため。

from __future__ import annotations

import math

from loopix.core.boundary import BoundaryPolicy, Box, apply_boundary
from loopix.core.entities import Entity

Vec3 = tuple[float, float, float]


def map_range(value: float, in_lo: float, in_hi: float, out_lo: float, out_hi: float) -> float:
    """value を [in_lo, in_hi] から [out_lo, out_hi] へ線形写像する（クランプしない）。"""

    span = float(in_hi) - float(in_lo)
    if span == 0.0:
        return float(out_lo)
    return float(out_lo) + (float(value) - float(in_lo)) * (float(out_hi) - float(out_lo)) / span


def orbit_position(entity: Entity, t: float, *, rate: float = 1.0, bob: float = 0.0) -> Vec3:
    """XZ 平面の周回位置を返す。

    角度は `angle + speed * rate * t` で進み、半径 `radius` は変化しない。
    y は `height` を中心に `bob` の振幅で上下する。
    """

    a = entity.angle + entity.speed * float(rate) * float(t)
    x = entity.radius * math.cos(a)
    z = entity.radius * math.sin(a)
    y = entity.height + float(bob) * math.sin(float(t) + entity.phase)
    return x, y, z


def drift_position(entity: Entity, t: float, *, box: Box, policy: BoundaryPolicy, rate: float = 1.0) -> Vec3:
    """等速ドリフト位置（`position + velocity * rate * t`）を境界ポリシー付きで返す。"""

    return apply_boundary(
        policy,
        entity.position,
        entity.velocity,
        float(t) * float(rate),
        box,
        seed=entity.seed,
    )


def twinkle_alpha(entity: Entity, t: float, *, lo: float = 50.0, hi: float = 255.0) -> float:
    """`sin(t * speed + phase)` を [lo, hi] に写した明滅 alpha を返す。"""

    return map_range(math.sin(float(t) * entity.speed + entity.phase), -1.0, 1.0, lo, hi)


def breathe(t: float, phase: float = 0.0, *, amount: float = 0.3, rate: float = 1.5) -> float:
    """1 を中心に ±amount で脈動する倍率を返す。"""

    return 1.0 + float(amount) * math.sin(float(rate) * float(t) + float(phase))


__all__ = ["breathe", "drift_position", "map_range", "orbit_position", "twinkle_alpha"]
