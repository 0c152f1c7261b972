# どこで: `src/loopix/core/boundary.py`。
# 何を: 箱からはみ出した自由粒子の扱い（wrap / respawn / clamp）を t の閉形式で提供する。
# なぜ: 粒子位置を「前フレームへの加算」ではなく t の純関数にし、再生を決定的に保つため。

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

import numpy as np

Vec3 = tuple[float, float, float]


class BoundaryPolicy(str, Enum):
    """箱の外へ出た座標の扱い。1 種類のエンティティにつき 1 つを固定で使う。"""

    WRAP = "wrap"
    RESPAWN = "respawn"
    CLAMP = "clamp"


@dataclass(frozen=True, slots=True)
class Box:
    """軸平行の境界箱 [lo, hi]。"""

    lo: Vec3
    hi: Vec3

    def __post_init__(self) -> None:
        for a, b in zip(self.lo, self.hi):
            if float(a) > float(b):
                raise ValueError(f"Box は lo <= hi である必要がある: lo={self.lo}, hi={self.hi}")

    @classmethod
    def centered(cls, half_x: float, half_y: float, half_z: float = 0.0) -> "Box":
        """原点中心・半径指定の箱を返す。"""

        hx, hy, hz = abs(float(half_x)), abs(float(half_y)), abs(float(half_z))
        return cls(lo=(-hx, -hy, -hz), hi=(hx, hy, hz))

    def extent(self, axis: int) -> float:
        return float(self.hi[axis]) - float(self.lo[axis])


def wrap_coordinate(x: float, lo: float, hi: float) -> float:
    """トーラス状に [lo, hi) へ折り返す。幅 0 の軸は lo に固定する。"""

    span = float(hi) - float(lo)
    if span <= 0.0:
        return float(lo)
    return float(lo) + math.fmod(math.fmod(float(x) - float(lo), span) + span, span)


def _wrap(p: np.ndarray, box: Box) -> np.ndarray:
    return np.array([wrap_coordinate(p[i], box.lo[i], box.hi[i]) for i in range(3)])


def _respawn(p0: np.ndarray, v: np.ndarray, t: float, box: Box, seed: int) -> np.ndarray:
    axis = int(np.argmax(np.abs(v)))
    vm = float(v[axis])
    if vm == 0.0:
        return _wrap(p0, box)

    extent = box.extent(axis)
    if extent <= 0.0:
        return _wrap(p0 + v * t, box)

    lo = float(box.lo[axis])
    hi = float(box.hi[axis])
    speed = abs(vm)
    # 進行方向の入口面から測った移動距離
    if vm > 0.0:
        travelled = float(p0[axis]) - lo + speed * t
    else:
        travelled = hi - float(p0[axis]) + speed * t

    cycle = math.floor(travelled / extent)
    if cycle <= 0:
        return _wrap(p0 + v * t, box)

    along = travelled - cycle * extent
    t_start = t - along / speed
    rng = np.random.default_rng([int(seed) & 0x7FFFFFFF, int(cycle)])
    start = rng.uniform(np.asarray(box.lo, dtype=np.float64), np.asarray(box.hi, dtype=np.float64))
    pos = start + v * (t - t_start)
    pos[axis] = lo + along if vm > 0.0 else hi - along
    return _wrap(pos, box)


def apply_boundary(
    policy: BoundaryPolicy,
    position: Vec3,
    velocity: Vec3,
    t: float,
    box: Box,
    *,
    seed: int = 0,
) -> Vec3:
    """`position + velocity * t` を境界ポリシーに従って箱へ収めた座標を返す。

    Notes
    -----
    - WRAP: 反対側の面へ折り返す（トーラス）。
    - RESPAWN: 主移動軸の入口面から再出発し、他軸は `(seed, 周回数)` から決まる乱数位置に置き直す。
    - CLAMP: 箱の面で止める。
    """

    p0 = np.asarray(position, dtype=np.float64)
    v = np.asarray(velocity, dtype=np.float64)
    t_f = float(t)
    if policy is BoundaryPolicy.WRAP:
        out = _wrap(p0 + v * t_f, box)
    elif policy is BoundaryPolicy.RESPAWN:
        out = _respawn(p0, v, t_f, box, seed)
    elif policy is BoundaryPolicy.CLAMP:
        out = np.clip(p0 + v * t_f, np.asarray(box.lo), np.asarray(box.hi))
    else:  # pragma: no cover
        raise ValueError(f"未対応の BoundaryPolicy: {policy!r}")
    return float(out[0]), float(out[1]), float(out[2])


__all__ = ["BoundaryPolicy", "Box", "apply_boundary", "wrap_coordinate"]
