"""
どこで: `src/loopix/core/curves/attractor.py`。ストレンジアトラクタの事前計算バッファ。
何を: Aizawa 系（固定刻み Euler）と Clifford 写像を一度だけ積分し、固定長の点列として保持する。
なぜ: 毎フレーム積分し直さず、`(start + i) mod n` の窓をずらして再生するため（1 フレーム O(窓長)）。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numba import njit  # type: ignore[import-untyped]


@dataclass(frozen=True, slots=True)
class AizawaParams:
    """Aizawa 系の係数。既定値はスケッチで使っていた値。"""

    a: float = 0.95
    b: float = 0.7
    c: float = 0.6
    d: float = 3.5
    e: float = 0.25
    f: float = 0.1


@dataclass(frozen=True, slots=True)
class CliffordParams:
    """Clifford 写像の係数。"""

    a: float
    b: float
    c: float
    d: float


@njit(cache=True)  # type: ignore[misc]
def _integrate_aizawa(
    x: float,
    y: float,
    z: float,
    a: float,
    b: float,
    c: float,
    d: float,
    e: float,
    f: float,
    dt: float,
    n: int,
) -> np.ndarray:
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        dx = (z - b) * x - d * y
        dy = d * x + (z - b) * y
        dz = c + a * z - z * z * z / 3.0 - (x * x + y * y) * (1.0 + e * z) + f * z * x * x * x
        x += dx * dt
        y += dy * dt
        z += dz * dt
        out[i, 0] = x
        out[i, 1] = y
        out[i, 2] = z
    return out


@njit(cache=True)  # type: ignore[misc]
def _iterate_clifford(x: float, y: float, a: float, b: float, c: float, d: float, n: int) -> np.ndarray:
    out = np.empty((n, 3), dtype=np.float64)
    for i in range(n):
        nx = math.sin(a * y) + c * math.cos(a * x)
        ny = math.sin(b * x) + d * math.cos(b * y)
        x = nx
        y = ny
        out[i, 0] = x
        out[i, 1] = y
        out[i, 2] = 0.0
    return out


class AttractorBuffer:
    """生成時に長さが固定される読み取り専用の点列。

    Notes
    -----
    `index(start, i)` は `start >= 0` の任意の整数に対し `[0, len)` を返す。
    """

    def __init__(self, points: np.ndarray) -> None:
        arr = np.array(points, dtype=np.float64, copy=True)
        if arr.ndim != 2 or arr.shape[1] != 3:
            raise ValueError(f"points は shape (N,3) である必要がある: got={arr.shape}")
        if arr.shape[0] == 0:
            raise ValueError("AttractorBuffer は少なくとも 1 点を含む必要がある")
        arr.setflags(write=False)
        self._points = arr

    @property
    def points(self) -> np.ndarray:
        return self._points

    def __len__(self) -> int:
        return int(self._points.shape[0])

    def start_index(self, t: float, speed: float) -> int:
        """`floor(t * speed) mod n` を返す。"""

        return int(math.floor(float(t) * float(speed))) % len(self)

    def index(self, start: int, i: int) -> int:
        """窓の i 番目に対応する配列 index を返す。"""

        return (int(start) + int(i)) % len(self)

    def window(self, start: int, length: int, *, step: int = 1) -> np.ndarray:
        """start から length 点分（step 間隔）を循環しながら取り出す。"""

        if int(step) <= 0:
            raise ValueError(f"step は正の値である必要がある: got={step!r}")
        offsets = np.arange(0, int(length), int(step), dtype=np.int64)
        return np.take(self._points, int(start) + offsets, axis=0, mode="wrap")


def aizawa_buffer(
    n: int = 6000,
    *,
    dt: float = 0.01,
    scale: float = 95.0,
    initial: tuple[float, float, float] = (0.1, 0.0, 0.0),
    params: AizawaParams | None = None,
) -> AttractorBuffer:
    """Aizawa 系を固定刻み Euler で n ステップ積分したバッファを返す。"""

    n_i = int(n)
    if n_i <= 0:
        raise ValueError(f"n は正の値である必要がある: got={n!r}")
    if not float(dt) > 0:
        raise ValueError(f"dt は正の値である必要がある: got={dt!r}")
    p = params if params is not None else AizawaParams()
    x0, y0, z0 = (float(v) for v in initial)
    pts = _integrate_aizawa(x0, y0, z0, p.a, p.b, p.c, p.d, p.e, p.f, float(dt), n_i)
    return AttractorBuffer(pts * float(scale))


def clifford_buffer(
    params: CliffordParams,
    n: int = 1000,
    *,
    scale: float = 1.0,
    initial: tuple[float, float] = (0.0, 0.0),
) -> AttractorBuffer:
    """Clifford 写像を n 回反復したバッファ（z=0）を返す。"""

    n_i = int(n)
    if n_i <= 0:
        raise ValueError(f"n は正の値である必要がある: got={n!r}")
    x0, y0 = (float(v) for v in initial)
    pts = _iterate_clifford(x0, y0, params.a, params.b, params.c, params.d, n_i)
    return AttractorBuffer(pts * float(scale))


def random_clifford_params(rng: np.random.Generator, *, spread: float = 2.5) -> CliffordParams:
    """各係数を [-spread, spread] から一様に選ぶ。"""

    a, b, c, d = (float(v) for v in rng.uniform(-float(spread), float(spread), size=4))
    return CliffordParams(a=a, b=b, c=c, d=d)


__all__ = [
    "AizawaParams",
    "AttractorBuffer",
    "CliffordParams",
    "aizawa_buffer",
    "clifford_buffer",
    "random_clifford_params",
]
