"""
どこで: `src/loopix/core/curves/spiral.py`。冪乗則の螺旋と金属比の定数。
何を: `radius = k * base**(i*p)` の半径列と、t で回転する螺旋腕の点列を生成する。
なぜ: 黄金/白銀/青銅比の螺旋を「半径が単調増加し、上限で打ち切る」契約つきで共有するため。
"""

from __future__ import annotations

import math

import numpy as np

GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))
"""黄金角 π(3−√5) ≈ 137.5°。"""


def metallic_ratio(n: int) -> float:
    """第 n 金属比（x² − n·x − 1 = 0 の正根）を返す。

    n=1 が黄金比、n=2 が白銀比、n=3 が青銅比。
    """

    n_f = float(n)
    if n_f <= 0:
        raise ValueError(f"metallic_ratio の n は正の値である必要がある: got={n!r}")
    return (n_f + math.sqrt(n_f * n_f + 4.0)) / 2.0


def metallic_angle(n: int) -> float:
    """金属比に基づく角度増分 2π/δn を返す。"""

    return 2.0 * math.pi / metallic_ratio(n)


GOLDEN_RATIO = metallic_ratio(1)
SILVER_RATIO = metallic_ratio(2)
BRONZE_RATIO = metallic_ratio(3)


def spiral_radii(count: int, *, k: float, base: float, exponent: float) -> np.ndarray:
    """冪乗則の半径列 `k * base**(i*exponent)`（i=0..count-1）を返す。

    Raises
    ------
    ValueError
        半径が単調非減少にならない設定（k<0, base<1, exponent<0）の場合。
    """

    n = int(count)
    if n < 0:
        raise ValueError(f"count は 0 以上である必要がある: got={count!r}")
    k_f = float(k)
    base_f = float(base)
    p_f = float(exponent)
    if k_f < 0.0:
        raise ValueError(f"k は 0 以上である必要がある: got={k!r}")
    if base_f < 1.0:
        raise ValueError(f"base は 1 以上である必要がある: got={base!r}")
    if p_f < 0.0:
        raise ValueError(f"exponent は 0 以上である必要がある: got={exponent!r}")
    i = np.arange(n, dtype=np.float64)
    with np.errstate(over="ignore"):
        return k_f * np.power(base_f, i * p_f)


def power_spiral(
    count: int,
    *,
    k: float,
    base: float,
    exponent: float,
    angle_step: float = GOLDEN_ANGLE,
    t: float = 0.0,
    bound: float = math.inf,
    rise: float = 0.0,
) -> np.ndarray:
    """t で回る冪乗則螺旋腕の点列 shape (M, 3) を返す。

    Parameters
    ----------
    count : int
        最大点数。
    k, base, exponent : float
        半径 `k * base**(i*exponent)`。
    angle_step : float
        1 点あたりの角度増分（既定は黄金角）。
    t : float
        角度に加えるバイアス。
    bound : float
        半径上限。最初に上限を超えた点以降は描かない（折り返さない）。
    rise : float
        1 点あたりの高さ（y）増分。0 なら平面螺旋。

    Returns
    -------
    np.ndarray
        上限以内の先頭 M 点（M <= count）。
    """

    radii = spiral_radii(count, k=k, base=base, exponent=exponent)
    over = np.nonzero(~(radii <= float(bound)))[0]
    m = int(over[0]) if over.size else int(radii.shape[0])
    radii = radii[:m]
    i = np.arange(m, dtype=np.float64)
    theta = i * float(angle_step) + float(t)
    x = radii * np.cos(theta)
    z = radii * np.sin(theta)
    y = i * float(rise)
    return np.stack([x, y, z], axis=1)


def sqrt_spiral(count: int, *, spacing: float, angle_step: float = GOLDEN_ANGLE, t: float = 0.0) -> np.ndarray:
    """Vogel 螺旋（r = spacing·√i）の点列 shape (count, 3) を XY 平面に返す。"""

    n = int(count)
    if n < 0:
        raise ValueError(f"count は 0 以上である必要がある: got={count!r}")
    i = np.arange(n, dtype=np.float64)
    r = float(spacing) * np.sqrt(i)
    theta = i * float(angle_step) + float(t)
    return np.stack([r * np.cos(theta), r * np.sin(theta), np.zeros(n)], axis=1)


__all__ = [
    "BRONZE_RATIO",
    "GOLDEN_ANGLE",
    "GOLDEN_RATIO",
    "SILVER_RATIO",
    "metallic_angle",
    "metallic_ratio",
    "power_spiral",
    "spiral_radii",
    "sqrt_spiral",
]
