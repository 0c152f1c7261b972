"""
どこで: `src/loopix/core/curves/harmonics.py`。球面調和関数と superformula の曲面。
何を: 花弁状の球面（spherical flower）、低次の球面調和半径、Gielis の superformula を評価する。
なぜ: 3D の「花」「量子軌道」風の形を、t で位相をずらすだけのワイヤーフレームとして描くため。
"""

from __future__ import annotations

import math

import numpy as np


def spherical_harmonic_radius(theta: np.ndarray | float, phi: np.ndarray | float, l: int, m: int) -> np.ndarray:
    """l ∈ {2, 3} の（正規化なし）実球面調和の絶対値を返す。

    Notes
    -----
    l=2: m=0 なら `3cos²θ − 1`、それ以外は `sin²θ · cos(mφ)`。
    l=3: `sinθ · (5cos²θ − 1) · cos(mφ)`。
    """

    th = np.asarray(theta, dtype=np.float64)
    ph = np.asarray(phi, dtype=np.float64)
    if int(l) == 2:
        if int(m) == 0:
            r = 3.0 * np.cos(th) ** 2 - 1.0
        else:
            r = np.sin(th) ** 2 * np.cos(int(m) * ph)
    elif int(l) == 3:
        r = np.sin(th) * (5.0 * np.cos(th) ** 2 - 1.0) * np.cos(int(m) * ph)
    else:
        raise ValueError(f"spherical_harmonic_radius は l=2 または 3 のみ対応: got={l!r}")
    return np.abs(r)


def spherical_harmonic_lines(
    l: int,
    m: int,
    *,
    scale: float,
    rings: int = 24,
    segments: int = 48,
) -> list[np.ndarray]:
    """球面調和曲面を緯線ポリライン列（各 shape (segments+1, 3)）として返す。"""

    rings_i = int(rings)
    seg_i = int(segments)
    if rings_i < 1 or seg_i < 2:
        raise ValueError("rings >= 1 かつ segments >= 2 である必要がある")
    phi = np.linspace(0.0, 2.0 * math.pi, seg_i + 1)
    lines: list[np.ndarray] = []
    for j in range(1, rings_i + 1):
        theta = math.pi * j / float(rings_i + 1)
        r = spherical_harmonic_radius(theta, phi, l, m) * float(scale)
        x = r * math.sin(theta) * np.cos(phi)
        y = r * math.sin(theta) * np.sin(phi)
        z = r * math.cos(theta) * np.ones_like(phi)
        lines.append(np.stack([x, y, z], axis=1))
    return lines


def spherical_flower(
    *,
    petals: int,
    waves: int,
    size: float,
    t: float,
    detail: int = 40,
) -> list[np.ndarray]:
    """`r = size * (0.7 + 0.3|sin(petals·θ)·cos(waves·φ + t)|)` の花弁球面を返す。

    detail 本の経線方向ポリライン（各 detail+1 点）を返す。
    """

    d = int(detail)
    if d < 2:
        raise ValueError(f"detail は 2 以上である必要がある: got={detail!r}")
    theta = np.linspace(0.0, 2.0 * math.pi, d + 1)
    lines: list[np.ndarray] = []
    for i in range(d):
        phi = math.pi * i / float(d)
        r = float(size) * (0.7 + 0.3 * np.abs(np.sin(int(petals) * theta) * math.cos(int(waves) * phi + float(t))))
        x = r * math.sin(phi) * np.cos(theta)
        y = r * math.sin(phi) * np.sin(theta)
        z = r * math.cos(phi)
        lines.append(np.stack([x, y, np.broadcast_to(z, x.shape)], axis=1))
    return lines


def superformula(theta: np.ndarray | float, m: float, n1: float, n2: float, n3: float) -> np.ndarray:
    """Gielis の superformula 半径 `(|cos(mθ/4)|^n2 + |sin(mθ/4)|^n3)^(-1/n1)`。"""

    th = np.asarray(theta, dtype=np.float64)
    if float(n1) == 0.0:
        raise ValueError("superformula の n1 は 0 以外である必要がある")
    t1 = np.abs(np.cos(float(m) * th / 4.0)) ** float(n2)
    t2 = np.abs(np.sin(float(m) * th / 4.0)) ** float(n3)
    with np.errstate(divide="ignore"):
        return (t1 + t2) ** (-1.0 / float(n1))


def supershape_point(lat: float, lon: float, *, m1: float, m2: float, n1: float, scale: float) -> tuple[float, float, float]:
    """緯度・経度から 3D supershape 上の点を返す。"""

    r1 = float(superformula(lon, m1, n1, 1.0, 1.0))
    r2 = float(superformula(lat, m2, n1, 1.0, 1.0))
    s = float(scale)
    return (
        r1 * math.cos(lon) * r2 * math.cos(lat) * s,
        r1 * math.sin(lon) * r2 * math.cos(lat) * s,
        r2 * math.sin(lat) * s,
    )


def supershape_lines(
    *,
    m1: float,
    m2: float,
    n1: float,
    scale: float,
    rings: int = 16,
    segments: int = 48,
) -> list[np.ndarray]:
    """3D supershape を緯線ポリライン列で返す。"""

    lines: list[np.ndarray] = []
    lons = np.linspace(-math.pi, math.pi, int(segments) + 1)
    for j in range(1, int(rings)):
        lat = -math.pi / 2.0 + math.pi * j / float(rings)
        pts = [supershape_point(lat, float(lon), m1=m1, m2=m2, n1=n1, scale=scale) for lon in lons]
        lines.append(np.asarray(pts, dtype=np.float64))
    return lines


__all__ = [
    "spherical_flower",
    "spherical_harmonic_lines",
    "spherical_harmonic_radius",
    "superformula",
    "supershape_lines",
    "supershape_point",
]
