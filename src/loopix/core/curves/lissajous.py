"""
どこで: `src/loopix/core/curves/lissajous.py`。3D リサージュ曲線と De Moivre 点。
何を: 周波数 (a, b, c)・位相 delta から 3D リサージュを 1 本の開ポリラインとしてサンプルする。
なぜ: De Moivre の n 乗回転と組み合わせた周期曲線を、t の位相ずらしだけで動かすため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, slots=True)
class LissajousSpec:
    """3D リサージュの周波数・位相・スケール。"""

    a: float
    b: float
    c: float
    delta: float = 0.0
    scale: float = 1.0


def lissajous3d(spec: LissajousSpec, *, samples: int = 512, t: float = 0.0, turns: float = 1.0) -> np.ndarray:
    """3D リサージュ曲線の点列 shape (samples, 3) を返す。

    x = sin(a·s + delta + t), y = sin(b·s), z = sin(c·s + t/2)、s ∈ [0, 2π·turns]。
    """

    n = int(samples)
    if n < 2:
        raise ValueError("lissajous3d の samples は 2 以上である必要がある")
    s = np.linspace(0.0, 2.0 * math.pi * float(turns), n)
    x = np.sin(float(spec.a) * s + float(spec.delta) + float(t))
    y = np.sin(float(spec.b) * s)
    z = np.sin(float(spec.c) * s + 0.5 * float(t))
    return np.stack([x, y, z], axis=1) * float(spec.scale)


def de_moivre(theta: float, n: float, r: float) -> tuple[float, float]:
    """(cosθ + i sinθ)^n を半径 r で実平面へ写した点 (r·cos nθ, r·sin nθ)。"""

    return float(r) * math.cos(float(n) * float(theta)), float(r) * math.sin(float(n) * float(theta))


__all__ = ["LissajousSpec", "de_moivre", "lissajous3d"]
