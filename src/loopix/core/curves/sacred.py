"""
どこで: `src/loopix/core/curves/sacred.py`。神聖幾何の構成点。
何を: 正多角形、Flower of Life の円中心、Metatron's Cube の 13 点と辺を返す。
なぜ: マンダラ系スケッチが共有する作図を、回転角を引数に取る純関数として切り出すため。
"""

from __future__ import annotations

import math
from itertools import combinations

import numpy as np


def regular_polygon(sides: int, radius: float, *, rotation: float = 0.0, center: tuple[float, float] = (0.0, 0.0)) -> np.ndarray:
    """正 n 角形の頂点 shape (sides, 3) を返す（閉じない）。"""

    n = int(sides)
    if n < 3:
        raise ValueError(f"sides は 3 以上である必要がある: got={sides!r}")
    a = np.arange(n, dtype=np.float64) * (2.0 * math.pi / n) + float(rotation)
    cx, cy = (float(v) for v in center)
    return np.stack(
        [cx + float(radius) * np.cos(a), cy + float(radius) * np.sin(a), np.zeros(n)],
        axis=1,
    )


def flower_of_life(radius: float, *, rings: int = 1, rotation: float = 0.0) -> list[tuple[float, float]]:
    """Flower of Life の円中心列（中心 + 六角格子 rings 周）を返す。

    すべての円は半径 radius で描く前提。
    """

    r = float(radius)
    rings_i = int(rings)
    if rings_i < 0:
        raise ValueError(f"rings は 0 以上である必要がある: got={rings!r}")
    centers: list[tuple[float, float]] = [(0.0, 0.0)]
    for ring in range(1, rings_i + 1):
        for side in range(6):
            a0 = float(rotation) + side * math.pi / 3.0
            a1 = a0 + math.pi / 3.0
            x0, y0 = ring * r * math.cos(a0), ring * r * math.sin(a0)
            x1, y1 = ring * r * math.cos(a1), ring * r * math.sin(a1)
            for step in range(ring):
                u = step / float(ring)
                centers.append((x0 + (x1 - x0) * u, y0 + (y1 - y0) * u))
    return centers


def metatron_points(size: float, *, rotation: float = 0.0) -> np.ndarray:
    """Metatron's Cube の 13 点（中心 + 内周 6 + 外周 6）shape (13, 3) を返す。"""

    r = float(size) / 4.0
    pts = [(0.0, 0.0, 0.0)]
    for i in range(6):
        a = 2.0 * math.pi / 6.0 * i + float(rotation)
        pts.append((r * math.cos(a), r * math.sin(a), 0.0))
    for i in range(6):
        a = 2.0 * math.pi / 6.0 * i + math.pi / 6.0 + float(rotation)
        pts.append((2.0 * r * math.cos(a), 2.0 * r * math.sin(a), 0.0))
    return np.asarray(pts, dtype=np.float64)


def metatron_edges() -> list[tuple[int, int]]:
    """13 点を全結合する辺（i < j）の列を返す。"""

    return list(combinations(range(13), 2))


__all__ = ["flower_of_life", "metatron_edges", "metatron_points", "regular_polygon"]
