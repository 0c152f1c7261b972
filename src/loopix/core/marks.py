# どこで: `src/loopix/core/marks.py`。
# 何を: 1 フレーム分の即時描画命令（点・線・輪・全面ラスタ）を値として表す。
# なぜ: レイヤーの render 関数を「t → 描画命令」の純関数に保ち、描画面から切り離すため。

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from loopix.core.palette import RGB

Vec3 = tuple[float, float, float]


def _finite3(v: Sequence[float]) -> bool:
    return all(math.isfinite(float(c)) for c in v)


@dataclass(frozen=True, slots=True)
class Dot:
    """塗りつぶし円（粒子）。size は直径。"""

    center: Vec3
    size: float
    color: RGB
    alpha: float = 255.0

    def is_finite(self) -> bool:
        return _finite3(self.center) and math.isfinite(self.size) and math.isfinite(self.alpha)


@dataclass(frozen=True, slots=True)
class Ring:
    """輪郭だけの円。radius は半径。"""

    center: Vec3
    radius: float
    color: RGB
    weight: float = 1.0
    alpha: float = 255.0

    def is_finite(self) -> bool:
        return (
            _finite3(self.center)
            and math.isfinite(self.radius)
            and math.isfinite(self.weight)
            and math.isfinite(self.alpha)
        )


@dataclass(frozen=True, slots=True)
class Stroke:
    """ポリライン。points は shape (N, 3)。"""

    points: np.ndarray
    color: RGB
    weight: float = 1.0
    alpha: float = 255.0
    closed: bool = False

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=np.float64)
        if pts.ndim == 2 and pts.shape[1] == 2:
            pts = np.concatenate([pts, np.zeros((pts.shape[0], 1))], axis=1)
        if pts.ndim != 2 or pts.shape[1] != 3:
            raise ValueError(f"Stroke の points は shape (N,3) である必要がある: got={pts.shape}")
        object.__setattr__(self, "points", pts)

    def is_finite(self) -> bool:
        return (
            bool(np.isfinite(self.points).all())
            and math.isfinite(self.weight)
            and math.isfinite(self.alpha)
        )


@dataclass(frozen=True, slots=True)
class Backdrop:
    """全面ラスタ（RGB24、行は上から下）。シェーダ出力の貼り付けに使う。"""

    rgb: bytes
    size: tuple[int, int]

    def is_finite(self) -> bool:
        w, h = self.size
        return len(self.rgb) == int(w) * int(h) * 3


Mark = Dot | Ring | Stroke | Backdrop


def as_marks(value: object) -> list[Mark]:
    """render 関数の戻り値（None / 単体 / 列）を Mark のリストへ正規化する。"""

    if value is None:
        return []
    if isinstance(value, (Dot, Ring, Stroke, Backdrop)):
        return [value]
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        out: list[Mark] = []
        for item in value:
            out.extend(as_marks(item))
        return out
    raise TypeError(f"render は Mark / Mark 列 / None を返す必要がある: got={type(value).__name__}")


__all__ = ["Backdrop", "Dot", "Mark", "Ring", "Stroke", "as_marks"]
