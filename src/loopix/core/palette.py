# どこで: `src/loopix/core/palette.py`。
# 何を: 全エンティティが読み取り専用で共有する固定カラーパレットを定義する。
# なぜ: 色をエンティティごとに持たせず、パレット index だけを保持させるため。

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

RGB = tuple[int, int, int]


def hex_to_rgb255(text: str) -> RGB:
    """`#RRGGBB` / `RRGGBB` を (r, g, b)（0..255）へ変換する。"""

    s = str(text).strip()
    if s.startswith("#"):
        s = s[1:]
    if len(s) != 6:
        raise ValueError(f"hex color は #RRGGBB 形式である必要がある: got={text!r}")
    try:
        r = int(s[0:2], 16)
        g = int(s[2:4], 16)
        b = int(s[4:6], 16)
    except ValueError as exc:
        raise ValueError(f"hex color は #RRGGBB 形式である必要がある: got={text!r}") from exc
    return r, g, b


def rgb01_to_rgb255(rgb: Sequence[float]) -> RGB:
    """RGB（0..1）を 0..255 の int へ変換する（範囲外はクランプ）。"""

    out: list[int] = []
    for v in rgb:
        f = min(max(float(v), 0.0), 1.0)
        out.append(int(round(f * 255.0)))
    if len(out) != 3:
        raise ValueError(f"rgb は長さ 3 である必要がある: got={tuple(rgb)!r}")
    return out[0], out[1], out[2]


@dataclass(frozen=True, slots=True)
class Palette:
    """不変の色列。

    Notes
    -----
    index は長さで剰余を取るため、どの整数 index でも範囲外にならない。
    """

    colors: tuple[RGB, ...]

    def __post_init__(self) -> None:
        if not self.colors:
            raise ValueError("Palette は少なくとも 1 色を含む必要がある")
        normalized: list[RGB] = []
        for c in self.colors:
            r, g, b = (int(v) for v in c)
            for v in (r, g, b):
                if v < 0 or v > 255:
                    raise ValueError(f"Palette の成分は 0..255 である必要がある: got={tuple(c)!r}")
            normalized.append((r, g, b))
        object.__setattr__(self, "colors", tuple(normalized))

    @classmethod
    def from_hex(cls, values: Iterable[str]) -> "Palette":
        """hex 文字列列から Palette を作る。"""

        return cls(tuple(hex_to_rgb255(v) for v in values))

    def __len__(self) -> int:
        return len(self.colors)

    def __getitem__(self, index: int) -> RGB:
        return self.colors[int(index) % len(self.colors)]

    def lerp(self, i: int, j: int, amount: float) -> RGB:
        """2 色を amount（0..1、範囲外はクランプ）で線形補間する。"""

        a = min(max(float(amount), 0.0), 1.0)
        c0 = self[i]
        c1 = self[j]
        return (
            int(round(c0[0] + (c1[0] - c0[0]) * a)),
            int(round(c0[1] + (c1[1] - c0[1]) * a)),
            int(round(c0[2] + (c1[2] - c0[2]) * a)),
        )


TWILIGHT = Palette.from_hex(
    [
        "#362d78",
        "#523fa3",
        "#916ccc",
        "#bda1e5",
        "#c8c0e9",
        "#84bae7",
        "#516ad4",
        "#333f87",
        "#293039",
        "#283631",
    ]
)
"""スケッチ群で共有される 10 色の紫〜青系パレット。"""

MONOCHROME = Palette(((255, 255, 255), (200, 200, 200), (120, 120, 120), (40, 40, 40)))

__all__ = ["MONOCHROME", "Palette", "RGB", "TWILIGHT", "hex_to_rgb255", "rgb01_to_rgb255"]
