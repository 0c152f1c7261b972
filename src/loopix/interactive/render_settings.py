# どこで: `src/loopix/interactive/render_settings.py`。
# 何を: プレビューウィンドウの設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、interactive 側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PreviewSettings:
    """プレビュー表示に用いる設定値の集合。"""

    canvas_size: tuple[int, int] = (720, 1280)
    render_scale: float = 1.0
    caption: str = "loopix"
    fps: float = 60.0

    @property
    def window_size(self) -> tuple[int, int]:
        w, h = self.canvas_size
        return max(int(w * self.render_scale), 1), max(int(h * self.render_scale), 1)
