# どこで: `src/loopix/interactive/preview_window.py`。
# 何を: プレビュー用の pyglet ウィンドウ生成と、RGB24 フレームの貼り付けを行う。
# なぜ: interactive 依存をこの層に閉じ込め、core/render/runtime をヘッドレスに保つため。

from __future__ import annotations

import pyglet
from pyglet.window import Window

from loopix.interactive.render_settings import PreviewSettings


def create_preview_window(settings: PreviewSettings) -> Window:
    """設定に基づきプレビューウィンドウを生成する。"""

    width, height = settings.window_size
    window = pyglet.window.Window(  # type: ignore[abstract]
        width=width,
        height=height,
        resizable=False,
        caption=settings.caption,
    )
    return window


def blit_rgb24(frame: bytes, size: tuple[int, int], *, window_size: tuple[int, int]) -> None:
    """RGB24（行は上から下）フレームを現在のウィンドウへ全面表示する。"""

    w, h = size
    # pitch を負にすると先頭行が画面上端になる
    image = pyglet.image.ImageData(int(w), int(h), "RGB", frame, pitch=-int(w) * 3)
    ww, wh = window_size
    image.blit(0, 0, width=int(ww), height=int(wh))


__all__ = ["blit_rgb24", "create_preview_window"]
