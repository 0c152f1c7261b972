# どこで: `src/loopix/interactive/runtime/window_loop.py`。
# 何を: プレビューウィンドウを 1 つの app loop（`pyglet.app.run()`）で回す最小ランナーを提供する。
# なぜ: OS 依存のイベント配送を pyglet に任せ、フレーム駆動を固定間隔のスケジュールに寄せるため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

import pyglet


@dataclass(frozen=True, slots=True)
class WindowTask:
    """pyglet window と「flip しない描画関数」を束ねる。"""

    # 注: pyglet の Window 型は環境/バージョン差があるため Any に寄せる。
    window: Any
    draw_frame: Callable[[], None]


class PreviewLoop:
    """ウィンドウを閉じるまで固定間隔で描画する。

    `draw_frame()` は back buffer へ描画するだけにし、`flip()` は pyglet が行う。
    """

    def __init__(self, task: WindowTask, *, fps: float) -> None:
        """ループを初期化する。

        Parameters
        ----------
        task : WindowTask
            描画したいウィンドウと描画処理。
        fps : float
            目標フレームレート。`<=0` の場合はスロットリングしない。
        """

        self._task = task
        self._fps = float(fps)

    def run(self) -> None:
        """ウィンドウが閉じられるまでループを実行する。"""

        task = self._task

        def request_exit(*_: object) -> None:
            pyglet.app.exit()

        task.window.push_handlers(on_close=request_exit)
        task.window.push_handlers(on_draw=task.draw_frame)

        def draw_once(dt: float) -> None:
            if task.window not in pyglet.app.windows:
                return
            task.window.draw(dt)

        if self._fps <= 0:
            pyglet.clock.schedule(draw_once)
        else:
            pyglet.clock.schedule_interval(draw_once, 1.0 / float(self._fps))

        try:
            pyglet.app.run(interval=None)
        finally:
            pyglet.clock.unschedule(draw_once)
