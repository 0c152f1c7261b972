"""
どこで: `src/loopix/api/runner.py`。公開 API のランナー実装。
何を: pyglet ウィンドウでスケッチをプレビューし、V/P/R/Space/M のキー操作を受け付ける。
なぜ: 録画・静止画保存・再生成をその場で試せる経路を用意するため。
"""

from __future__ import annotations

import pyglet

from loopix.api.render import create_recorder
from loopix.api.sketches import get_sketch
from loopix.core.sketch_registry import build_scene
from loopix.export.image import default_png_output_path
from loopix.interactive.render_settings import PreviewSettings
from loopix.interactive.runtime.preview_window_system import PreviewWindowSystem
from loopix.interactive.runtime.window_loop import PreviewLoop, WindowTask

PREVIEW_WINDOW_POS = (25, 25)


def run(
    name: str,
    *,
    seed: int = 0,
    fps: float | None = None,
    render_scale: float = 0.5,
) -> None:
    """pyglet ウィンドウを生成してスケッチをリアルタイム表示する。

    Parameters
    ----------
    name : str
        登録済みスケッチ名。
    seed : int
        エンティティ生成の seed。
    fps : float | None
        プレビューの目標 fps。None ならスケッチ指定、無ければ 60。
    render_scale : float
        キャンバス寸法に掛ける表示倍率（720x1280 を画面に収めるため既定 0.5）。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。
    """

    pyglet.options["vsync"] = True

    spec = get_sketch(name)
    preview_fps = float(fps if fps is not None else (spec.fps or 60.0))
    settings = PreviewSettings(
        canvas_size=spec.canvas_size,
        render_scale=float(render_scale),
        fps=preview_fps,
    )

    scene = build_scene(spec, seed=seed)
    system = PreviewWindowSystem(
        spec,
        scene,
        settings=settings,
        recorder=create_recorder(spec),
        png_output_path=default_png_output_path(spec.output_stem),
    )
    system.window.set_location(*PREVIEW_WINDOW_POS)

    loop = PreviewLoop(WindowTask(window=system.window, draw_frame=system.draw_frame), fps=preview_fps)
    try:
        loop.run()
    finally:
        system.close()


__all__ = ["run"]
