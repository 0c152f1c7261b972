# どこで: `src/loopix/interactive/runtime/preview_window_system.py`。
# 何を: FrameDriver が描いたフレームをプレビューウィンドウへ表示し、キー/マウス操作を配線する。
# なぜ: `src/loopix/api/runner.py` の `run()` を「配線」に寄せ、表示と操作の責務を独立させるため。

from __future__ import annotations

import logging
from pathlib import Path

from pyglet.window import key, mouse

from loopix.core.scene import SceneState
from loopix.core.sketch_registry import SketchSpec, regenerate
from loopix.export.image import save_png
from loopix.interactive.preview_window import blit_rgb24, create_preview_window
from loopix.interactive.render_settings import PreviewSettings
from loopix.render.canvas import RasterCanvas
from loopix.runtime.frame_driver import FrameDriver
from loopix.runtime.recorder import Recorder, RecorderState

_logger = logging.getLogger(__name__)


class PreviewWindowSystem:
    """プレビュー（メインウィンドウ）のサブシステム。

    キー操作:
    - V: 録画の開始/停止
    - P: 現在フレームを PNG 保存
    - R / クリック: エンティティ集団を作り直す
    - Space: 時計を 0 に戻す
    - M: 表示モードを巡回（モードを持つスケッチのみ）
    """

    def __init__(
        self,
        spec: SketchSpec,
        scene: SceneState,
        *,
        settings: PreviewSettings,
        recorder: Recorder,
        png_output_path: Path,
    ) -> None:
        self._spec = spec
        self._scene = scene
        self._settings = settings
        self._png_output_path = Path(png_output_path)
        self._canvas = RasterCanvas(spec.canvas_size)
        self._recorder = recorder
        self._driver = FrameDriver.for_sketch(spec, scene, self._canvas, recorder=recorder)
        self._pending_png_save = False

        self.window = create_preview_window(settings)
        self.window.push_handlers(
            on_key_press=self._on_key_press,
            on_mouse_press=self._on_mouse_press,
            on_mouse_motion=self._on_mouse_motion,
        )
        recorder.add_listener(self._on_recorder_state)
        self._update_caption()

    @property
    def driver(self) -> FrameDriver:
        return self._driver

    def _update_caption(self) -> None:
        status = self._recorder.status_text
        self.window.set_caption(f"{self._settings.caption} - {self._spec.name} [{status}]")

    def _on_recorder_state(self, state: RecorderState) -> None:
        self._update_caption()
        if state is RecorderState.FAILED:
            print(f"Recording failed: {self._recorder.last_error}")

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        if symbol == key.V:
            self.toggle_recording()
            return
        if symbol == key.P:
            self._pending_png_save = True
            return
        if symbol == key.R:
            self.regenerate()
            return
        if symbol == key.SPACE:
            self._scene.clock.reset()
            return
        if symbol == key.M and self._spec.modes > 0:
            mode = self._scene.cycle_control("mode", self._spec.modes)
            _logger.info("mode -> %d", int(mode))

    def _on_mouse_press(self, _x: int, _y: int, button: int, _modifiers: int) -> None:
        if button == mouse.LEFT:
            self.regenerate()

    def _on_mouse_motion(self, x: int, y: int, _dx: int, _dy: int) -> None:
        ww, wh = self._settings.window_size
        # -1..1、y は下向き
        self._scene.controls["mouse_x"] = 2.0 * float(x) / float(ww) - 1.0
        self._scene.controls["mouse_y"] = 1.0 - 2.0 * float(y) / float(wh)

    def regenerate(self) -> None:
        """エンティティ集団を作り直す。"""

        regenerate(self._spec, self._scene)
        _logger.info("regenerated: %s (generation=%d)", self._spec.name, self._scene.generation)

    def toggle_recording(self) -> None:
        """録画の開始/停止を切り替える。"""

        try:
            self._driver.toggle_recording()
        except RuntimeError as e:
            _logger.exception("Failed to toggle video recording")
            print(f"Failed to start recording: {e}")

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        try:
            self._driver.on_frame()
        except Exception:
            _logger.exception("Frame failed: %s", self._spec.name)
            return

        self.window.clear()
        blit_rgb24(
            self._canvas.frame_rgb24(),
            self._canvas.size,
            window_size=self._settings.window_size,
        )

        if self._pending_png_save:
            self._pending_png_save = False
            try:
                path = save_png(self._canvas.image, self._png_output_path)
                print(f"Saved PNG: {path}")
            except Exception as e:
                _logger.exception("Failed to save PNG")
                print(f"Failed to save PNG: {e}")

    def close(self) -> None:
        """録画を確定してウィンドウを閉じる。"""

        if self._recorder.is_recording:
            self._recorder.stop()
        self.window.close()


__all__ = ["PreviewWindowSystem"]
