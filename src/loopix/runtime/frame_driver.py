# どこで: `src/loopix/runtime/frame_driver.py`。
# 何を: 1 フレーム分の「t を進める → 全レイヤーを描く → 録画中なら書き込む」を実行する。
# なぜ: スケッチごとに複製されていた draw() ループを、SceneState と Canvas を受け取る 1 つの駆動器にまとめるため。

from __future__ import annotations

import logging
from dataclasses import dataclass

from loopix.core.camera import FLAT
from loopix.core.errors import MalformedEntity
from loopix.core.marks import as_marks
from loopix.core.palette import RGB
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import CameraFunc, SketchSpec
from loopix.render.canvas import Canvas
from loopix.runtime.recorder import Recorder, RecordingResult

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FrameStats:
    """on_frame() 1 回分の結果。"""

    frame_index: int
    t: float
    drawn: int
    skipped: int
    recorded: bool


class FrameDriver:
    """SceneState を Canvas へ描き、必要なら Recorder へ流すフレーム駆動器。

    Notes
    -----
    t は描画前に 1 増分だけ進める（N フレーム後の t は `N * increment`）。
    非有限値を含む Mark と、render が ArithmeticError / ValueError を送出したエンティティは
    そのフレームだけ描画を飛ばし、フレーム自体は継続する。
    """

    def __init__(
        self,
        scene: SceneState,
        canvas: Canvas,
        *,
        recorder: Recorder | None = None,
        camera: CameraFunc | None = None,
        background: RGB = (0, 0, 0),
        fade: float | None = None,
    ) -> None:
        if recorder is not None and tuple(recorder.size) != tuple(canvas.size):
            raise ValueError(
                f"canvas と recorder のサイズが一致しません: canvas={canvas.size}, recorder={recorder.size}"
            )
        self.scene = scene
        self.canvas = canvas
        self.recorder = recorder
        self._camera = camera
        self._background = background
        self._fade = fade

    @classmethod
    def for_sketch(
        cls,
        spec: SketchSpec,
        scene: SceneState,
        canvas: Canvas,
        *,
        recorder: Recorder | None = None,
    ) -> "FrameDriver":
        """SketchSpec の背景・残像・カメラ設定で FrameDriver を作る。"""

        return cls(
            scene,
            canvas,
            recorder=recorder,
            camera=spec.camera,
            background=spec.background,
            fade=spec.fade,
        )

    def on_frame(self) -> FrameStats:
        """1 フレーム進めて描画する。"""

        scene = self.scene
        t = scene.clock.advance()
        camera = FLAT if self._camera is None else self._camera(t)

        self.canvas.begin(self._background, self._fade)
        drawn = 0
        skipped = 0
        for layer in scene.layers:
            render = layer.render
            for index, entity in enumerate(layer.entities):
                try:
                    marks = as_marks(render(entity, t))
                except (ArithmeticError, ValueError) as exc:
                    skipped += 1
                    _logger.debug(
                        "%s",
                        MalformedEntity(f"layer={layer.name} index={index} t={t:.4f}: {exc}"),
                    )
                    continue
                for mark in marks:
                    if not mark.is_finite():
                        skipped += 1
                        _logger.debug(
                            "%s",
                            MalformedEntity(f"非有限値の Mark: layer={layer.name} index={index} t={t:.4f}"),
                        )
                        continue
                    if self.canvas.draw(mark, camera=camera):
                        drawn += 1

        recorded = False
        recorder = self.recorder
        if recorder is not None and recorder.is_recording:
            recorder.capture_frame(self.canvas.frame_rgb24())
            recorded = True

        return FrameStats(
            frame_index=scene.clock.frame_index,
            t=t,
            drawn=drawn,
            skipped=skipped,
            recorded=recorded,
        )

    def run(self, frames: int) -> list[FrameStats]:
        """on_frame() を frames 回呼ぶ（ヘッドレス実行用）。"""

        n = int(frames)
        if n < 0:
            raise ValueError(f"frames は 0 以上である必要がある: got={frames!r}")
        return [self.on_frame() for _ in range(n)]

    def start_recording(self) -> bool:
        """時計を 0 に戻して録画を開始する。Recorder が無ければ False。"""

        recorder = self.recorder
        if recorder is None:
            return False
        return recorder.start(clock=self.scene.clock)

    def stop_recording(self) -> RecordingResult | None:
        """録画を停止する。"""

        recorder = self.recorder
        if recorder is None:
            return None
        return recorder.stop()

    def toggle_recording(self) -> bool:
        """録画中なら停止、そうでなければ開始し、操作後に録画中かどうかを返す。"""

        recorder = self.recorder
        if recorder is None:
            return False
        if recorder.is_recording:
            recorder.stop()
        else:
            recorder.start(clock=self.scene.clock)
        return recorder.is_recording


__all__ = ["FrameDriver", "FrameStats"]
