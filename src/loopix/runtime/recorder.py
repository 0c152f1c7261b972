# どこで: `src/loopix/runtime/recorder.py`。
# 何を: 録画の開始/フレーム書き込み/停止を Idle → Recording → Finalizing → Idle（+ Failed）の状態機械で扱う。
# なぜ: 二重開始・停止済みへの書き込み・エンコーダ障害を 1 か所で判定し、描画ループを止めないため。

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Protocol

from loopix.core.clock import FrameClock, RecordingClock
from loopix.core.errors import EncoderFault
from loopix.runtime.video_encoder import open_video_encoder

_logger = logging.getLogger(__name__)


class RecorderState(str, Enum):
    IDLE = "Idle"
    RECORDING = "Recording"
    FINALIZING = "Finalizing"
    FAILED = "Failed"


class FrameEncoder(Protocol):
    """Recorder が要求するエンコーダ（VideoEncoder と同形）。"""

    def write_frame_rgb24(self, frame: bytes) -> None: ...

    def close(self) -> None: ...

    def abort(self) -> None: ...


EncoderFactory = Callable[..., FrameEncoder]
StateListener = Callable[["RecorderState"], None]


@dataclass(frozen=True, slots=True)
class RecordingResult:
    """書き出し完了した録画の要約。seconds は `frames / fps`。"""

    path: Path
    frames: int
    seconds: float


class Recorder:
    """フレーム正確な録画セッションを管理する。

    Notes
    -----
    タイムスタンプは実時間ではなく `frame_index / fps` で決まるため、
    `max_frames` で自動停止した動画の尺は常に `max_frames / fps` 秒になる。
    """

    def __init__(
        self,
        *,
        output_path: Path,
        size: tuple[int, int],
        fps: float,
        max_frames: int,
        bitrate: int,
        container: str = "mp4",
        keyframe_interval: int = 60,
        encoder_factory: EncoderFactory | None = None,
    ) -> None:
        if float(fps) <= 0:
            raise ValueError("fps は正の値である必要がある")
        if int(max_frames) <= 0:
            raise ValueError("max_frames は正の値である必要がある")
        self._output_path = Path(output_path)
        self._size = (int(size[0]), int(size[1]))
        self._fps = float(fps)
        self._max_frames = int(max_frames)
        self._bitrate = int(bitrate)
        self._container = str(container)
        self._keyframe_interval = int(keyframe_interval)
        self._encoder_factory: EncoderFactory = encoder_factory or open_video_encoder

        self._state = RecorderState.IDLE
        self._encoder: FrameEncoder | None = None
        self._clock: RecordingClock | None = None
        self._listeners: list[StateListener] = []
        self.last_error: BaseException | None = None
        self.last_result: RecordingResult | None = None

    @property
    def state(self) -> RecorderState:
        return self._state

    @property
    def is_recording(self) -> bool:
        """録画中なら True を返す。"""

        return self._state is RecorderState.RECORDING

    @property
    def status_text(self) -> str:
        """UI 表示用の状態文字列（"Idle" / "Recording" / "Finalizing" / "Failed"）。"""

        return self._state.value

    @property
    def output_path(self) -> Path:
        return self._output_path

    @property
    def size(self) -> tuple[int, int]:
        """書き込むフレームの (width, height)。"""

        return self._size

    @property
    def fps(self) -> float:
        return self._fps

    @property
    def max_frames(self) -> int:
        return self._max_frames

    @property
    def frame_count(self) -> int:
        """このセッションで書き込んだフレーム数を返す。"""

        clock = self._clock
        return 0 if clock is None else int(clock.frame_index)

    def timestamp(self) -> float:
        """次に書き込むフレームのタイムスタンプ（秒）を返す。"""

        clock = self._clock
        return 0.0 if clock is None else clock.t()

    def add_listener(self, listener: StateListener) -> None:
        """状態遷移のたびに呼ばれるリスナーを登録する。"""

        self._listeners.append(listener)

    def _set_state(self, state: RecorderState) -> None:
        if state is self._state:
            return
        self._state = state
        _logger.debug("recorder state -> %s", state.value)
        # リスナーの失敗で状態機械を止めない
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.exception("recorder listener failed: state=%s", state.value)

    def start(self, *, clock: FrameClock | None = None) -> bool:
        """録画を開始する。

        Returns
        -------
        bool
            開始できたら True。録画中 / 終了処理中の呼び出しは拒否して False。

        Raises
        ------
        UnsupportedEncoder
            エンコーダを確保できない場合（状態は変えない）。
        """

        if self._state in (RecorderState.RECORDING, RecorderState.FINALIZING):
            _logger.warning("録画中のため start() を無視しました: state=%s", self._state.value)
            return False

        encoder = self._encoder_factory(
            output_path=self._output_path,
            size=self._size,
            fps=self._fps,
            bitrate=self._bitrate,
            container=self._container,
            keyframe_interval=self._keyframe_interval,
        )
        self._encoder = encoder
        self._clock = RecordingClock(fps=self._fps)
        self.last_error = None
        self.last_result = None
        if clock is not None:
            clock.reset()
        self._set_state(RecorderState.RECORDING)
        print(f"Started video recording: {self._output_path} (fps={self._fps:g}, max_frames={self._max_frames})")
        return True

    def capture_frame(self, frame: bytes) -> None:
        """1 フレームを書き込む。上限に達したら自動で stop() する。

        録画中以外の呼び出しは無視する。エンコーダ障害は Failed へ遷移して握り込み、送出しない。
        """

        encoder = self._encoder
        clock = self._clock
        if self._state is not RecorderState.RECORDING or encoder is None or clock is None:
            return

        try:
            encoder.write_frame_rgb24(frame)
        except (EncoderFault, OSError, ValueError) as exc:
            self._fail(exc, "フレームの書き込みに失敗しました")
            return
        clock.tick()

        if clock.frame_index >= self._max_frames:
            self.stop()

    def stop(self) -> RecordingResult | None:
        """録画を終了してファイルを確定する。Idle / Failed では何もしない。"""

        encoder = self._encoder
        clock = self._clock
        if self._state is not RecorderState.RECORDING or encoder is None or clock is None:
            return None

        self._set_state(RecorderState.FINALIZING)
        frames = int(clock.frame_index)
        seconds = frames / self._fps
        try:
            encoder.close()
        except (EncoderFault, OSError) as exc:
            self._fail(exc, "動画の確定に失敗しました")
            return None
        finally:
            self._encoder = None

        result = RecordingResult(path=self._output_path, frames=frames, seconds=seconds)
        self.last_result = result
        self._set_state(RecorderState.IDLE)
        print(f"Saved video: {result.path} (frames={frames}, seconds={seconds:.3f})")
        return result

    def _fail(self, exc: BaseException, message: str) -> None:
        self.last_error = exc
        encoder = self._encoder
        self._encoder = None
        if encoder is not None:
            try:
                encoder.abort()
            except OSError:
                _logger.debug("encoder abort failed", exc_info=True)
        _logger.error("%s: %s", message, exc, exc_info=exc)
        self._set_state(RecorderState.FAILED)


__all__ = [
    "EncoderFactory",
    "FrameEncoder",
    "Recorder",
    "RecorderState",
    "RecordingResult",
]
