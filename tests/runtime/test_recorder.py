"""Recorder の状態遷移テスト（フェイクエンコーダで ffmpeg を使わない）。"""

from __future__ import annotations

from pathlib import Path

import pytest

from loopix.core.clock import FrameClock
from loopix.core.errors import UnsupportedEncoder
from loopix.runtime.recorder import Recorder, RecorderState

FRAME = bytes(4 * 2 * 3)


def _recorder(tmp_path: Path, factory, *, fps: float = 60.0, max_frames: int = 900) -> Recorder:
    return Recorder(
        output_path=tmp_path / "video" / "sketch.mp4",
        size=(4, 2),
        fps=fps,
        max_frames=max_frames,
        bitrate=8_000_000,
        encoder_factory=factory,
    )


def test_max_frames_auto_stop_fixes_duration(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory)
    assert rec.start()
    for _ in range(2000):
        rec.capture_frame(FRAME)

    assert rec.state is RecorderState.IDLE
    assert len(fake_encoder_factory.last.frames) == 900
    assert fake_encoder_factory.last.closed
    result = rec.last_result
    assert result is not None
    assert result.frames == 900
    assert result.seconds == pytest.approx(15.0)
    assert result.path == tmp_path / "video" / "sketch.mp4"


def test_factory_receives_recording_settings(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory, fps=30.0)
    rec.start()
    kwargs = fake_encoder_factory.last.kwargs
    assert kwargs["size"] == (4, 2)
    assert kwargs["fps"] == 30.0
    assert kwargs["bitrate"] == 8_000_000
    assert kwargs["container"] == "mp4"
    assert kwargs["keyframe_interval"] == 60


def test_timestamps_follow_frame_index(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory, fps=30.0)
    assert rec.timestamp() == 0.0
    rec.start()
    for _ in range(45):
        rec.capture_frame(FRAME)
    assert rec.frame_count == 45
    assert rec.timestamp() == pytest.approx(1.5)


def test_stop_in_idle_is_noop(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory)
    assert rec.stop() is None
    assert rec.state is RecorderState.IDLE
    assert fake_encoder_factory.created == []


def test_capture_outside_recording_is_ignored(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory)
    rec.capture_frame(FRAME)
    assert rec.frame_count == 0

    rec.start()
    rec.capture_frame(FRAME)
    rec.stop()
    rec.capture_frame(FRAME)
    assert len(fake_encoder_factory.last.frames) == 1


def test_start_while_recording_is_rejected(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory)
    assert rec.start()
    rec.capture_frame(FRAME)
    assert not rec.start()
    assert len(fake_encoder_factory.created) == 1
    assert rec.frame_count == 1
    assert rec.is_recording


def test_start_resets_animation_clock(tmp_path: Path, fake_encoder_factory) -> None:
    clock = FrameClock(increment=0.01)
    for _ in range(10):
        clock.advance()
    rec = _recorder(tmp_path, fake_encoder_factory)
    rec.start(clock=clock)
    assert clock.t == 0.0


def test_encoder_fault_moves_to_failed_without_raising(tmp_path: Path, make_encoder_factory) -> None:
    factory = make_encoder_factory(fail_on_frame=3)
    rec = _recorder(tmp_path, factory)
    rec.start()
    for _ in range(10):
        rec.capture_frame(FRAME)

    assert rec.state is RecorderState.FAILED
    assert rec.status_text == "Failed"
    assert rec.last_error is not None
    assert factory.last.aborted
    assert len(factory.last.frames) == 3
    assert rec.stop() is None


def test_failed_recorder_can_start_again(tmp_path: Path, make_encoder_factory) -> None:
    factory = make_encoder_factory(fail_on_frame=0)
    rec = _recorder(tmp_path, factory)
    rec.start()
    rec.capture_frame(FRAME)
    assert rec.state is RecorderState.FAILED

    factory.options.clear()
    assert rec.start()
    assert rec.state is RecorderState.RECORDING
    assert rec.last_error is None


def test_close_failure_moves_to_failed(tmp_path: Path, make_encoder_factory) -> None:
    factory = make_encoder_factory(fail_on_close=True)
    rec = _recorder(tmp_path, factory)
    rec.start()
    rec.capture_frame(FRAME)
    assert rec.stop() is None
    assert rec.state is RecorderState.FAILED
    assert rec.last_result is None


def test_unsupported_encoder_keeps_idle(tmp_path: Path) -> None:
    def _factory(**kwargs):
        raise UnsupportedEncoder("ffmpeg が見つかりません")

    rec = _recorder(tmp_path, _factory)  # type: ignore[arg-type]
    with pytest.raises(UnsupportedEncoder):
        rec.start()
    assert rec.state is RecorderState.IDLE


def test_listeners_see_every_transition(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory, max_frames=2)
    seen: list[str] = []
    rec.add_listener(lambda state: seen.append(state.value))
    rec.start()
    rec.capture_frame(FRAME)
    rec.capture_frame(FRAME)
    assert seen == ["Recording", "Finalizing", "Idle"]


def test_start_and_save_messages(
    tmp_path: Path, fake_encoder_factory, capsys: pytest.CaptureFixture[str]
) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory, max_frames=1)
    rec.start()
    rec.capture_frame(FRAME)
    out = capsys.readouterr().out
    assert "Started video recording" in out
    assert "Saved video" in out


@pytest.mark.parametrize("kwargs", [{"fps": 0.0}, {"max_frames": 0}])
def test_invalid_settings_are_rejected(tmp_path: Path, kwargs: dict) -> None:
    params = {"fps": 60.0, "max_frames": 10}
    params.update(kwargs)
    with pytest.raises(ValueError):
        Recorder(output_path=tmp_path / "a.mp4", size=(4, 2), bitrate=1, **params)


def test_listener_error_does_not_leave_finalizing(tmp_path: Path, fake_encoder_factory) -> None:
    rec = _recorder(tmp_path, fake_encoder_factory, max_frames=2)
    seen: list[str] = []

    def _listener(state: RecorderState) -> None:
        seen.append(state.value)
        if state is RecorderState.FINALIZING:
            raise RuntimeError("ui")

    rec.add_listener(_listener)
    rec.start()
    rec.capture_frame(FRAME)
    rec.capture_frame(FRAME)

    assert seen == ["Recording", "Finalizing", "Idle"]
    assert rec.state is RecorderState.IDLE
    assert fake_encoder_factory.last.closed
    assert rec.start()


def test_frame_size_mismatch_moves_to_failed(tmp_path: Path) -> None:
    class _SizeCheckingEncoder:
        def __init__(self) -> None:
            self.aborted = False

        def write_frame_rgb24(self, frame: bytes) -> None:
            if len(frame) != len(FRAME):
                raise ValueError("frame bytes が想定サイズと一致しません")

        def close(self) -> None:
            pass

        def abort(self) -> None:
            self.aborted = True

    encoder = _SizeCheckingEncoder()
    rec = _recorder(tmp_path, lambda **kwargs: encoder)
    rec.start()
    rec.capture_frame(bytes(3))

    assert rec.state is RecorderState.FAILED
    assert not rec.is_recording
    assert isinstance(rec.last_error, ValueError)
    assert encoder.aborted
