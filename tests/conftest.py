"""テスト共通の fixture（config の隔離とフェイクエンコーダ）。"""

from __future__ import annotations

from pathlib import Path

import pytest

from loopix.core.errors import EncoderFault
from loopix.core.runtime_config import set_config_path


class FakeEncoder:
    """ffmpeg を起動せず、受け取ったフレームを記録するエンコーダ。"""

    def __init__(self, *, fail_on_frame: int | None = None, fail_on_close: bool = False, **kwargs) -> None:
        self.kwargs = kwargs
        self.frames: list[bytes] = []
        self.closed = False
        self.aborted = False
        self._fail_on_frame = fail_on_frame
        self._fail_on_close = fail_on_close

    def write_frame_rgb24(self, frame: bytes) -> None:
        if self._fail_on_frame is not None and len(self.frames) >= self._fail_on_frame:
            raise EncoderFault("broken pipe")
        self.frames.append(bytes(frame))

    def close(self) -> None:
        if self._fail_on_close:
            raise EncoderFault("ffmpeg exited with code 1")
        self.closed = True

    def abort(self) -> None:
        self.aborted = True


class FakeEncoderFactory:
    """Recorder に渡す factory。生成したエンコーダを `created` に残す。"""

    def __init__(self, **options) -> None:
        self.options = options
        self.created: list[FakeEncoder] = []

    def __call__(self, **kwargs) -> FakeEncoder:
        enc = FakeEncoder(**self.options, **kwargs)
        self.created.append(enc)
        return enc

    @property
    def last(self) -> FakeEncoder:
        return self.created[-1]


@pytest.fixture
def fake_encoder_factory() -> FakeEncoderFactory:
    return FakeEncoderFactory()


@pytest.fixture
def make_encoder_factory() -> type[FakeEncoderFactory]:
    """失敗注入つきの factory を作るためのクラスを返す。"""

    return FakeEncoderFactory


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """config 探索を tmp_path に閉じ込める（出力も tmp_path 配下へ）。"""

    set_config_path(None)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    yield tmp_path
    set_config_path(None)
