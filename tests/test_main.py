"""`python -m loopix` のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest

from loopix.__main__ import main
from loopix.core.errors import UnsupportedEncoder


def test_list_prints_registered_sketches(isolated_config: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "orbit_dust" in out
    assert "周回する宇宙塵と接続線。" in out


def test_unknown_sketch_returns_2(isolated_config: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["still", "no_such_sketch"]) == 2
    assert "no_such_sketch" in capsys.readouterr().out


def test_still_writes_png(isolated_config: Path) -> None:
    out = isolated_config / "cli.png"
    assert main(["still", "orbit_dust", "--seed", "3", "--out", str(out)]) == 0
    assert out.is_file()


def test_render_reports_missing_encoder(
    isolated_config: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def _render_video(*args, **kwargs):
        raise UnsupportedEncoder("ffmpeg が見つかりません")

    monkeypatch.setattr("loopix.api.render_video", _render_video)
    assert main(["render", "orbit_dust", "--frames", "2"]) == 1
    assert "ffmpeg" in capsys.readouterr().out


def test_config_option_is_applied(isolated_config: Path) -> None:
    cfg = isolated_config / "custom.yaml"
    cfg.write_text('paths:\n  output_dir: "./elsewhere"\n', encoding="utf-8")
    assert main(["--config", str(cfg), "still", "orbit_dust"]) == 0
    assert (isolated_config / "elsewhere" / "png" / "orbit_dust.png").is_file()


def test_invalid_log_level_is_rejected(isolated_config: Path) -> None:
    with pytest.raises(SystemExit):
        main(["--log-level", "loud", "list"])


@pytest.mark.parametrize("command", ["render", "still"])
@pytest.mark.parametrize("frames", ["0", "-3"])
def test_non_positive_frames_is_rejected(isolated_config: Path, command: str, frames: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([command, "orbit_dust", "--frames", frames])
    assert excinfo.value.code == 2
