"""ヘッドレス出力 API（render_video / render_still）のテスト。"""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

import loopix
from loopix.api.render import create_recorder
from loopix.api.sketches import get_sketch, sketch_names
from loopix.core.errors import UnsupportedEncoder


def test_public_api_exports() -> None:
    for name in ("get_sketch", "render_still", "render_video", "run", "sketch", "sketch_names"):
        assert callable(getattr(loopix, name))


def test_builtin_sketches_are_registered() -> None:
    names = sketch_names()
    for expected in ("orbit_dust", "cosmic_dust", "falling_sparks", "metallic_ratios", "aizawa_flow"):
        assert expected in names
    with pytest.raises(KeyError):
        get_sketch("no_such_sketch")


def test_create_recorder_prefers_sketch_settings(isolated_config: Path) -> None:
    spec = get_sketch("metallic_ratios")
    rec = create_recorder(spec)
    assert rec.fps == 60.0
    assert rec.max_frames == 900
    assert rec.output_path == Path("data/output/video/metallic_ratios_3d.mp4")

    webm = create_recorder(get_sketch("demoivre_lissajous"), max_frames=10, run_id="take2")
    assert webm.max_frames == 10
    assert webm.output_path.name == "demoivre_lissajous_take2.webm"


def test_render_video_stops_at_frame_count(isolated_config: Path, fake_encoder_factory) -> None:
    result = loopix.render_video("orbit_dust", frames=6, seed=3, encoder_factory=fake_encoder_factory)

    assert result is not None
    assert result.frames == 6
    assert result.seconds == pytest.approx(6 / 60)
    enc = fake_encoder_factory.last
    assert len(enc.frames) == 6
    assert all(len(f) == 720 * 1280 * 3 for f in enc.frames)
    assert enc.kwargs["container"] == "mp4"


def test_render_video_returns_none_on_encoder_fault(isolated_config: Path, make_encoder_factory) -> None:
    factory = make_encoder_factory(fail_on_frame=2)
    assert loopix.render_video("orbit_dust", frames=5, encoder_factory=factory) is None
    assert factory.last.aborted


def test_render_video_without_ffmpeg_raises(isolated_config: Path) -> None:
    def _factory(**kwargs):
        raise UnsupportedEncoder("ffmpeg が見つかりません")

    with pytest.raises(UnsupportedEncoder):
        loopix.render_video("orbit_dust", frames=2, encoder_factory=_factory)


def test_render_still_writes_png(isolated_config: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out = loopix.render_still("falling_sparks", frames=3, seed=2, out=isolated_config / "still.png")
    assert out.is_file()
    with Image.open(out) as img:
        assert img.size == (720, 1280)
    assert "Saved PNG" in capsys.readouterr().out


def test_render_still_default_path(isolated_config: Path) -> None:
    out = loopix.render_still("orbit_dust", run_id="a")
    assert out == Path("data/output/png/orbit_dust_a.png")
    assert (isolated_config / out).is_file()


def test_render_still_rejects_zero_frames(isolated_config: Path) -> None:
    with pytest.raises(ValueError):
        loopix.render_still("orbit_dust", frames=0)
