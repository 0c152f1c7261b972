"""シェーダパスの GL 非依存部分（uniform 組み立て / ソース読み込み）のテスト。"""

from __future__ import annotations

from pathlib import Path

from loopix.render.shader_pass import frame_uniforms, load_shader_sources


def test_frame_uniforms_contains_standard_names() -> None:
    u = frame_uniforms(1.5, (720, 1280), mouse=(10, 20), extra={"u_mode": 2.0})
    assert u["u_time"] == 1.5
    assert u["u_resolution"] == (720.0, 1280.0)
    assert u["u_mouse"] == (10.0, 20.0)
    assert u["u_mode"] == 2.0


def test_load_shader_sources_uses_packaged_defaults() -> None:
    vert, frag = load_shader_sources()
    assert vert.startswith("#version 330")
    assert "in_vert" in vert
    for name in ("u_time", "u_resolution", "u_mouse", "u_mode"):
        assert name in frag


def test_load_shader_sources_reads_explicit_fragment(tmp_path: Path) -> None:
    frag_path = tmp_path / "custom.frag"
    frag_path.write_text("#version 330\nvoid main() {}\n", encoding="utf-8")
    vert, frag = load_shader_sources(fragment=frag_path)
    assert "in_vert" in vert
    assert frag == "#version 330\nvoid main() {}\n"
