"""
どこで: `src/loopix/render/shader_pass.py`。全画面シェーダのオフスクリーン描画。
何を: ModernGL の standalone コンテキストで全画面クワッドを描き、RGB24 バイト列として読み出す。
なぜ: GLSL スケッチのフレームも Backdrop として Canvas / Recorder の同じ経路に流すため。

Notes
-----
シェーダの意味（GLSL 本体）はスケッチ側の持ち物で、ここでは uniform を素通しするだけ。
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from importlib import resources
from pathlib import Path

import numpy as np

_logger = logging.getLogger(__name__)

UniformValue = float | int | tuple[float, ...]

_QUAD = np.array(
    [
        -1.0, -1.0,
        1.0, -1.0,
        -1.0, 1.0,
        1.0, 1.0,
    ],
    dtype="f4",
)


def frame_uniforms(
    t: float,
    size: tuple[int, int],
    *,
    mouse: tuple[float, float] = (0.0, 0.0),
    extra: Mapping[str, UniformValue] | None = None,
) -> dict[str, UniformValue]:
    """1 フレーム分の標準 uniform（`u_time` / `u_resolution` / `u_mouse`）を組み立てる。"""

    w, h = size
    out: dict[str, UniformValue] = {
        "u_time": float(t),
        "u_resolution": (float(w), float(h)),
        "u_mouse": (float(mouse[0]), float(mouse[1])),
    }
    if extra:
        out.update(extra)
    return out


def load_shader_sources(
    vertex: str | Path | None = None,
    fragment: str | Path | None = None,
) -> tuple[str, str]:
    """頂点/フラグメントシェーダのソースを読み込む。

    None の側は同梱 `loopix/resource/shaders/` の既定（default.vert / flow.frag）を使う。
    """

    def _read(path: str | Path | None, default_name: str) -> str:
        if path is not None:
            return Path(path).read_text(encoding="utf-8")
        return (
            resources.files("loopix")
            .joinpath("resource", "shaders", default_name)
            .read_text(encoding="utf-8")
        )

    return _read(vertex, "default.vert"), _read(fragment, "flow.frag")


class ShaderPass:
    """全画面クワッドを 1 枚描くオフスクリーンパス。"""

    def __init__(self, vertex_source: str, fragment_source: str, size: tuple[int, int]) -> None:
        import moderngl

        w, h = size
        if int(w) <= 0 or int(h) <= 0:
            raise ValueError("size は正の (width, height) である必要がある")
        self.size = (int(w), int(h))
        self.ctx = moderngl.create_standalone_context()
        self.program = self.ctx.program(vertex_shader=vertex_source, fragment_shader=fragment_source)
        self.vbo = self.ctx.buffer(_QUAD.tobytes())
        self.vao = self.ctx.simple_vertex_array(self.program, self.vbo, "in_vert")
        self.fbo = self.ctx.framebuffer(color_attachments=[self.ctx.texture(self.size, 3)])
        self._mode = moderngl.TRIANGLE_STRIP

    def render(self, uniforms: Mapping[str, UniformValue]) -> bytes:
        """uniform を設定して 1 フレーム描き、RGB24（行は上から下）を返す。

        プログラムに存在しない（未使用で最適化された）uniform は無視する。
        """

        for name, value in uniforms.items():
            if name not in self.program:
                _logger.debug("uniform skipped: %s", name)
                continue
            self.program[name].value = value
        self.fbo.use()
        self.ctx.clear(0.0, 0.0, 0.0, 1.0)
        self.vao.render(mode=self._mode)
        raw = self.fbo.read(components=3, alignment=1)
        w, h = self.size
        # GL の読み出しは下の行から
        rows = np.frombuffer(raw, dtype=np.uint8).reshape(h, w, 3)[::-1]
        return rows.tobytes()

    def release(self) -> None:
        """GPU リソースを解放する。"""

        self.vao.release()
        self.vbo.release()
        self.fbo.release()
        self.program.release()
        self.ctx.release()


__all__ = ["ShaderPass", "frame_uniforms", "load_shader_sources"]
