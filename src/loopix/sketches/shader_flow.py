# どこで: `src/loopix/sketches/shader_flow.py`。
# 何を: GLSL の全画面パス（波 / 輪 / 花弁の 3 モード）を Backdrop として描くスケッチ。
# なぜ: シェーダ出力も他スケッチと同じ Canvas / Recorder の経路で録画できるようにするため。

from __future__ import annotations

import numpy as np

from loopix.core.marks import Backdrop
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch
from loopix.render.shader_pass import ShaderPass, frame_uniforms, load_shader_sources

CANVAS_SIZE = (720, 1280)
MODE_COUNT = 3

_PASSES: dict[tuple[int, int], ShaderPass] = {}


def shader_pass(size: tuple[int, int]) -> ShaderPass:
    """サイズごとに 1 つの ShaderPass を遅延生成して使い回す。"""

    sp = _PASSES.get(size)
    if sp is None:
        vert, frag = load_shader_sources()
        sp = ShaderPass(vert, frag, size)
        _PASSES[size] = sp
    return sp


@sketch(
    canvas_size=CANVAS_SIZE,
    increment=1.0 / 60.0,
    requires_gl=True,
    modes=MODE_COUNT,
    export_name="shader_flow",
)
def shader_flow(scene: SceneState, rng: np.random.Generator) -> None:
    """GLSL フロー（M キーでモード切替）。"""

    controls = scene.controls

    def render(_entity: object, t: float) -> Backdrop:
        uniforms = frame_uniforms(
            t,
            CANVAS_SIZE,
            mouse=(controls.get("mouse_x", 0.0), controls.get("mouse_y", 0.0)),
            extra={"u_mode": float(controls.get("mode", 0.0)), "u_zoom": float(controls.get("zoom", 1.0))},
        )
        return Backdrop(shader_pass(CANVAS_SIZE).render(uniforms), CANVAS_SIZE)

    scene.add_layer("shader", [None], render)
