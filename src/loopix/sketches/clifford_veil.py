# どこで: `src/loopix/sketches/clifford_veil.py`。
# 何を: seed から係数を選んだ Clifford 写像の点群を数層重ね、ゆっくり回転させる 2D スケッチ。
# なぜ: クリックで係数ごと作り直す「再生成」をアトラクタ系スケッチで使うため。

from __future__ import annotations

import math

import numpy as np

from loopix.core.curves.attractor import AttractorBuffer, clifford_buffer, random_clifford_params
from loopix.core.marks import Dot
from loopix.core.scene import SceneState
from loopix.core.sketch_registry import sketch

LAYER_COUNT = 4
ITERATIONS = 1000
SCALE = 110.0
VISIBLE = 600


@sketch(
    canvas_size=(720, 1280),
    increment=0.008,
    background=(10, 8, 20),
    fade=30.0,
    export_name="clifford_veil",
)
def clifford_veil(scene: SceneState, rng: np.random.Generator) -> None:
    """Clifford アトラクタのヴェール。"""

    palette = scene.palette

    def render_layer(item: tuple[int, AttractorBuffer], t: float) -> list[Dot]:
        k, buf = item
        a = 0.1 * t * (1.0 if k % 2 == 0 else -1.0)
        c, s = math.cos(a), math.sin(a)
        start = buf.start_index(t, 60.0)
        pts = buf.window(start, VISIBLE)
        x = pts[:, 0] * c - pts[:, 1] * s
        y = pts[:, 0] * s + pts[:, 1] * c
        color = palette[1 + 2 * k]
        return [Dot((float(px), float(py), 0.0), 1.6, color, 90.0) for px, py in zip(x, y)]

    layers = [
        (k, clifford_buffer(random_clifford_params(rng), ITERATIONS, scale=SCALE, initial=(0.1 * k, 0.0)))
        for k in range(LAYER_COUNT)
    ]
    scene.add_layer("veil", layers, render_layer)
