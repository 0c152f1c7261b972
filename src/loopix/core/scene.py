# どこで: `src/loopix/core/scene.py`。
# 何を: 時計・パレット・名前付きエンティティ集団（描画順つきレイヤー）を保持する SceneState を定義する。
# なぜ: モジュールグローバルな `particles` / `time` をやめ、1 つのオブジェクトが明示的に所有するため。

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

import numpy as np

from loopix.core.clock import FrameClock
from loopix.core.palette import Palette

RenderFunc = Callable[[Any, float], object]


@dataclass(slots=True)
class SceneLayer:
    """同じ描画規則を共有するエンティティ集団。

    Notes
    -----
    `render(entity, t)` は Mark / Mark 列 / None を返す純関数であること。
    他エンティティの可変状態を読まないため、エンティティ間の評価順は結果に影響しない。
    """

    name: str
    entities: list[Any]
    render: RenderFunc


@dataclass(slots=True)
class SceneState:
    """1 スケッチ分のアニメーション状態。"""

    clock: FrameClock
    palette: Palette
    seed: int = 0
    controls: dict[str, float] = field(default_factory=dict)
    _layers: dict[str, SceneLayer] = field(default_factory=dict)
    _generation: int = 0

    @property
    def t(self) -> float:
        return self.clock.t

    @property
    def generation(self) -> int:
        """エンティティを作り直した回数を返す。"""

        return int(self._generation)

    @property
    def layers(self) -> list[SceneLayer]:
        """描画順（奥→手前 = 追加順）のレイヤー列を返す。"""

        return list(self._layers.values())

    def __iter__(self) -> Iterator[SceneLayer]:
        return iter(self.layers)

    def layer(self, name: str) -> SceneLayer:
        """名前でレイヤーを引く（未登録なら KeyError）。"""

        return self._layers[name]

    def add_layer(self, name: str, entities: Sequence[Any], render: RenderFunc) -> SceneLayer:
        """レイヤーを描画順の末尾（最前面）に追加する。"""

        key = str(name)
        if key in self._layers:
            raise ValueError(f"layer '{key}' は既に登録されている")
        layer = SceneLayer(name=key, entities=list(entities), render=render)
        self._layers[key] = layer
        return layer

    def replace_entities(self, name: str, entities: Sequence[Any]) -> None:
        """レイヤーのエンティティ集団を丸ごと差し替える（描画規則と描画順は維持）。"""

        self.layer(name).entities = list(entities)

    def clear(self) -> None:
        """全レイヤーを破棄し、世代を 1 つ進める。"""

        self._layers.clear()
        self._generation += 1

    def rng(self) -> np.random.Generator:
        """`(seed, generation)` から決まる乱数源を返す。

        同じ seed なら作り直しの n 回目も毎回同じ集団になる。
        """

        return np.random.default_rng([int(self.seed) & 0x7FFFFFFF, int(self._generation)])

    def cycle_control(self, name: str, count: int) -> float:
        """整数値の操作量（表示モードなど）を `count` 周期で 1 つ進め、新しい値を返す。"""

        n = int(count)
        if n <= 0:
            raise ValueError(f"count は正の値である必要がある: got={count!r}")
        value = float((int(self.controls.get(name, 0.0)) + 1) % n)
        self.controls[name] = value
        return value

    def entity_count(self) -> int:
        return sum(len(layer.entities) for layer in self._layers.values())


__all__ = ["RenderFunc", "SceneLayer", "SceneState"]
