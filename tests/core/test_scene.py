"""SceneState のテスト。"""

from __future__ import annotations

import pytest

from loopix.core.clock import FrameClock
from loopix.core.palette import TWILIGHT
from loopix.core.scene import SceneState


def _render(entity: object, t: float) -> None:
    return None


def _scene(seed: int = 0) -> SceneState:
    return SceneState(clock=FrameClock(increment=0.01), palette=TWILIGHT, seed=seed)


def test_layers_keep_insertion_order() -> None:
    scene = _scene()
    scene.add_layer("back", [1, 2], _render)
    scene.add_layer("front", [3], _render)
    assert [layer.name for layer in scene] == ["back", "front"]
    assert scene.entity_count() == 3


def test_duplicate_layer_name_is_rejected() -> None:
    scene = _scene()
    scene.add_layer("dust", [], _render)
    with pytest.raises(ValueError):
        scene.add_layer("dust", [], _render)


def test_unknown_layer_raises_key_error() -> None:
    with pytest.raises(KeyError):
        _scene().layer("missing")


def test_replace_entities_keeps_render_and_order() -> None:
    scene = _scene()
    scene.add_layer("a", [1], _render)
    scene.add_layer("b", [2], _render)
    scene.replace_entities("a", [7, 8, 9])
    assert scene.layer("a").entities == [7, 8, 9]
    assert scene.layer("a").render is _render
    assert [layer.name for layer in scene] == ["a", "b"]


def test_clear_advances_generation_and_rng() -> None:
    scene = _scene(seed=5)
    before = scene.rng().uniform(size=4)
    assert list(scene.rng().uniform(size=4)) == list(before)

    scene.add_layer("a", [1], _render)
    scene.clear()
    assert scene.generation == 1
    assert scene.layers == []
    assert list(scene.rng().uniform(size=4)) != list(before)


def test_rng_sequence_is_reproducible_across_scenes() -> None:
    a, b = _scene(seed=9), _scene(seed=9)
    for s in (a, b):
        s.clear()
        s.clear()
    assert list(a.rng().integers(0, 1000, size=5)) == list(b.rng().integers(0, 1000, size=5))


def test_t_follows_clock() -> None:
    scene = _scene()
    scene.clock.advance()
    assert scene.t == pytest.approx(0.01)


def test_cycle_control_wraps() -> None:
    scene = _scene()
    assert [scene.cycle_control("mode", 3) for _ in range(4)] == [1.0, 2.0, 0.0, 1.0]
    with pytest.raises(ValueError):
        scene.cycle_control("mode", 0)
