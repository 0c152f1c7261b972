"""sketch レジストリと `@sketch` デコレータのテスト。"""

from __future__ import annotations

import pytest

from loopix.core.entities import seed_ring
from loopix.core.sketch_registry import build_scene, regenerate, sketch, sketch_registry


@pytest.fixture(autouse=True)
def _restore_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sketch_registry, "_items", dict(sketch_registry._items))


def _populate(scene, rng) -> None:
    n = int(rng.integers(3, 10))
    scene.add_layer("ring", seed_ring(n, radius=50.0), lambda e, t: None)


def test_decorator_registers_with_function_name_and_doc() -> None:
    @sketch(canvas_size=(320, 240), increment=0.02)
    def tiny_ring(scene, rng):
        """小さなリング。

        詳細説明は一覧に出さない。
        """
        _populate(scene, rng)

    spec = sketch_registry.get("tiny_ring")
    assert spec.populate is tiny_ring
    assert spec.canvas_size == (320, 240)
    assert spec.increment == 0.02
    assert spec.description == "小さなリング。"
    assert spec.output_stem == "tiny_ring"
    assert "tiny_ring" in sketch_registry.names()


def test_export_name_overrides_output_stem() -> None:
    sketch(_populate, name="named_ring", export_name="ring_3d")
    spec = sketch_registry["named_ring"]
    assert spec.output_stem == "ring_3d"


def test_unknown_name_lists_registered_sketches() -> None:
    sketch(_populate, name="known_ring")
    with pytest.raises(KeyError, match="known_ring"):
        sketch_registry.get("nope")


def test_overwrite_false_rejects_duplicate() -> None:
    sketch(_populate, name="dup_ring")
    with pytest.raises(ValueError):
        sketch(_populate, name="dup_ring", overwrite=False)


@pytest.mark.parametrize(
    "kwargs",
    [{"increment": 0.0}, {"increment": -1.0}, {"canvas_size": (0, 100)}],
)
def test_invalid_settings_are_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        sketch(name="bad", **kwargs)


def test_build_scene_and_regenerate_follow_seed() -> None:
    sketch(_populate, name="seeded_ring", increment=0.5)
    spec = sketch_registry.get("seeded_ring")

    a = build_scene(spec, seed=11)
    b = build_scene(spec, seed=11)
    assert a.clock.increment == 0.5
    assert len(a.layer("ring").entities) == len(b.layer("ring").entities)

    a.clock.advance()
    regenerate(spec, a)
    regenerate(spec, b)
    assert a.generation == 1
    assert a.t == pytest.approx(0.5)
    assert len(a.layer("ring").entities) == len(b.layer("ring").entities)
