# どこで: `src/loopix/api/sketches.py`。
# 何を: 組み込みスケッチを登録させ、名前からスケッチ定義を引く公開関数を提供する。
# なぜ: 利用側が個々のスケッチモジュールを import せずに、レジストリだけで選べるようにするため。

from __future__ import annotations

from loopix.core.sketch_registry import SketchSpec, sketch_registry

# スケッチ実装モジュールをインポートしてレジストリに登録させる。
from loopix.sketches import aizawa_flow as _sketch_aizawa_flow  # noqa: F401
from loopix.sketches import clifford_veil as _sketch_clifford_veil  # noqa: F401
from loopix.sketches import cosmic_dust as _sketch_cosmic_dust  # noqa: F401
from loopix.sketches import demoivre_lissajous as _sketch_demoivre_lissajous  # noqa: F401
from loopix.sketches import falling_sparks as _sketch_falling_sparks  # noqa: F401
from loopix.sketches import harmonic_bloom as _sketch_harmonic_bloom  # noqa: F401
from loopix.sketches import metallic_ratios as _sketch_metallic_ratios  # noqa: F401
from loopix.sketches import orbit_dust as _sketch_orbit_dust  # noqa: F401
from loopix.sketches import shader_flow as _sketch_shader_flow  # noqa: F401


def get_sketch(name: str) -> SketchSpec:
    """名前に対応する SketchSpec を返す（未登録なら KeyError）。"""

    return sketch_registry.get(str(name))


def sketch_names() -> list[str]:
    """登録済みスケッチ名を辞書順で返す。"""

    return sketch_registry.names()


__all__ = ["get_sketch", "sketch_names"]
