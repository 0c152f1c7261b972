# どこで: `src/loopix/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の「ループ/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `src/loopix/api/runner.py` の肥大化を防ぎ、表示と操作の責務を分けるため。

from __future__ import annotations

__all__ = []
