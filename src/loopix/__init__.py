# どこで: `src/loopix/__init__.py`。
# 何を: ルート `loopix` パッケージを定義する。
# なぜ: import 起点を `loopix` に統一するため。

from __future__ import annotations

from loopix.api import get_sketch, render_still, render_video, run, sketch, sketch_names

__all__ = ["get_sketch", "render_still", "render_video", "run", "sketch", "sketch_names"]
