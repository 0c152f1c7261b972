# どこで: `src/loopix/api/__init__.py`。
# 何を: 公開 API（render_video / render_still / run / スケッチ参照）と登録用デコレータを再エクスポートする。
# なぜ: ユーザーコードからシンプルに API を import できるようにするため。

from __future__ import annotations

from loopix.core.sketch_registry import sketch

from .render import render_still, render_video
from .sketches import get_sketch, sketch_names

__all__ = ["get_sketch", "render_still", "render_video", "run", "sketch", "sketch_names"]


def run(*args, **kwargs):
    """公開 run API へのラッパ（遅延インポートで GUI 依存を後回しにする）。"""

    from .runner import run as _run

    return _run(*args, **kwargs)
