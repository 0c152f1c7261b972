# どこで: `src/loopix/core/errors.py`。
# 何を: 録画・エンティティ生成・描画で使う例外型を定義する。
# なぜ: 「操作単位で終わる失敗」と「ループを止めない失敗」を呼び出し側で区別できるようにするため。

from __future__ import annotations


class UnsupportedEncoder(RuntimeError):
    """動画エンコード手段が実行環境に無い。

    Notes
    -----
    録画開始時に送出し、録画は開始しない。
    """


class EncoderFault(RuntimeError):
    """録画開始後にエンコーダ（ffmpeg）が失敗した。"""


class MalformedEntity(ValueError):
    """エンティティの計算結果に非有限値が含まれる。

    Notes
    -----
    FrameDriver はこのエンティティの描画だけをスキップし、フレームは継続する。
    """


class InvalidEntityConfig(ValueError):
    """エンティティ生成設定が不正（負の個数、逆転した範囲など）。"""


__all__ = ["EncoderFault", "InvalidEntityConfig", "MalformedEntity", "UnsupportedEncoder"]
