# どこで: `src/loopix/core/clock.py`。
# 何を: フレームごとに固定増分で進むアニメーション時計 `t` を提供する。
# なぜ: `t` を実時間から切り離し、同じ増分なら毎回同じタイムラインを再生できるようにするため。

from __future__ import annotations


class FrameClock:
    """固定増分のフレーム時計。

    Notes
    -----
    `t` は `frame_index * increment`。
    増分を足し込まずフレーム番号から算出するため、誤差が蓄積しない。
    """

    def __init__(self, *, increment: float) -> None:
        _increment = float(increment)
        if not _increment > 0:
            raise ValueError("increment は正の値である必要がある")
        self._increment = _increment
        self._frame_index = 0

    @property
    def increment(self) -> float:
        """1 フレームあたりの増分を返す。"""

        return float(self._increment)

    @property
    def frame_index(self) -> int:
        """進めたフレーム数を返す。"""

        return int(self._frame_index)

    @property
    def t(self) -> float:
        """現在のフレーム時刻 `t` を返す。"""

        return float(self._frame_index) * self._increment

    def advance(self) -> float:
        """1 フレーム進めて新しい `t` を返す。"""

        self._frame_index += 1
        return self.t

    def reset(self) -> None:
        """`t` を 0 に戻す。"""

        self._frame_index = 0


class RecordingClock:
    """録画タイムラインのフレーム時計。

    Notes
    -----
    `t` は `frame_index/fps`。
    実時間と切り離し、出力動画の尺を「フレーム数 / fps」に固定するために使う。
    """

    def __init__(self, *, fps: float) -> None:
        _fps = float(fps)
        if _fps <= 0:
            raise ValueError("fps は正の値である必要がある")
        self._fps = _fps
        self._frame_index = 0

    @property
    def fps(self) -> float:
        """録画 fps を返す。"""

        return float(self._fps)

    @property
    def frame_index(self) -> int:
        """現在のフレーム番号（0-based）を返す。"""

        return int(self._frame_index)

    def t(self) -> float:
        """現在のフレームのタイムスタンプ（秒）を返す。"""

        return float(self._frame_index) / float(self._fps)

    def tick(self) -> None:
        """フレームを 1 つ進める。"""

        self._frame_index += 1


__all__ = ["FrameClock", "RecordingClock"]
