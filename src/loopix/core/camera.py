# どこで: `src/loopix/core/camera.py`。
# 何を: 3D 投影に使うカメラ姿勢（yaw / pitch / roll / 焦点距離）の値型を定義する。
# なぜ: スケッチ側は `t -> Camera` を返すだけにし、投影計算は描画面側へ閉じ込めるため。

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Camera:
    """原点を注視するカメラ。

    Parameters
    ----------
    yaw : float
        y 軸まわりの回転 [rad]。
    pitch : float
        x 軸まわりの回転 [rad]。
    roll : float
        視線（z 軸）まわりの回転 [rad]。
    focal : float | None
        透視投影の焦点距離。None なら平行投影。
    zoom : float
        画面上の拡大率。
    """

    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0
    focal: float | None = 800.0
    zoom: float = 1.0


FLAT = Camera(focal=None)
"""2D スケッチ用の平行投影カメラ。"""

__all__ = ["FLAT", "Camera"]
