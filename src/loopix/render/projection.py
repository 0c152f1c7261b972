# どこで: `src/loopix/render/projection.py`。
# 何を: Camera に従って 3D 点列をキャンバス座標へ写す小さな投影器を提供する。
# なぜ: 描画ライブラリのカメラ機能を再実装せず、回転 + 透視の最小限だけを持つため。

from __future__ import annotations

import math

import numpy as np

from loopix.core.camera import Camera

_NEAR = 1.0


def rotation_matrix(camera: Camera) -> np.ndarray:
    """yaw → pitch → roll の順に適用する 3x3 回転行列を返す。"""

    cy, sy = math.cos(camera.yaw), math.sin(camera.yaw)
    cp, sp = math.cos(camera.pitch), math.sin(camera.pitch)
    cr, sr = math.cos(camera.roll), math.sin(camera.roll)
    ry = np.array([[cy, 0.0, sy], [0.0, 1.0, 0.0], [-sy, 0.0, cy]])
    rx = np.array([[1.0, 0.0, 0.0], [0.0, cp, -sp], [0.0, sp, cp]])
    rz = np.array([[cr, -sr, 0.0], [sr, cr, 0.0], [0.0, 0.0, 1.0]])
    return rz @ rx @ ry


class Projector:
    """原点をキャンバス中心に置く投影器。

    Notes
    -----
    画面座標は y 下向き。視点は +z 側にあり、z が大きいほど手前に来る。
    透視時の倍率は `focal / (focal - z)`。視点より後ろ（奥行きが near 未満）の点は不可視。
    """

    def __init__(self, size: tuple[int, int], camera: Camera) -> None:
        w, h = size
        self._center = np.array([0.5 * float(w), 0.5 * float(h)])
        self._camera = camera
        self._rot = rotation_matrix(camera)

    @property
    def camera(self) -> Camera:
        return self._camera

    def project(self, points: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """点列 shape (N, 3) を投影し、`(xy (N, 2), scale (N,), visible (N,))` を返す。"""

        pts = np.asarray(points, dtype=np.float64).reshape(-1, 3)
        rotated = pts @ self._rot.T
        zoom = float(self._camera.zoom)
        focal = self._camera.focal
        if focal is None:
            scale = np.full(rotated.shape[0], zoom)
            visible = np.ones(rotated.shape[0], dtype=bool)
        else:
            depth = float(focal) - rotated[:, 2]
            visible = depth >= _NEAR
            safe = np.where(visible, depth, 1.0)
            scale = zoom * float(focal) / safe
        xy = rotated[:, :2] * scale[:, None] + self._center
        return xy, scale, visible & np.isfinite(xy).all(axis=1)

    def project_point(self, point: tuple[float, float, float]) -> tuple[float, float, float] | None:
        """1 点を投影して `(x, y, scale)` を返す。不可視なら None。"""

        xy, scale, visible = self.project(np.asarray(point, dtype=np.float64))
        if not bool(visible[0]):
            return None
        return float(xy[0, 0]), float(xy[0, 1]), float(scale[0])


__all__ = ["Projector", "rotation_matrix"]
