"""Camera 投影のテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from loopix.core.camera import FLAT, Camera
from loopix.render.projection import Projector, rotation_matrix


def test_rotation_matrix_is_orthonormal() -> None:
    r = rotation_matrix(Camera(yaw=0.4, pitch=-1.1, roll=2.0))
    assert np.allclose(r @ r.T, np.eye(3))
    assert np.linalg.det(r) == pytest.approx(1.0)


def test_yaw_quarter_turn_moves_x_to_depth() -> None:
    r = rotation_matrix(Camera(yaw=math.pi / 2))
    assert np.allclose(r @ np.array([1.0, 0.0, 0.0]), [0.0, 0.0, -1.0])


def test_flat_projection_centers_origin_and_keeps_scale() -> None:
    proj = Projector((200, 100), FLAT)
    assert proj.project_point((0.0, 0.0, 0.0)) == (100.0, 50.0, 1.0)
    x, y, s = proj.project_point((10.0, 20.0, 999.0))
    assert (x, y, s) == (110.0, 70.0, 1.0)


def test_perspective_scale_grows_toward_viewer() -> None:
    proj = Projector((200, 100), Camera(focal=800.0))
    _, _, s0 = proj.project_point((0.0, 0.0, 0.0))
    _, _, s1 = proj.project_point((0.0, 0.0, 400.0))
    _, _, s2 = proj.project_point((0.0, 0.0, -800.0))
    assert s0 == pytest.approx(1.0)
    assert s1 == pytest.approx(2.0)
    assert s2 == pytest.approx(0.5)


def test_points_behind_viewer_are_invisible() -> None:
    proj = Projector((200, 100), Camera(focal=800.0))
    assert proj.project_point((0.0, 0.0, 800.0)) is None
    _, _, visible = proj.project(np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 5000.0]]))
    assert visible.tolist() == [True, False]


def test_non_finite_points_are_invisible() -> None:
    proj = Projector((200, 100), FLAT)
    _, _, visible = proj.project(np.array([[np.nan, 0.0, 0.0], [1.0, 1.0, 0.0]]))
    assert visible.tolist() == [False, True]


def test_zoom_scales_flat_projection() -> None:
    proj = Projector((100, 100), Camera(focal=None, zoom=2.0))
    assert proj.project_point((5.0, -5.0, 0.0)) == (60.0, 40.0, 2.0)
