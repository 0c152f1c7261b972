"""描画命令（Mark）のテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from loopix.core.marks import Backdrop, Dot, Ring, Stroke, as_marks


def test_stroke_pads_2d_points_with_zero_z() -> None:
    s = Stroke(points=[[0.0, 0.0], [1.0, 2.0]], color=(255, 255, 255))
    assert s.points.shape == (2, 3)
    assert np.all(s.points[:, 2] == 0.0)


def test_stroke_rejects_bad_shape() -> None:
    with pytest.raises(ValueError):
        Stroke(points=np.zeros((4, 5)), color=(0, 0, 0))


def test_is_finite_detects_nan_and_inf() -> None:
    assert Dot((0.0, 0.0, 0.0), 3.0, (1, 2, 3)).is_finite()
    assert not Dot((float("nan"), 0.0, 0.0), 3.0, (1, 2, 3)).is_finite()
    assert not Ring((0.0, 0.0, 0.0), float("inf"), (1, 2, 3)).is_finite()
    assert not Stroke(points=[[0.0, 0.0, 0.0], [np.nan, 1.0, 1.0]], color=(0, 0, 0)).is_finite()


def test_backdrop_requires_matching_byte_length() -> None:
    assert Backdrop(rgb=bytes(2 * 3 * 3), size=(2, 3)).is_finite()
    assert not Backdrop(rgb=bytes(5), size=(2, 3)).is_finite()


def test_as_marks_flattens_nested_sequences() -> None:
    d = Dot((0.0, 0.0, 0.0), 1.0, (0, 0, 0))
    r = Ring((0.0, 0.0, 0.0), 1.0, (0, 0, 0))
    assert as_marks(None) == []
    assert as_marks(d) == [d]
    assert as_marks([d, (r, None), []]) == [d, r]


@pytest.mark.parametrize("value", [1, "dot", object()])
def test_as_marks_rejects_other_values(value: object) -> None:
    with pytest.raises(TypeError):
        as_marks(value)
