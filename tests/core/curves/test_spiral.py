"""冪乗則螺旋と金属比のテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from loopix.core.curves.spiral import (
    BRONZE_RATIO,
    GOLDEN_RATIO,
    SILVER_RATIO,
    power_spiral,
    spiral_radii,
    sqrt_spiral,
)


def test_metallic_ratios() -> None:
    assert GOLDEN_RATIO == pytest.approx((1.0 + math.sqrt(5.0)) / 2.0)
    assert SILVER_RATIO == pytest.approx(1.0 + math.sqrt(2.0))
    assert BRONZE_RATIO == pytest.approx((3.0 + math.sqrt(13.0)) / 2.0)


def test_radii_are_non_decreasing() -> None:
    radii = spiral_radii(1000, k=50.0, base=GOLDEN_RATIO, exponent=0.03)
    assert radii.shape == (1000,)
    assert radii[0] == pytest.approx(50.0)
    assert np.all(np.diff(radii) >= 0.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"k": -1.0, "base": 2.0, "exponent": 0.1},
        {"k": 1.0, "base": 0.5, "exponent": 0.1},
        {"k": 1.0, "base": 2.0, "exponent": -0.1},
    ],
)
def test_radii_reject_shrinking_settings(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        spiral_radii(10, **kwargs)


def test_power_spiral_truncates_at_bound() -> None:
    pts = power_spiral(1000, k=50.0, base=GOLDEN_RATIO, exponent=0.03, bound=520.0)
    r = np.hypot(pts[:, 0], pts[:, 2])
    assert 0 < pts.shape[0] < 1000
    assert np.all(r <= 520.0 + 1e-9)
    assert np.all(np.diff(r) >= -1e-9)


def test_power_spiral_rotates_with_t() -> None:
    a = power_spiral(50, k=10.0, base=2.0, exponent=0.05, t=0.0)
    b = power_spiral(50, k=10.0, base=2.0, exponent=0.05, t=0.5)
    assert np.allclose(np.hypot(a[:, 0], a[:, 2]), np.hypot(b[:, 0], b[:, 2]))
    assert not np.allclose(a, b)


def test_sqrt_spiral_shape() -> None:
    pts = sqrt_spiral(64, spacing=4.0)
    assert pts.shape == (64, 3)
    assert np.hypot(pts[16, 0], pts[16, 1]) == pytest.approx(16.0)
