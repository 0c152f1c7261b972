"""エンティティ更新規則（周回 / ドリフト / 明滅）のテスト。"""

from __future__ import annotations

import math

import pytest

from loopix.core.boundary import BoundaryPolicy, Box
from loopix.core.entities import Entity
from loopix.core.motion import breathe, drift_position, map_range, orbit_position, twinkle_alpha


def test_map_range_is_linear_and_unclamped() -> None:
    assert map_range(0.0, -1.0, 1.0, 50.0, 255.0) == pytest.approx(152.5)
    assert map_range(2.0, 0.0, 1.0, 0.0, 10.0) == pytest.approx(20.0)
    assert map_range(3.0, 1.0, 1.0, 7.0, 9.0) == 7.0


@pytest.mark.parametrize("t", [0.0, 0.8, 12.3])
def test_orbit_position_keeps_radius(t: float) -> None:
    e = Entity(radius=300.0, angle=1.0, speed=0.25, height=20.0, phase=0.5)
    x, y, z = orbit_position(e, t, rate=0.8, bob=24.0)
    assert math.hypot(x, z) == pytest.approx(300.0)
    assert abs(y - 20.0) <= 24.0 + 1e-9


def test_orbit_position_is_pure_function_of_t() -> None:
    e = Entity(radius=120.0, angle=0.3, speed=0.4)
    assert orbit_position(e, 5.0) == orbit_position(e, 5.0)
    assert orbit_position(e, 5.0) != orbit_position(e, 5.1)


def test_drift_position_applies_boundary_policy() -> None:
    box = Box.centered(10.0, 10.0)
    e = Entity(position=(9.0, 0.0, 0.0), velocity=(2.0, 0.0, 0.0))
    x, y, _ = drift_position(e, 1.0, box=box, policy=BoundaryPolicy.WRAP)
    assert x == pytest.approx(-9.0)
    assert y == 0.0


@pytest.mark.parametrize("t", [0.0, 1.0, 2.5, 100.0])
def test_twinkle_alpha_stays_in_range(t: float) -> None:
    e = Entity(speed=3.0, phase=1.2)
    assert 50.0 <= twinkle_alpha(e, t) <= 255.0


def test_breathe_oscillates_around_one() -> None:
    assert breathe(0.0) == pytest.approx(1.0)
    values = [breathe(t * 0.1, amount=0.3) for t in range(200)]
    assert min(values) >= 0.7 - 1e-9
    assert max(values) <= 1.3 + 1e-9
