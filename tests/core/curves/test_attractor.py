"""アトラクタの事前計算バッファのテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from loopix.core.curves.attractor import (
    AttractorBuffer,
    CliffordParams,
    aizawa_buffer,
    clifford_buffer,
    random_clifford_params,
)


def test_aizawa_buffer_has_fixed_length_and_is_finite() -> None:
    buf = aizawa_buffer(6000)
    assert len(buf) == 6000
    assert buf.points.shape == (6000, 3)
    assert np.isfinite(buf.points).all()


def test_buffer_is_read_only() -> None:
    buf = aizawa_buffer(100)
    with pytest.raises(ValueError):
        buf.points[0, 0] = 1.0


@pytest.mark.parametrize("start", [0, 1, 5999, 6000, 123_456_789])
def test_index_stays_in_range(start: int) -> None:
    buf = AttractorBuffer(np.zeros((6000, 3)))
    for i in (0, 1, 3499, 6000):
        assert 0 <= buf.index(start, i) < 6000


def test_start_index_follows_replay_speed() -> None:
    buf = AttractorBuffer(np.zeros((100, 3)))
    assert buf.start_index(0.0, 180.0) == 0
    assert buf.start_index(0.5, 180.0) == 90
    assert buf.start_index(1.0, 180.0) == 80


def test_window_wraps_around_end() -> None:
    pts = np.arange(30, dtype=np.float64).reshape(10, 3)
    buf = AttractorBuffer(pts)
    win = buf.window(8, 4)
    assert win[:, 0].tolist() == [24.0, 27.0, 0.0, 3.0]
    assert buf.window(0, 10, step=3).shape == (4, 3)


def test_buffer_rejects_empty_or_bad_shape() -> None:
    with pytest.raises(ValueError):
        AttractorBuffer(np.zeros((0, 3)))
    with pytest.raises(ValueError):
        AttractorBuffer(np.zeros((5, 2)))


def test_clifford_buffer_stays_bounded() -> None:
    params = CliffordParams(a=-1.4, b=1.6, c=1.0, d=0.7)
    buf = clifford_buffer(params, 1000, scale=110.0)
    pts = buf.points
    # |sin| + |c·cos| <= 1 + |c|
    assert np.all(np.abs(pts[:, 0]) <= (1.0 + 1.0) * 110.0 + 1e-9)
    assert np.all(np.abs(pts[:, 1]) <= (1.0 + 0.7) * 110.0 + 1e-9)
    assert np.all(pts[:, 2] == 0.0)


def test_random_clifford_params_is_seeded() -> None:
    a = random_clifford_params(np.random.default_rng(3))
    b = random_clifford_params(np.random.default_rng(3))
    assert a == b
    assert all(-2.5 <= v <= 2.5 for v in (a.a, a.b, a.c, a.d))
