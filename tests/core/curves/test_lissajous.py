"""3D リサージュ / De Moivre のテスト。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from loopix.core.curves.lissajous import LissajousSpec, de_moivre, lissajous3d


def test_lissajous3d_shape_and_scale() -> None:
    pts = lissajous3d(LissajousSpec(a=3.0, b=2.0, c=5.0, scale=200.0), samples=256)
    assert pts.shape == (256, 3)
    assert np.abs(pts).max() <= 200.0 + 1e-9


def test_lissajous3d_phase_shifts_with_t() -> None:
    spec = LissajousSpec(a=1.0, b=2.0, c=3.0, delta=math.pi / 2)
    a = lissajous3d(spec, samples=64, t=0.0)
    b = lissajous3d(spec, samples=64, t=1.0)
    assert np.allclose(a[:, 1], b[:, 1])
    assert not np.allclose(a[:, 0], b[:, 0])


def test_lissajous3d_requires_two_samples() -> None:
    with pytest.raises(ValueError):
        lissajous3d(LissajousSpec(1.0, 1.0, 1.0), samples=1)


def test_de_moivre_rotates_by_n_theta() -> None:
    x, y = de_moivre(math.pi / 6, 3.0, 10.0)
    assert x == pytest.approx(0.0, abs=1e-9)
    assert y == pytest.approx(10.0)
