import math

import numpy as np
import pytest

from fieldlab.core.interference import (
    WaveField,
    interference,
    intensity_to_gray,
    source_distances,
    WaveSource,
)
from fieldlab.utils.surface import Surface


def _expected(d, time=0.0, wavelength=20.0):
    return math.floor((math.cos((d / wavelength) * 2 * math.pi - time) + 1) * 127.5)


def test_intensity_to_gray_range():
    gray = intensity_to_gray(np.array([-1.0, 0.0, 1.0]))
    assert gray.dtype == np.uint8
    assert list(gray) == [0, 127, 255]


def test_equidistant_at_time_zero():
    for d in (0.0, 3.0, 10.0):
        value = intensity_to_gray(interference(np.array([d]), np.array([d]), 0.0, 20.0))[0]
        assert value == _expected(d)
    assert intensity_to_gray(interference(np.array([0.0]), np.array([0.0]), 0.0, 20.0))[0] == 255


def test_source_distances():
    d = source_distances(4, 3, WaveSource(0.0, 0.0))
    assert d.shape == (3, 4)
    assert d[0, 0] == 0.0
    assert d[2, 3] == pytest.approx(math.hypot(3, 2))


def test_field_frame_matches_formula():
    wf = WaveField(Surface(32, 16))
    frame = wf.render_frame()
    assert frame.shape == (16, 32, 4)
    assert np.all(frame[..., 3] == 255)
    assert np.array_equal(frame[..., 0], frame[..., 1])
    assert np.array_equal(frame[..., 1], frame[..., 2])
    a, b = wf.sources
    for x, y in ((0, 0), (31, 15), (12, 7)):
        d1 = math.hypot(x - a.x, y - a.y)
        d2 = math.hypot(x - b.x, y - b.y)
        w1 = math.cos((d1 / 20) * 2 * math.pi)
        w2 = math.cos((d2 / 20) * 2 * math.pi)
        assert abs(int(frame[y, x, 0]) - math.floor(((w1 + w2) / 2 + 1) * 127.5)) <= 1


def test_phase_advances_per_frame():
    surface = Surface(10, 10)
    wf = WaveField(surface)
    for _ in range(3):
        wf.update()
    assert wf.time == pytest.approx(0.3)
    assert np.array_equal(surface.to_array(), wf.render_frame())


def test_sources_placed_on_midline():
    wf = WaveField(Surface(100, 40))
    a, b = wf.sources
    assert (a.x, a.y) == pytest.approx((30.0, 20.0))
    assert (b.x, b.y) == pytest.approx((70.0, 20.0))
