import numpy as np
import pytest

from defocus_deblur.errors import InvalidParameter, NumericAnomaly
from defocus_deblur.spectral.fourier import forward, inverse, to_complex


def test_round_trip_recovers_real_grid(rng):
    g = rng.random((32, 48)).astype(np.float32)
    back = inverse(forward(g)).real
    assert back.shape == g.shape
    assert np.max(np.abs(back - g)) < 1e-4


def test_round_trip_leaves_no_imaginary_part(rng):
    g = rng.random((17, 10))
    assert np.max(np.abs(inverse(forward(g)).imag)) < 1e-12


def test_scaled_forward_dc_is_mean(rng):
    g = rng.random((16, 20))
    assert forward(g)[0, 0] == pytest.approx(g.mean())


def test_unscaled_forward_dc_is_sum(rng):
    g = rng.random((16, 20))
    assert forward(g, scaled=False)[0, 0] == pytest.approx(g.sum())


def test_forward_does_not_touch_input(rng):
    g = rng.random((8, 8))
    before = g.copy()
    forward(g)
    np.testing.assert_array_equal(g, before)


def test_to_complex_has_zero_imaginary_plane():
    plane = np.arange(12, dtype=np.float64).reshape(3, 4)
    spec = to_complex(plane)
    assert np.iscomplexobj(spec)
    np.testing.assert_array_equal(spec.real, plane)
    assert not np.any(spec.imag)


@pytest.mark.parametrize("bad", [np.zeros(5), np.zeros((2, 2, 2)), np.zeros((0, 4))])
def test_forward_rejects_non_planes(bad):
    with pytest.raises(InvalidParameter):
        forward(bad)


def test_non_finite_input_is_reported():
    g = np.ones((4, 4))
    g[1, 2] = np.nan
    with pytest.raises(NumericAnomaly):
        forward(g)
