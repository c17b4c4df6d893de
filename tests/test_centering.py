import numpy as np
import pytest

from defocus_deblur.errors import InvalidParameter
from defocus_deblur.spectral.centering import center_quadrants, uncenter_quadrants


def test_even_swap_moves_quadrants_diagonally():
    g = np.arange(16).reshape(4, 4)
    out = center_quadrants(g)
    np.testing.assert_array_equal(out[:2, :2], g[2:, 2:])
    np.testing.assert_array_equal(out[2:, 2:], g[:2, :2])
    np.testing.assert_array_equal(out[:2, 2:], g[2:, :2])
    np.testing.assert_array_equal(out[2:, :2], g[:2, 2:])


@pytest.mark.parametrize("shape", [(2, 2), (6, 8), (64, 64), (10, 4)])
def test_even_swap_is_an_involution(rng, shape):
    g = rng.random(shape)
    np.testing.assert_array_equal(center_quadrants(center_quadrants(g)), g)


def test_returns_a_new_array(rng):
    g = rng.random((4, 6))
    out = center_quadrants(g)
    assert out is not g
    assert not np.shares_memory(out, g)


@pytest.mark.parametrize("shape", [(5, 7), (3, 4), (9, 9), (1, 6)])
def test_center_cell_lands_on_origin(shape):
    g = np.zeros(shape)
    g[shape[0] // 2, shape[1] // 2] = 1.0
    out = center_quadrants(g)
    assert out[0, 0] == 1.0
    assert out.sum() == 1.0


@pytest.mark.parametrize("shape", [(5, 7), (3, 3), (8, 5)])
def test_odd_sizes_follow_floor_rule_and_uncenter_inverts(rng, shape):
    g = rng.random(shape)
    out = center_quadrants(g)
    np.testing.assert_array_equal(out, np.fft.ifftshift(g))
    np.testing.assert_array_equal(uncenter_quadrants(out), g)
    np.testing.assert_array_equal(center_quadrants(uncenter_quadrants(g)), g)


def test_uncenter_matches_center_for_even_sizes(rng):
    g = rng.random((6, 10))
    np.testing.assert_array_equal(uncenter_quadrants(g), center_quadrants(g))


def test_rejects_non_planes():
    with pytest.raises(InvalidParameter):
        center_quadrants(np.zeros(4))
