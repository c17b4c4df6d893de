import numpy as np
import matplotlib.pyplot as plt
import pytest

from defocus_deblur.scenes.scene_generator import (
    generate_flat_gray_with_square,
    generate_scene,
    load_grayscale,
)


@pytest.mark.parametrize("kind", ["flat_square", "slanted_edge", "checker", "siemens_star"])
def test_scenes_are_float01(kind):
    img = generate_scene(kind, 48)
    assert img.shape == (48, 48)
    assert img.dtype == np.float32
    assert img.min() >= 0.0 and img.max() <= 1.0


def test_flat_square_layout():
    img = generate_flat_gray_with_square(64, background=0.5, foreground=0.9)
    assert img[0, 0] == pytest.approx(0.5)
    assert img[32, 32] == pytest.approx(0.9)
    assert np.count_nonzero(np.isclose(img, 0.9)) == 40 * 40


def test_unknown_scene_kind():
    with pytest.raises(ValueError):
        generate_scene("mandrill", 32)


def test_load_grayscale_from_rgb_png(tmp_path):
    ramp = np.tile(np.linspace(0.0, 1.0, 40), (20, 1))
    path = tmp_path / "ramp.png"
    plt.imsave(path, ramp, cmap="gray", vmin=0.0, vmax=1.0)

    img = load_grayscale(str(path))
    assert img.shape == (20, 40)
    assert img.dtype == np.float32
    np.testing.assert_allclose(img, ramp, atol=0.01)
