import numpy as np
import pytest

from defocus_deblur.restoration.wiener_filter import build_wiener_filter
from defocus_deblur.scenes.scene_generator import load_grayscale
from defocus_deblur.utils.display import downscale_preview, save_image, to_display_uint8
from defocus_deblur.utils.metrics_module import (
    compute_snr,
    mean_absolute_error,
    psnr,
    radial_profile,
    restoration_gain,
)


# -----------------------------------------------------------------------------
# Display sink
# -----------------------------------------------------------------------------
def test_display_conversion_saturates():
    out = to_display_uint8(np.array([[-0.4, 0.25, 1.0, 3.0, np.nan]]))
    assert out.dtype == np.uint8
    np.testing.assert_array_equal(out, [[0, 64, 255, 255, 0]])


def test_display_conversion_with_raw_scale():
    out = to_display_uint8(np.array([[10.0, 300.0]]), scale=1.0)
    np.testing.assert_array_equal(out, [[10, 255]])


def test_preview_downscale():
    img = np.full((100, 200), 128, dtype=np.uint8)
    small = downscale_preview(img, 0.3)
    assert small.shape == (30, 60)
    assert small.dtype == np.uint8
    assert np.all(small == 128)

    same = downscale_preview(img, 1.0)
    np.testing.assert_array_equal(same, img)
    assert same is not img


@pytest.mark.parametrize("factor", [0.0, -0.5, 1.5])
def test_preview_rejects_bad_factor(factor):
    with pytest.raises(ValueError):
        downscale_preview(np.zeros((10, 10)), factor)


@pytest.mark.parametrize("name", ["filtered.png", "filtered.jpg", "nested/out.png"])
def test_save_image_writes_file(tmp_path, name):
    img = np.tile(np.arange(0, 256, 4, dtype=np.uint8), (16, 1))
    path = save_image(img, tmp_path / name)
    assert path.is_file()
    back = load_grayscale(str(path))
    assert back.shape == img.shape


def test_saved_png_round_trips_intensities(tmp_path):
    img = np.tile(np.arange(0, 256, 4, dtype=np.uint8), (8, 1))
    back = load_grayscale(str(save_image(img, tmp_path / "x.png")))
    np.testing.assert_allclose(back * 255.0, img, atol=1.5)


# -----------------------------------------------------------------------------
# Metrics
# -----------------------------------------------------------------------------
def test_mae_and_gain():
    sharp = np.zeros((4, 4))
    blurred = np.full((4, 4), 0.4)
    restored = np.full((4, 4), 0.1)
    assert mean_absolute_error(blurred, sharp) == pytest.approx(0.4)
    assert restoration_gain(sharp, blurred, restored) == pytest.approx(4.0)
    assert restoration_gain(sharp, blurred, sharp) == float("inf")


def test_mae_shape_mismatch():
    with pytest.raises(ValueError):
        mean_absolute_error(np.zeros((2, 2)), np.zeros((2, 3)))


def test_psnr_and_snr():
    ref = np.full((8, 8), 0.5)
    assert psnr(ref, ref) == float("inf")
    assert psnr(ref + 0.1, ref) == pytest.approx(20.0)
    assert compute_snr(ref * 1.1, ref) == pytest.approx(20.0)


def test_radial_profile_of_constant_filter():
    W = build_wiener_filter((64, 64), 0, 9)
    f, prof = radial_profile(W)
    assert f.shape == prof.shape == (32,)
    assert f[0] > 0 and f[-1] < 0.5
    np.testing.assert_allclose(prof, 0.9, rtol=1e-6)


def test_radial_profile_starts_at_dc_gain():
    W = build_wiener_filter((64, 64), 8, 1000)
    _, prof = radial_profile(W)
    # first annulus is narrower than one frequency step, so it holds DC only
    assert prof[0] == pytest.approx(W[0, 0])
