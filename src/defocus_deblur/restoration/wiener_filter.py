"""
wiener_filter.py - Wiener deconvolution of a defocused grayscale image

WHAT THIS MODULE DOES
---------------------
Undoes a known disk blur in the frequency domain:

  psf  = disk_psf(shape, r)                    (∑ = 1)
  H    = Re DFT{ center_quadrants(psf) }       (unit gain at DC)
  W    = H / (|H|² + 1/SNR)                    (Wiener transfer function)
  out  = Re IDFT{ DFT_s{img} ⊙ W }             (DFT_s scaled by 1/(rows·cols))

WHY WIENER?
-----------
The plain inverse filter 1/H explodes wherever the disk's jinc spectrum
crosses zero. Adding the noise-to-signal term 1/SNR to the denominator keeps
the gain bounded (|W| ≤ √SNR / 2 by AM-GM) while leaving well-transmitted
frequencies (|H|² ≫ 1/SNR) almost exactly inverted. High SNR → sharper but
more ringing; low SNR → smoother, less restoration.

NOTES
-----
• Every call is a pure function of its inputs; nothing is cached.
• The output is float32 and NOT clamped; it may leave the input range.
  Display conversion belongs to defocus_deblur.utils.display.

REFERENCES (short list)
-----------------------
• Wiener, N. (1949). *Extrapolation, Interpolation, and Smoothing of
  Stationary Time Series*.
• Gonzalez & Woods, Digital Image Processing, §5.8 (minimum MSE filtering).
• OpenCV tutorial "Out-of-focus Deblur Filter" (disk PSF + Wiener).

© 2025 Ali Pouya, Imaging Pipeline (defocus deblur edition)
"""

from __future__ import annotations
from dataclasses import dataclass
from numbers import Real
from typing import Tuple

import numpy as np

from defocus_deblur.errors import DimensionMismatch, InvalidParameter, NumericAnomaly
from defocus_deblur.optics.psf_model import disk_psf, validate_radius
from defocus_deblur.spectral.centering import center_quadrants
from defocus_deblur.spectral.fourier import forward, inverse, to_complex


def _check_snr(snr) -> float:
    if isinstance(snr, bool) or not isinstance(snr, Real):
        raise InvalidParameter(f"snr must be a number, got {snr!r}.")
    s = float(snr)
    if not np.isfinite(s) or s <= 0.0:
        raise InvalidParameter(f"snr must be a finite value > 0, got {snr!r}.")
    return s


def _check_image(image: np.ndarray) -> np.ndarray:
    img = np.asarray(image)
    if img.ndim != 2:
        raise InvalidParameter(f"Expected a 2-D grayscale image, got shape {img.shape}.")
    if img.size == 0:
        raise InvalidParameter("Image must not be empty.")
    return img


# -----------------------------------------------------------------------------
# Parameters
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class DeblurParams:
    """
    Immutable restoration settings.

    radius : disk PSF radius in pixels (≥ 0)
    snr    : assumed signal-to-noise ratio (> 0); 1/snr is the regularizer

    Defaults match the interactive tool's start-up slider positions.
    """
    radius: int = 64
    snr: float = 1200.0

    def __post_init__(self):
        # Fail at construction time, not on first use
        validate_radius(self.radius)
        _check_snr(self.snr)

    def restore(self, image: np.ndarray) -> np.ndarray:
        return restore(image, self.radius, self.snr)


# -----------------------------------------------------------------------------
# Filter construction
# -----------------------------------------------------------------------------
def build_wiener_filter(shape: Tuple[int, int], radius: int, snr: float) -> np.ndarray:
    """
    Wiener transfer function for a disk blur of `radius` on a grid of `shape`.

    Parameters
    ----------
    shape : (H, W)
        Grid size; must equal the shape of the image it will filter.
    radius : int
        Disk PSF radius in pixels.
    snr : float
        Signal-to-noise ratio (> 0).

    Returns
    -------
    W : (H, W) float64 ndarray
        Real, finite, |W| ≤ √snr / 2.
    """
    s = _check_snr(snr)
    psf = disk_psf(shape, radius)

    # Kernel center → index (0, 0) so its spectrum is real
    H = forward(center_quadrants(psf), scaled=False).real

    degrad = np.abs(H) ** 2 + 1.0 / s
    W = H / degrad

    if not np.all(np.isfinite(W)):
        raise NumericAnomaly("Non-finite values in the Wiener transfer function.")
    return W


# -----------------------------------------------------------------------------
# Filter application
# -----------------------------------------------------------------------------
def apply_filter(image: np.ndarray, transfer: np.ndarray) -> np.ndarray:
    """
    Multiply the image spectrum by a real transfer function and transform back.

    Returns the real plane of the inverse transform as float32, same shape as
    `image`. Raises DimensionMismatch if the shapes differ.
    """
    img = _check_image(image)
    W = np.asarray(transfer)
    if W.shape != img.shape:
        raise DimensionMismatch(
            f"Transfer function shape {W.shape} does not match image shape {img.shape}."
        )

    S_img = forward(img)
    S_filt = to_complex(W)
    # Elementwise complex product (a+bi)(c+di); non-finite cells are reported below
    with np.errstate(invalid="ignore", over="ignore"):
        product = S_img * S_filt
    if not np.all(np.isfinite(product)):
        raise NumericAnomaly("Non-finite values in the filtered spectrum.")

    restored = inverse(product).real
    return restored.astype(np.float32)


# -----------------------------------------------------------------------------
# Orchestrator (public API)
# -----------------------------------------------------------------------------
def restore(image: np.ndarray, radius: int, snr: float) -> np.ndarray:
    """
    Remove a disk (defocus) blur of the given radius from a grayscale image.

    Parameters
    ----------
    image : ndarray
        2-D grayscale image, any real dtype.
    radius : int
        Estimated blur radius in pixels.
    snr : float
        Estimated signal-to-noise ratio (> 0).

    Returns
    -------
    restored : float32 ndarray, same shape as `image` (not clamped)
    """
    img = _check_image(image)
    W = build_wiener_filter(img.shape, radius, snr)
    return apply_filter(img, W)
