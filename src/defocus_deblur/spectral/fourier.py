"""
fourier.py - forward/inverse 2-D DFT with a fixed scaling convention

WHAT THIS MODULE DOES
---------------------
Moves real spatial grids into the frequency domain and back:
  • forward(g)            DFT scaled by 1/(W·H)  (scipy norm="forward")
  • forward(g, False)     plain unnormalized DFT (used for the PSF → OTF)
  • inverse(S)            unscaled inverse DFT; spatial data is S.real

Because the 1/(W·H) factor is applied once on the way in, the pair
inverse(forward(g)).real reproduces g to floating-point precision and no
caller ever re-normalizes.

A complex spectrum is stored as one complex ndarray, so its real and
imaginary planes are co-indexed by construction.

REFERENCES (short list)
-----------------------
• Oppenheim & Schafer, Discrete-Time Signal Processing (DFT conventions).
• Gonzalez & Woods, Digital Image Processing, ch. 4 (2-D DFT, filtering).

© 2025 Ali Pouya, Imaging Pipeline (defocus deblur edition)
"""

from __future__ import annotations
import numpy as np
from scipy import fft as sp_fft

from defocus_deblur.errors import InvalidParameter, NumericAnomaly


def _as_plane(grid: np.ndarray, name: str) -> np.ndarray:
    arr = np.asarray(grid)
    if arr.ndim != 2:
        raise InvalidParameter(f"{name} must be a 2-D grid, got shape {arr.shape}.")
    if arr.size == 0:
        raise InvalidParameter(f"{name} must not be empty.")
    return arr


def _check_finite(spectrum: np.ndarray, what: str) -> np.ndarray:
    if not np.all(np.isfinite(spectrum)):
        raise NumericAnomaly(f"Non-finite values in {what}.")
    return spectrum


def to_complex(real_plane: np.ndarray) -> np.ndarray:
    """Promote a real grid to a complex spectrum with a zero imaginary plane."""
    plane = _as_plane(real_plane, "real_plane")
    return plane.astype(np.complex128)


def forward(spatial: np.ndarray, scaled: bool = True) -> np.ndarray:
    """
    2-D forward DFT of a real spatial grid.

    Parameters
    ----------
    spatial : (H, W) array
        Real intensities. Cast to float64 for the transform.
    scaled : bool
        True  → multiply by 1/(H·W) so `inverse` needs no rescale.
        False → plain DFT; a unit-sum kernel gets DC gain 1.

    Returns
    -------
    spectrum : (H, W) complex128 ndarray
    """
    plane = _as_plane(spatial, "spatial").astype(np.float64, copy=False)
    norm = "forward" if scaled else "backward"
    spectrum = sp_fft.fft2(plane, norm=norm)
    return _check_finite(spectrum, "forward spectrum")


def inverse(spectrum: np.ndarray) -> np.ndarray:
    """
    Unscaled 2-D inverse DFT (counterpart of `forward(..., scaled=True)`).

    The spatial-domain result is the real plane of the returned array.
    """
    spec = _as_plane(spectrum, "spectrum").astype(np.complex128, copy=False)
    out = sp_fft.ifft2(spec, norm="forward")
    return _check_finite(out, "inverse transform")
