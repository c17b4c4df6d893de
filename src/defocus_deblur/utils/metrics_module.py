"""
metrics_module.py - small metrics helpers for judging a restoration

WHAT THIS MODULE PROVIDES
-------------------------
• mean_absolute_error(a, b)
    Mean |a - b|; the headline number for "did deblurring help?".
• restoration_gain(sharp, blurred, restored)
    MAE(blurred, sharp) / MAE(restored, sharp). > 1 means the restoration
    moved closer to the sharp reference; ≥ 2 means the error at least halved.
• compute_snr(img_noisy, img_ref), psnr(img, img_ref)
    Frame-level fidelity in dB.
• radial_profile(grid)
    Orientation-averaged profile of a centered-at-(0,0) frequency grid
    (e.g. a Wiener transfer function) for plotting gain vs frequency.

LEARNING NOTES
--------------
• With the true radius and a high SNR, the Wiener gain tracks 1/H wherever
  |H|² ≫ 1/SNR; near the PSF's spectral zeros it collapses toward 0, so
  the radial profile shows sharp dips at the jinc zero rings.

REFERENCES (short list)
-----------------------
• Oppenheim & Schafer, Discrete-Time Signal Processing (FFT basics).
• Wang et al. (2004), Image quality assessment (MSE/PSNR caveats).

© 2025 Ali Pouya, Imaging Pipeline (defocus deblur edition)
"""

from __future__ import annotations
from typing import Tuple
import numpy as np


# -----------------------------------------------------------------------------
# Error metrics
# -----------------------------------------------------------------------------
def mean_absolute_error(img: np.ndarray, img_ref: np.ndarray) -> float:
    """Mean absolute difference of two same-shape images."""
    a = np.asarray(img, dtype=np.float64)
    b = np.asarray(img_ref, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError(f"Shape mismatch: {a.shape} vs {b.shape}.")
    return float(np.mean(np.abs(a - b)))


def restoration_gain(sharp: np.ndarray, blurred: np.ndarray, restored: np.ndarray) -> float:
    """
    Ratio of blurred-vs-sharp MAE to restored-vs-sharp MAE.

    Returns inf when the restoration is exact.
    """
    before = mean_absolute_error(blurred, sharp)
    after = mean_absolute_error(restored, sharp)
    return float(before / after) if after > 0 else float("inf")


def compute_snr(img_noisy: np.ndarray, img_ref: np.ndarray) -> float:
    """
    Frame-level SNR in dB:  20·log10( ||ref||₂ / ||ref − noisy||₂ ).
    """
    ref = np.asarray(img_ref, dtype=np.float64)
    y = np.asarray(img_noisy, dtype=np.float64)

    num = np.linalg.norm(ref.ravel())
    den = np.linalg.norm((ref - y).ravel()) + 1e-12  # avoid divide-by-zero

    return float(20.0 * np.log10(num / den))


def psnr(img: np.ndarray, img_ref: np.ndarray, data_range: float = 1.0) -> float:
    """Peak SNR in dB for images in [0, data_range]."""
    mse = float(np.mean((np.asarray(img, np.float64) - np.asarray(img_ref, np.float64)) ** 2))
    if mse == 0.0:
        return float("inf")
    return float(10.0 * np.log10(data_range**2 / mse))


# -----------------------------------------------------------------------------
# Orientation-averaged profile of a frequency grid
# -----------------------------------------------------------------------------
def radial_profile(grid: np.ndarray, nbins: int | None = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Average a frequency-domain grid over annuli of constant |f|.

    The grid is assumed in DFT order (DC at index (0, 0)), which is how the
    Wiener transfer function comes out of build_wiener_filter.

    Returns
    -------
    f : ndarray
        Bin centers in cycles/pixel (0 .. 0.5, Nyquist = 0.5).
    profile : ndarray
        Mean value of `grid` in each annulus (empty bins are 0).
    """
    g = np.asarray(grid, dtype=np.float64)
    h, w = g.shape
    fy = np.fft.fftfreq(h)[:, None]
    fx = np.fft.fftfreq(w)[None, :]
    r = np.sqrt(fy**2 + fx**2)

    if nbins is None:
        nbins = int(min(h, w) // 2)
    nbins = max(8, int(nbins))

    edges = np.linspace(0.0, 0.5, nbins + 1)
    idx = np.clip(np.digitize(r, edges) - 1, 0, nbins - 1)
    keep = r <= 0.5

    sums = np.bincount(idx[keep], weights=g[keep], minlength=nbins)
    counts = np.bincount(idx[keep], minlength=nbins)
    profile = np.divide(sums, counts, out=np.zeros(nbins), where=counts > 0)

    f = 0.5 * (edges[1:] + edges[:-1])
    return f.astype(np.float32), profile.astype(np.float32)
