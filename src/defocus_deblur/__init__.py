"""
defocus_deblur - Wiener deconvolution of defocused grayscale images
===================================================================
Organized like the imaging pipeline it grew out of:
    scenes → optics (disk PSF) → spectral (DFT, centering) → restoration
plus utils (display, metrics) and an interactive slider viewer.

The numeric core is pure: `restore(image, radius, snr)` builds a fresh disk
PSF, Wiener transfer function and restored image on every call.

© 2025 Ali Pouya, Imaging Pipeline (defocus deblur edition)
"""

from defocus_deblur.errors import DeblurError, DimensionMismatch, InvalidParameter, NumericAnomaly
from defocus_deblur.restoration.wiener_filter import (
    DeblurParams,
    apply_filter,
    build_wiener_filter,
    restore,
)

__all__ = [
    "DeblurError",
    "DimensionMismatch",
    "InvalidParameter",
    "NumericAnomaly",
    "DeblurParams",
    "apply_filter",
    "build_wiener_filter",
    "restore",
]

__version__ = "0.1.0"
