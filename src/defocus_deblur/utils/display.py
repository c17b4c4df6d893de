"""
display.py - turning a restored float image into something you can look at

The restoration core returns unclamped float32 data (Wiener ringing can
overshoot below 0 and above the input range). This module is the sink side:
  • to_display_uint8   saturating conversion to 8-bit
  • downscale_preview  smaller copy for on-screen preview (default 0.3×)
  • save_image         8-bit grayscale file on disk
"""

from __future__ import annotations
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from scipy import ndimage

DEFAULT_OUTPUT_NAME = "filtered.jpg"
DEFAULT_PREVIEW_SCALE = 0.3


def to_display_uint8(img: np.ndarray, scale: float = 255.0) -> np.ndarray:
    """
    Map intensities to 0..255 by multiplying with `scale`, rounding and
    saturating (out-of-range values clip instead of wrapping).
    """
    arr = np.asarray(img, dtype=np.float64) * float(scale)
    arr = np.nan_to_num(arr, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(np.rint(arr), 0, 255).astype(np.uint8)


def downscale_preview(img: np.ndarray, factor: float = DEFAULT_PREVIEW_SCALE) -> np.ndarray:
    """Resize by `factor` (bilinear) for preview; the full-size result is untouched."""
    if not 0.0 < factor <= 1.0:
        raise ValueError(f"Preview factor must be in (0, 1], got {factor}.")
    arr = np.asarray(img)
    if factor == 1.0:
        return arr.copy()
    out = ndimage.zoom(arr.astype(np.float32), factor, order=1)
    return np.clip(np.rint(out), 0, 255).astype(np.uint8) if arr.dtype == np.uint8 else out


def save_image(img_u8: np.ndarray, path: str | Path = DEFAULT_OUTPUT_NAME) -> Path:
    """Write an 8-bit grayscale image; the format follows the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, np.asarray(img_u8), cmap="gray", vmin=0, vmax=255)
    return path
