"""
scene_generator.py - image sources for the deblur tool (float32 [0..1])

WHAT THIS MODULE PROVIDES
-------------------------
• load_grayscale(path)      read a photo from disk, convert to gray [0, 1]
• Synthetic sharp targets to blur and restore in demos/tests:
    - flat_square            - flat gray field with one brighter square
    - slanted_edge           - edge-spread / ringing checks
    - checker                - strong contrast, many edges
    - siemens_star           - radial frequency sweep; shows which
                               frequencies the disk PSF wiped out
• generate_scene(kind, size, **kw)   dispatcher used by the CLI

RETURNS
-------
All functions return a 2-D NumPy array, dtype float32, normalized to [0, 1].

© 2025 Ali Pouya, Imaging Pipeline (defocus deblur edition)
"""

from __future__ import annotations
from typing import Literal
import numpy as np
from matplotlib import image as mpimg

__all__ = [
    "load_grayscale",
    "generate_scene",
    "generate_flat_gray_with_square",
    "generate_slanted_edge",
    "generate_checker_scene",
    "generate_siemens_star",
]

Kind = Literal["flat_square", "slanted_edge", "checker", "siemens_star"]


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _to_float01(img: np.ndarray) -> np.ndarray:
    """Ensure float32 in [0,1]. Accepts uint8-like or float arrays."""
    img = np.asarray(img)
    if img.dtype.kind in ("u", "i"):
        img = img.astype(np.float32) / float(np.iinfo(img.dtype).max)
    else:
        img = img.astype(np.float32)
    return np.clip(img, 0.0, 1.0)


def _to_gray01(img: np.ndarray) -> np.ndarray:
    """
    Convert RGB/RGBA or grayscale array to float32 in [0,1].
    Uses ITU-R BT.601 luma weights for RGB → gray.
    """
    img = np.asarray(img)
    if img.ndim == 2:
        return _to_float01(img)
    if img.ndim == 3 and img.shape[2] in (3, 4):
        rgb = _to_float01(img[:, :, :3])
        r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
        gray = 0.299 * r + 0.587 * g + 0.114 * b
        return np.clip(gray.astype(np.float32), 0.0, 1.0)
    raise ValueError(f"Unsupported image array shape for grayscale conversion: {img.shape}.")


def _centered_indices(h: int, w: int):
    """Return centered coordinate grids (y, x) with origin at image center."""
    y, x = np.indices((h, w))
    return y - (h / 2.0), x - (w / 2.0)


# -----------------------------------------------------------------------------
# File source
# -----------------------------------------------------------------------------
def load_grayscale(path: str) -> np.ndarray:
    """Read an image file (PNG/JPG/...) as a float32 grayscale array in [0, 1]."""
    img = mpimg.imread(path)  # float [0..1] for PNG, uint8 for JPEG
    return _to_gray01(img)


# -----------------------------------------------------------------------------
# Generators (each returns float32 in [0,1])
# -----------------------------------------------------------------------------
def generate_flat_gray_with_square(
    size: int = 64,
    background: float = 0.5,
    foreground: float = 0.9,
    square_frac: float = 0.625,
) -> np.ndarray:
    """Flat gray canvas with a centered brighter square (side = square_frac·size)."""
    s = int(size)
    img = np.full((s, s), float(background), dtype=np.float32)
    side = max(1, int(round(s * square_frac)))
    top = (s - side) // 2
    img[top:top + side, top:top + side] = float(foreground)
    return _to_float01(img)


def generate_slanted_edge(size: int = 256, angle_deg: float = 5.0, threshold: float = 0.0) -> np.ndarray:
    """
    Slanted binary edge. The edge line is x·cosθ + y·sinθ = threshold
    (origin at the image center); pixels beyond it are white.
    """
    s = int(size)
    y, x = _centered_indices(s, s)
    t = np.deg2rad(angle_deg)
    img = (x * np.cos(t) + y * np.sin(t) > threshold).astype(np.float32)
    return _to_float01(img)


def generate_checker_scene(size: int = 256, square_px: int = 16, invert: bool = False) -> np.ndarray:
    """Binary checkerboard with `square_px` tiles."""
    s = int(size)
    y, x = np.indices((s, s))
    tiles = ((y // max(int(square_px), 1)) + (x // max(int(square_px), 1))) % 2
    img = tiles.astype(np.float32)
    if invert:
        img = 1.0 - img
    return _to_float01(img)


def generate_siemens_star(size: int = 256, spokes: int = 36) -> np.ndarray:
    """Binary Siemens star (0/1) inside a circular aperture; background set to 1."""
    s = int(size)
    y, x = _centered_indices(s, s)
    pattern = (np.sin(spokes * np.arctan2(y, x)) > 0).astype(np.float32)
    pattern[np.sqrt(x**2 + y**2) > s / 2.0] = 1.0
    return _to_float01(pattern)


# -----------------------------------------------------------------------------
# Dispatcher (public API)
# -----------------------------------------------------------------------------
def generate_scene(kind: Kind = "flat_square", size: int = 256, **kwargs) -> np.ndarray:
    """
    Dispatch scene generation by name.

    Parameters
    ----------
    kind : {"flat_square", "slanted_edge", "checker", "siemens_star"}
    size : int
        Square canvas size (pixels).
    kwargs : forwarded to the specific generator; unknown keys are ignored.
    """
    def pick(*names):
        return {k: v for k, v in kwargs.items() if k in names}

    if kind == "flat_square":
        return generate_flat_gray_with_square(size=size, **pick("background", "foreground", "square_frac"))
    if kind == "slanted_edge":
        return generate_slanted_edge(size=size, **pick("angle_deg", "threshold"))
    if kind == "checker":
        return generate_checker_scene(size=size, **pick("square_px", "invert"))
    if kind == "siemens_star":
        return generate_siemens_star(size=size, **pick("spokes",))
    raise ValueError("Unknown scene kind "
                     f"'{kind}'. Valid: flat_square, slanted_edge, checker, siemens_star")
