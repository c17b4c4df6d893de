"""
centering.py - quadrant swap that puts a kernel's center at index (0, 0)

A PSF is drawn around the visual center (H//2, W//2) of its grid, but the DFT
treats index (0, 0) as the origin. Swapping quadrants diagonally
(top-left ↔ bottom-right, top-right ↔ bottom-left) moves the center cell to
the origin so a symmetric kernel gets a (numerically) real spectrum.

Odd sizes use floor boundaries: the split is at row H//2 and column W//2,
and the bottom/right blocks (which hold the center row/column) move to the
top/left. For even sizes the swap is its own inverse; for odd sizes use
`uncenter_quadrants` to go back.
"""

from __future__ import annotations
import numpy as np

from defocus_deblur.errors import InvalidParameter


def _as_grid(grid: np.ndarray) -> np.ndarray:
    arr = np.asarray(grid)
    if arr.ndim != 2:
        raise InvalidParameter(f"Quadrant centering expects a 2-D grid, got shape {arr.shape}.")
    return arr


def center_quadrants(grid: np.ndarray) -> np.ndarray:
    """Swap quadrants diagonally; cell (H//2, W//2) lands on (0, 0). Returns a new array."""
    arr = _as_grid(grid)
    h, w = arr.shape
    cy, cx = h // 2, w // 2

    out = np.empty_like(arr)
    # bottom-right → top-left, top-left → bottom-right
    out[: h - cy, : w - cx] = arr[cy:, cx:]
    out[h - cy:, w - cx:] = arr[:cy, :cx]
    # bottom-left → top-right, top-right → bottom-left
    out[: h - cy, w - cx:] = arr[cy:, :cx]
    out[h - cy:, : w - cx] = arr[:cy, cx:]
    return out


def uncenter_quadrants(grid: np.ndarray) -> np.ndarray:
    """Exact inverse of `center_quadrants` for any size (odd included)."""
    arr = _as_grid(grid)
    h, w = arr.shape
    # Same swap with ceil boundaries undoes the floor-based one.
    cy, cx = h - h // 2, w - w // 2

    out = np.empty_like(arr)
    out[: h - cy, : w - cx] = arr[cy:, cx:]
    out[h - cy:, w - cx:] = arr[:cy, :cx]
    out[: h - cy, w - cx:] = arr[cy:, :cx]
    out[h - cy:, : w - cx] = arr[:cy, cx:]
    return out
