"""
viewer.py - interactive Wiener deblur with Radius / SNR sliders

Every slider move rebuilds the filter from scratch with the current
(radius, snr) pair and redraws the preview; no state is carried between
recomputations except the last successfully displayed result. If a setting
is rejected by the core (DeblurError), a warning is printed and the previous
output stays on screen.
"""

from __future__ import annotations
from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.widgets import Slider

from defocus_deblur.errors import DeblurError
from defocus_deblur.restoration.wiener_filter import DeblurParams, restore
from defocus_deblur.utils.display import (
    DEFAULT_PREVIEW_SCALE,
    downscale_preview,
    save_image,
    to_display_uint8,
)

RADIUS_MAX = 130
SNR_MIN = 1
SNR_MAX = 2000


class DeblurViewer:
    """
    Matplotlib window: preview on top, two sliders below.

    Parameters
    ----------
    image : ndarray
        2-D grayscale image in [0, 1].
    params : DeblurParams
        Initial slider positions.
    output_path : path | None
        If set, each successful restoration is also written here (8-bit).
    preview_scale : float
        Downscale factor for the on-screen preview.
    """

    def __init__(
        self,
        image: np.ndarray,
        params: DeblurParams = DeblurParams(),
        output_path: str | Path | None = None,
        preview_scale: float = DEFAULT_PREVIEW_SCALE,
    ):
        self.image = np.asarray(image, dtype=np.float32)
        self.params = params
        self.output_path = Path(output_path) if output_path is not None else None
        self.preview_scale = preview_scale
        self.display_u8: np.ndarray | None = None

        self.fig = plt.figure("Wiener Filter", figsize=(7, 7.5))
        self.ax_img = self.fig.add_axes([0.05, 0.18, 0.9, 0.77])
        self.ax_img.axis("off")
        ax_r = self.fig.add_axes([0.15, 0.09, 0.7, 0.03])
        ax_s = self.fig.add_axes([0.15, 0.04, 0.7, 0.03])

        self.radius_slider = Slider(ax_r, "Radius", 0, RADIUS_MAX,
                                    valinit=params.radius, valstep=1)
        self.snr_slider = Slider(ax_s, "SNR", SNR_MIN, SNR_MAX,
                                 valinit=params.snr, valstep=1)

        self._artist = None
        self.refresh(params)
        self.radius_slider.on_changed(self._on_slider)
        self.snr_slider.on_changed(self._on_slider)

    def _on_slider(self, _value) -> None:
        self.refresh_from(int(self.radius_slider.val), float(self.snr_slider.val))

    def refresh_from(self, radius, snr) -> bool:
        """Validate a raw (radius, snr) pair and redraw; False if rejected."""
        try:
            params = DeblurParams(radius=radius, snr=snr)
        except DeblurError as exc:
            print(f"[WARN] keeping previous output: {exc}")
            return False
        return self.refresh(params)

    def refresh(self, params: DeblurParams) -> bool:
        """Recompute with `params` and redraw. Returns False if the core refused."""
        try:
            restored = restore(self.image, params.radius, params.snr)
        except DeblurError as exc:
            print(f"[WARN] keeping previous output: {exc}")
            return False

        self.params = params
        # Intensities are [0, 1]; the sink works in 8-bit like the saved file
        self.display_u8 = to_display_uint8(restored)
        preview = downscale_preview(self.display_u8, self.preview_scale)

        if self._artist is None:
            self._artist = self.ax_img.imshow(preview, cmap="gray", vmin=0, vmax=255)
        else:
            self._artist.set_data(preview)
        self.ax_img.set_title(f"radius={params.radius}  snr={params.snr:g}")
        self.fig.canvas.draw_idle()

        if self.output_path is not None:
            save_image(self.display_u8, self.output_path)
        return True

    def show(self) -> None:
        plt.show()
