"""
#python -m main_deblur                               # synthetic scene, defaults
#python -m main_deblur --image photo.jpg --radius 12 --snr 800
#python -m main_deblur --image photo.jpg --interactive
#python -m main_deblur --test all

main_deblur.py - Wiener deblur of a defocused image: load → restore → save

WHAT THIS FILE DOES
-------------------
1) Gets a grayscale image: either a photo (--image) or a synthetic sharp
   scene that is then blurred with a disk PSF (+ optional noise)
2) Restores it with the Wiener filter for the given (radius, snr)
3) Converts the result to 8-bit, writes filtered.jpg and a 0.3× preview
4) Saves a 3-panel figure: Input | Restored | Wiener gain vs frequency,
   and prints MAE figures when a sharp reference exists

With --interactive, opens the Radius/SNR slider window instead.

NOTES
-----
• The numeric core lives in defocus_deblur/; this file is only plumbing.
• Defaults (radius 64, snr 1200) are the slider start positions. For the
  synthetic demo the restore radius defaults to the simulated blur radius.

© 2025 Ali Pouya, Imaging Pipeline (defocus deblur edition)
"""

from __future__ import annotations
import argparse
from pathlib import Path
from typing import Sequence

import numpy as np
import matplotlib.pyplot as plt

from defocus_deblur.errors import DeblurError
from defocus_deblur.optics.psf_model import apply_defocus_blur, disk_psf
from defocus_deblur.restoration.wiener_filter import DeblurParams, apply_filter, build_wiener_filter, restore
from defocus_deblur.scenes.scene_generator import generate_scene, load_grayscale
from defocus_deblur.utils.display import (
    DEFAULT_OUTPUT_NAME,
    DEFAULT_PREVIEW_SCALE,
    downscale_preview,
    save_image,
    to_display_uint8,
)
from defocus_deblur.utils.metrics_module import mean_absolute_error, psnr, radial_profile, restoration_gain
from defocus_deblur.viewer import DeblurViewer


def run_once(
    blurred: np.ndarray,
    params: DeblurParams,
    sharp: np.ndarray | None = None,
    outdir: str | Path = "outputs",
    preview_scale: float = DEFAULT_PREVIEW_SCALE,
    show: bool = True,
) -> np.ndarray:
    """
    Restore one image, save outputs, and optionally show the overview figure.

    Parameters
    ----------
    blurred : ndarray
        2-D grayscale input in [0, 1].
    params : DeblurParams
        Radius / SNR for the Wiener filter.
    sharp : ndarray | None
        Ground-truth sharp image (synthetic runs only) for MAE/PSNR.
    outdir : str | Path
        Directory for filtered.jpg, preview.png and deblur_overview.png.
    preview_scale : float
        Downscale factor for preview.png.
    show : bool
        Call plt.show() at the end.

    Returns
    -------
    restored : float32 ndarray (unclamped)
    """
    outpath = Path(outdir)
    outpath.mkdir(parents=True, exist_ok=True)

    W = build_wiener_filter(blurred.shape, params.radius, params.snr)
    restored = apply_filter(blurred, W)
    f_norm, gain = radial_profile(W)

    restored_u8 = to_display_uint8(restored)
    save_image(restored_u8, outpath / DEFAULT_OUTPUT_NAME)
    save_image(downscale_preview(restored_u8, preview_scale), outpath / "preview.png")

    # --- 3-up visualization: Input | Restored | Wiener gain ---
    fig, axs = plt.subplots(1, 3, figsize=(13, 4))
    axs[0].imshow(blurred, cmap="gray", vmin=0, vmax=1);   axs[0].set_title("Input (blurred)"); axs[0].axis("off")
    axs[1].imshow(np.clip(restored, 0, 1), cmap="gray", vmin=0, vmax=1)
    axs[1].set_title(f"Restored (r={params.radius}, SNR={params.snr:g})"); axs[1].axis("off")
    axs[2].plot(f_norm, gain)
    axs[2].set_xlabel("Spatial frequency (cycles/pixel, Nyquist=0.5)")
    axs[2].set_ylabel("Wiener gain")
    axs[2].set_title("Transfer function (orientation-averaged)")
    axs[2].grid(True, alpha=0.3)
    fig.tight_layout()
    fig.savefig(outpath / "deblur_overview.png", dpi=150)

    print(f"[OK] Saved outputs to: {outpath.resolve()}")
    if sharp is not None:
        mae_before = mean_absolute_error(blurred, sharp)
        mae_after = mean_absolute_error(restored, sharp)
        print(f"MAE blurred {mae_before:.4f} → restored {mae_after:.4f} "
              f"(gain ×{restoration_gain(sharp, blurred, restored):.2f}, "
              f"PSNR {psnr(restored, sharp):.2f} dB)")

    if show:
        plt.show()
    else:
        plt.close(fig)
    return restored


# -----------------------------------------------------------------------------
# Quick Tests (visual self-checks; pytest suite lives in tests/)
# -----------------------------------------------------------------------------
# Run all:            python -m main_deblur --test all
# PSF gallery:        python -m main_deblur --test psf
# Filter profiles:    python -m main_deblur --test filter
# Restore sweep:      python -m main_deblur --test restore
# -----------------------------------------------------------------------------

def test_psf(size: int = 128, outdir: str | Path = "outputs_test_psf"):
    """
    Purpose: eyeball the disk PSF for a few radii.
    Expectation: filled disks, sum == 1 printed in each title.
    """
    outdir = Path(outdir); outdir.mkdir(parents=True, exist_ok=True)
    radii = [0, 2, 8, 24]
    fig = plt.figure(figsize=(12, 3))
    for i, r in enumerate(radii, start=1):
        psf = disk_psf((size, size), r)
        ax = fig.add_subplot(1, len(radii), i)
        ax.imshow(psf, cmap="inferno")
        ax.set_title(f"r={r} (sum={psf.sum():.4f})")
        ax.axis("off")
    fig.tight_layout()
    fig.savefig(outdir / "psf_gallery.png", dpi=150)
    plt.close(fig)
    print("[TEST psf] saved:", (outdir / "psf_gallery.png").resolve())


def test_filter(size: int = 256, outdir: str | Path = "outputs_test_filter"):
    """
    Purpose: show how SNR trades restoration against noise gain.
    Expectation: higher SNR → taller gain curve, dips at the jinc zeros.
    """
    outdir = Path(outdir); outdir.mkdir(parents=True, exist_ok=True)
    plt.figure()
    for snr in (10, 100, 1000):
        W = build_wiener_filter((size, size), 8, snr)
        f_norm, gain = radial_profile(W)
        plt.plot(f_norm, gain, label=f"SNR={snr}")
    plt.xlabel("Normalized f (cyc/pix)"); plt.ylabel("Wiener gain")
    plt.title("Wiener gain, disk radius 8"); plt.legend(); plt.grid(True, alpha=0.3)
    plt.tight_layout(); plt.savefig(outdir / "wiener_gain.png", dpi=150)
    plt.close()
    print("[TEST filter] saved gain curves to:", outdir.resolve())


def test_restore(size: int = 256, outdir: str | Path = "outputs_test_restore"):
    """
    Purpose: blur a Siemens star, then restore with under/true/over radius.
    Expectation: the true radius gives the lowest MAE.
    """
    outdir = Path(outdir); outdir.mkdir(parents=True, exist_ok=True)
    sharp = generate_scene("siemens_star", size)
    blurred = apply_defocus_blur(sharp, 6, noise_sigma=0.002)
    fig = plt.figure(figsize=(12, 3))
    ax = fig.add_subplot(1, 4, 1); ax.imshow(blurred, cmap="gray", vmin=0, vmax=1)
    ax.set_title("Blurred (r=6)"); ax.axis("off")
    for i, r in enumerate((3, 6, 12), start=2):
        restored = restore(blurred, r, 300)
        ax = fig.add_subplot(1, 4, i)
        ax.imshow(np.clip(restored, 0, 1), cmap="gray", vmin=0, vmax=1)
        ax.set_title(f"r={r}, MAE={mean_absolute_error(restored, sharp):.3f}")
        ax.axis("off")
    fig.tight_layout(); fig.savefig(outdir / "restore_radius_sweep.png", dpi=150)
    plt.close(fig)
    print("[TEST restore] saved radius sweep to:", outdir.resolve())


# -----------------------------------------------------------------------------
# CLI
# -----------------------------------------------------------------------------

def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Wiener deblur of a defocused grayscale image")
    p.add_argument("--image", default=None, help="path to a blurred photo (PNG/JPG); omit for a synthetic scene")
    p.add_argument("--scene", default="siemens_star",
                   help="synthetic scene: flat_square, slanted_edge, checker, siemens_star")
    p.add_argument("--size", type=int, default=256, help="synthetic scene size (pixels)")
    p.add_argument("--blur_radius", type=int, default=8, help="synthetic: disk radius used to blur the scene")
    p.add_argument("--noise_sigma", type=float, default=0.0, help="synthetic: additive Gaussian noise sigma")
    p.add_argument("--radius", type=int, default=None,
                   help="restore disk radius (default: blur_radius for synthetic, 64 for --image)")
    p.add_argument("--snr", type=float, default=DeblurParams.snr, help="assumed signal-to-noise ratio (> 0)")
    p.add_argument("--preview_scale", type=float, default=DEFAULT_PREVIEW_SCALE, help="preview downscale factor")
    p.add_argument("--outdir", default="outputs", help="output directory")
    p.add_argument("--interactive", action="store_true", help="open the Radius/SNR slider window")
    p.add_argument("--no_show", action="store_true", help="do not open a figure window")
    p.add_argument("--test", default=None, choices=["psf", "filter", "restore", "all"],
                   help="run quick visual tests instead of a restoration")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)

    if args.test:
        if args.test in ("psf", "all"):
            test_psf(size=min(args.size, 256))
        if args.test in ("filter", "all"):
            test_filter(size=min(args.size, 384))
        if args.test in ("restore", "all"):
            test_restore(size=min(args.size, 384))
        return 0

    sharp = None
    if args.image:
        blurred = load_grayscale(args.image)
        radius = DeblurParams.radius if args.radius is None else args.radius
    else:
        sharp = generate_scene(args.scene, args.size)
        blurred = apply_defocus_blur(sharp, args.blur_radius, noise_sigma=args.noise_sigma)
        radius = args.blur_radius if args.radius is None else args.radius

    try:
        params = DeblurParams(radius=radius, snr=args.snr)
    except DeblurError as exc:
        print(f"[ERROR] {exc}")
        return 2

    if args.interactive:
        viewer = DeblurViewer(blurred, params,
                              output_path=Path(args.outdir) / DEFAULT_OUTPUT_NAME,
                              preview_scale=args.preview_scale)
        viewer.show()
        return 0

    run_once(blurred, params, sharp=sharp, outdir=args.outdir,
             preview_scale=args.preview_scale, show=not args.no_show)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
