"""
Diagnostic figures for the stereo synthesis pipeline.

All functions save figures to disk rather than displaying them interactively,
making the module suitable for headless execution.
"""

import os
import numpy as np
import matplotlib
matplotlib.use("Agg")          # non-interactive backend
import matplotlib.pyplot as plt

from stereoshift.warping.dibr import compute_shifts


def save_warp_overview(base: np.ndarray, depth: np.ndarray,
                       synthesized: np.ndarray, holes: np.ndarray,
                       name: str, out_dir: str) -> str:
    """Save a 2x2 grid: base image, height map, synthesised view, holes."""
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))

    axes[0, 0].imshow(base); axes[0, 0].set_title(f"{name} – base image"); axes[0, 0].axis("off")
    axes[0, 1].imshow(depth, cmap="gray", vmin=0, vmax=255)
    axes[0, 1].set_title("Height map"); axes[0, 1].axis("off")

    axes[1, 0].imshow(synthesized); axes[1, 0].set_title("Synthesised left view"); axes[1, 0].axis("off")

    pct = 100.0 * holes.mean() if holes.size else 0.0
    axes[1, 1].imshow(holes.astype(np.uint8), cmap="magma", vmin=0, vmax=1)
    axes[1, 1].set_title(f"Disocclusion holes ({int(holes.sum())} px, {pct:.1f}%)")
    axes[1, 1].axis("off")

    plt.tight_layout()
    path = os.path.join(out_dir, name, "warp_overview.jpg")
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()
    return path


def save_shift_histogram(depth: np.ndarray, effect_size: int,
                         name: str, out_dir: str) -> str:
    """Save a histogram of the per-pixel displacement implied by *depth*."""
    width = depth.shape[1]
    shifts = compute_shifts(depth.ravel(), effect_size, width=width)
    shown = min(effect_size, max(width - 1, 0))

    plt.figure(figsize=(10, 5))
    plt.hist(shifts, bins=max(1, min(shown + 1, 64)), edgecolor="black", alpha=0.7)
    plt.axvline(shown, color="red", linestyle="--", linewidth=2,
                label=f"Effect size = {effect_size}px")
    plt.xlabel("Horizontal shift (px)")
    plt.ylabel("Count")
    plt.title(f"{name} – shift distribution")
    plt.legend()
    plt.grid(True, alpha=0.3)
    path = os.path.join(out_dir, name, "shift_histogram.jpg")
    plt.savefig(path, dpi=150, bbox_inches="tight")
    plt.close()
    return path
