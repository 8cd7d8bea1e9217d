"""
Depth-image-based rendering (DIBR) of a virtual left-eye view.

Every pixel of the base image is pushed to the right by an amount
proportional to its height-map sample, as seen from a camera offset to the
left of the original one.  Output columns that no source pixel lands on
(disocclusion holes) are filled by pulling over the nearest written pixel to
their left.
"""

import numpy as np


def compute_shifts(depth_row: np.ndarray, effect_size: int,
                   width: int = None) -> np.ndarray:
    """Per-column displacement for one row of the height map.

    Parameters
    ----------
    depth_row : np.ndarray
        1-D uint8 array of height samples.
    effect_size : int
        Displacement (pixels) applied at intensity 255.
    width : int
        Row width; shifts are capped at ``width - 1``.  Defaults to
        ``len(depth_row)``.

    Returns
    -------
    np.ndarray
        1-D int64 array, ``trunc(effect_size * depth / 255)`` evaluated in
        single precision.
    """
    if width is None:
        width = depth_row.shape[0]
    limit = max(width - 1, 0)
    # Any sample >= 1 already reaches the right edge at this magnitude,
    # and it keeps the float32 product finite.
    effect_size = min(effect_size, 255 * (limit + 1))
    scaled = np.float32(effect_size) * depth_row.astype(np.float32) / np.float32(255.0)
    return np.minimum(scaled, np.float32(limit)).astype(np.int64)


def warp_row(base_row: np.ndarray, depth_row: np.ndarray, effect_size: int,
             out_row: np.ndarray, present: np.ndarray) -> None:
    """Warp a single row of *base_row* into *out_row* in place.

    *present* is the caller-owned presence mask for this row; it is reset
    here and left holding True for every column written by displacement
    (False marks a filled hole).

    Parameters
    ----------
    base_row : np.ndarray
        W x C source pixels.
    depth_row : np.ndarray
        W uint8 height samples.
    effect_size : int
        Maximum displacement in pixels.
    out_row : np.ndarray
        W x C destination pixels, overwritten completely.
    present : np.ndarray
        W boolean scratch buffer.
    """
    width = base_row.shape[0]
    present.fill(False)
    if width == 0:
        return
    shifts = compute_shifts(depth_row, effect_size)

    # Right to left, so a barely-shifted pixel never clobbers a heavily
    # shifted one arriving from its left.
    for j in range(width - 1, -1, -1):
        j2 = min(j + int(shifts[j]), width - 1)
        out_row[j2] = base_row[j]
        present[j2] = True

    # Unwritten columns take the nearest written pixel to their left.
    last_pix = base_row[0].copy()
    for j in range(width):
        if present[j]:
            last_pix = out_row[j].copy()
        else:
            out_row[j] = last_pix


def infer_left_view(base: np.ndarray, depth: np.ndarray, effect_size: int,
                    return_holes: bool = False):
    """Synthesise the left-eye view of *base* from its height map.

    The caller guarantees ``base.shape[:2] == depth.shape``.

    Parameters
    ----------
    base : np.ndarray
        H x W x 4 uint8 RGBA image.
    depth : np.ndarray
        H x W uint8 height map; brighter means larger displacement.
    effect_size : int
        Displacement (pixels) applied at full intensity.
    return_holes : bool
        Also return the disocclusion mask.

    Returns
    -------
    output : np.ndarray
        Synthesised view, same shape and dtype as *base*.
    holes : np.ndarray
        H x W boolean mask of hole-filled pixels (only if *return_holes*).
    """
    height, width = base.shape[:2]
    output = np.zeros_like(base)
    holes = np.zeros((height, width), dtype=bool)
    present = np.zeros(width, dtype=bool)

    for i in range(height):
        warp_row(base[i], depth[i], effect_size, output[i], present)
        holes[i] = ~present

    if return_holes:
        return output, holes
    return output
