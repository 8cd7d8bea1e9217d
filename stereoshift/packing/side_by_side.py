"""
Side-by-side packing of the base and synthesised views.
"""

import numpy as np

from stereoshift.errors import ArgumentError, DimensionError

LAYOUTS = ("RL", "LR", "L")


def horiz_stack(left: np.ndarray, right: np.ndarray) -> np.ndarray:
    """Concatenate two equal-height images horizontally.

    Parameters
    ----------
    left, right : np.ndarray
        H x W x C uint8 images (widths may differ).

    Returns
    -------
    np.ndarray
        H x (W_left + W_right) x C image with *left* in the first
        ``W_left`` columns and *right* after it.

    Raises
    ------
    DimensionError
        If the heights differ.
    """
    if left.shape[0] != right.shape[0]:
        raise DimensionError("image heights mismatched")

    h, w1 = left.shape[:2]
    w2 = right.shape[1]
    combined = np.zeros((h, w1 + w2) + left.shape[2:], dtype=left.dtype)
    combined[:, :w1] = left
    combined[:, w1:w1 + w2] = right
    return combined


def compose_output(base: np.ndarray, synthesized: np.ndarray,
                   layout: str) -> np.ndarray:
    """Arrange the views according to *layout*.

    ``LR`` puts the synthesised left view first, ``RL`` puts the base image
    first, and ``L`` returns the synthesised view alone.
    """
    if layout == "LR":
        return horiz_stack(synthesized, base)
    if layout == "RL":
        return horiz_stack(base, synthesized)
    if layout == "L":
        return synthesized
    raise ArgumentError(f"type must be one of {', '.join(LAYOUTS)} (got {layout!r})")
