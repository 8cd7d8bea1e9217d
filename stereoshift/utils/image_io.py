"""
Image I/O helpers.

Thin wrappers around PIL and scikit-image for loading the base image and its
height map as uint8 arrays, writing the final output, and managing output
directories.
"""

import os
import struct

import numpy as np
from PIL import Image, UnidentifiedImageError
from skimage.color import rgb2gray
from skimage.util import img_as_ubyte

from stereoshift.errors import ArgumentError, DecodeError

# Formats PIL cannot write with an alpha channel
_NO_ALPHA_FORMATS = {"JPEG"}


def _open(path: str) -> Image.Image:
    # Filesystem errors come from open() and propagate unchanged; anything
    # raised while PIL parses the content is a decode failure.
    with open(path, "rb") as fh:
        try:
            img = Image.open(fh)
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError,
                OSError, EOFError, SyntaxError, ValueError, struct.error) as e:
            raise DecodeError(f"cannot decode {path}: {e}") from None
    return img


def load_base_image(path: str) -> np.ndarray:
    """Load the base image as an H x W x 4 uint8 RGBA array.

    The file format is detected from the content, not the extension.
    """
    return np.array(_open(path).convert("RGBA"))


def to_grayscale(img: Image.Image) -> np.ndarray:
    """Reduce a PIL image to an H x W uint8 intensity array.

    8-bit grayscale images are returned unchanged and 16-bit grayscale
    images are rescaled to 8 bits with rounding.  Everything else is
    converted to RGB and reduced with Rec. 709 luma weights.
    """
    if img.mode == "L":
        return np.array(img)
    if img.mode.startswith("I;16"):
        return np.round(np.array(img).astype(np.float64) / 257.0).astype(np.uint8)
    return img_as_ubyte(rgb2gray(np.array(img.convert("RGB"))))


def load_height_map(path: str) -> np.ndarray:
    """Load a height map as an H x W uint8 array (brighter = nearer)."""
    return to_grayscale(_open(path))


def save_image(img: np.ndarray, path: str) -> None:
    """Write *img* to *path*; the format is inferred from the extension.

    Parameters
    ----------
    img : np.ndarray
        H x W x 4 uint8 RGBA (or H x W x 3 RGB) image.
    path : str
        Destination file path.
    """
    ext = os.path.splitext(path)[1].lower()
    fmt = Image.registered_extensions().get(ext)
    if fmt is None:
        raise ArgumentError(f"unsupported output format {ext or '(none)'!r}")

    out = Image.fromarray(img)
    if fmt in _NO_ALPHA_FORMATS and out.mode == "RGBA":
        out = out.convert("RGB")
    out.save(path, format=fmt)


def ensure_parent_dir(path: str) -> None:
    """Create the directory that will hold *path* if it does not exist."""
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def ensure_output_dirs(names: list, base: str = "results") -> None:
    """Create one diagnostics subdirectory per job name under *base*."""
    for name in names:
        os.makedirs(os.path.join(base, name), exist_ok=True)
