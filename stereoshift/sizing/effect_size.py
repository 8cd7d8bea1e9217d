"""
Effect-size parsing.

The maximum horizontal displacement is given either as an absolute number of
pixels (``"12"`` or ``"12px"``) or as a percentage of the image width
(``"2%"``).  The result is the shift applied to pixels at full depth
intensity.
"""

import math
import sys

from stereoshift.errors import ArgumentError


def split_specifier(specified: str):
    """Split a size specifier into its multiplier unit and numeric text.

    Returns
    -------
    is_percent : bool
        True when the value is a percentage of the reference width.
    numeric_str : str
        The specifier with its unit suffix removed.
    """
    if specified.endswith("%"):
        return True, specified[:-1]
    if specified.endswith("px"):
        return False, specified[:-2]
    return False, specified


def parse_effect_size(specified: str, width: int) -> int:
    """Resolve a displacement specifier into a whole number of pixels.

    Parameters
    ----------
    specified : str
        ``"<n>"``, ``"<n>px"`` or ``"<n>%"``.
    width : int
        Reference image width used for percentage specifiers.

    Returns
    -------
    int
        ``floor(multiplier * n)`` where the multiplier is ``width / 100``
        for percentages and 1 otherwise.

    Raises
    ------
    ArgumentError
        If the number does not parse, is not strictly positive, or is not a
        normal finite float.
    """
    is_percent, numeric_str = split_specifier(str(specified))
    mult = width / 100.0 if is_percent else 1.0

    try:
        num = float(numeric_str)
    except ValueError:
        raise ArgumentError("size must be a number of pixels or x%") from None

    if num <= 0.0:
        raise ArgumentError("size must be strictly positive")
    # NaN fails both comparisons above and lands here too
    if not math.isfinite(num) or num < sys.float_info.min:
        raise ArgumentError("size must be a normal float")

    scaled = mult * num
    if not math.isfinite(scaled):
        scaled = sys.float_info.max
    return int(math.floor(scaled))
