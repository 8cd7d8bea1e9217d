"""
Exception hierarchy for the stereo synthesis pipeline.

Every failure is terminal for a run: the entry point reports the message and
exits before any output image is written.  Filesystem problems are not
wrapped and surface as the builtin ``OSError`` family.
"""


class StereoError(Exception):
    """Base class for all pipeline errors."""

    prefix = ""

    def __init__(self, what: str):
        super().__init__(what)
        self.what = what

    def __str__(self) -> str:
        return f"{self.prefix}{self.what}"


class DecodeError(StereoError):
    """An input file could not be decoded as an image."""

    prefix = "Unusable image: "


class DimensionError(StereoError):
    """Image dimensions are incompatible (base vs. map, or packed heights)."""

    prefix = "Unusable image: "


DimensionMismatch = DimensionError


class ArgumentError(StereoError):
    """Malformed size specifier or unknown output layout."""

    prefix = "Bad argument: "
