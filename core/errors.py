"""
Errors Module
Exception hierarchy shared by the comparison core and its collaborators.
"""


class VisualDiffError(Exception):
    """Base class for every error raised by the visual diff tool."""


class DimensionMismatchError(VisualDiffError, ValueError):
    """Two images handed to the comparator do not share the same size."""

    def __init__(self, size_a, size_b):
        self.size_a = size_a
        self.size_b = size_b
        super().__init__(
            f"Image sizes do not match: {size_a[0]}x{size_a[1]} vs {size_b[0]}x{size_b[1]}"
        )


class InvalidConfigError(VisualDiffError, ValueError):
    """A comparison option is outside its allowed range."""


class DecodeError(VisualDiffError):
    """Raw bytes could not be decoded into a raster image."""


class EncodeError(VisualDiffError):
    """A raster image could not be serialized."""


class CaptureError(VisualDiffError):
    """The browser failed to load or screenshot a page."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Failed to capture {url}: {reason}")
