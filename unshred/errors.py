"""Error types raised by the unshredding pipeline."""

from __future__ import annotations


class UnshredError(Exception):
    """Base class for all reconstruction failures."""


class ConfigurationError(UnshredError, ValueError):
    """Image and shred width do not describe a valid shredded image."""


class HeightMismatchError(UnshredError):
    """Two shreds compared edge to edge have different heights."""

    def __init__(self, left_height: int, right_height: int) -> None:
        super().__init__(
            f"shreds have different heights ({left_height} vs {right_height})"
        )
        self.left_height = left_height
        self.right_height = right_height


class ImageIOError(UnshredError, OSError):
    """An image file could not be decoded or encoded."""
