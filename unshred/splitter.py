"""Shred extraction from a shredded image."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

import numpy as np

from .errors import ConfigurationError

DEFAULT_SHRED_WIDTH = 32


def channel_max_for(dtype: np.dtype) -> float:
    """Return the largest representable channel value for an image dtype."""
    dtype = np.dtype(dtype)
    if np.issubdtype(dtype, np.integer):
        return float(np.iinfo(dtype).max)
    return 1.0


def normalize_channels(pixels: np.ndarray, channel_max: float) -> np.ndarray:
    """Map raw RGB channel values into [0, 1] as float64."""
    # Divide in floating point; integer division would collapse values to {0, 1}.
    return pixels[..., :3].astype(np.float64) / float(channel_max)


@dataclass(frozen=True)
class Shred:
    """A vertical strip of the shredded image with normalized boundary columns."""

    image: np.ndarray
    original_index: int
    edges: Dict[str, np.ndarray]

    @classmethod
    def from_image(cls, image: np.ndarray, original_index: int) -> "Shred":
        """Create a shred and extract its left and right edge columns."""
        channel_max = channel_max_for(image.dtype)
        edges = {
            "left": normalize_channels(image[:, 0, :], channel_max),
            "right": normalize_channels(image[:, -1, :], channel_max),
        }
        return cls(image=image, original_index=original_index, edges=edges)

    @property
    def height(self) -> int:
        return int(self.image.shape[0])

    @property
    def width(self) -> int:
        return int(self.image.shape[1])


def validate_image(image: np.ndarray, shred_width: int) -> int:
    """Check shredded-image preconditions and return the shred count."""
    if shred_width <= 0:
        raise ConfigurationError(f"shred width must be positive, got {shred_width}")
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ConfigurationError("image must be an HxWx3 or HxWx4 numpy array")

    height, width, _ = image.shape
    if height == 0 or width == 0:
        raise ConfigurationError("image must not be empty")
    if width % shred_width != 0:
        raise ConfigurationError(
            f"image width {width} is not a multiple of shred width {shred_width}"
        )
    return width // shred_width


def extract_shred(image: np.ndarray, shred_index: int, shred_width: int) -> np.ndarray:
    """Return a view of the pixel block for one shred."""
    shred_count = image.shape[1] // shred_width
    if not 0 <= shred_index < shred_count:
        raise IndexError(f"shred index {shred_index} out of range [0, {shred_count})")
    x0 = shred_index * shred_width
    return image[:, x0 : x0 + shred_width, :]


class ShredSplitter:
    """Split a shredded image into equal-width vertical shreds."""

    def __init__(self, shred_width: int = DEFAULT_SHRED_WIDTH) -> None:
        self.shred_width = int(shred_width)

    def split(self, image: np.ndarray) -> List[Shred]:
        """Split image into shreds in left-to-right order."""
        shred_count = validate_image(image, self.shred_width)
        shreds: List[Shred] = []
        for index in range(shred_count):
            shred_img = extract_shred(image, index, self.shred_width).copy()
            shreds.append(Shred.from_image(shred_img, original_index=index))
        return shreds
