"""Image I/O, assembly and synthetic-data helpers."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Tuple, Union

import numpy as np

from .errors import ConfigurationError, ImageIOError
from .splitter import Shred, channel_max_for

try:
    import cv2  # type: ignore
except ImportError:  # pragma: no cover
    cv2 = None

PathLike = Union[str, Path]

LOSSLESS_SUFFIXES = frozenset({".png", ".tif", ".tiff"})


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def shuffle_shreds(shreds: List[Shred], seed: int = 42) -> Tuple[List[Shred], np.ndarray]:
    """Return a shuffled copy of shreds and the applied permutation."""
    rng = set_random_seed(seed)
    order = rng.permutation(len(shreds))
    return [shreds[i] for i in order], order


def compose_image_from_ordering(ordering: Sequence[int], shreds: List[Shred]) -> np.ndarray:
    """Place ``shreds[ordering[d]]`` into slot ``d`` of a freshly allocated image."""
    if len(ordering) != len(shreds):
        raise ConfigurationError(f"ordering has {len(ordering)} entries for {len(shreds)} shreds")
    height, shred_w, channels = shreds[0].image.shape
    canvas = np.zeros((height, shred_w * len(ordering), channels), dtype=shreds[0].image.dtype)
    for dest, src in enumerate(ordering):
        x0 = dest * shred_w
        canvas[:, x0 : x0 + shred_w, :] = shreds[int(src)].image
    return canvas


def compose_image_list_order(shreds: List[Shred]) -> np.ndarray:
    """Compose an image with shreds laid out in list order."""
    return compose_image_from_ordering(list(range(len(shreds))), shreds)


def generate_random_image(height: int = 120, width: int = 256, seed: int = 42) -> np.ndarray:
    """Generate a purely random RGB image."""
    rng = set_random_seed(seed)
    return rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8)


def generate_panorama_image(height: int = 120, width: int = 256, seed: int = 42) -> np.ndarray:
    """Generate a smooth panorama whose columns are distinct and change gradually.

    Green and blue trace a color circle around the full width, so neighboring
    columns are close and distant columns are not. Red climbs slowly from left
    to right, leaving a visible jump where the right border meets the left one.
    """
    rng = set_random_seed(seed)
    x = np.arange(width, dtype=np.float64)
    y = np.arange(height, dtype=np.float64)
    xv, yv = np.meshgrid(x, y)
    phase = float(rng.uniform(0.0, 2.0 * np.pi))
    theta = 2.0 * np.pi * xv / width + phase + 0.15 * np.sin(2.0 * np.pi * yv / max(height, 1))
    r = 0.3 * xv / max(width - 1, 1) + 0.05 * (yv / max(height - 1, 1))
    g = 0.5 + 0.5 * np.cos(theta)
    b = 0.5 + 0.5 * np.sin(theta)
    img = np.stack([r, g, b], axis=2) * 255.0
    return np.clip(np.rint(img), 0, 255).astype(np.uint8)


def generate_solid_image(height: int = 40, width: int = 128, color=(200, 40, 90)) -> np.ndarray:
    """Generate a single-color RGB image."""
    img = np.zeros((height, width, 3), dtype=np.uint8)
    img[:, :, :] = np.asarray(color, dtype=np.uint8)
    return img


def _to_rgb_layout(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return np.repeat(image[:, :, None], 3, axis=2)
    if image.ndim == 3 and image.shape[2] == 1:
        return np.repeat(image, 3, axis=2)
    if image.ndim == 3 and image.shape[2] in (3, 4):
        return image
    raise ImageIOError(f"unsupported image layout with shape {image.shape}")


def load_image(path: PathLike) -> np.ndarray:
    """Load an image as an RGB or RGBA array.

    With OpenCV the channel depth is kept (8 or 16 bit). The matplotlib fallback
    only reads 8-bit data: 16-bit files come back quantized to uint8.
    """
    path = Path(path)
    if cv2 is not None:
        try:
            image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
        except cv2.error as exc:
            raise ImageIOError(f"failed to decode image {path}: {exc}") from exc
        if image is None:
            raise ImageIOError(f"failed to load image from path: {path}")
        image = _to_rgb_layout(image)
        if image.shape[2] == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
        return cv2.cvtColor(image, cv2.COLOR_BGR2RGB)

    import matplotlib.image as mpimg

    try:
        image = mpimg.imread(path)
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"failed to load image from path: {path}") from exc
    if image.dtype != np.uint8:
        image = np.clip(np.rint(image * 255.0), 0, 255).astype(np.uint8)
    return _to_rgb_layout(image)


def check_lossless_suffix(path: PathLike) -> None:
    """Reject output paths whose suffix selects a lossy or unknown format."""
    suffix = Path(path).suffix.lower()
    if suffix not in LOSSLESS_SUFFIXES:
        raise ImageIOError(
            f"output {path} must use a lossless format ({', '.join(sorted(LOSSLESS_SUFFIXES))})"
        )


def save_image(path: PathLike, image: np.ndarray) -> None:
    """Save an RGB or RGBA image losslessly; the format follows the file suffix."""
    path = Path(path)
    check_lossless_suffix(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ImageIOError(f"cannot create output directory for {path}") from exc

    if cv2 is not None:
        code = cv2.COLOR_RGBA2BGRA if image.shape[2] == 4 else cv2.COLOR_RGB2BGR
        try:
            ok = cv2.imwrite(str(path), cv2.cvtColor(image, code))
        except cv2.error as exc:
            raise ImageIOError(f"failed to encode image {path}: {exc}") from exc
        if not ok:
            raise ImageIOError(f"failed to write image to path: {path}")
        return

    import matplotlib.pyplot as plt

    data = image
    if data.dtype != np.uint8:
        data = data.astype(np.float64) / channel_max_for(data.dtype)
    try:
        plt.imsave(path, data)
    except (OSError, ValueError) as exc:
        raise ImageIOError(f"failed to write image to path: {path}") from exc
