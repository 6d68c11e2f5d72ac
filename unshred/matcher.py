"""Pixel and edge similarity between shreds."""

from __future__ import annotations

from typing import List, Optional, Sequence, Union

import numpy as np

from .errors import HeightMismatchError
from .splitter import Shred

ArrayOrFloat = Union[float, np.ndarray]


def channel_similarity(a: ArrayOrFloat, b: ArrayOrFloat) -> ArrayOrFloat:
    """Similarity of two normalized channel intensities: ``1 - |a - b|``."""
    return 1.0 - np.abs(np.subtract(a, b, dtype=np.float64))


def column_similarity(left_column: np.ndarray, right_column: np.ndarray) -> np.ndarray:
    """Pixel similarity for every row of two normalized ``(H, C)`` columns.

    This is the row-vectorized form of :func:`pixel_similarity`; channels past
    the third (alpha) are ignored.
    """
    return np.mean(channel_similarity(left_column[:, :3], right_column[:, :3]), axis=1)


def pixel_similarity(
    pixel_a: Sequence[float],
    pixel_b: Sequence[float],
    channel_max: Optional[float] = None,
) -> float:
    """Average channel similarity over R, G and B; alpha is ignored.

    Pixels are taken as already normalized to [0, 1] unless ``channel_max`` is
    given, in which case raw channel values are scaled by it first.
    """
    a = np.asarray(pixel_a, dtype=np.float64).reshape(1, -1)
    b = np.asarray(pixel_b, dtype=np.float64).reshape(1, -1)
    if channel_max is not None:
        a = a / float(channel_max)
        b = b / float(channel_max)
    return float(column_similarity(a, b)[0])


class EdgeMatcher:
    """Compute directional edge similarity between shreds."""

    def shred_similarity(self, left: Shred, right: Shred) -> float:
        """Compare the rightmost column of ``left`` with the leftmost column of ``right``."""
        left_edge = left.edges["right"]
        right_edge = right.edges["left"]
        if left_edge.shape[0] != right_edge.shape[0]:
            raise HeightMismatchError(left_edge.shape[0], right_edge.shape[0])
        if left_edge.shape[0] == 0:
            return 0.0
        return float(np.mean(column_similarity(left_edge, right_edge)))

    def build_similarity_matrix(self, shreds: List[Shred]) -> np.ndarray:
        """Build the full directional similarity matrix ``[left, right]``."""
        n = len(shreds)
        similarity = np.zeros((n, n), dtype=np.float64)
        for i in range(n):
            for j in range(n):
                similarity[i, j] = self.shred_similarity(shreds[i], shreds[j])
        return similarity

    def ring_similarity(self, ordering: Sequence[int], similarity: np.ndarray) -> float:
        """Sum of adjacent similarities around the cyclic ordering."""
        n = len(ordering)
        total = 0.0
        for pos in range(n):
            total += float(similarity[ordering[pos], ordering[(pos + 1) % n]])
        return total
