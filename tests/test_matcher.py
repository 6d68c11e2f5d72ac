"""Tests for pixel and edge similarity."""

from __future__ import annotations

import numpy as np
import pytest

from unshred.errors import HeightMismatchError
from unshred.matcher import EdgeMatcher, channel_similarity, pixel_similarity
from unshred.splitter import Shred


def _two_column_shred(left_color, right_color, height: int = 4, index: int = 0) -> Shred:
    image = np.zeros((height, 2, 3), dtype=np.uint8)
    image[:, 0, :] = left_color
    image[:, 1, :] = right_color
    return Shred.from_image(image, original_index=index)


@pytest.mark.parametrize("a,b", [(0.0, 1.0), (0.25, 0.75), (0.1, 0.1), (1.0, 0.4)])
def test_channel_similarity_is_symmetric(a: float, b: float) -> None:
    """Swapping the two channels never changes the score."""
    assert channel_similarity(a, b) == channel_similarity(b, a)


def test_channel_similarity_extremes() -> None:
    """Equal channels score 1, opposite extremes score 0."""
    assert channel_similarity(0.3, 0.3) == 1.0
    assert channel_similarity(0.0, 1.0) == 0.0
    assert channel_similarity(1.0, 0.0) == 0.0


def test_pixel_similarity_identical_pixels_ignores_alpha() -> None:
    """Identical RGB with different alpha is a perfect match."""
    assert pixel_similarity((0.2, 0.4, 0.6, 1.0), (0.2, 0.4, 0.6, 0.0)) == 1.0


def test_pixel_similarity_white_vs_red() -> None:
    """Red matches white on one of three channels."""
    white = (1.0, 1.0, 1.0)
    red = (1.0, 0.0, 0.0)
    assert pixel_similarity(white, red) == pytest.approx(1.0 / 3.0)


def test_pixel_similarity_normalizes_in_floating_point() -> None:
    """Raw 16-bit channels stay fractional after normalization."""
    score = pixel_similarity((30000, 30000, 30000), (30001, 30000, 30000), channel_max=65535)
    assert 0.99 < score < 1.0
    assert pixel_similarity((65535, 0, 0), (0, 0, 0), channel_max=65535) == pytest.approx(2.0 / 3.0)


def test_shred_edges_are_normalized_for_16_bit_images() -> None:
    """Edge columns of uint16 shreds are scaled by 65535."""
    image = np.full((3, 4, 4), 65535, dtype=np.uint16)
    image[:, 0, 1] = 0
    shred = Shred.from_image(image, original_index=0)
    assert shred.edges["left"].shape == (3, 3)
    np.testing.assert_allclose(shred.edges["left"][0], [1.0, 0.0, 1.0])
    np.testing.assert_allclose(shred.edges["right"], np.ones((3, 3)))


def test_shred_similarity_is_directional() -> None:
    """Right edge of the left shred is compared with the left edge of the right shred."""
    a = _two_column_shred(left_color=(0, 0, 0), right_color=(255, 255, 255), index=0)
    b = _two_column_shred(left_color=(255, 255, 255), right_color=(255, 0, 0), index=1)
    matcher = EdgeMatcher()
    a_then_b = matcher.shred_similarity(a, b)
    b_then_a = matcher.shred_similarity(b, a)
    assert a_then_b == pytest.approx(1.0)
    assert b_then_a == pytest.approx(2.0 / 3.0)
    assert a_then_b != b_then_a


def test_shred_similarity_averages_rows() -> None:
    """Half matching rows and half opposite rows average to one half."""
    left = np.zeros((4, 2, 3), dtype=np.uint8)
    right = np.zeros((4, 2, 3), dtype=np.uint8)
    right[2:, 0, :] = 255
    matcher = EdgeMatcher()
    score = matcher.shred_similarity(
        Shred.from_image(left, original_index=0), Shred.from_image(right, original_index=1)
    )
    assert score == pytest.approx(0.5)


def test_shred_similarity_rejects_height_mismatch() -> None:
    """Shreds of different heights cannot be compared."""
    short = _two_column_shred((0, 0, 0), (0, 0, 0), height=3)
    tall = _two_column_shred((0, 0, 0), (0, 0, 0), height=5)
    with pytest.raises(HeightMismatchError, match="different heights"):
        EdgeMatcher().shred_similarity(short, tall)


def test_similarity_matrix_shape_and_range() -> None:
    """Matrix is N x N with every score in [0, 1]."""
    rng = np.random.default_rng(3)
    shreds = [
        Shred.from_image(rng.integers(0, 256, size=(10, 4, 3), dtype=np.uint8), original_index=i)
        for i in range(5)
    ]
    matrix = EdgeMatcher().build_similarity_matrix(shreds)
    assert matrix.shape == (5, 5)
    assert np.all(matrix >= 0.0)
    assert np.all(matrix <= 1.0)
    assert matrix[1, 3] == pytest.approx(EdgeMatcher().shred_similarity(shreds[1], shreds[3]))


def test_shred_similarity_matches_row_mean_of_pixel_similarity() -> None:
    """Edge score equals the mean of per-row pixel similarity."""
    rng = np.random.default_rng(11)
    left = Shred.from_image(rng.integers(0, 256, size=(6, 3, 4), dtype=np.uint8), original_index=0)
    right = Shred.from_image(rng.integers(0, 256, size=(6, 3, 4), dtype=np.uint8), original_index=1)
    expected = np.mean(
        [
            pixel_similarity(left.image[row, -1], right.image[row, 0], channel_max=255)
            for row in range(6)
        ]
    )
    assert EdgeMatcher().shred_similarity(left, right) == pytest.approx(expected)
