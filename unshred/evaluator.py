"""Evaluation metrics for unshredding quality."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .matcher import EdgeMatcher
from .splitter import Shred


@dataclass
class EvaluationResult:
    """Container for reconstruction metrics."""

    position_accuracy: float
    neighbor_accuracy: float
    ring_similarity: float


class UnshredEvaluator:
    """Compare a solved ordering with the shreds' original positions."""

    def __init__(self) -> None:
        self.matcher = EdgeMatcher()

    def compute_position_accuracy(self, ordering: Sequence[int], shreds: List[Shred]) -> float:
        """Fraction of shreds restored to their original slot."""
        total = len(ordering)
        correct = sum(
            1 for pos, idx in enumerate(ordering) if shreds[int(idx)].original_index == pos
        )
        return correct / total if total else 0.0

    def compute_neighbor_accuracy(self, ordering: Sequence[int], shreds: List[Shred]) -> float:
        """Fraction of ring links that join original neighbors; ignores rotation."""
        n = len(ordering)
        if n == 0:
            return 0.0
        correct = 0
        for pos in range(n):
            cur = shreds[int(ordering[pos])].original_index
            nxt = shreds[int(ordering[(pos + 1) % n])].original_index
            if nxt == (cur + 1) % n:
                correct += 1
        return correct / n

    def evaluate(
        self, ordering: Sequence[int], shreds: List[Shred], similarity: np.ndarray
    ) -> EvaluationResult:
        """Calculate all metrics for a solved ordering."""
        return EvaluationResult(
            position_accuracy=self.compute_position_accuracy(ordering, shreds),
            neighbor_accuracy=self.compute_neighbor_accuracy(ordering, shreds),
            ring_similarity=self.matcher.ring_similarity(ordering, similarity),
        )
