"""Diagnostic trace sink and text reports for the solver."""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

logger = logging.getLogger(__name__)


class SolverTrace:
    """Receives solver progress events. The base implementation discards them."""

    def chain_step(self, position: int, shred_index: int, score: float) -> None:
        pass

    def seam_found(self, seam_index: int, delta: float) -> None:
        pass

    def ordering_final(self, ordering: Sequence[int]) -> None:
        pass


class LoggingTrace(SolverTrace):
    """Forward solver events to a logger at DEBUG level."""

    def __init__(self, log: logging.Logger = logger) -> None:
        self.log = log

    def chain_step(self, position: int, shred_index: int, score: float) -> None:
        self.log.debug("chain[%d] = shred %d (similarity %.4f)", position, shred_index, score)

    def seam_found(self, seam_index: int, delta: float) -> None:
        self.log.debug("seam after ring position %d (delta %.4f)", seam_index, delta)

    def ordering_final(self, ordering: Sequence[int]) -> None:
        self.log.debug("final ordering: %s", list(ordering))


class RecordingTrace(SolverTrace):
    """Keep every event in memory; handy for inspecting a single run."""

    def __init__(self) -> None:
        self.steps: List[tuple] = []
        self.seams: List[tuple] = []
        self.orderings: List[List[int]] = []

    def chain_step(self, position: int, shred_index: int, score: float) -> None:
        self.steps.append((position, shred_index, score))

    def seam_found(self, seam_index: int, delta: float) -> None:
        self.seams.append((seam_index, delta))

    def ordering_final(self, ordering: Sequence[int]) -> None:
        self.orderings.append(list(ordering))


def format_similarity_matrix(similarity: np.ndarray) -> str:
    """Render an N x N similarity matrix as a percentage grid."""
    n = similarity.shape[0]
    lines = [f"{'':6}" + "".join(f"{j:6d}" for j in range(n))]
    for i in range(n):
        cells = "".join(f"{similarity[i, j] * 100:6.2f}" for j in range(n))
        lines.append(f"{i:6d}{cells}")
    return "\n".join(lines)


def format_seam_report(ordering: Sequence[int], ring: np.ndarray) -> str:
    """Per ring position: neighbor triple, both adjacent similarities, mean and delta."""
    n = len(ordering)
    lines = [f"{'L':>3}{'M':>3}{'R':>3}{'L-M':>8}{'M-R':>8}{'mean':>8}{'delta':>8}"]
    for pos in range(n):
        left = ordering[(pos - 1) % n]
        right = ordering[(pos + 1) % n]
        left_middle = float(ring[(pos - 1) % n])
        middle_right = float(ring[pos])
        mean = 0.5 * (left_middle + middle_right)
        delta = left_middle - middle_right
        lines.append(
            f"{left:3d}{ordering[pos]:3d}{right:3d}"
            f"{left_middle * 100:8.2f}{middle_right * 100:8.2f}"
            f"{mean * 100:8.2f}{delta * 100:8.2f}"
        )
    return "\n".join(lines)
