"""Shred ordering: greedy chain construction and seam location."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError, UnshredError
from .matcher import EdgeMatcher
from .splitter import DEFAULT_SHRED_WIDTH, Shred, ShredSplitter
from .trace import SolverTrace


@dataclass
class SolverConfig:
    """Configuration for the unshredding solver."""

    shred_width: int = DEFAULT_SHRED_WIDTH
    seed_index: int = 0


@dataclass
class UnshredResult:
    """Everything the solver decided for one image."""

    chain: List[int]
    chain_scores: np.ndarray
    seam_index: int
    ordering: List[int]
    ring_scores: np.ndarray
    similarity_matrix: np.ndarray


class ChainBuilder:
    """Greedy nearest-neighbor chaining over a directional similarity matrix."""

    def __init__(self, seed_index: int = 0, trace: Optional[SolverTrace] = None) -> None:
        self.seed_index = seed_index
        self.trace = trace if trace is not None else SolverTrace()

    def build_chain(self, similarity: np.ndarray) -> Tuple[List[int], np.ndarray]:
        """Return the chain of shred indices and the score linking each to its predecessor."""
        n = similarity.shape[0]
        if n == 0:
            return [], np.zeros(0, dtype=np.float64)
        if not 0 <= self.seed_index < n:
            raise ConfigurationError(f"seed index {self.seed_index} out of range [0, {n})")

        chain = [self.seed_index]
        scores = np.full(n, np.nan, dtype=np.float64)
        unused = set(range(n))
        unused.remove(self.seed_index)
        self.trace.chain_step(0, self.seed_index, float("nan"))

        for pos in range(1, n):
            if not unused:
                raise UnshredError(f"no candidate shred left for chain position {pos}")
            tail = chain[-1]
            candidates = np.array(sorted(unused), dtype=np.int64)
            candidate_scores = similarity[tail, candidates]
            # argmax returns the first maximum, so ties go to the lowest index.
            best = int(np.argmax(candidate_scores))
            choice = int(candidates[best])
            chain.append(choice)
            scores[pos] = float(candidate_scores[best])
            unused.remove(choice)
            self.trace.chain_step(pos, choice, scores[pos])

        return chain, scores


class SeamFinder:
    """Locate the spurious adjacency in a chain read as a ring."""

    def __init__(self, trace: Optional[SolverTrace] = None) -> None:
        self.trace = trace if trace is not None else SolverTrace()

    @staticmethod
    def ring_scores(ordering: Sequence[int], similarity: np.ndarray) -> np.ndarray:
        """Similarity between each ring position and the next one."""
        n = len(ordering)
        ring = np.zeros(n, dtype=np.float64)
        for pos in range(n):
            ring[pos] = similarity[ordering[pos], ordering[(pos + 1) % n]]
        return ring

    @staticmethod
    def deltas(ring: np.ndarray) -> np.ndarray:
        """``ring[i - 1] - ring[i]`` for every ring position."""
        return np.roll(ring, 1) - ring

    def find_seam(self, ordering: Sequence[int], ring: np.ndarray) -> int:
        """Return the ring position whose shred should end up last."""
        n = len(ordering)
        if n == 0:
            raise UnshredError("cannot find a seam in an empty ordering")
        if ring.shape[0] != n:
            raise UnshredError(f"ring has {ring.shape[0]} scores for {n} shreds")

        delta = self.deltas(ring)
        seam = int(np.argmax(delta))
        if delta[seam] <= 0.0:
            seam = n - 1
        self.trace.seam_found(seam, float(delta[seam]))
        return seam

    @staticmethod
    def rotate(ordering: Sequence[int], seam: int) -> List[int]:
        """Break the ring just after ``seam``."""
        start = (seam + 1) % len(ordering)
        return list(ordering[start:]) + list(ordering[:start])


class UnshredSolver:
    """Recover the left-to-right order of shuffled shreds."""

    def __init__(self, config: Optional[SolverConfig] = None, trace: Optional[SolverTrace] = None) -> None:
        self.config = config if config is not None else SolverConfig()
        self.trace = trace if trace is not None else SolverTrace()
        self.matcher = EdgeMatcher()
        self.chain_builder = ChainBuilder(seed_index=self.config.seed_index, trace=self.trace)
        self.seam_finder = SeamFinder(trace=self.trace)

    def split(self, image: np.ndarray) -> List[Shred]:
        """Cut ``image`` into shreds of the configured width."""
        return ShredSplitter(self.config.shred_width).split(image)

    def solve(self, shreds: List[Shred], similarity: Optional[np.ndarray] = None) -> UnshredResult:
        """Return the solved ordering of indices into ``shreds``."""
        n = len(shreds)
        if n == 0:
            raise ConfigurationError("no shreds to order")
        matrix = similarity if similarity is not None else self.matcher.build_similarity_matrix(shreds)
        if matrix.shape != (n, n):
            raise ConfigurationError(f"expected a {n}x{n} similarity matrix, got {matrix.shape}")

        chain, chain_scores = self.chain_builder.build_chain(matrix)
        ring = self.seam_finder.ring_scores(chain, matrix)
        seam = self.seam_finder.find_seam(chain, ring)
        ordering = self.seam_finder.rotate(chain, seam)
        self._check_permutation(ordering, n)
        self.trace.ordering_final(ordering)

        return UnshredResult(
            chain=chain,
            chain_scores=chain_scores,
            seam_index=seam,
            ordering=ordering,
            ring_scores=self.seam_finder.ring_scores(ordering, matrix),
            similarity_matrix=matrix,
        )

    @staticmethod
    def _check_permutation(ordering: Sequence[int], n: int) -> None:
        if sorted(ordering) != list(range(n)):
            raise UnshredError(f"ordering {list(ordering)} is not a permutation of range({n})")
