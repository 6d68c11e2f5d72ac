"""End-to-end reconstruction of a shredded image."""

from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from .solver import SolverConfig, UnshredResult, UnshredSolver
from .splitter import DEFAULT_SHRED_WIDTH
from .trace import SolverTrace
from .utils import compose_image_from_ordering

logger = logging.getLogger(__name__)


def unshred_image(
    image: np.ndarray,
    shred_width: int = DEFAULT_SHRED_WIDTH,
    trace: Optional[SolverTrace] = None,
) -> Tuple[np.ndarray, UnshredResult]:
    """Split, order and reassemble a shredded image."""
    solver = UnshredSolver(SolverConfig(shred_width=shred_width), trace=trace)
    shreds = solver.split(image)
    logger.info(
        "unshredding %dx%d image into %d shreds of width %d",
        image.shape[1],
        image.shape[0],
        len(shreds),
        solver.config.shred_width,
    )
    result = solver.solve(shreds)
    return compose_image_from_ordering(result.ordering, shreds), result
