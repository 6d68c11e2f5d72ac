"""Reconstruction of images cut into shuffled vertical shreds."""

from .errors import ConfigurationError, HeightMismatchError, ImageIOError, UnshredError
from .evaluator import EvaluationResult, UnshredEvaluator
from .matcher import EdgeMatcher, channel_similarity, pixel_similarity
from .pipeline import unshred_image
from .solver import ChainBuilder, SeamFinder, SolverConfig, UnshredResult, UnshredSolver
from .splitter import DEFAULT_SHRED_WIDTH, Shred, ShredSplitter, extract_shred
from .trace import LoggingTrace, SolverTrace, format_seam_report, format_similarity_matrix
from .utils import compose_image_from_ordering, load_image, save_image

__all__ = [
    "UnshredError",
    "ConfigurationError",
    "HeightMismatchError",
    "ImageIOError",
    "DEFAULT_SHRED_WIDTH",
    "Shred",
    "ShredSplitter",
    "extract_shred",
    "channel_similarity",
    "pixel_similarity",
    "EdgeMatcher",
    "SolverConfig",
    "ChainBuilder",
    "SeamFinder",
    "UnshredResult",
    "UnshredSolver",
    "SolverTrace",
    "LoggingTrace",
    "format_similarity_matrix",
    "format_seam_report",
    "compose_image_from_ordering",
    "load_image",
    "save_image",
    "unshred_image",
    "EvaluationResult",
    "UnshredEvaluator",
]
