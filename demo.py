"""Demo script for shredded image reconstruction."""

from __future__ import annotations

import argparse
import time

import matplotlib.pyplot as plt

from unshred.evaluator import UnshredEvaluator
from unshred.matcher import EdgeMatcher
from unshred.solver import SolverConfig, UnshredSolver
from unshred.splitter import ShredSplitter
from unshred.utils import (
    compose_image_from_ordering,
    compose_image_list_order,
    generate_panorama_image,
    load_image,
    shuffle_shreds,
)


def run_demo(image_path: str | None = None, shred_width: int = 32, seed: int = 42) -> None:
    """Shred an image, shuffle it, reconstruct it and display all three."""
    if image_path:
        image = load_image(image_path)
        usable = (image.shape[1] // shred_width) * shred_width
        image = image[:, :usable, :]
    else:
        image = generate_panorama_image(height=240, width=shred_width * 20, seed=seed)

    splitter = ShredSplitter(shred_width)
    shreds = splitter.split(image)
    shuffled, _ = shuffle_shreds(shreds, seed=seed)

    matcher = EdgeMatcher()
    similarity = matcher.build_similarity_matrix(shuffled)
    solver = UnshredSolver(SolverConfig(shred_width=shred_width))

    start = time.perf_counter()
    result = solver.solve(shuffled, similarity=similarity)
    duration = time.perf_counter() - start

    evaluator = UnshredEvaluator()
    metrics = evaluator.evaluate(result.ordering, shuffled, similarity)

    shuffled_image = compose_image_list_order(shuffled)
    reconstructed_image = compose_image_from_ordering(result.ordering, shuffled)

    print(f"Shreds: {len(shreds)} x {shred_width}px")
    print(f"Position accuracy: {metrics.position_accuracy:.4f}")
    print(f"Neighbor accuracy: {metrics.neighbor_accuracy:.4f}")
    print(f"Ring similarity: {metrics.ring_similarity:.4f}")
    print(f"Solve time: {duration:.4f}s")

    fig, axes = plt.subplots(3, 1, figsize=(10, 9))
    axes[0].imshow(image)
    axes[0].set_title("Original")
    axes[1].imshow(shuffled_image)
    axes[1].set_title("Shredded")
    axes[2].imshow(reconstructed_image)
    axes[2].set_title("Reconstructed")
    for ax in axes:
        ax.axis("off")
    plt.tight_layout()
    plt.show()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Shredded image reconstruction demo")
    parser.add_argument("--image", type=str, default=None, help="Optional input image path")
    parser.add_argument("--shred-width", type=int, default=32, help="Shred width, default=32")
    parser.add_argument("--seed", type=int, default=42, help="Shuffle seed, default=42")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    run_demo(image_path=args.image, shred_width=args.shred_width, seed=args.seed)
