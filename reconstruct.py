"""Reconstruct a shredded image whose shreds were shuffled horizontally."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from unshred.errors import UnshredError
from unshred.matcher import EdgeMatcher
from unshred.pipeline import unshred_image
from unshred.solver import SeamFinder
from unshred.splitter import DEFAULT_SHRED_WIDTH, ShredSplitter
from unshred.trace import LoggingTrace, format_seam_report, format_similarity_matrix
from unshred.utils import check_lossless_suffix, load_image, save_image

logger = logging.getLogger("reconstruct")


def positive_int(value: str) -> int:
    """Parse a strictly positive integer argument."""
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("shred width must be an integer") from exc
    if number <= 0:
        raise argparse.ArgumentTypeError("shred width must be positive")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Reconstruct a shredded image.")
    parser.add_argument("image", help="Path to the shredded input image")
    parser.add_argument(
        "--output",
        default=None,
        help="Output path for the reconstructed image (default: <input>_unshredded.png)",
    )
    parser.add_argument(
        "--shred-width",
        type=positive_int,
        default=DEFAULT_SHRED_WIDTH,
        help=f"Width of every shred in pixels (default: {DEFAULT_SHRED_WIDTH})",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print similarity matrices and the seam report",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display shredded and reconstructed images side by side",
    )
    return parser.parse_args(argv)


def default_output_path(image_path: Path) -> Path:
    return image_path.with_name(f"{image_path.stem}_unshredded.png")


def show_images(shredded: np.ndarray, reconstructed: np.ndarray) -> None:
    import matplotlib.pyplot as plt

    fig, axes = plt.subplots(2, 1, figsize=(10, 6))
    axes[0].imshow(shredded)
    axes[0].set_title("Shredded Input")
    axes[1].imshow(reconstructed)
    axes[1].set_title("Reconstructed")
    for ax in axes:
        ax.axis("off")
    plt.tight_layout()
    plt.show()


def run(args: argparse.Namespace) -> None:
    """Run reconstruction pipeline from shredded image to output image."""
    image_path = Path(args.image)
    output_path = Path(args.output) if args.output else default_output_path(image_path)

    check_lossless_suffix(output_path)
    image = load_image(image_path)
    reconstructed, result = unshred_image(image, shred_width=args.shred_width, trace=LoggingTrace())
    save_image(output_path, reconstructed)

    if args.verbose:
        similarity = result.similarity_matrix
        print("Similarity matrix (input):")
        print(format_similarity_matrix(similarity))
        print("Seam report (chain):")
        print(format_seam_report(result.chain, SeamFinder.ring_scores(result.chain, similarity)))
        output_shreds = ShredSplitter(args.shred_width).split(reconstructed)
        print("Similarity matrix (reconstructed):")
        print(format_similarity_matrix(EdgeMatcher().build_similarity_matrix(output_shreds)))

    print(f"Input image: {image_path}")
    print(f"Shreds: {len(result.ordering)} x {args.shred_width}px")
    print(f"Chain: {result.chain}")
    print(f"Seam after position: {result.seam_index}")
    print(f"Ordering: {result.ordering}")
    print(f"Output image: {output_path.resolve()}")

    if args.show:
        show_images(image, reconstructed)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point; returns the process exit status."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        run(args)
    except UnshredError as exc:
        if exc.__cause__ is not None:
            logger.error("%s (%s)", exc, exc.__cause__)
        else:
            logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
