"""Benchmark unshredding quality across shred counts."""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List

import sys
import numpy as np

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from unshred.evaluator import UnshredEvaluator
from unshred.matcher import EdgeMatcher
from unshred.solver import SolverConfig, UnshredSolver
from unshred.splitter import ShredSplitter
from unshred.utils import generate_panorama_image, generate_random_image, shuffle_shreds

GENERATORS = {
    "panorama": generate_panorama_image,
    "random": generate_random_image,
}


@dataclass
class BenchmarkRow:
    shreds: int
    seeds: int
    pos_acc_mean: float
    pos_acc_min: float
    nbr_acc_mean: float
    nbr_acc_min: float
    ring_sim_mean: float
    runtime_mean_sec: float


def run_case(shred_count: int, shred_width: int, seed: int, image_type: str):
    image = GENERATORS[image_type](height=160, width=shred_count * shred_width, seed=seed)
    shreds = ShredSplitter(shred_width).split(image)
    shuffled, _ = shuffle_shreds(shreds, seed=seed)

    matcher = EdgeMatcher()
    similarity = matcher.build_similarity_matrix(shuffled)
    solver = UnshredSolver(SolverConfig(shred_width=shred_width))

    t0 = time.perf_counter()
    result = solver.solve(shuffled, similarity=similarity)
    runtime_sec = time.perf_counter() - t0

    metrics = UnshredEvaluator().evaluate(result.ordering, shuffled, similarity)
    return metrics, runtime_sec


def run_case_multi_seed(
    shred_count: int, shred_width: int, seeds: List[int], image_type: str
) -> BenchmarkRow:
    runs = [run_case(shred_count, shred_width, seed, image_type) for seed in seeds]

    pos = np.array([m.position_accuracy for m, _ in runs], dtype=np.float64)
    nbr = np.array([m.neighbor_accuracy for m, _ in runs], dtype=np.float64)
    ring = np.array([m.ring_similarity for m, _ in runs], dtype=np.float64)
    rt = np.array([t for _, t in runs], dtype=np.float64)
    return BenchmarkRow(
        shreds=shred_count,
        seeds=len(seeds),
        pos_acc_mean=float(np.mean(pos)),
        pos_acc_min=float(np.min(pos)),
        nbr_acc_mean=float(np.mean(nbr)),
        nbr_acc_min=float(np.min(nbr)),
        ring_sim_mean=float(np.mean(ring)),
        runtime_mean_sec=float(np.mean(rt)),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run unshred benchmark on multiple shred counts.")
    parser.add_argument(
        "--counts",
        type=int,
        nargs="+",
        default=[8, 16, 32],
        help="Shred counts to benchmark (default: 8 16 32)",
    )
    parser.add_argument("--shred-width", type=int, default=32, help="Shred width in pixels")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=1,
        help="Number of seeds to evaluate per shred count (default: 1)",
    )
    parser.add_argument(
        "--image-type",
        choices=sorted(GENERATORS),
        default="panorama",
        help="Synthetic image generator (default: panorama)",
    )
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Shreds':<8}{'Seeds':>7}{'PosMean':>10}{'PosMin':>10}"
        f"{'NbrMean':>10}{'NbrMin':>10}{'RingMean':>12}{'RtMean(s)':>11}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.shreds:<8d}"
            f"{row.seeds:>7d}"
            f"{row.pos_acc_mean:>10.4f}"
            f"{row.pos_acc_min:>10.4f}"
            f"{row.nbr_acc_mean:>10.4f}"
            f"{row.nbr_acc_min:>10.4f}"
            f"{row.ring_sim_mean:>12.4f}"
            f"{row.runtime_mean_sec:>11.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [
        run_case_multi_seed(count, args.shred_width, seeds=seeds, image_type=args.image_type)
        for count in args.counts
    ]
    print_table(rows)


if __name__ == "__main__":
    main()
