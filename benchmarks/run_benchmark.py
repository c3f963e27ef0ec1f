"""Benchmark assembly and scanning across puzzle sizes."""

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

from mosaic.matcher import AdjacencyIndex
from mosaic.scanner import PatternScanner
from mosaic.solver import MosaicAssembler
from mosaic.symmetry import find_orientation
from mosaic.utils import generate_random_puzzle, scramble_tiles


@dataclass
class BenchmarkRow:
    grid: str
    seeds: int
    solved: int
    index_sec: float
    assemble_sec: float
    scan_sec: float
    runtime_mean_sec: float


@dataclass
class CaseTiming:
    solved: bool
    index_sec: float
    assemble_sec: float
    scan_sec: float


def run_case(width: int, tile_size: int, seed: int) -> CaseTiming:
    tiles, expected = generate_random_puzzle(width=width, tile_size=tile_size, seed=seed)
    scrambled = scramble_tiles(tiles, seed=seed)

    t0 = time.perf_counter()
    index = AdjacencyIndex(scrambled)
    index.classify()
    t1 = time.perf_counter()
    grid = MosaicAssembler().assemble(scrambled)
    composite = grid.content()
    t2 = time.perf_counter()
    PatternScanner().scan(composite)
    t3 = time.perf_counter()

    return CaseTiming(
        solved=find_orientation(composite, expected) is not None,
        index_sec=t1 - t0,
        assemble_sec=t2 - t1,
        scan_sec=t3 - t2,
    )


def run_case_multi_seed(width: int, tile_size: int, seeds: List[int]) -> BenchmarkRow:
    cases = [run_case(width, tile_size, seed=seed) for seed in seeds]
    idx = np.array([c.index_sec for c in cases], dtype=np.float64)
    asm = np.array([c.assemble_sec for c in cases], dtype=np.float64)
    scn = np.array([c.scan_sec for c in cases], dtype=np.float64)
    return BenchmarkRow(
        grid=f"{width}x{width}",
        seeds=len(seeds),
        solved=sum(c.solved for c in cases),
        index_sec=float(np.mean(idx)),
        assemble_sec=float(np.mean(asm)),
        scan_sec=float(np.mean(scn)),
        runtime_mean_sec=float(np.mean(idx + asm + scn)),
    )


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run mosaic benchmark on multiple grid sizes.")
    parser.add_argument(
        "--sizes",
        type=int,
        nargs="+",
        default=[3, 6, 12],
        help="Grid widths to benchmark (default: 3 6 12)",
    )
    parser.add_argument(
        "--tile-size",
        type=int,
        default=16,
        help="Tile side length; larger tiles keep random borders unique (default: 16)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--num-seeds",
        type=int,
        default=1,
        help="Number of seeds to evaluate per grid (default: 1)",
    )
    return parser.parse_args()


def print_table(rows: List[BenchmarkRow]) -> None:
    header = (
        f"{'Grid':<8}{'Seeds':>7}{'Solved':>8}{'Index(s)':>11}"
        f"{'Assemble(s)':>13}{'Scan(s)':>10}{'RtMean(s)':>11}"
    )
    print(header)
    print("-" * len(header))
    for row in rows:
        print(
            f"{row.grid:<8}"
            f"{row.seeds:>7d}"
            f"{row.solved:>8d}"
            f"{row.index_sec:>11.4f}"
            f"{row.assemble_sec:>13.4f}"
            f"{row.scan_sec:>10.4f}"
            f"{row.runtime_mean_sec:>11.4f}"
        )


def main() -> None:
    args = parse_args()
    seeds = [args.seed + i for i in range(args.num_seeds)]
    rows = [run_case_multi_seed(size, tile_size=args.tile_size, seeds=seeds) for size in args.sizes]
    print_table(rows)


if __name__ == "__main__":
    main()
