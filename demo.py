"""Demo script for synthetic tile mosaic assembly and sea monster scanning."""

from __future__ import annotations

import argparse
import logging
import time

import matplotlib.pyplot as plt
import numpy as np

from mosaic.evaluator import MosaicEvaluator
from mosaic.scanner import SEA_MONSTER
from mosaic.symmetry import find_orientation
from mosaic.utils import compose_image_from_grid, generate_random_puzzle, render_image, scramble_tiles


def run_demo(width: int = 4, tile_size: int = 12, seed: int = 42, monsters: int = 2) -> None:
    """Generate a puzzle with hidden monsters, scramble it, solve it and display the result."""
    side = width * (tile_size - 2)
    rng = np.random.default_rng(seed)
    content = rng.random((side, side)) < 0.1
    rows, cols = SEA_MONSTER.shape
    if side >= cols:
        for i in range(monsters):
            y = (i * (rows + 2)) % max(1, side - rows + 1)
            x = int(rng.integers(0, side - cols + 1))
            content[y : y + rows, x : x + cols] |= SEA_MONSTER.mask

    tiles, expected = generate_random_puzzle(width=width, tile_size=tile_size, seed=seed, content=content)
    scrambled = scramble_tiles(tiles, seed=seed)

    evaluator = MosaicEvaluator()
    start = time.perf_counter()
    result = evaluator.evaluate(scrambled)
    duration = time.perf_counter() - start

    scrambled_view = compose_image_from_grid(
        [scrambled[r * width : (r + 1) * width] for r in range(width)]
    )
    highlight = evaluator.scanner.occurrence_mask(result.composite, result.scan.orientation)

    print(f"Grid size: {width}x{width} of {tile_size}px tiles")
    print(f"Corner product: {result.corner_product}")
    print(f"Orientation vs. ground truth: {find_orientation(result.composite, expected)}")
    print(f"Occurrences: {result.scan.occurrences} ({result.scan.orientation})")
    print(f"Roughness: {result.roughness}")
    print(f"Solve time: {duration:.4f}s")

    fig, axes = plt.subplots(1, 3, figsize=(15, 5))
    axes[0].imshow(render_image(expected))
    axes[0].set_title("Original")
    axes[1].imshow(render_image(scrambled_view))
    axes[1].set_title("Scrambled")
    axes[2].imshow(render_image(result.composite, highlight=highlight))
    axes[2].set_title("Assembled")
    for ax in axes:
        ax.axis("off")
    plt.tight_layout()
    plt.show()


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Tile mosaic assembly demo")
    parser.add_argument("--width", type=int, default=4, help="Tiles per side, default=4")
    parser.add_argument("--tile-size", type=int, default=12, help="Tile side length in pixels, default=12")
    parser.add_argument("--seed", type=int, default=42, help="Random seed, default=42")
    parser.add_argument("--monsters", type=int, default=2, help="Sea monsters to hide, default=2")
    parser.add_argument("--verbose", action="store_true", help="Log assembly progress")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    run_demo(width=args.width, tile_size=args.tile_size, seed=args.seed, monsters=args.monsters)
