"""Assemble a tile pool from a text file and answer the mosaic queries."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from mosaic.errors import MosaicError
from mosaic.evaluator import MosaicEvaluator
from mosaic.scanner import SEA_MONSTER, Pattern
from mosaic.solver import AssemblerConfig
from mosaic.splitter import TileSplitter
from mosaic.utils import image_to_text, render_image

QUERIES = ("corners", "roughness", "all")


def load_pattern(path: Optional[str]) -> Pattern:
    """Read a pattern file, or fall back to the sea monster."""
    if path is None:
        return SEA_MONSTER
    return Pattern.from_lines(Path(path).read_text(encoding="utf-8").splitlines())


def save_image(path: Path, image: np.ndarray) -> None:
    """Save RGB image to disk."""
    import matplotlib.pyplot as plt

    path.parent.mkdir(parents=True, exist_ok=True)
    plt.imsave(path, image.astype(np.uint8))


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Assemble a tile mosaic and scan it for a pattern.")
    parser.add_argument("--input", required=True, help="Path to the tile text file")
    parser.add_argument(
        "--tile-size",
        type=int,
        default=None,
        help="Expected tile side length (default: taken from the first tile)",
    )
    parser.add_argument(
        "--pattern",
        default=None,
        help="Optional pattern file; '#' cells are required (default: sea monster)",
    )
    parser.add_argument("--query", choices=QUERIES, default="all", help="Which answer to print (default: all)")
    parser.add_argument(
        "--start-corner",
        type=int,
        default=None,
        help="Corner tile id to pin at the top-left (default: lowest corner id)",
    )
    parser.add_argument(
        "--output",
        default=None,
        help="Optional PNG path for the composite with pattern cells highlighted",
    )
    parser.add_argument("--show", action="store_true", help="Display the composite with matplotlib")
    parser.add_argument("--verbose", action="store_true", help="Log assembly progress")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the pipeline from tile text to printed answers."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    input_path = Path(args.input)

    try:
        tiles = TileSplitter(tile_size=args.tile_size).split(input_path.read_text(encoding="utf-8"))
        evaluator = MosaicEvaluator(AssemblerConfig(start_corner=args.start_corner), pattern=load_pattern(args.pattern))
        if args.query == "corners" and args.output is None and not args.show:
            print(f"Corner product: {evaluator.corner_product(tiles)}")
            return 0
        result = evaluator.evaluate(tiles)
    except (OSError, MosaicError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Input: {input_path}")
    print(f"Tiles: {len(tiles)} ({result.grid.width}x{result.grid.width} grid of {result.grid.tile_size}px tiles)")
    if args.query in ("corners", "all"):
        print(f"Corner tiles: {sorted(result.grid.corner_ids())}")
        print(f"Corner product: {result.corner_product}")
    if args.query in ("roughness", "all"):
        print(f"Pattern orientation: {result.scan.orientation}")
        print(f"Occurrences: {result.scan.occurrences}")
        print(f"Roughness: {result.roughness}")
    if args.verbose:
        print("Composite:")
        print("\n".join(image_to_text(result.composite)))

    if args.output is not None or args.show:
        highlight = evaluator.scanner.occurrence_mask(result.composite, result.scan.orientation)
        rendered = render_image(result.composite, highlight=highlight)
        if args.output is not None:
            output_path = Path(args.output)
            save_image(output_path, rendered)
            print(f"Output image: {output_path.resolve()}")
        if args.show:
            import matplotlib.pyplot as plt

            fig, ax = plt.subplots(figsize=(6, 6))
            ax.imshow(rendered)
            ax.set_title(f"Roughness {result.roughness}")
            ax.axis("off")
            plt.tight_layout()
            plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
