"""Utility helpers for composing, generating and rendering tile mosaics."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import DuplicateBorderMatch
from .matcher import AdjacencyIndex
from .symmetry import ALL_ORIENTATIONS
from .tile import Edge, Tile

ACTIVE_RGB = (235, 235, 220)
INACTIVE_RGB = (16, 56, 112)
HIGHLIGHT_RGB = (220, 50, 40)


def set_random_seed(seed: int = 42) -> np.random.Generator:
    """Create a deterministic numpy random generator."""
    return np.random.default_rng(seed)


def compose_image_from_grid(grid: Sequence[Sequence[Tile]]) -> np.ndarray:
    """Stitch tile interiors in row-major grid order; every border ring is dropped."""
    if not grid or not grid[0]:
        return np.zeros((0, 0), dtype=bool)
    return np.block([[tile.content for tile in row] for row in grid]).astype(bool)


def image_from_text(lines: Iterable[str]) -> np.ndarray:
    """Parse '#'/'.' rows into a boolean image."""
    rows = [line.strip() for line in lines if line.strip()]
    if not rows:
        return np.zeros((0, 0), dtype=bool)
    width = len(rows[0])
    if any(len(row) != width for row in rows):
        raise ValueError("image rows must all have the same width")
    return np.array([[char == "#" for char in row] for row in rows], dtype=bool)


def image_to_text(image: np.ndarray) -> List[str]:
    return ["".join("#" if bit else "." for bit in row) for row in np.asarray(image, dtype=bool)]


def _neighbors_are_exact(tiles: List[Tile], width: int) -> bool:
    """True when every edge matches exactly its true neighbour and outer edges match nothing."""
    index = AdjacencyIndex(tiles)
    steps = {Edge.TOP: (-1, 0), Edge.RIGHT: (0, 1), Edge.BOTTOM: (1, 0), Edge.LEFT: (0, -1)}
    try:
        for position, tile in enumerate(tiles):
            row, col = divmod(position, width)
            matches = index.matches(tile)
            for edge, (dr, dc) in steps.items():
                r, c = row + dr, col + dc
                expected = tiles[r * width + c].id if 0 <= r < width and 0 <= c < width else None
                found = matches[edge].tile_id if matches[edge] is not None else None
                if found != expected:
                    return False
    except DuplicateBorderMatch:
        return False
    return True


def generate_random_puzzle(
    width: int = 3,
    tile_size: int = 10,
    seed: int = 42,
    density: float = 0.5,
    max_attempts: int = 1000,
    content: Optional[np.ndarray] = None,
) -> Tuple[List[Tile], np.ndarray]:
    """Cut a random picture into overlapping tiles with unambiguous borders.

    Neighbouring tiles share their border row/column, as in a real puzzle.
    When `content` is given it becomes the composite (tile interiors) and only
    the border lines are random. Returns the tiles in solved row-major order
    plus the expected composite.
    """
    if width <= 0:
        raise ValueError("width must be a positive integer")
    if tile_size < 3:
        raise ValueError("tile_size must be at least 3")

    rng = set_random_seed(seed)
    step = tile_size - 1
    side = width * step + 1
    count = width * width
    interior = np.ones((side, side), dtype=bool)
    interior[::step, :] = False
    interior[:, ::step] = False
    if content is not None:
        content = np.asarray(content, dtype=bool)
        expected_side = width * (tile_size - 2)
        if content.shape != (expected_side, expected_side):
            raise ValueError(f"content must be {expected_side}x{expected_side}, got {content.shape}")

    for _ in range(max_attempts):
        picture = rng.random((side, side)) < density
        if content is not None:
            picture[interior] = content.ravel()
        ids = rng.choice(np.arange(1000, 10000), size=count, replace=False)
        tiles: List[Tile] = []
        for position in range(count):
            r, c = divmod(position, width)
            y0, x0 = r * step, c * step
            block = picture[y0 : y0 + tile_size, x0 : x0 + tile_size]
            tiles.append(Tile.from_pixels(int(ids[position]), block))
        if _neighbors_are_exact(tiles, width):
            grid = [tiles[r * width : (r + 1) * width] for r in range(width)]
            return tiles, compose_image_from_grid(grid)
    raise ValueError(
        f"could not generate an unambiguous {width}x{width} puzzle of {tile_size}px tiles "
        f"in {max_attempts} attempts; use larger tiles"
    )


def scramble_tiles(tiles: Sequence[Tile], seed: int = 42) -> List[Tile]:
    """Give every tile a random orientation and shuffle the pool order."""
    rng = set_random_seed(seed)
    scrambled = []
    for tile in tiles:
        orientation = ALL_ORIENTATIONS[int(rng.integers(len(ALL_ORIENTATIONS)))]
        scrambled.append(Tile.from_pixels(tile.id, tile.oriented(orientation).pixels))
    order = rng.permutation(len(scrambled))
    return [scrambled[i] for i in order]


def tiles_to_text(tiles: Iterable[Tile]) -> str:
    """Render tiles back into the blank-line separated block format."""
    blocks = [f"Tile {tile.id}:\n" + "\n".join(tile.to_lines()) for tile in tiles]
    return "\n\n".join(blocks) + "\n"


def render_image(image: np.ndarray, highlight: Optional[np.ndarray] = None) -> np.ndarray:
    """Convert a boolean image into RGB uint8, painting highlighted pixels."""
    image = np.asarray(image, dtype=bool)
    rgb = np.empty(image.shape + (3,), dtype=np.uint8)
    rgb[...] = INACTIVE_RGB
    rgb[image] = ACTIVE_RGB
    if highlight is not None:
        rgb[np.asarray(highlight, dtype=bool)] = HIGHLIGHT_RGB
    return rgb
