"""Greedy, backtracking-free reconstruction of the tile grid."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .errors import AssemblyError, MissingNeighborTile, NoCornerFound, NonSquareTileCount
from .matcher import AdjacencyIndex, Match
from .tile import Edge, Tile
from .utils import compose_image_from_grid

logger = logging.getLogger(__name__)

IndexFactory = Callable[[Sequence[Tile]], AdjacencyIndex]


@dataclass
class AssemblerConfig:
    """Configuration for the grid assembler."""

    start_corner: Optional[int] = None
    check_layout: bool = True


@dataclass
class AssembledGrid:
    """A width x width grid of placed, fully oriented tiles."""

    width: int
    tile_size: int
    tiles: List[List[Tile]]

    def tile_at(self, row: int, col: int) -> Tile:
        """Placed tile at grid cell (row, col)."""
        return self.tiles[row][col]

    def ids(self) -> np.ndarray:
        """Tile ids laid out as a width x width array."""
        return np.array([[tile.id for tile in row] for row in self.tiles], dtype=np.int64)

    def corner_ids(self) -> List[int]:
        """Ids in the four corner cells, in row-major order."""
        last = self.width - 1
        return [self.tiles[0][0].id, self.tiles[0][last].id, self.tiles[last][0].id, self.tiles[last][last].id]

    def content(self) -> np.ndarray:
        """Composite image of all tile interiors."""
        return compose_image_from_grid(self.tiles)


class MosaicAssembler:
    """Place tiles row by row, orienting each one against its already placed neighbour.

    Every edge has at most one matching partner (the adjacency index refuses
    ambiguous pools), so the first fit found is the only fit and no search is
    needed.
    """

    def __init__(
        self,
        config: Optional[AssemblerConfig] = None,
        index_factory: IndexFactory = AdjacencyIndex,
    ) -> None:
        self.config = config if config is not None else AssemblerConfig()
        self.index_factory = index_factory

    def assemble(self, tiles: Sequence[Tile]) -> AssembledGrid:
        """Return the reconstructed grid; the input sequence is left untouched."""
        count = len(tiles)
        width = math.isqrt(count)
        if width * width != count:
            raise NonSquareTileCount(f"{count} tiles cannot form a square grid")

        index = self.index_factory(tiles)
        logger.info("assembling %d tiles into a %dx%d grid", count, width, width)
        if self.config.check_layout:
            index.layout_report(width)

        pool: Dict[int, Tile] = {tile.id: tile for tile in tiles}
        corner = pool.pop(self._pick_corner(index, pool))
        placed: List[Tile] = [self._orient_corner(index, corner)]
        logger.info("tile %d pinned at (0, 0) as %s", corner.id, placed[0].orientation)

        for position in range(1, count):
            row, col = divmod(position, width)
            horizontal = col > 0
            reference = placed[-1] if horizontal else placed[position - width]
            direction = Edge.RIGHT if horizontal else Edge.BOTTOM

            match = index.matches(reference)[direction]
            if match is None or match.tile_id not in pool:
                missing = "no match" if match is None else f"tile {match.tile_id} already placed"
                raise MissingNeighborTile(
                    f"cell ({row}, {col}): tile {reference.id} edge {direction.name} has {missing}"
                )
            tile = self._orient_neighbor(pool.pop(match.tile_id), match, horizontal)

            if not self._fits(index, tile, row, col, placed, width) and reference.border(direction).is_palindrome:
                # A palindromic border cannot tell a mirrored tile from an upright one.
                tile = tile.flip_vertical() if horizontal else tile.flip_horizontal()
            if tile.border(direction.inverse()) != reference.border(direction) or not self._fits(
                index, tile, row, col, placed, width
            ):
                raise AssemblyError(
                    f"cell ({row}, {col}): tile {tile.id} does not fit against tile {reference.id}"
                )
            logger.debug("cell (%d, %d): tile %d as %s", row, col, tile.id, tile.orientation)
            placed.append(tile)

        grid = [placed[r * width : (r + 1) * width] for r in range(width)]
        return AssembledGrid(width=width, tile_size=corner.size, tiles=grid)

    def _pick_corner(self, index: AdjacencyIndex, pool: Dict[int, Tile]) -> int:
        corners = [tid for tid in index.corners() if tid in pool]
        if not corners:
            raise NoCornerFound("no tile has exactly two matching edges")
        start = self.config.start_corner
        if start is None:
            return corners[0]
        if start not in corners:
            raise NoCornerFound(f"tile {start} is not a corner tile (corners: {corners})")
        return start

    @staticmethod
    def _orient_corner(index: AdjacencyIndex, corner: Tile) -> Tile:
        """Rotate the corner until its matched edges face right and down."""
        tile = corner
        for _ in range(4):
            matches = index.matches(tile)
            if matches[Edge.RIGHT] is not None and matches[Edge.BOTTOM] is not None:
                return tile
            tile = tile.rotate_cw()
        raise AssemblyError(f"corner tile {corner.id} has no rotation with matched edges facing right and down")

    @staticmethod
    def _orient_neighbor(tile: Tile, match: Match, horizontal: bool) -> Tile:
        """Turn the matched edge to face the reference tile, then undo any mirroring."""
        target = Edge.LEFT if horizontal else Edge.TOP
        edge = match.edge
        flipped = match.flipped
        while edge != target:
            tile = tile.rotate_cw()
            edge = edge.advanced(1)
            # Rotation reverses the bit order of edges landing on top or bottom.
            if edge in (Edge.TOP, Edge.BOTTOM):
                flipped = not flipped
        if flipped:
            tile = tile.flip_vertical() if horizontal else tile.flip_horizontal()
        return tile

    @staticmethod
    def _fits(index: AdjacencyIndex, tile: Tile, row: int, col: int, placed: List[Tile], width: int) -> bool:
        """Top and left edges agree with the placed neighbours, or face outward unmatched."""
        matches = index.matches(tile)
        if row == 0:
            top_ok = matches[Edge.TOP] is None
        else:
            top_ok = tile.border(Edge.TOP) == placed[(row - 1) * width + col].border(Edge.BOTTOM)
        if col == 0:
            left_ok = matches[Edge.LEFT] is None
        else:
            left_ok = tile.border(Edge.LEFT) == placed[-1].border(Edge.RIGHT)
        return top_ok and left_ok
