"""Square image tiles and their geometric transforms."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Tuple

import numpy as np

from .border import BorderCode
from .symmetry import FLIP_HORIZONTAL, FLIP_VERTICAL, IDENTITY, ROTATE_CW, Orientation


class Edge(IntEnum):
    """Compass edges of a tile, in clockwise order."""

    TOP = 0
    RIGHT = 1
    BOTTOM = 2
    LEFT = 3

    def advanced(self, steps: int) -> "Edge":
        """Edge reached after `steps` clockwise quarter turns."""
        return Edge((int(self) + steps) % 4)

    def inverse(self) -> "Edge":
        return self.advanced(2)


Borders = Tuple[BorderCode, BorderCode, BorderCode, BorderCode]


@dataclass(frozen=True, eq=False)
class Tile:
    """An immutable square tile; transforms return new tiles with updated borders.

    `borders` is tracked through each transform rather than re-read from the
    pixels, so `derive_borders(tile.pixels) == tile.borders` is a real check.
    """

    id: int
    pixels: np.ndarray
    borders: Borders
    orientation: Orientation = field(default=IDENTITY)

    @classmethod
    def from_pixels(cls, tile_id: int, pixels: np.ndarray) -> "Tile":
        """Build a tile from a square boolean grid, reading borders from its edges."""
        grid = np.array(pixels, dtype=bool)
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise ValueError(f"tile {tile_id}: pixels must be a square 2-D array")
        if grid.shape[0] < 3:
            raise ValueError(f"tile {tile_id}: tiles must be at least 3x3")
        grid.setflags(write=False)
        return cls(id=int(tile_id), pixels=grid, borders=cls.derive_borders(grid))

    @staticmethod
    def derive_borders(pixels: np.ndarray) -> Borders:
        """Read {Top, Right, Bottom, Left} straight from a pixel grid."""
        return (
            BorderCode.from_pixels(pixels[0, :]),
            BorderCode.from_pixels(pixels[:, -1]),
            BorderCode.from_pixels(pixels[-1, :]),
            BorderCode.from_pixels(pixels[:, 0]),
        )

    @property
    def size(self) -> int:
        """Side length N in pixels."""
        return int(self.pixels.shape[0])

    @property
    def content(self) -> np.ndarray:
        """Interior pixels with the border ring removed."""
        return self.pixels[1:-1, 1:-1]

    def border(self, edge: Edge) -> BorderCode:
        """Border code of `edge` in the current orientation."""
        return self.borders[edge]

    def _transformed(self, pixels: np.ndarray, borders: Borders, step: Orientation) -> "Tile":
        grid = np.ascontiguousarray(pixels)
        grid.setflags(write=False)
        return Tile(id=self.id, pixels=grid, borders=borders, orientation=self.orientation.then(step))

    def rotate_cw(self) -> "Tile":
        """Rotate 90 degrees clockwise."""
        top, right, bottom, left = self.borders
        return self._transformed(
            np.rot90(self.pixels, k=-1),
            (left.flipped(), top, right.flipped(), bottom),
            ROTATE_CW,
        )

    def flip_horizontal(self) -> "Tile":
        """Mirror across the vertical axis."""
        top, right, bottom, left = self.borders
        return self._transformed(
            np.fliplr(self.pixels),
            (top.flipped(), left, bottom.flipped(), right),
            FLIP_HORIZONTAL,
        )

    def flip_vertical(self) -> "Tile":
        """Mirror across the horizontal axis."""
        top, right, bottom, left = self.borders
        return self._transformed(
            np.flipud(self.pixels),
            (bottom, right.flipped(), top, left.flipped()),
            FLIP_VERTICAL,
        )

    def oriented(self, orientation: Orientation) -> "Tile":
        """Apply an orientation relative to the tile's current state."""
        tile = self
        for _ in range(orientation.rotations):
            tile = tile.rotate_cw()
        if orientation.mirrored:
            tile = tile.flip_horizontal()
        return tile

    def to_lines(self) -> List[str]:
        return ["".join("#" if bit else "." for bit in row) for row in self.pixels]

    def __repr__(self) -> str:
        return f"Tile(id={self.id}, size={self.size}, orientation={self.orientation})"
