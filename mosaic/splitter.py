"""Split puzzle text into validated tiles."""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Sequence

import numpy as np

from .border import PIXEL_BITS
from .errors import InvalidCharacter, MalformedTileBlock
from .tile import Tile

HEADER_RE = re.compile(r"^Tile ([0-9]+):$")


def parse_tile_block(lines: Sequence[str], tile_size: Optional[int] = None) -> Tile:
    """Parse one `Tile <id>:` block followed by N rows of N '#'/'.' characters."""
    if not lines:
        raise MalformedTileBlock("empty tile block")
    header = lines[0].strip()
    match = HEADER_RE.match(header)
    if match is None:
        raise MalformedTileBlock(f"bad tile header: {header!r}")
    tile_id = int(match.group(1))

    rows = [line.rstrip("\r\n") for line in lines[1:]]
    size = tile_size if tile_size is not None else len(rows)
    if size < 3:
        raise MalformedTileBlock(f"tile {tile_id}: tiles must be at least 3x3, got {size}")
    if len(rows) != size:
        raise MalformedTileBlock(f"tile {tile_id}: expected {size} rows, got {len(rows)}")

    pixels = np.zeros((size, size), dtype=bool)
    for r, row in enumerate(rows):
        if len(row) != size:
            raise MalformedTileBlock(
                f"tile {tile_id}: row {r} has {len(row)} characters, expected {size}"
            )
        for c, char in enumerate(row):
            if char not in PIXEL_BITS:
                raise InvalidCharacter(
                    f"tile {tile_id}: invalid character {char!r} at row {r}, column {c}"
                )
            pixels[r, c] = bool(PIXEL_BITS[char])
    return Tile.from_pixels(tile_id, pixels)


class TileSplitter:
    """Split blank-line separated tile blocks into a pool of uniform tiles."""

    def __init__(self, tile_size: Optional[int] = None) -> None:
        """Fix the tile side length, or infer it from the first block when None."""
        self.tile_size = tile_size

    @staticmethod
    def _blocks(text: str) -> List[List[str]]:
        blocks: List[List[str]] = []
        current: List[str] = []
        for line in text.splitlines():
            if line.strip():
                current.append(line)
            elif current:
                blocks.append(current)
                current = []
        if current:
            blocks.append(current)
        return blocks

    def split(self, text: str) -> List[Tile]:
        """Parse every tile block in `text`, in input order."""
        size = self.tile_size
        tiles: List[Tile] = []
        seen: Dict[int, int] = {}
        for index, block in enumerate(self._blocks(text)):
            tile = parse_tile_block(block, tile_size=size)
            if size is None:
                size = tile.size
            if tile.id in seen:
                raise MalformedTileBlock(
                    f"duplicate tile id {tile.id} in blocks {seen[tile.id]} and {index}"
                )
            seen[tile.id] = index
            tiles.append(tile)
        return tiles
