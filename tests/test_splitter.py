"""Tests for splitting puzzle text into tiles."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.errors import InvalidCharacter, MalformedTileBlock
from mosaic.splitter import TileSplitter, parse_tile_block
from mosaic.utils import tiles_to_text


def test_split_small_puzzle(small_puzzle_tiles) -> None:
    """The literal fixture parses into nine uniform 5x5 tiles."""
    assert len(small_puzzle_tiles) == 9
    assert {tile.size for tile in small_puzzle_tiles} == {5}
    assert small_puzzle_tiles[0].id == 1427
    assert small_puzzle_tiles[0].to_lines() == ["##..#", "#.#.#", "#....", "..#..", ".##.."]


def test_parse_block_reads_header_and_rows() -> None:
    """A block is a header line plus N rows of N pixels."""
    tile = parse_tile_block(["Tile 42:", "#.#", "...", "##."])
    assert tile.id == 42
    assert tile.size == 3
    np.testing.assert_array_equal(tile.content, [[False]])


@pytest.mark.parametrize("header", ["Tile x:", "Tile 12", "tile 12:", "Tile -3:", "12:", "Tile \u0661\u0662:"])
def test_bad_header_is_rejected(header: str) -> None:
    """Headers must read 'Tile <integer in ASCII digits>:'."""
    with pytest.raises(MalformedTileBlock, match="bad tile header"):
        parse_tile_block([header, "#.#", "...", "##."])


def test_wrong_row_count_is_rejected() -> None:
    """A 3-wide tile needs exactly three rows."""
    with pytest.raises(MalformedTileBlock, match="expected 3 rows"):
        parse_tile_block(["Tile 1:", "#.#", "..."], tile_size=3)


def test_ragged_row_is_rejected() -> None:
    """Every row must be exactly N characters."""
    with pytest.raises(MalformedTileBlock, match="row 1 has 4 characters"):
        parse_tile_block(["Tile 1:", "#.#", "....", "##."])


def test_invalid_character_names_tile_and_position() -> None:
    """Characters other than '#' and '.' are reported with their location."""
    with pytest.raises(InvalidCharacter, match=r"tile 9: invalid character 'o' at row 2, column 1"):
        parse_tile_block(["Tile 9:", "#.#", "...", "#o."])


def test_tiles_must_share_one_size() -> None:
    """The first tile fixes N for the rest of the pool."""
    text = "Tile 1:\n#.#\n...\n##.\n\nTile 2:\n#.#.\n....\n##..\n....\n"
    with pytest.raises(MalformedTileBlock, match="tile 2: expected 3 rows"):
        TileSplitter().split(text)


def test_explicit_tile_size_is_enforced() -> None:
    """A configured tile size rejects blocks of another size."""
    with pytest.raises(MalformedTileBlock, match="expected 4 rows"):
        TileSplitter(tile_size=4).split("Tile 1:\n#.#\n...\n##.\n")


def test_tiny_tiles_are_rejected() -> None:
    """Tiles need an interior, so N must be at least 3."""
    with pytest.raises(MalformedTileBlock, match="at least 3x3"):
        TileSplitter().split("Tile 1:\n#.\n..\n")


def test_duplicate_ids_are_rejected() -> None:
    """Tile ids are unique within a pool."""
    text = "Tile 5:\n#.#\n...\n##.\n\nTile 5:\n...\n...\n...\n"
    with pytest.raises(MalformedTileBlock, match="duplicate tile id 5"):
        TileSplitter().split(text)


def test_blank_lines_and_crlf_are_tolerated() -> None:
    """Extra separators and Windows line endings do not create empty blocks."""
    text = "\r\n\r\nTile 1:\r\n#.#\r\n...\r\n##.\r\n\r\n\r\n\r\nTile 2:\r\n...\r\n.#.\r\n...\r\n\r\n"
    tiles = TileSplitter().split(text)
    assert [tile.id for tile in tiles] == [1, 2]


def test_empty_text_gives_empty_pool() -> None:
    """No blocks, no tiles."""
    assert TileSplitter().split("") == []


def test_tiles_to_text_parses_back(small_puzzle_tiles) -> None:
    """Rendering tiles back to text preserves every pixel."""
    reparsed = TileSplitter().split(tiles_to_text(small_puzzle_tiles))
    assert [tile.id for tile in reparsed] == [tile.id for tile in small_puzzle_tiles]
    for before, after in zip(small_puzzle_tiles, reparsed):
        np.testing.assert_array_equal(before.pixels, after.pixels)
