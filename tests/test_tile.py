"""Tests for tile transforms and the symmetry group."""

from __future__ import annotations

import numpy as np
import pytest

from mosaic.symmetry import (
    ALL_ORIENTATIONS,
    FLIP_VERTICAL,
    IDENTITY,
    Orientation,
    apply_orientation,
    find_orientation,
)
from mosaic.tile import Edge, Tile
from mosaic.utils import image_from_text


def _random_tile(seed: int, size: int = 7) -> Tile:
    rng = np.random.default_rng(seed)
    return Tile.from_pixels(seed, rng.random((size, size)) < 0.5)


def _same(a: Tile, b: Tile) -> bool:
    return a.borders == b.borders and np.array_equal(a.pixels, b.pixels)


def test_borders_are_read_clockwise_in_reading_order() -> None:
    """Top/Bottom run left-to-right, Left/Right run top-to-bottom."""
    tile = Tile.from_pixels(7, image_from_text(["#...", "##..", "...#", "..##"]))
    assert [tile.border(edge).to_text() for edge in Edge] == ["#...", "..##", "..##", "##.."]
    assert tile.content.shape == (2, 2)
    np.testing.assert_array_equal(tile.content, [[True, False], [False, False]])


def test_rotate_cw_permutes_borders() -> None:
    """Rotation maps borders to [Left reversed, Top, Right reversed, Bottom]."""
    tile = Tile.from_pixels(7, image_from_text(["#...", "##..", "...#", "..##"]))
    rotated = tile.rotate_cw()
    assert rotated.border(Edge.TOP) == tile.border(Edge.LEFT).flipped()
    assert rotated.border(Edge.RIGHT) == tile.border(Edge.TOP)
    assert rotated.border(Edge.BOTTOM) == tile.border(Edge.RIGHT).flipped()
    assert rotated.border(Edge.LEFT) == tile.border(Edge.BOTTOM)
    assert rotated.border(Edge.TOP).to_text() == "..##"


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_four_rotations_restore_tile(seed: int) -> None:
    """rotate_cw applied four times is the identity."""
    tile = _random_tile(seed)
    turned = tile.rotate_cw().rotate_cw().rotate_cw().rotate_cw()
    assert _same(turned, tile)
    assert turned.orientation == IDENTITY


@pytest.mark.parametrize("seed", [1, 2, 3, 4])
def test_double_flips_restore_tile(seed: int) -> None:
    """Each mirror applied twice is the identity."""
    tile = _random_tile(seed)
    assert _same(tile.flip_horizontal().flip_horizontal(), tile)
    assert _same(tile.flip_vertical().flip_vertical(), tile)


@pytest.mark.parametrize("seed", range(10))
def test_tracked_borders_match_pixels_after_random_transforms(seed: int) -> None:
    """Borders updated by the transforms always equal borders re-read from the pixels."""
    rng = np.random.default_rng(seed)
    tile = _random_tile(seed + 100, size=6)
    original = tile
    for step in rng.integers(0, 3, size=12):
        tile = (tile.rotate_cw, tile.flip_horizontal, tile.flip_vertical)[int(step)]()
        assert tile.borders == Tile.derive_borders(tile.pixels)
    np.testing.assert_array_equal(apply_orientation(original.pixels, tile.orientation), tile.pixels)


@pytest.mark.parametrize("orientation", ALL_ORIENTATIONS, ids=str)
def test_oriented_agrees_with_grid_transform(orientation: Orientation) -> None:
    """Orienting a tile moves its pixels exactly like apply_orientation does."""
    tile = _random_tile(11)
    oriented = tile.oriented(orientation)
    assert oriented.orientation == orientation
    np.testing.assert_array_equal(oriented.pixels, apply_orientation(tile.pixels, orientation))
    assert oriented.borders == Tile.derive_borders(oriented.pixels)


def test_flip_vertical_is_rotation_then_mirror() -> None:
    """flipVertical equals two rotations followed by flipHorizontal."""
    tile = _random_tile(5)
    derived = tile.rotate_cw().rotate_cw().flip_horizontal()
    assert _same(tile.flip_vertical(), derived)
    assert tile.flip_vertical().orientation == FLIP_VERTICAL


def test_eight_orientations_are_distinct() -> None:
    """An asymmetric tile has eight different orientations."""
    tile = _random_tile(3)
    seen = {tile.oriented(o).pixels.tobytes() for o in ALL_ORIENTATIONS}
    assert len(seen) == 8


def test_orientation_inverse_undoes() -> None:
    """Applying an orientation and then its inverse is the identity."""
    grid = _random_tile(9).pixels
    for orientation in ALL_ORIENTATIONS:
        assert orientation.then(orientation.inverse()) == IDENTITY
        restored = apply_orientation(apply_orientation(grid, orientation), orientation.inverse())
        np.testing.assert_array_equal(restored, grid)
        assert find_orientation(grid, apply_orientation(grid, orientation)) == orientation


def test_transforms_leave_original_untouched() -> None:
    """Tiles are values: transforms return new tiles and pixels are read-only."""
    tile = _random_tile(8)
    before = tile.pixels.copy()
    tile.rotate_cw().flip_horizontal()
    np.testing.assert_array_equal(tile.pixels, before)
    with pytest.raises(ValueError):
        tile.pixels[0, 0] = not tile.pixels[0, 0]


def test_tiles_must_be_square_and_large_enough() -> None:
    """Non-square or tiny grids are rejected."""
    with pytest.raises(ValueError, match="square"):
        Tile.from_pixels(1, np.zeros((3, 4), dtype=bool))
    with pytest.raises(ValueError, match="at least 3x3"):
        Tile.from_pixels(1, np.zeros((2, 2), dtype=bool))
