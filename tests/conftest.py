"""Shared pytest fixtures for mosaic tests."""

import pytest

from fixtures import (
    SMALL_PUZZLE,
    SMALL_PUZZLE_ACTIVE_PIXELS,
    SMALL_PUZZLE_COMPOSITE,
    SMALL_PUZZLE_CORNER_PRODUCT,
    SMALL_PUZZLE_CORNERS,
)
from mosaic.splitter import TileSplitter
from mosaic.utils import image_from_text


@pytest.fixture
def small_puzzle_text():
    """Literal text of the 3x3 puzzle of 5x5 tiles."""
    return SMALL_PUZZLE


@pytest.fixture
def small_puzzle_tiles(small_puzzle_text):
    """Parsed tile pool for the 3x3 puzzle."""
    return TileSplitter().split(small_puzzle_text)


@pytest.fixture
def small_puzzle_composite():
    """Expected composite of the 3x3 puzzle, up to orientation."""
    return image_from_text(SMALL_PUZZLE_COMPOSITE)


@pytest.fixture
def small_puzzle_expectations():
    """Known answers for the 3x3 puzzle."""
    return {
        "corners": list(SMALL_PUZZLE_CORNERS),
        "corner_product": SMALL_PUZZLE_CORNER_PRODUCT,
        "active_pixels": SMALL_PUZZLE_ACTIVE_PIXELS,
    }
