"""Error types raised while parsing, assembling and scanning tile mosaics."""

from __future__ import annotations


class MosaicError(ValueError):
    """Base class for all mosaic failures; every failure aborts the run."""


class MalformedTileBlock(MosaicError):
    """A tile block has a bad header, wrong line count or non-uniform width."""


class InvalidCharacter(MalformedTileBlock):
    """A tile row contains a character other than '#' or '.'."""


class DuplicateBorderMatch(MosaicError):
    """More than one candidate tile edge matches a single edge."""


class AmbiguousPatternOrientation(MosaicError):
    """The search pattern was found under more than one distinct orientation."""


class AssemblyError(MosaicError):
    """The tile pool cannot be assembled into a square grid."""


class NonSquareTileCount(AssemblyError):
    """The number of tiles is not a perfect square."""


class NoCornerFound(AssemblyError):
    """No tile has exactly two matched edges."""


class MissingNeighborTile(AssemblyError):
    """Assembly expected a neighbouring tile that does not exist in the pool."""
