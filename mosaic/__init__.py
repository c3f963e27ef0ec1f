"""Square tile mosaic assembly and pattern detection package."""

from .border import BorderCode
from .errors import (
    AmbiguousPatternOrientation,
    AssemblyError,
    DuplicateBorderMatch,
    InvalidCharacter,
    MalformedTileBlock,
    MissingNeighborTile,
    MosaicError,
    NoCornerFound,
    NonSquareTileCount,
)
from .evaluator import EvaluationResult, MosaicEvaluator
from .matcher import AdjacencyIndex, LayoutReport, Match
from .scanner import SEA_MONSTER, Pattern, PatternScanner, ScanResult
from .solver import AssembledGrid, AssemblerConfig, MosaicAssembler
from .splitter import TileSplitter, parse_tile_block
from .symmetry import ALL_ORIENTATIONS, Orientation, apply_orientation, find_orientation
from .tile import Edge, Tile

__all__ = [
    "BorderCode",
    "Edge",
    "Tile",
    "Orientation",
    "ALL_ORIENTATIONS",
    "apply_orientation",
    "find_orientation",
    "TileSplitter",
    "parse_tile_block",
    "Match",
    "AdjacencyIndex",
    "LayoutReport",
    "AssemblerConfig",
    "AssembledGrid",
    "MosaicAssembler",
    "Pattern",
    "SEA_MONSTER",
    "PatternScanner",
    "ScanResult",
    "EvaluationResult",
    "MosaicEvaluator",
    "MosaicError",
    "MalformedTileBlock",
    "InvalidCharacter",
    "DuplicateBorderMatch",
    "NoCornerFound",
    "NonSquareTileCount",
    "MissingNeighborTile",
    "AssemblyError",
    "AmbiguousPatternOrientation",
]
