"""The two standard mosaic queries: corner identity check and pattern roughness."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .matcher import AdjacencyIndex, LayoutReport
from .scanner import SEA_MONSTER, Pattern, PatternScanner, ScanResult
from .solver import AssembledGrid, AssemblerConfig, MosaicAssembler
from .tile import Tile

logger = logging.getLogger(__name__)


@dataclass
class EvaluationResult:
    """Container for every query answered about one tile pool."""

    corner_product: int
    roughness: int
    layout: LayoutReport
    grid: AssembledGrid
    composite: np.ndarray
    scan: ScanResult


class MosaicEvaluator:
    """Answer corner and pattern queries for a tile pool."""

    def __init__(self, config: Optional[AssemblerConfig] = None, pattern: Pattern = SEA_MONSTER) -> None:
        self.assembler = MosaicAssembler(config)
        self.scanner = PatternScanner(pattern)

    @staticmethod
    def corner_product(tiles: Sequence[Tile]) -> int:
        """Product of the corner tile ids; needs classification only, no assembly."""
        return AdjacencyIndex(tiles).corner_product()

    def roughness(self, tiles: Sequence[Tile]) -> int:
        """Active composite pixels left over after removing every pattern occurrence."""
        return self.scanner.scan(self.assembler.assemble(tiles).content()).roughness

    def evaluate(self, tiles: Sequence[Tile]) -> EvaluationResult:
        index = AdjacencyIndex(tiles)
        layout = index.layout_report()
        grid = self.assembler.assemble(tiles)
        composite = grid.content()
        scan = self.scanner.scan(composite)
        logger.info("assembled %dx%d grid, roughness %d", grid.width, grid.width, scan.roughness)
        return EvaluationResult(
            corner_product=index.corner_product(),
            roughness=scan.roughness,
            layout=layout,
            grid=grid,
            composite=composite,
            scan=scan,
        )
