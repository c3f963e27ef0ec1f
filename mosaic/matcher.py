"""Border matching and adjacency classification for a tile pool."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .border import BorderCode
from .errors import DuplicateBorderMatch, NoCornerFound
from .tile import Edge, Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """The unique neighbour of one edge.

    `edge` refers to the neighbour in the orientation it has inside the index.
    `flipped` is set when the two borders only agree after a bit reversal.
    """

    tile_id: int
    edge: Edge
    flipped: bool


EdgeMatches = Tuple[Optional[Match], Optional[Match], Optional[Match], Optional[Match]]


@dataclass
class LayoutReport:
    """Corner / boundary / interior counts checked against a square layout."""

    width: Optional[int]
    corners: List[int]
    boundary: List[int]
    interior: List[int]
    unclassified: List[int]
    problems: List[str] = field(default_factory=list)

    @property
    def is_well_formed(self) -> bool:
        return not self.problems


class AdjacencyIndex:
    """Find the matching neighbour edge, if any, for every edge of every tile."""

    def __init__(self, tiles: Sequence[Tile]) -> None:
        """Index pool borders by their orientation-free value."""
        self._tiles: Dict[int, Tile] = {tile.id: tile for tile in tiles}
        self._by_border: Dict[Tuple[int, int], List[Tuple[int, Edge, BorderCode]]] = {}
        for tile in self._tiles.values():
            for edge in Edge:
                border = tile.border(edge)
                key = (border.width, border.canonical)
                self._by_border.setdefault(key, []).append((tile.id, edge, border))
        # Keyed on the tile's current border values: a transformed tile never
        # sees matches computed for an older orientation.
        self._cache: Dict[Tuple[int, Tuple[int, ...]], EdgeMatches] = {}

    def tile(self, tile_id: int) -> Tile:
        """Pool tile with `tile_id`, in its original orientation."""
        return self._tiles[tile_id]

    def _edge_match(self, tile: Tile, edge: Edge) -> Optional[Match]:
        border = tile.border(edge)
        found: List[Match] = []
        for other_id, other_edge, other_border in self._by_border.get((border.width, border.canonical), []):
            if other_id == tile.id:
                continue
            flipped = border.flip_against(other_border)
            if flipped is not None:
                found.append(Match(tile_id=other_id, edge=other_edge, flipped=flipped))
        if len(found) > 1:
            candidates = ", ".join(f"{m.tile_id}:{m.edge.name}" for m in found)
            raise DuplicateBorderMatch(
                f"tile {tile.id} edge {edge.name} matches {len(found)} candidate edges ({candidates})"
            )
        return found[0] if found else None

    def matches(self, tile: Tile) -> EdgeMatches:
        """Return the unique match (or None) for each edge of `tile` as currently oriented."""
        key = (tile.id, tuple(border.raw for border in tile.borders))
        cached = self._cache.get(key)
        if cached is None:
            cached = tuple(self._edge_match(tile, edge) for edge in Edge)  # type: ignore[assignment]
            self._cache[key] = cached
        return cached

    def match_count(self, tile: Tile) -> int:
        """Number of edges of `tile` that have a partner."""
        return sum(1 for m in self.matches(tile) if m is not None)

    def _ids_with_count(self, count: int) -> List[int]:
        return sorted(tid for tid, tile in self._tiles.items() if self.match_count(tile) == count)

    def corners(self) -> List[int]:
        """Tile ids with exactly two matched edges."""
        return self._ids_with_count(2)

    def boundary_tiles(self) -> List[int]:
        """Tile ids with exactly three matched edges."""
        return self._ids_with_count(3)

    def interior_tiles(self) -> List[int]:
        """Tile ids with all four edges matched."""
        return self._ids_with_count(4)

    def classify(self) -> Dict[str, List[int]]:
        """Group tile ids by matched-edge count: corner, boundary, interior or unclassified."""
        classes: Dict[str, List[int]] = {"corner": [], "boundary": [], "interior": [], "unclassified": []}
        names = {2: "corner", 3: "boundary", 4: "interior"}
        for tid in sorted(self._tiles):
            count = self.match_count(self._tiles[tid])
            classes[names.get(count, "unclassified")].append(tid)
        return classes

    def layout_report(self, width: Optional[int] = None) -> LayoutReport:
        """Check the classification against a `width` x `width` layout; never raises on mismatch."""
        classes = self.classify()
        report = LayoutReport(
            width=width,
            corners=classes["corner"],
            boundary=classes["boundary"],
            interior=classes["interior"],
            unclassified=classes["unclassified"],
        )
        if width is None:
            root = math.isqrt(len(self._tiles))
            if root * root != len(self._tiles):
                report.problems.append(f"{len(self._tiles)} tiles do not form a square")
                return self._log_problems(report)
            width = root
            report.width = width

        if width <= 1:
            expected = {"corner": 0, "boundary": 0, "interior": 0}
        else:
            inner = width - 2
            expected = {"corner": 4, "boundary": 4 * inner, "interior": inner * inner}
        for name, wanted in expected.items():
            got = len(classes[name])
            if got != wanted:
                report.problems.append(f"expected {wanted} {name} tiles for width {width}, found {got}")
        if report.unclassified and width > 1:
            report.problems.append(f"tiles with fewer than two matches: {report.unclassified}")
        return self._log_problems(report)

    @staticmethod
    def _log_problems(report: LayoutReport) -> LayoutReport:
        for problem in report.problems:
            logger.warning("layout check: %s", problem)
        return report

    def corner_product(self) -> int:
        """Product of the corner tile ids."""
        corners = self.corners()
        if not corners:
            raise NoCornerFound("no tile has exactly two matching edges")
        if len(corners) != 4:
            logger.warning("expected 4 corner tiles, found %d: %s", len(corners), corners)
        return math.prod(corners)
