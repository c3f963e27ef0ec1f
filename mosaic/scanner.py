"""Sliding-window pattern search over all eight orientations of an image."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from .errors import AmbiguousPatternOrientation
from .symmetry import ALL_ORIENTATIONS, Orientation, apply_orientation

logger = logging.getLogger(__name__)

SEA_MONSTER_LINES = (
    "                  # ",
    "#    ##    ##    ###",
    " #  #  #  #  #  #   ",
)


@dataclass(frozen=True, eq=False)
class Pattern:
    """Rectangular stencil: True cells must be active, False cells are don't-care."""

    mask: np.ndarray

    @classmethod
    def from_lines(cls, lines: Sequence[str]) -> "Pattern":
        """'#' marks a required pixel; every other character is don't-care."""
        rows = [line.rstrip("\r\n") for line in lines]
        while rows and not rows[-1].strip():
            rows.pop()
        width = max((len(row) for row in rows), default=0)
        mask = np.zeros((len(rows), width), dtype=bool)
        for r, row in enumerate(rows):
            for c, char in enumerate(row):
                mask[r, c] = char == "#"
        if not mask.any():
            raise ValueError("pattern must contain at least one '#' cell")
        mask.setflags(write=False)
        return cls(mask=mask)

    @property
    def shape(self) -> Tuple[int, int]:
        return self.mask.shape

    @property
    def active_cells(self) -> int:
        return int(np.count_nonzero(self.mask))

    def oriented(self, orientation: Orientation) -> "Pattern":
        mask = apply_orientation(self.mask, orientation)
        mask.setflags(write=False)
        return Pattern(mask=mask)

    def key(self) -> Tuple[Tuple[int, int], bytes]:
        return self.mask.shape, np.packbits(self.mask).tobytes()


SEA_MONSTER = Pattern.from_lines(SEA_MONSTER_LINES)


def find_occurrences(image: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Boolean map of top-left offsets where every required stencil cell is active."""
    image = np.asarray(image, dtype=bool)
    h, w = mask.shape
    if image.shape[0] < h or image.shape[1] < w:
        return np.zeros((0, 0), dtype=bool)
    windows = sliding_window_view(image, (h, w))
    return np.all(windows | ~mask, axis=(-2, -1))


@dataclass
class ScanResult:
    """Outcome of scanning one image for one pattern."""

    counts: Dict[Orientation, int]
    orientation: Optional[Orientation]
    occurrences: int
    active_pixels: int
    pattern_cells: int
    equivalent: List[Orientation] = field(default_factory=list)

    @property
    def roughness(self) -> int:
        """Active pixels not accounted for by pattern occurrences."""
        return self.active_pixels - self.occurrences * self.pattern_cells


class PatternScanner:
    """Count pattern occurrences in every orientation of an image."""

    def __init__(self, pattern: Pattern = SEA_MONSTER) -> None:
        self.pattern = pattern

    def count(self, image: np.ndarray, orientation: Orientation) -> int:
        """Occurrences of the pattern in `image` viewed under `orientation`."""
        view = apply_orientation(np.asarray(image, dtype=bool), orientation)
        return int(np.count_nonzero(find_occurrences(view, self.pattern.mask)))

    def _orientation_classes(self) -> List[List[Orientation]]:
        """Group orientations that see the same occurrences because the pattern is symmetric."""
        classes: Dict[Tuple[Tuple[int, int], bytes], List[Orientation]] = {}
        for orientation in ALL_ORIENTATIONS:
            # Scanning the image under o equals scanning the original with o^-1(pattern).
            key = self.pattern.oriented(orientation.inverse()).key()
            classes.setdefault(key, []).append(orientation)
        return list(classes.values())

    def scan(self, image: np.ndarray) -> ScanResult:
        """Scan all orientations; occurrences in more than one distinct orientation are an error."""
        image = np.asarray(image, dtype=bool)
        counts = {orientation: self.count(image, orientation) for orientation in ALL_ORIENTATIONS}
        found = [group for group in self._orientation_classes() if counts[group[0]] > 0]
        if len(found) > 1:
            summary = ", ".join(f"{group[0]}={counts[group[0]]}" for group in found)
            raise AmbiguousPatternOrientation(f"pattern found under {len(found)} orientations: {summary}")

        result = ScanResult(
            counts=counts,
            orientation=found[0][0] if found else None,
            occurrences=counts[found[0][0]] if found else 0,
            active_pixels=int(np.count_nonzero(image)),
            pattern_cells=self.pattern.active_cells,
            equivalent=list(found[0]) if found else [],
        )
        logger.info(
            "found %d pattern occurrences (orientation %s) among %d active pixels",
            result.occurrences,
            result.orientation,
            result.active_pixels,
        )
        return result

    def occurrence_mask(self, image: np.ndarray, orientation: Optional[Orientation]) -> np.ndarray:
        """Pixels of `image`, in its own frame, covered by occurrences found under `orientation`."""
        image = np.asarray(image, dtype=bool)
        covered = np.zeros_like(image)
        if orientation is None:
            return covered
        stencil = self.pattern.oriented(orientation.inverse()).mask
        h, w = stencil.shape
        for y, x in zip(*np.nonzero(find_occurrences(image, stencil))):
            covered[y : y + h, x : x + w] |= stencil
        return covered
