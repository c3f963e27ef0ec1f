"""Dihedral symmetry group of a square grid (4 rotations x optional mirror)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Orientation:
    """Rotate clockwise `rotations` quarter turns, then mirror left-right if `mirrored`."""

    rotations: int = 0
    mirrored: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotations", int(self.rotations) % 4)
        object.__setattr__(self, "mirrored", bool(self.mirrored))

    def then(self, other: "Orientation") -> "Orientation":
        """Orientation equivalent to applying `self` first and `other` second."""
        # A mirror reverses the sense of every rotation applied after it.
        turn = -other.rotations if self.mirrored else other.rotations
        return Orientation(self.rotations + turn, self.mirrored != other.mirrored)

    def inverse(self) -> "Orientation":
        if self.mirrored:
            return self
        return Orientation(-self.rotations, False)

    def __str__(self) -> str:
        text = f"rot{self.rotations * 90}"
        return f"{text}+mirror" if self.mirrored else text


IDENTITY = Orientation()
ROTATE_CW = Orientation(1, False)
FLIP_HORIZONTAL = Orientation(0, True)
FLIP_VERTICAL = Orientation(2, True)

ALL_ORIENTATIONS: Tuple[Orientation, ...] = tuple(
    Orientation(rotations, mirrored) for mirrored in (False, True) for rotations in range(4)
)


def apply_orientation(grid: np.ndarray, orientation: Orientation) -> np.ndarray:
    """Return a copy of a 2-D grid transformed by `orientation`."""
    out = np.rot90(grid, k=-orientation.rotations)
    if orientation.mirrored:
        out = np.fliplr(out)
    return out.copy()


def find_orientation(source: np.ndarray, target: np.ndarray) -> Optional[Orientation]:
    """First orientation that maps `source` onto `target`, or None if they differ."""
    for orientation in ALL_ORIENTATIONS:
        candidate = apply_orientation(source, orientation)
        if candidate.shape == target.shape and np.array_equal(candidate, target):
            return orientation
    return None
