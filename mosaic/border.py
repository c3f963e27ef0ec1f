"""Fixed-width bit codes for tile edges."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from .errors import InvalidCharacter, MalformedTileBlock

PIXEL_BITS = {"#": 1, ".": 0}


@dataclass(frozen=True)
class BorderCode:
    """One tile edge folded MSB-first into an integer of `width` bits.

    Edges run left-to-right for Top/Bottom and top-to-bottom for Left/Right.
    """

    raw: int
    width: int

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError("border width must be positive")
        if not 0 <= self.raw < (1 << self.width):
            raise ValueError(f"border value {self.raw} does not fit in {self.width} bits")

    @classmethod
    def parse(cls, chars: Iterable[str], width: int) -> "BorderCode":
        """Parse a run of '#'/'.' characters of exactly `width` length."""
        raw = 0
        count = 0
        for index, char in enumerate(chars):
            if char not in PIXEL_BITS:
                raise InvalidCharacter(f"invalid character {char!r} at border position {index}")
            raw = (raw << 1) | PIXEL_BITS[char]
            count += 1
        if count != width:
            raise MalformedTileBlock(f"border has {count} pixels, expected {width}")
        return cls(raw=raw, width=width)

    @classmethod
    def from_pixels(cls, pixels: np.ndarray) -> "BorderCode":
        """Fold a 1-D boolean pixel run into a border code."""
        raw = 0
        for bit in np.asarray(pixels, dtype=bool).ravel():
            raw = (raw << 1) | int(bit)
        return cls(raw=raw, width=int(pixels.size))

    def flipped(self) -> "BorderCode":
        """Return the border read in the opposite direction."""
        text = format(self.raw, f"0{self.width}b")
        return BorderCode(raw=int(text[::-1], 2), width=self.width)

    def flip_against(self, other: "BorderCode") -> Optional[bool]:
        """Return None if the borders do not match, else whether a reversal was needed."""
        if self.width != other.width:
            return None
        if self.raw == other.raw:
            return False
        if self.flipped().raw == other.raw:
            return True
        return None

    def matches(self, other: "BorderCode") -> bool:
        """True when the borders agree directly or after a reversal."""
        return self.flip_against(other) is not None

    @property
    def canonical(self) -> int:
        """Orientation-free key shared by a border and its reversal."""
        return min(self.raw, self.flipped().raw)

    @property
    def is_palindrome(self) -> bool:
        """True when reversal leaves the border unchanged."""
        return self.raw == self.flipped().raw

    def to_text(self) -> str:
        """Render the border as a run of '#'/'.' characters."""
        return "".join("#" if bit == "1" else "." for bit in format(self.raw, f"0{self.width}b"))
