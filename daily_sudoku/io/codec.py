"""Digit-string encoding for puzzles and solutions.

A puzzle is stored as up to 81 digits read left-to-right, top-to-bottom,
with ``0`` marking a blank cell.
"""

from __future__ import annotations

import re
from typing import Optional, Sequence

from ..core.constants import CELL_COUNT, GRID_SIZE
from ..core.models import Grid

NON_DIGIT_RE = re.compile(r"\D")


def normalize_digits(text: Optional[str]) -> str:
    """Strip non-digits, then right-pad with zeros or truncate to 81 chars."""

    cleaned = NON_DIGIT_RE.sub("", text or "")
    return cleaned.ljust(CELL_COUNT, "0")[:CELL_COUNT]


def decode_digits(text: Optional[str]) -> Grid:
    """Return a 9x9 grid from a digit string. Never raises."""

    digits = normalize_digits(text)
    return [
        [int(digits[row * GRID_SIZE + col]) for col in range(GRID_SIZE)]
        for row in range(GRID_SIZE)
    ]


def encode_digits(grid: Sequence[Sequence[int]]) -> str:
    return "".join(str(value) for row in grid for value in row)


__all__ = ["normalize_digits", "decode_digits", "encode_digits"]
