"""Shared grids for the test suite."""

from __future__ import annotations

from typing import List

SOLVED_DIGITS = (
    "534678912"
    "672195348"
    "198342567"
    "859761423"
    "426853791"
    "713924856"
    "961537284"
    "287419635"
    "345286179"
)


def solved_grid() -> List[List[int]]:
    return [[int(SOLVED_DIGITS[r * 9 + c]) for c in range(9)] for r in range(9)]


def relabelled_grid() -> List[List[int]]:
    """A different valid solution: digits 1 and 2 swapped everywhere."""
    swap = {1: 2, 2: 1}
    return [[swap.get(value, value) for value in row] for row in solved_grid()]


def puzzle_with_holes(holes) -> List[List[int]]:
    grid = solved_grid()
    for row, col in holes:
        grid[row][col] = 0
    return grid


def empty() -> List[List[int]]:
    return [[0] * 9 for _ in range(9)]
