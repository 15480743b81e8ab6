"""Mapping between 1-based linear cell indices and (row, col) pairs."""

import math

from .constants import GRID_ROWS, GRID_COLS


def cell_index(row: int, col: int, cols: int = GRID_COLS) -> int:
    """Linear index of (row, col). Does not clamp; callers range-check."""
    return (row - 1) * cols + col


def cell_position(index: int, cols: int = GRID_COLS) -> tuple[int, int]:
    row = math.ceil(index / cols)
    return row, index - (row - 1) * cols


def in_bounds(row: int, col: int, rows: int = GRID_ROWS, cols: int = GRID_COLS) -> bool:
    return 1 <= row <= rows and 1 <= col <= cols
