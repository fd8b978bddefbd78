from __future__ import annotations

import math
from enum import Enum
from typing import Tuple, Union

from .defaults import HASH_COL, HASH_ROW, HASH_SCALE


class AlternationPattern(str, Enum):
    CHECKERBOARD = "checkerboard"
    ROWS = "rows"
    COLS = "cols"
    RANDOM = "random"


def _safe_mod(n: int, m: int) -> int:
    return ((n % m) + m) % m


def pick_source(
    col: int,
    row: int,
    pattern: Union[AlternationPattern, str],
    source_count: int,
) -> int:
    """
    Index in [0, source_count) of the source image that colors grid cell (col,row).

    "random" is a sine hash of the coordinates: the same cell always gets the same source.
    """
    if source_count < 1:
        raise ValueError("source_count must be >= 1")
    try:
        pattern = AlternationPattern(pattern)
    except ValueError:
        raise ValueError(f"unknown alternation pattern: {pattern!r}") from None

    if source_count == 1:
        return 0

    col = int(col)
    row = int(row)
    if pattern is AlternationPattern.CHECKERBOARD:
        return _safe_mod(col + row, source_count)
    if pattern is AlternationPattern.ROWS:
        return _safe_mod(row, source_count)
    if pattern is AlternationPattern.COLS:
        return _safe_mod(col, source_count)

    h = math.floor(abs(math.sin(col * HASH_COL + row * HASH_ROW)) * HASH_SCALE)
    return _safe_mod(h, source_count)


def grid_cell_for_point(x: float, y: float, size: float) -> Tuple[int, int]:
    """
    Coarse (col,row) of a free-standing site, so Voronoi/stipple modes alternate in 2*size blocks.
    """
    step = 2.0 * size
    return math.floor(x / step), math.floor(y / step)
