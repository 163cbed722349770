# -*- coding: utf-8 -*-
"""Shaped (position-sensitive) recipe matching.

Both sides must already be trimmed. Dimensions must agree exactly; an empty
template cell needs an empty grid cell (it is not a wildcard).
"""

from __future__ import annotations

from typing import Sequence

from .grid import shape
from .models import Cell, TemplateCell

__all__ = ["cell_matches", "match_shaped"]


def cell_matches(expected: TemplateCell, actual: Cell) -> bool:
    if expected is None:
        return actual is None
    return expected.accepts(actual)


def match_shaped(grid: Sequence[Sequence[Cell]], template: Sequence[Sequence[TemplateCell]]) -> bool:
    if shape(grid) != shape(template):
        return False
    for grid_row, tpl_row in zip(grid, template):
        for actual, expected in zip(grid_row, tpl_row):
            if not cell_matches(expected, actual):
                return False
    return True
