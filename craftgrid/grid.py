# -*- coding: utf-8 -*-
"""Crafting grid normalization.

Two jobs:
- map raw slot contents to material ids (`slot_material`, `to_grid`)
- trim fully-empty border rows/columns (`trim_grid`)

Trimming rule
- Rows are scanned, then columns; the whole thing runs twice, because a row
  removal can expose an empty column that the first column scan kept.
- Position 1 of an axis is never removed while that axis is 3 or more long.
  That keeps ring-shaped patterns (empty middle row/column) aligned with
  their templates. Axes of length 1 or 2 have no exempt position.
- "Current length" is the length of the axis at the point of the scan:
  lines kept so far plus lines not yet looked at.

The same rule trims crafting grids and shaped templates; it only looks at
whether a cell is None, so it works for either cell type.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, TypeVar

from .models import Cell, Grid, MaterialId

__all__ = [
    "GridError",
    "slot_material",
    "to_grid",
    "trim_grid",
    "normalize",
    "flatten",
    "shape",
    "ensure_rectangular",
]

T = TypeVar("T")

GENERIC_TAG = "item"
TRIM_PASSES = 2
_MIDDLE = 1
_MIN_EXEMPT_LEN = 3

_TAG_KEYS = ("classes", "class_list", "tags")


class GridError(ValueError):
    pass


# =========================================================
# Slot -> material
# =========================================================


def _slot_tags(slot: Any) -> Iterable[Any]:
    if isinstance(slot, Mapping):
        for key in _TAG_KEYS:
            if slot.get(key):
                return slot[key]
        return ()
    for key in _TAG_KEYS:
        tags = getattr(slot, key, None)
        if tags:
            return tags
    if isinstance(slot, (list, tuple)):
        return slot
    return ()


def slot_material(slot: Any) -> Cell:
    """Material id of one slot, or None for an empty slot.

    Accepted slot shapes
    - None / "" (empty)
    - "stick" (already a material id)
    - an object or mapping with `classes` / `class_list` / `tags`
    - a list of classification tags

    The id is the first tag that is not the generic "item" tag.
    """
    if slot is None:
        return None
    if isinstance(slot, str):
        s = slot.strip()
        return s or None

    tags = _slot_tags(slot)
    if isinstance(tags, str):
        # "item stick" style class strings
        tags = tags.split()
    for tag in tags:
        t = str(tag or "").strip()
        if t and t != GENERIC_TAG:
            return t
    return None


def to_grid(slots: Sequence[Sequence[Any]]) -> Grid:
    return [[slot_material(s) for s in row] for row in slots]


# =========================================================
# Trimming
# =========================================================


def _retained(count: int, is_empty: Callable[[int], bool]) -> List[int]:
    kept: List[int] = []
    for idx in range(count):
        current_len = len(kept) + (count - idx)
        if len(kept) == _MIDDLE and current_len >= _MIN_EXEMPT_LEN:
            kept.append(idx)
        elif not is_empty(idx):
            kept.append(idx)
    return kept


def _trim_rows(rows: List[List[T]]) -> List[List[T]]:
    keep = _retained(len(rows), lambda i: all(c is None for c in rows[i]))
    return [rows[i] for i in keep]


def _trim_cols(rows: List[List[T]]) -> List[List[T]]:
    if not rows:
        return rows
    keep = _retained(len(rows[0]), lambda j: all(r[j] is None for r in rows))
    return [[r[j] for j in keep] for r in rows]


def trim_grid(grid: Sequence[Sequence[Optional[T]]]) -> List[List[Optional[T]]]:
    """Return a trimmed copy; the input is left untouched."""
    rows: List[List[Optional[T]]] = [list(r) for r in grid]
    for _ in range(TRIM_PASSES):
        rows = _trim_rows(rows)
        rows = _trim_cols(rows)
    return rows


def normalize(slots: Sequence[Sequence[Any]]) -> Grid:
    """Raw slots -> trimmed material grid."""
    return trim_grid(to_grid(slots))


# =========================================================
# Helpers
# =========================================================


def flatten(grid: Sequence[Sequence[Cell]]) -> List[MaterialId]:
    """Non-empty materials in row-major order (shape discarded)."""
    return [c for row in grid for c in row if c is not None]


def shape(grid: Sequence[Sequence[Any]]) -> Tuple[int, int]:
    if not grid:
        return 0, 0
    return len(grid), len(grid[0])


def ensure_rectangular(grid: Sequence[Sequence[Any]]) -> None:
    """Reject ragged input before it reaches the matchers."""
    widths = {len(row) for row in grid}
    if len(widths) > 1:
        raise GridError(f"grid is not rectangular (row widths: {sorted(widths)})")
