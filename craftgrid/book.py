# -*- coding: utf-8 -*-
"""Knowledge book helpers: turn recipes back into crafting-table grids.

- layout_shapeless: lay required entries out row by row
- preview_grid: a concrete grid for one "frame" of a recipe; frames cycle
  through the options of every alternative set in step
- fits: whether a recipe can be placed on a table of a given size
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .grid import shape, trim_grid
from .models import AnyOf, Grid, RecipeVariant, ShapelessRecipe, TemplateCell

__all__ = [
    "layout_shapeless",
    "pad_template",
    "recipe_layout",
    "cycle_length",
    "fits",
    "preview_grid",
    "preview_frames",
]


def layout_shapeless(recipe: ShapelessRecipe, table_size: int) -> List[List[TemplateCell]]:
    """Required entries, `table_size` per row, as alternative-set cells.

    The last row is left short. Optional entries are not laid out.
    """
    if table_size <= 0:
        raise ValueError("table_size must be positive")
    rows: List[List[TemplateCell]] = [[]]
    for entry in recipe.required:
        if len(rows[-1]) >= table_size:
            rows.append([])
        rows[-1].append(AnyOf(entry.options))
    return rows


def pad_template(rows: Sequence[Sequence[TemplateCell]]) -> List[List[TemplateCell]]:
    width = max((len(r) for r in rows), default=0)
    return [list(r) + [None] * (width - len(r)) for r in rows]


def recipe_layout(variant: RecipeVariant, table_size: int) -> List[List[TemplateCell]]:
    """Rectangular template for display: trimmed shaped template or padded shapeless layout."""
    if isinstance(variant.recipe, ShapelessRecipe):
        return pad_template(layout_shapeless(variant.recipe, table_size))
    return trim_grid(variant.recipe)


def cycle_length(variant: RecipeVariant) -> int:
    """Number of distinct preview frames (longest alternative list, at least 1)."""
    if isinstance(variant.recipe, ShapelessRecipe):
        shown = list(variant.recipe.required)
    else:
        shown = variant.ingredients()
    longest = 1
    for ing in shown:
        longest = max(longest, len(ing.options))
    return longest


def fits(variant: RecipeVariant, table_size: int) -> bool:
    rows, cols = shape(recipe_layout(variant, table_size))
    return rows <= table_size and cols <= table_size


def preview_grid(variant: RecipeVariant, table_size: int, frame: int = 0) -> Optional[Grid]:
    """A full `table_size` x `table_size` grid showing the recipe, or None if it does not fit.

    Each cell shows option `frame % len(options)`, so cells with different
    option counts cycle independently.
    """
    if not fits(variant, table_size):
        return None

    grid: Grid = [[None] * table_size for _ in range(table_size)]
    for r, row in enumerate(recipe_layout(variant, table_size)):
        for c, cell in enumerate(row):
            if cell is None:
                continue
            opts = cell.options
            grid[r][c] = opts[frame % len(opts)]
    return grid


def preview_frames(variant: RecipeVariant, table_size: int) -> List[Grid]:
    out: List[Grid] = []
    for frame in range(cycle_length(variant)):
        g = preview_grid(variant, table_size, frame)
        if g is None:
            return []
        out.append(g)
    return out

