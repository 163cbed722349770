# -*- coding: utf-8 -*-
"""Shapeless (position-free) recipe matching.

The grid's materials form a multiset. Required entries consume from it,
then optional entries, and the match holds only when nothing is left over.

Consumption is greedy and never backtracks: an AnyOf takes the first of its
declared options that is still available. Two overlapping alternative sets
can therefore fail on a grid that some other assignment would satisfy.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Optional, Sequence

from .models import AnyOf, Ingredient, Material, MaterialId, ShapelessRecipe

__all__ = [
    "match_required",
    "match_optional",
    "match_shapeless",
]


def _take(items: Counter, material: MaterialId) -> bool:
    if items[material] <= 0:
        return False
    items[material] -= 1
    if items[material] == 0:
        del items[material]
    return True


def _take_any(items: Counter, group: AnyOf) -> bool:
    for option in group.options:
        if _take(items, option):
            return True
    return False


def match_required(items: Counter, required: Sequence[Ingredient]) -> bool:
    """Consume one instance per entry; any missing entry fails."""
    for entry in required:
        if isinstance(entry, AnyOf):
            if not _take_any(items, entry):
                return False
        elif isinstance(entry, Material):
            if not _take(items, entry.id):
                return False
        else:
            raise TypeError(f"unexpected ingredient: {entry!r}")
    return True


def match_optional(items: Counter, optional: Sequence[Ingredient]) -> bool:
    """Bare materials are skipped when absent; alternative sets are not."""
    for entry in optional:
        if isinstance(entry, AnyOf):
            if not _take_any(items, entry):
                return False
        elif isinstance(entry, Material):
            _take(items, entry.id)
        else:
            raise TypeError(f"unexpected ingredient: {entry!r}")
    return True


def match_shapeless(
    materials: Iterable[MaterialId],
    recipe: Optional[ShapelessRecipe] = None,
    *,
    required: Sequence[Ingredient] = (),
    optional: Optional[Sequence[Ingredient]] = None,
) -> bool:
    """Match a flat list of materials against a shapeless recipe.

    Either pass a ShapelessRecipe or the two entry lists. The materials are
    copied into a private multiset; the caller's iterable is not modified.
    """
    if recipe is not None:
        required = recipe.required
        optional = recipe.optional

    items: Counter = Counter(materials)
    if not match_required(items, required):
        return False
    # optional entries are only looked at when something is left over
    if items and optional is not None and not match_optional(items, optional):
        return False
    return not items
