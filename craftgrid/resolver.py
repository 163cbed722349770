# -*- coding: utf-8 -*-
"""Recipe resolution: crafting grid + catalog -> first matching recipe.

The catalog is walked in stored order (groups, then variants inside a
group) and the first variant that matches wins. When a grid satisfies
several variants, the earliest one in the catalog is the answer; callers
rely on this to order specific recipes before general ones.

No match is a normal outcome and is returned as None.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .catalog import RecipeCatalog
from .grid import flatten, normalize, trim_grid
from .models import Cell, MatchResult, RecipeVariant, ShapelessRecipe
from .shaped import match_shaped
from .shapeless import match_shapeless

__all__ = [
    "RecipeResolver",
    "variant_matches",
    "resolve",
    "craft",
]

logger = logging.getLogger(__name__)

Collection = Union[RecipeCatalog, Mapping[str, Sequence[RecipeVariant]]]


def _iter_collection(recipes: Collection) -> Iterator[Tuple[str, RecipeVariant]]:
    if isinstance(recipes, RecipeCatalog):
        yield from recipes
        return
    for group, variants in recipes.items():
        for variant in variants:
            yield group, variant


def variant_matches(grid: Sequence[Sequence[Cell]], variant: RecipeVariant) -> bool:
    """Match one variant against an already-normalized grid."""
    if isinstance(variant.recipe, ShapelessRecipe):
        return match_shapeless(flatten(grid), variant.recipe)
    return match_shaped(grid, trim_grid(variant.recipe))


class RecipeResolver:
    """Stateless matcher bound to one catalog.

    The catalog is read-only for the resolver's lifetime; every call works on
    its own copies, so one resolver can serve any number of crafting attempts.
    """

    def __init__(self, recipes: Collection):
        self.recipes = recipes

    def first_match(self, grid: Sequence[Sequence[Cell]]) -> Optional[Tuple[str, RecipeVariant]]:
        """(group, variant) of the first variant matching a normalized grid."""
        tried = 0
        for group, variant in _iter_collection(self.recipes):
            tried += 1
            if variant_matches(grid, variant):
                logger.debug("Grid matched %s/%s after %d variants", group, variant.id, tried)
                return group, variant
        logger.debug("No recipe matched (%d variants tried)", tried)
        return None

    def resolve(self, grid: Sequence[Sequence[Cell]]) -> Optional[MatchResult]:
        """First variant matching a normalized grid, or None."""
        hit = self.first_match(grid)
        if hit is None:
            return None
        group, variant = hit
        return MatchResult(group=group, id=variant.id)

    def resolve_all(self, grid: Sequence[Sequence[Cell]]) -> List[MatchResult]:
        """Every matching variant, in catalog order (first entry == resolve())."""
        return [
            MatchResult(group=group, id=variant.id)
            for group, variant in _iter_collection(self.recipes)
            if variant_matches(grid, variant)
        ]

    def craft(self, slots: Sequence[Sequence[Any]]) -> Optional[MatchResult]:
        """Raw crafting-table slots -> match result."""
        return self.resolve(normalize(slots))


def resolve(grid: Sequence[Sequence[Cell]], recipes: Collection) -> Optional[MatchResult]:
    return RecipeResolver(recipes).resolve(grid)


def craft(slots: Sequence[Sequence[Any]], recipes: Collection) -> Optional[MatchResult]:
    return RecipeResolver(recipes).craft(slots)
