# -*- coding: utf-8 -*-
"""craftgrid: crafting-grid recipe matching.

Typical use

    catalog = load_catalog("recipes.json")
    result = RecipeResolver(catalog).craft(table_slots)
    if result is not None:
        print(result.group, result.id)
"""

from .catalog import CatalogError, RecipeCatalog, load_catalog
from .grid import GridError, normalize, slot_material, trim_grid
from .models import AnyOf, Material, MatchResult, RecipeVariant, ShapelessRecipe
from .resolver import RecipeResolver, craft, resolve

__all__ = [
    "AnyOf",
    "CatalogError",
    "GridError",
    "Material",
    "MatchResult",
    "RecipeCatalog",
    "RecipeResolver",
    "RecipeVariant",
    "ShapelessRecipe",
    "craft",
    "load_catalog",
    "normalize",
    "resolve",
    "slot_material",
    "trim_grid",
]
