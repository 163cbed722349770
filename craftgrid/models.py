# -*- coding: utf-8 -*-
"""Recipe data model.

A recipe cell or requirement is either one material or a list of
interchangeable materials. Both shapes are explicit types here
(`Material` / `AnyOf`) so matchers branch on the type, not on
"is this a list or a string".

JSON shape (RecipeCollection)
- group name -> [ {id, name, shapeless, recipe}, ... ]
- shaped recipe: rows of cells; a cell is null, "material" or ["a", "b"]
- shapeless recipe: {"required": [...], "optional": [...]} with the same
  string / list-of-strings entries
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

MaterialId = str
Cell = Optional[MaterialId]
Grid = List[List[Cell]]


@dataclass(frozen=True)
class Material:
    id: MaterialId

    @property
    def options(self) -> Tuple[MaterialId, ...]:
        return (self.id,)

    def accepts(self, material: Cell) -> bool:
        return material is not None and material == self.id

    def to_json(self) -> Any:
        return self.id


@dataclass(frozen=True)
class AnyOf:
    """Alternative set. Declared order decides which member is consumed first."""

    options: Tuple[MaterialId, ...]

    def accepts(self, material: Cell) -> bool:
        return material is not None and material in self.options

    def to_json(self) -> Any:
        return list(self.options)


Ingredient = Union[Material, AnyOf]
TemplateCell = Optional[Ingredient]
ShapedTemplate = Tuple[Tuple[TemplateCell, ...], ...]


@dataclass(frozen=True)
class ShapelessRecipe:
    required: Tuple[Ingredient, ...]
    # None means "no optional list", which is not the same as an empty one
    optional: Optional[Tuple[Ingredient, ...]] = None

    def to_json(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"required": [i.to_json() for i in self.required]}
        if self.optional is not None:
            out["optional"] = [i.to_json() for i in self.optional]
        return out


@dataclass(frozen=True)
class RecipeVariant:
    id: str
    name: str
    shapeless: bool
    recipe: Union[ShapedTemplate, ShapelessRecipe]

    def ingredients(self) -> List[Ingredient]:
        """Every ingredient entry in declaration order (shaped: row-major)."""
        if isinstance(self.recipe, ShapelessRecipe):
            return list(self.recipe.required) + list(self.recipe.optional or ())
        return [cell for row in self.recipe for cell in row if cell is not None]

    def materials(self) -> List[MaterialId]:
        out: List[MaterialId] = []
        for ing in self.ingredients():
            for m in ing.options:
                if m not in out:
                    out.append(m)
        return out

    def to_dict(self) -> Dict[str, Any]:
        if isinstance(self.recipe, ShapelessRecipe):
            recipe: Any = self.recipe.to_json()
        else:
            recipe = [[None if c is None else c.to_json() for c in row] for row in self.recipe]
        return {"id": self.id, "name": self.name, "shapeless": self.shapeless, "recipe": recipe}


@dataclass(frozen=True)
class MatchResult:
    group: str
    id: str

    def to_dict(self) -> Dict[str, str]:
        return {"group": self.group, "id": self.id}


# =========================================================
# JSON decoding
# =========================================================


def parse_ingredient(raw: Any) -> Ingredient:
    """Decode "material" -> Material, ["a", "b"] -> AnyOf."""
    if isinstance(raw, (Material, AnyOf)):
        return raw
    if isinstance(raw, str):
        if not raw:
            raise ValueError("empty material id")
        return Material(raw)
    if isinstance(raw, (list, tuple)):
        opts = tuple(raw)
        if not opts or not all(isinstance(x, str) and x for x in opts):
            raise ValueError(f"alternative set must be a non-empty list of strings: {raw!r}")
        return AnyOf(opts)
    raise ValueError(f"ingredient must be a string or a list of strings: {raw!r}")


def parse_template(raw: Any) -> ShapedTemplate:
    if not isinstance(raw, (list, tuple)) or not raw:
        raise ValueError("shaped recipe must be a non-empty list of rows")
    rows: List[Tuple[TemplateCell, ...]] = []
    width: Optional[int] = None
    for row in raw:
        if not isinstance(row, (list, tuple)):
            raise ValueError(f"shaped recipe row must be a list: {row!r}")
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise ValueError("shaped recipe is not rectangular")
        rows.append(tuple(None if c is None else parse_ingredient(c) for c in row))
    return tuple(rows)


def _parse_ingredient_list(raw: Any, key: str) -> Tuple[Ingredient, ...]:
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"shapeless '{key}' must be a list")
    return tuple(parse_ingredient(x) for x in raw)


def parse_shapeless(raw: Any) -> ShapelessRecipe:
    if not isinstance(raw, dict):
        raise ValueError("shapeless recipe must be an object with 'required'")
    if raw.get("required") is None:
        raise ValueError("shapeless recipe needs a 'required' list")
    required = _parse_ingredient_list(raw["required"], "required")
    optional = None
    if raw.get("optional") is not None:
        optional = _parse_ingredient_list(raw["optional"], "optional")
    return ShapelessRecipe(required=required, optional=optional)


def parse_variant(raw: Any) -> RecipeVariant:
    if not isinstance(raw, dict):
        raise ValueError("recipe variant must be an object")
    vid = raw.get("id")
    if not isinstance(vid, str) or not vid:
        raise ValueError(f"recipe variant missing id: {raw!r}")
    shapeless = raw.get("shapeless", False)
    if not isinstance(shapeless, bool):
        raise ValueError(f"'shapeless' must be true or false, got {shapeless!r}")
    body = raw.get("recipe")
    recipe: Union[ShapedTemplate, ShapelessRecipe] = parse_shapeless(body) if shapeless else parse_template(body)
    return RecipeVariant(id=vid, name=str(raw.get("name") or vid), shapeless=shapeless, recipe=recipe)


def template_from_rows(rows: Sequence[Sequence[Any]]) -> ShapedTemplate:
    """Shorthand for building templates in code: same cell rules as JSON."""
    return parse_template([list(r) for r in rows])
