# -*- coding: utf-8 -*-
"""craftgrid/catalog.py

Recipe catalog: the ordered group -> variants collection the resolver walks.

Why this module exists
- The catalog arrives as plain JSON-shaped data (RecipeCollection).
- Matchers want typed recipes (Material / AnyOf) and a stable order.
- UI layers (knowledge book, CLI) want query helpers.

Order
- Groups keep insertion order, variants keep list order. That order is the
  tie-break when a grid satisfies several recipes, so nothing here sorts the
  catalog itself (query results derived from it may be sorted).

Public API
- RecipeCatalog.from_dict(doc) / load_catalog(path)
- RecipeCatalog.to_dict() / dumps()
- RecipeCatalog.get(group) / find(group, id) / groups()
- RecipeCatalog.materials() / list_by_ingredient(material) / search(query)
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .models import RecipeVariant, parse_variant
from .version import catalog_schema

__all__ = [
    "CatalogError",
    "RecipeCatalog",
    "load_catalog",
]

logger = logging.getLogger(__name__)


class CatalogError(RuntimeError):
    pass


def _dedup_preserve(seq: Sequence[str]) -> List[str]:
    out: List[str] = []
    seen = set()
    for x in seq:
        if not x or x in seen:
            continue
        seen.add(x)
        out.append(x)
    return out


class RecipeCatalog:
    """Read-only, ordered recipe catalog.

    Built once per session; nothing mutates it afterwards. Derived indices
    (aliases, by_ingredient) are computed at construction.
    """

    def __init__(
        self,
        groups: Optional[Mapping[str, Sequence[RecipeVariant]]] = None,
        *,
        silent: bool = False,
    ):
        self.silent = bool(silent)
        self._groups: Dict[str, Tuple[RecipeVariant, ...]] = {
            str(name): tuple(variants) for name, variants in (groups or {}).items()
        }
        self._aliases: Dict[str, str] = {}
        self._by_ingredient: Dict[str, List[Tuple[str, str]]] = defaultdict(list)
        self._build()

    def _log(self, msg: str) -> None:
        if not self.silent:
            logger.info(msg)

    def _build(self) -> None:
        for name in self._groups:
            self._aliases.setdefault(name.lower(), name)

        for group, variant in self:
            for material in variant.materials():
                key = material.lower()
                ref = (group, variant.id)
                if ref not in self._by_ingredient[key]:
                    self._by_ingredient[key].append(ref)

        self._log(f"Recipe catalog ready: {len(self._groups)} groups, {len(self)} variants")

    # -----------------
    # Container protocol
    # -----------------

    def __len__(self) -> int:
        return sum(len(v) for v in self._groups.values())

    def __iter__(self) -> Iterator[Tuple[str, RecipeVariant]]:
        """(group, variant) pairs in catalog order."""
        for name, variants in self._groups.items():
            for variant in variants:
                yield name, variant

    def __contains__(self, group: object) -> bool:
        return group in self._groups

    def __bool__(self) -> bool:
        return bool(self._groups)

    def iter_variants(self) -> Iterator[Tuple[str, RecipeVariant]]:
        return iter(self)

    # -----------------
    # Public query API
    # -----------------

    def groups(self) -> List[str]:
        return list(self._groups.keys())

    def get(self, group: str) -> Tuple[RecipeVariant, ...]:
        if not group:
            return ()
        key = self._aliases.get(group.strip().lower())
        if key is None:
            return ()
        return self._groups[key]

    def canonical_group(self, group: str) -> Optional[str]:
        return self._aliases.get((group or "").strip().lower())

    def find(self, group: str, variant_id: Optional[str] = None) -> Optional[RecipeVariant]:
        """Variant by group and id; without an id, the group's first variant."""
        variants = self.get(group)
        if not variants:
            return None
        if variant_id is None:
            return variants[0]
        for v in variants:
            if v.id == variant_id:
                return v
        return None

    def materials(self) -> List[str]:
        out: List[str] = []
        for _, variant in self:
            out.extend(variant.materials())
        return sorted(set(out))

    def list_by_ingredient(self, material: str) -> List[Tuple[str, str]]:
        key = (material or "").strip().lower()
        return list(self._by_ingredient.get(key, []))

    def search(self, query: str) -> List[str]:
        """Group names whose variant names or materials contain `query`.

        Case-insensitive substring match, catalog order. Empty query -> all.
        """
        q = (query or "").strip().lower()
        if not q:
            return self.groups()

        out: List[str] = []
        for name, variants in self._groups.items():
            for v in variants:
                if q in v.name.lower() or any(q in m.lower() for m in v.materials()):
                    out.append(name)
                    break
        return out

    # -----------------
    # Serialization
    # -----------------

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, silent: bool = False) -> "RecipeCatalog":
        """Build from a RecipeCollection mapping.

        `{"schema": N, "recipes": {...}}` wrappers are accepted too; N must be
        the schema declared in conf/version.json.
        """
        if not isinstance(data, Mapping):
            raise CatalogError("Catalog root must be a JSON object")

        doc: Mapping[str, Any] = data
        if "recipes" in data and isinstance(data.get("recipes"), Mapping):
            expected = catalog_schema()
            schema = data.get("schema", expected)
            if schema != expected:
                raise CatalogError(f"Unsupported schema: {schema} (expected {expected})")
            doc = data["recipes"]

        groups: Dict[str, List[RecipeVariant]] = {}
        for name, raw_variants in doc.items():
            if not isinstance(raw_variants, (list, tuple)):
                raise CatalogError(f"Recipe group '{name}' must be a list")
            variants: List[RecipeVariant] = []
            for idx, raw in enumerate(raw_variants):
                try:
                    variants.append(parse_variant(raw))
                except ValueError as e:
                    raise CatalogError(f"Bad recipe {name}[{idx}]: {e}") from e
            dup = len(variants) - len(_dedup_preserve([v.id for v in variants]))
            if dup:
                logger.warning("Recipe group '%s' repeats variant ids (%d duplicates)", name, dup)
            groups[str(name)] = variants

        return cls(groups, silent=silent)

    def to_dict(self) -> Dict[str, Any]:
        """RecipeCollection JSON shape (round-trips through from_dict)."""
        return {name: [v.to_dict() for v in variants] for name, variants in self._groups.items()}

    def dumps(self, *, indent: int = 2, ensure_ascii: bool = False) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=ensure_ascii, indent=indent)


def load_catalog(path: Union[str, Path], *, silent: bool = False) -> RecipeCatalog:
    p = Path(path).expanduser()
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {p}") from e
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Catalog is not valid JSON: {p} ({e})") from e

    catalog = RecipeCatalog.from_dict(doc, silent=silent)
    if not silent:
        logger.info("Loaded recipe catalog: %s", p)
    return catalog
