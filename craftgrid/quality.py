# -*- coding: utf-8 -*-
"""Catalog quality report.

Checks
- shadowed variants: a variant's own preview grid resolves to an earlier
  variant, so players can never craft it with that arrangement
- oversized variants: the recipe does not fit the crafting table
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from .book import fits, preview_frames
from .catalog import RecipeCatalog
from .grid import trim_grid
from .resolver import RecipeResolver

__all__ = [
    "ShadowReport",
    "find_shadowed",
    "find_oversized",
    "build_report",
]


@dataclass(frozen=True)
class ShadowReport:
    group: str
    id: str
    frame: int
    winner_group: str
    winner_id: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "id": self.id,
            "frame": self.frame,
            "winner": {"group": self.winner_group, "id": self.winner_id},
        }


def find_shadowed(catalog: RecipeCatalog, table_size: int = 3) -> List[ShadowReport]:
    resolver = RecipeResolver(catalog)
    out: List[ShadowReport] = []
    for group, variant in catalog:
        for frame, grid in enumerate(preview_frames(variant, table_size)):
            hit = resolver.first_match(trim_grid(grid))
            # identity, not id: a repeated id in one group can shadow its twin
            if hit is None or hit[1] is variant:
                continue
            winner_group, winner = hit
            out.append(ShadowReport(group, variant.id, frame, winner_group, winner.id))
            break
    return out


def find_oversized(catalog: RecipeCatalog, table_size: int = 3) -> List[Dict[str, str]]:
    return [{"group": g, "id": v.id} for g, v in catalog if not fits(v, table_size)]


def build_report(catalog: RecipeCatalog, table_size: int = 3) -> Dict[str, Any]:
    shadowed = find_shadowed(catalog, table_size)
    oversized = find_oversized(catalog, table_size)
    return {
        "table_size": int(table_size),
        "groups": len(catalog.groups()),
        "variants": len(catalog),
        "materials": len(catalog.materials()),
        "shadowed": [s.to_dict() for s in shadowed],
        "oversized": oversized,
        "ok": not shadowed and not oversized,
    }
