#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""craftgrid CLI.

Thin front-end over the craftgrid engine; all matching lives in `craftgrid/`.

    craftgrid craft "coal/stick"
    craftgrid craft "stick _ stick" "stick stick stick" "stick _ stick" --all
    craftgrid book dye
    craftgrid uses stick
    craftgrid preview stick --frame 1
    craftgrid check
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Iterable, Optional

from rich.panel import Panel
from rich.table import Table

from apps.cli.cli_common import console, grid_table, parse_grid_spec, setup_logging
from craftgrid.book import cycle_length, fits, preview_grid, recipe_layout
from craftgrid.catalog import CatalogError, RecipeCatalog, load_catalog
from craftgrid.config import CraftSettings, resolve_settings
from craftgrid.grid import GridError, shape, trim_grid
from craftgrid.quality import build_report
from craftgrid.resolver import RecipeResolver
from craftgrid.version import versions

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_RESULT = 1
EXIT_BAD_INPUT = 2


def _add_common_flags(p: argparse.ArgumentParser) -> None:
    p.add_argument("--config", default=None, help="Path to conf/settings.ini")
    p.add_argument("--catalog", default=None, help="Recipe catalog JSON")
    p.add_argument("--table-size", type=int, default=None, help="Crafting table size (3, or 2 for pocket)")
    p.add_argument("--log-level", default=None, help="DEBUG / INFO / WARNING / ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="craftgrid", description="Crafting grid recipe matcher")
    sub = parser.add_subparsers(dest="action", required=True)

    p_craft = sub.add_parser("craft", help="Match a crafting grid against the catalog")
    _add_common_flags(p_craft)
    p_craft.add_argument("grid", nargs="+", help="Rows of the grid ('/' or ';' between rows, ',' or space between cells)")
    p_craft.add_argument("--all", action="store_true", help="List every matching recipe, not just the winner")

    p_book = sub.add_parser("book", help="List recipe groups (optionally filtered)")
    _add_common_flags(p_book)
    p_book.add_argument("query", nargs="?", default="")

    p_uses = sub.add_parser("uses", help="Recipes that use a material")
    _add_common_flags(p_uses)
    p_uses.add_argument("material")

    p_preview = sub.add_parser("preview", help="Show a recipe as it would be placed on the table")
    _add_common_flags(p_preview)
    p_preview.add_argument("group")
    p_preview.add_argument("id", nargs="?", default=None)
    p_preview.add_argument("--frame", type=int, default=0, help="Which alternative to show for each slot")

    p_check = sub.add_parser("check", help="Catalog quality report (shadowed / oversized recipes)")
    _add_common_flags(p_check)
    p_check.add_argument("--json", action="store_true", help="Print the report as JSON")

    sub.add_parser("version", help="Show project version")
    return parser


def _load(settings: CraftSettings) -> RecipeCatalog:
    return load_catalog(settings.catalog_path, silent=settings.log_level_num > logging.INFO)


# =========================================================
# Commands
# =========================================================


def cmd_craft(catalog: RecipeCatalog, settings: CraftSettings, rows: Iterable[str], show_all: bool) -> int:
    grid = parse_grid_spec("/".join(rows))
    n_rows, n_cols = shape(grid)
    if n_rows > settings.table_size or n_cols > settings.table_size:
        raise GridError(f"grid is {n_rows}x{n_cols}, table is {settings.table_size}x{settings.table_size}")

    resolver = RecipeResolver(catalog)
    normalized = trim_grid(grid)
    console.print(grid_table(normalized, title="Normalized grid"))

    if show_all:
        hits = resolver.resolve_all(normalized)
        if not hits:
            console.print("[yellow]No matching recipe[/yellow]")
            return EXIT_NO_RESULT
        table = Table(title=f"Matches ({len(hits)})", box=None, header_style="bold dim")
        table.add_column("No.", justify="right", style="dim", width=4)
        table.add_column("Group", style="cyan")
        table.add_column("Recipe", style="green")
        for i, hit in enumerate(hits, start=1):
            table.add_row(str(i), hit.group, hit.id + ("  [bold](winner)[/bold]" if i == 1 else ""))
        console.print(table)
        return EXIT_OK

    result = resolver.resolve(normalized)
    if result is None:
        console.print("[yellow]No matching recipe[/yellow]")
        return EXIT_NO_RESULT
    console.print(f"[bold green]Crafted:[/bold green] {result.id} [dim](group {result.group})[/dim]")
    return EXIT_OK


def cmd_book(catalog: RecipeCatalog, settings: CraftSettings, query: str) -> int:
    groups = catalog.search(query)
    if not groups:
        console.print(f"[yellow]No recipes for: {query}[/yellow]")
        return EXIT_NO_RESULT

    table = Table(title=f"Knowledge book ({len(groups)} groups)", box=None, header_style="bold dim")
    table.add_column("Group", style="cyan")
    table.add_column("Recipe", style="green")
    table.add_column("Kind", style="dim")
    table.add_column("Materials")
    table.add_column("Fits", justify="center")
    for name in groups:
        for v in catalog.get(name):
            kind = "shapeless" if v.shapeless else "shaped"
            ok = "[green]yes[/green]" if fits(v, settings.table_size) else "[red]no[/red]"
            table.add_row(name, v.id, kind, ", ".join(v.materials()), ok)
    console.print(Panel(table, border_style="blue"))
    return EXIT_OK


def cmd_uses(catalog: RecipeCatalog, material: str) -> int:
    refs = catalog.list_by_ingredient(material)
    if not refs:
        console.print(f"[yellow]No recipe uses: {material}[/yellow]")
        return EXIT_NO_RESULT
    table = Table(title=f"Uses {material} ({len(refs)})", box=None, header_style="bold dim")
    table.add_column("Group", style="cyan")
    table.add_column("Recipe", style="green")
    for group, vid in refs:
        table.add_row(group, vid)
    console.print(table)
    return EXIT_OK


def cmd_preview(catalog: RecipeCatalog, settings: CraftSettings, group: str, vid: Optional[str], frame: int) -> int:
    variant = catalog.find(group, vid)
    if variant is None:
        console.print(f"[red]Recipe not found: {group}{'/' + vid if vid else ''}[/red]")
        return EXIT_NO_RESULT

    console.print(grid_table(recipe_layout(variant, settings.table_size), title=f"{variant.name} (template)"))
    grid = preview_grid(variant, settings.table_size, frame)
    if grid is None:
        console.print(f"[red]{variant.id} does not fit a {settings.table_size}x{settings.table_size} table[/red]")
        return EXIT_NO_RESULT
    frames = cycle_length(variant)
    console.print(grid_table(grid, title=f"Frame {frame % frames + 1}/{frames}"))
    return EXIT_OK


def cmd_check(catalog: RecipeCatalog, settings: CraftSettings, as_json: bool) -> int:
    report = build_report(catalog, settings.table_size)
    if as_json:
        console.print_json(json.dumps(report))
        return EXIT_OK if report["ok"] else EXIT_NO_RESULT

    summary = Table.grid(padding=(0, 2))
    summary.add_column(style="bold")
    summary.add_column()
    summary.add_row("Groups", str(report["groups"]))
    summary.add_row("Variants", str(report["variants"]))
    summary.add_row("Materials", str(report["materials"]))
    summary.add_row("Table", f"{report['table_size']}x{report['table_size']}")
    console.print(Panel(summary, title="Catalog check", border_style="cyan"))

    for s in report["shadowed"]:
        w = s["winner"]
        console.print(f"[red]SHADOWED[/red] {s['group']}/{s['id']} (frame {s['frame']}) -> {w['group']}/{w['id']}")
    for o in report["oversized"]:
        console.print(f"[yellow]OVERSIZED[/yellow] {o['group']}/{o['id']}")
    if report["ok"]:
        console.print("[green]PASS[/green]")
        return EXIT_OK
    return EXIT_NO_RESULT


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.action == "version":
        for k, v in versions().items():
            console.print(f"{k}: {v}")
        return EXIT_OK

    settings = resolve_settings(
        config_path=args.config,
        catalog_path=args.catalog,
        table_size=args.table_size,
        log_level=args.log_level,
    )
    setup_logging(settings.log_level)
    logger.debug("Settings: %s", settings)

    try:
        catalog = _load(settings)
        if args.action == "craft":
            return cmd_craft(catalog, settings, args.grid, args.all)
        if args.action == "book":
            return cmd_book(catalog, settings, args.query)
        if args.action == "uses":
            return cmd_uses(catalog, args.material)
        if args.action == "preview":
            return cmd_preview(catalog, settings, args.group, args.id, args.frame)
        if args.action == "check":
            return cmd_check(catalog, settings, args.json)
    except (CatalogError, GridError) as e:
        console.print(f"[red]{e}[/red]")
        return EXIT_BAD_INPUT

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
