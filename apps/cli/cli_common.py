# -*- coding: utf-8 -*-
"""Shared helpers for CLI tools."""

from __future__ import annotations

import logging
import re
from typing import Any, List, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from craftgrid.grid import ensure_rectangular
from craftgrid.models import Cell

console = Console()

EMPTY_TOKENS = {"_", "-", ".", "none", "null"}

_ROW_SPLIT_RE = re.compile(r"[/;\n]+")
_CELL_SPLIT_RE = re.compile(r"[,\s]+")


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def parse_grid_spec(spec: str) -> List[List[Cell]]:
    """Parse a grid spec into rows of cells.

    Accepted examples
    - "coal/stick"                  (one column, two rows)
    - "stick,_,stick;stick,stick,stick"
    - "_ oak_planks _ / _ oak_planks _"

    `_`, `-`, `.` (and "none"/"null") are empty cells. The result must be
    rectangular.
    """
    rows: List[List[Cell]] = []
    for raw_row in _ROW_SPLIT_RE.split(spec or ""):
        tokens = [t for t in _CELL_SPLIT_RE.split(raw_row.strip()) if t]
        if not tokens:
            continue
        rows.append([None if t.lower() in EMPTY_TOKENS else t for t in tokens])
    ensure_rectangular(rows)
    return rows


def _cell_text(cell: object) -> str:
    if cell is None:
        return "[dim]·[/dim]"
    options = getattr(cell, "options", None)
    if options is not None:
        return " | ".join(f"[cyan]{o}[/cyan]" for o in options)
    return f"[cyan]{cell}[/cyan]"


def grid_table(grid: Sequence[Sequence[Any]], title: Optional[str] = None) -> Table:
    width = len(grid[0]) if grid else 0
    table = Table(title=title, show_header=False, show_lines=True, border_style="blue")
    for _ in range(max(width, 1)):
        table.add_column(justify="center", min_width=6)
    for row in grid:
        table.add_row(*[_cell_text(c) for c in row])
    return table
