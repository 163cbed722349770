# -*- coding: utf-8 -*-
"""Project version helpers.

`conf/version.json` declares the project version and the catalog schema the
loader accepts (`RecipeCatalog.from_dict` checks `{"schema": N}` wrappers
against `catalog_schema()`).
"""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path
from typing import Dict

DEFAULT_CATALOG_SCHEMA = 1


def _project_root() -> Path:
    return Path(__file__).resolve().parents[1]


@lru_cache(maxsize=1)
def _load_version_file() -> Dict[str, str]:
    path = _project_root() / "conf" / "version.json"
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    if not isinstance(data, dict):
        return {}
    out: Dict[str, str] = {}
    for key in ("project_version", "catalog_schema"):
        val = data.get(key)
        if isinstance(val, (str, int)) and str(val).strip():
            out[key] = str(val).strip()
    return out


def project_version() -> str:
    return _load_version_file().get("project_version", "unknown")


def catalog_schema() -> int:
    """Catalog schema number the loader accepts (falls back to 1)."""
    raw = _load_version_file().get("catalog_schema")
    try:
        return int(raw) if raw is not None else DEFAULT_CATALOG_SCHEMA
    except ValueError:
        return DEFAULT_CATALOG_SCHEMA


def versions() -> Dict[str, str]:
    return {
        "project_version": project_version(),
        "catalog_schema": str(catalog_schema()),
    }
