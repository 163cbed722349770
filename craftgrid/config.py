# -*- coding: utf-8 -*-
"""Settings loader (conf/settings.ini + environment overrides).

Resolution order for every value
- explicit argument (CLI flag)
- environment: CRAFTGRID_CATALOG / CRAFTGRID_TABLE_SIZE / CRAFTGRID_LOG_LEVEL
- conf/settings.ini ([CATALOG] PATH, [TABLE] SIZE, [LOG] LEVEL)
- built-in default
"""

from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "conf" / "settings.ini"
DEFAULT_CATALOG_PATH = PROJECT_ROOT / "data" / "catalog" / "sample_recipes.json"

DEFAULT_TABLE_SIZE = 3
MAX_TABLE_SIZE = 3
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class CraftSettings:
    catalog_path: Path
    table_size: int = DEFAULT_TABLE_SIZE
    log_level: str = DEFAULT_LOG_LEVEL
    config_path: Optional[Path] = None

    @property
    def log_level_num(self) -> int:
        return getattr(logging, self.log_level, logging.WARNING)


_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _expand(val: Optional[str]) -> Optional[str]:
    if not val:
        return None
    return os.path.expanduser(val.strip())


def _cfg_get(cfg: configparser.ConfigParser, section: str, key: str) -> Optional[str]:
    try:
        val = cfg.get(section, key, fallback="").strip()
    except configparser.Error:
        val = ""
    return val or None


def load_ini(path: Path, *, required: bool = False) -> configparser.ConfigParser:
    cfg = configparser.ConfigParser()
    if not path.exists():
        if required:
            raise SystemExit(f"Missing config: {path}")
        return cfg
    cfg.read(path, encoding="utf-8")
    return cfg


def _resolve_path(raw: str) -> Path:
    p = Path(_expand(raw) or raw)
    if not p.is_absolute():
        p = PROJECT_ROOT / p
    return p


def resolve_settings(
    *,
    config_path: Optional[Union[str, Path]] = None,
    catalog_path: Optional[str] = None,
    table_size: Optional[Union[int, str]] = None,
    log_level: Optional[str] = None,
) -> CraftSettings:
    explicit = config_path is not None
    ini_path = Path(_expand(str(config_path)) or "") if explicit else DEFAULT_CONFIG_PATH
    cfg = load_ini(ini_path, required=explicit)

    catalog = catalog_path or os.environ.get("CRAFTGRID_CATALOG") or _cfg_get(cfg, "CATALOG", "PATH")
    size = table_size
    if size is None:
        size = os.environ.get("CRAFTGRID_TABLE_SIZE") or _cfg_get(cfg, "TABLE", "SIZE")
    level = log_level or os.environ.get("CRAFTGRID_LOG_LEVEL") or _cfg_get(cfg, "LOG", "LEVEL")

    try:
        size_num = int(size) if size is not None else DEFAULT_TABLE_SIZE
    except (TypeError, ValueError):
        raise SystemExit(f"TABLE SIZE must be an integer, got {size!r}")
    if not 1 <= size_num <= MAX_TABLE_SIZE:
        raise SystemExit(f"TABLE SIZE must be between 1 and {MAX_TABLE_SIZE}, got {size_num}")

    level_name = str(level or DEFAULT_LOG_LEVEL).strip().upper()
    if level_name not in _LEVELS:
        raise SystemExit(f"Unknown log level: {level!r}")

    return CraftSettings(
        catalog_path=_resolve_path(catalog) if catalog else DEFAULT_CATALOG_PATH,
        table_size=size_num,
        log_level=level_name,
        config_path=ini_path if ini_path.exists() else None,
    )
