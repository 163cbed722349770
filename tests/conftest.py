import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from craftgrid.catalog import RecipeCatalog, load_catalog  # noqa: E402

SAMPLE_CATALOG = PROJECT_ROOT / "data" / "catalog" / "sample_recipes.json"

_ENV_KEYS = ("CRAFTGRID_CATALOG", "CRAFTGRID_TABLE_SIZE", "CRAFTGRID_LOG_LEVEL")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def sample_catalog() -> RecipeCatalog:
    return load_catalog(SAMPLE_CATALOG, silent=True)


def make_catalog(doc) -> RecipeCatalog:
    return RecipeCatalog.from_dict(doc, silent=True)


def shapeless(vid, required, optional=None):
    recipe = {"required": required}
    if optional is not None:
        recipe["optional"] = optional
    return {"id": vid, "name": vid.title(), "shapeless": True, "recipe": recipe}


def shaped(vid, rows):
    return {"id": vid, "name": vid.title(), "shapeless": False, "recipe": rows}
