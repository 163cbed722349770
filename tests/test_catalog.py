import json
import logging

import pytest

from conftest import SAMPLE_CATALOG, make_catalog, shaped, shapeless
from craftgrid import version
from craftgrid.catalog import CatalogError, RecipeCatalog, load_catalog
from craftgrid.models import AnyOf, Material, ShapelessRecipe


def test_sample_catalog_order_and_size(sample_catalog):
    assert sample_catalog.groups()[:4] == ["planks", "stick", "crafting_table", "furnace"]
    assert sample_catalog.groups()[-1] == "dye"
    assert len(sample_catalog) == 13
    assert [g for g, _ in sample_catalog][:3] == ["planks", "planks", "stick"]


def test_json_decodes_into_tagged_ingredients(sample_catalog):
    fletching = sample_catalog.find("fletching")
    assert fletching.shapeless
    assert fletching.recipe == ShapelessRecipe(
        required=(AnyOf(("stick",)), AnyOf(("stick",))),
        optional=(Material("feather"),),
    )
    torch = sample_catalog.find("torch", "torch")
    assert torch.recipe[0][0] == AnyOf(("coal", "charcoal"))
    assert torch.recipe[1][0] == Material("stick")


def test_to_dict_reproduces_the_source_document(sample_catalog):
    doc = json.loads(SAMPLE_CATALOG.read_text(encoding="utf-8"))
    assert sample_catalog.to_dict() == doc
    again = RecipeCatalog.from_dict(json.loads(sample_catalog.dumps()), silent=True)
    assert again.to_dict() == doc


def test_schema_wrapper():
    inner = {"g": [shapeless("x", ["a"])]}
    assert make_catalog({"schema": 1, "recipes": inner}).groups() == ["g"]
    with pytest.raises(CatalogError):
        make_catalog({"schema": 2, "recipes": inner})


def test_schema_follows_version_file(tmp_path, monkeypatch):
    conf = tmp_path / "conf"
    conf.mkdir()
    (conf / "version.json").write_text(json.dumps({"project_version": "9.9", "catalog_schema": 2}), encoding="utf-8")
    monkeypatch.setattr(version, "_project_root", lambda: tmp_path)
    version._load_version_file.cache_clear()
    try:
        inner = {"g": [shapeless("x", ["a"])]}
        assert version.versions()["catalog_schema"] == "2"
        assert make_catalog({"schema": 2, "recipes": inner}).groups() == ["g"]
        assert make_catalog({"recipes": inner}).groups() == ["g"]
        with pytest.raises(CatalogError):
            make_catalog({"schema": 1, "recipes": inner})
    finally:
        version._load_version_file.cache_clear()


def test_missing_required_never_loads_as_empty_recipe():
    doc = {"g": [{"id": "typo", "shapeless": True, "recipe": {"optional": ["feather"]}}]}
    with pytest.raises(CatalogError, match="required"):
        make_catalog(doc)
    # an explicit empty list is still a valid (empty-grid) recipe
    assert make_catalog({"g": [shapeless("nothing", [])]}).find("g").recipe.required == ()


@pytest.mark.parametrize(
    "doc",
    [
        [],
        {"g": {"id": "x"}},
        {"g": [{"name": "no id", "shapeless": True, "recipe": {"required": ["a"]}}]},
        {"g": [shaped("ragged", [["a", "b"], ["c"]])]},
        {"g": [shaped("no_rows", [])]},
        {"g": [shapeless("bad_item", [3])]},
        {"g": [shapeless("empty_group", [[]])]},
        {"g": [shapeless("bad_optional", ["a"], optional="b")]},
        {"g": [{"id": "typo", "shapeless": True, "recipe": {"requierd": ["stick"], "optional": ["feather"]}}]},
        {"g": [{"id": "null_required", "shapeless": True, "recipe": {"required": None}}]},
        {"g": [dict(shapeless("string_flag", ["a"]), shapeless="false")]},
        {"g": [dict(shaped("int_flag", [["a"]]), shapeless=0)]},
    ],
)
def test_malformed_documents_raise(doc):
    with pytest.raises(CatalogError):
        make_catalog(doc)


def test_load_catalog_errors(tmp_path):
    with pytest.raises(CatalogError):
        load_catalog(tmp_path / "missing.json")
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        load_catalog(bad)


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps({"g": [shapeless("x", ["a"])]}), encoding="utf-8")
    catalog = load_catalog(path, silent=True)
    assert catalog.find("g", "x").name == "X"


def test_lookup(sample_catalog):
    assert [v.id for v in sample_catalog.get("PLANKS")] == ["oak_planks", "birch_planks"]
    assert sample_catalog.find("planks").id == "oak_planks"
    assert sample_catalog.find("planks", "birch_planks").name == "Birch Planks"
    assert sample_catalog.find("planks", "spruce_planks") is None
    assert sample_catalog.find("nope") is None
    assert sample_catalog.get("") == ()
    assert "torch" in sample_catalog
    assert sample_catalog.canonical_group("Torch") == "torch"


def test_search(sample_catalog):
    assert sample_catalog.search("dye") == ["dye"]
    assert sample_catalog.search("STICK") == ["stick", "ladder", "torch", "arrow", "fletching"]
    assert sample_catalog.search("  ") == sample_catalog.groups()
    assert sample_catalog.search("diamond") == []


def test_list_by_ingredient(sample_catalog):
    expected = [("ladder", "ladder"), ("torch", "torch"), ("arrow", "arrow"), ("fletching", "fletching")]
    assert sample_catalog.list_by_ingredient("stick") == expected
    assert sample_catalog.list_by_ingredient("Stick") == expected
    assert sample_catalog.list_by_ingredient("charcoal") == [("torch", "torch"), ("fire_charge", "fire_charge")]
    assert sample_catalog.list_by_ingredient("") == []


def test_materials(sample_catalog):
    mats = sample_catalog.materials()
    assert mats == sorted(mats)
    assert {"cobblestone", "bone_meal", "feather", "oak_log"} <= set(mats)


def test_empty_catalog():
    catalog = RecipeCatalog()
    assert len(catalog) == 0
    assert not catalog
    assert catalog.groups() == []
    assert catalog.to_dict() == {}


def test_duplicate_ids_are_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="craftgrid.catalog"):
        make_catalog({"g": [shapeless("x", ["a"]), shapeless("x", ["b"])]})
    assert "repeats variant ids" in caplog.text
