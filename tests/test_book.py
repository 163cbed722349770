import pytest

from craftgrid.book import (
    cycle_length,
    fits,
    layout_shapeless,
    pad_template,
    preview_frames,
    preview_grid,
    recipe_layout,
)
from craftgrid.grid import trim_grid
from craftgrid.models import AnyOf
from craftgrid.resolver import RecipeResolver

_ = None


def test_layout_shapeless_rows(sample_catalog):
    book = sample_catalog.find("book").recipe
    paper, leather = AnyOf(("paper",)), AnyOf(("leather",))
    assert layout_shapeless(book, 3) == [[paper, paper, paper], [leather]]
    assert layout_shapeless(book, 2) == [[paper, paper], [paper, leather]]
    with pytest.raises(ValueError):
        layout_shapeless(book, 0)


def test_layout_ignores_optional(sample_catalog):
    fletching = sample_catalog.find("fletching").recipe
    assert layout_shapeless(fletching, 3) == [[AnyOf(("stick",)), AnyOf(("stick",))]]


def test_pad_template():
    a = AnyOf(("a",))
    assert pad_template([[a, a, a], [a]]) == [[a, a, a], [a, _, _]]
    assert pad_template([]) == []


def test_recipe_layout_trims_shaped(sample_catalog):
    torch = sample_catalog.find("torch")
    assert len(recipe_layout(torch, 3)) == 2
    furnace = sample_catalog.find("furnace")
    assert recipe_layout(furnace, 3)[1][1] is None


def test_cycle_length(sample_catalog):
    assert cycle_length(sample_catalog.find("stick")) == 2
    assert cycle_length(sample_catalog.find("furnace")) == 1
    assert cycle_length(sample_catalog.find("fire_charge")) == 2
    # the optional alternative set is not part of the preview
    assert cycle_length(sample_catalog.find("dye")) == 1


def test_preview_cycles_alternatives(sample_catalog):
    stick = sample_catalog.find("stick")
    assert preview_grid(stick, 3, 0) == [["oak_planks", _, _], ["oak_planks", _, _], [_, _, _]]
    assert preview_grid(stick, 3, 1) == [["birch_planks", _, _], ["birch_planks", _, _], [_, _, _]]
    assert preview_grid(stick, 3, 2) == preview_grid(stick, 3, 0)


def test_preview_of_shapeless_recipe(sample_catalog):
    charge = sample_catalog.find("fire_charge")
    assert preview_grid(charge, 2, 1) == [["gunpowder", "blaze_powder"], ["charcoal", _]]


def test_fits(sample_catalog):
    assert fits(sample_catalog.find("torch"), 2)
    assert fits(sample_catalog.find("book"), 2)
    assert not fits(sample_catalog.find("furnace"), 2)
    assert not fits(sample_catalog.find("arrow"), 2)
    assert preview_grid(sample_catalog.find("furnace"), 2) is None
    assert preview_frames(sample_catalog.find("furnace"), 2) == []


def test_every_preview_crafts_its_own_recipe(sample_catalog):
    resolver = RecipeResolver(sample_catalog)
    for group, variant in sample_catalog:
        frames = preview_frames(variant, 3)
        assert len(frames) == cycle_length(variant)
        for grid in frames:
            hit = resolver.craft(grid)
            assert hit is not None, (group, variant.id)
            assert (hit.group, hit.id) == (group, variant.id)
            assert trim_grid(grid) == trim_grid(trim_grid(grid))
