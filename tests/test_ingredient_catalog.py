"""Tests for the IngredientCatalog and IngredientInfo."""
import pytest

from barkeep.core.color import Color
from barkeep.domain.ingredients import (
    INGREDIENTS,
    IngredientCatalog,
    IngredientCategory,
    IngredientInfo,
)
from barkeep.errors import UnknownIngredientError


def test_catalog_has_30_ingredients():
    catalog = IngredientCatalog()
    assert len(catalog) == 30


def test_get_gin():
    catalog = IngredientCatalog()
    info = catalog.get("gin")
    assert info is not None
    assert info.display_name == "Gin"
    assert info.local_name == "琴酒"
    assert info.color == Color.from_hex(0xE8F4F8)
    assert info.abv == 40.0
    assert info.category == IngredientCategory.BASE_SPIRIT


def test_get_bitters_is_alcoholic():
    info = IngredientCatalog().get("angostura_bitters")
    assert info.abv == pytest.approx(44.7)
    assert info.is_alcoholic is True
    assert info.category == IngredientCategory.BITTERS


def test_get_juice_is_not_alcoholic():
    info = IngredientCatalog().get("orange_juice")
    assert info.is_alcoholic is False
    assert info.category == IngredientCategory.JUICE


def test_get_normalizes_case_and_whitespace():
    info = IngredientCatalog().get("  Vermouth_Dry ")
    assert info is not None
    assert info.id == "vermouth_dry"


def test_get_unknown_returns_none():
    assert IngredientCatalog().get("unicorn_tears") is None


def test_require_unknown_fails_loudly():
    with pytest.raises(UnknownIngredientError) as exc_info:
        IngredientCatalog().require("unicorn_tears")
    assert exc_info.value.ingredient_id == "unicorn_tears"
    assert isinstance(exc_info.value, KeyError)


def test_list_category_base_spirits():
    spirits = IngredientCatalog().list_category(IngredientCategory.BASE_SPIRIT)
    names = [i.id for i in spirits]
    assert names == sorted(["vodka", "gin", "rum", "whiskey", "tequila", "brandy"])


def test_list_category_liqueurs():
    liqueurs = IngredientCatalog().list_category(IngredientCategory.LIQUEUR)
    ids = {i.id for i in liqueurs}
    assert {"vermouth_dry", "vermouth_sweet", "campari", "triple_sec"} <= ids
    assert "gin" not in ids


def test_contains():
    catalog = IngredientCatalog()
    assert "campari" in catalog
    assert "unicorn" not in catalog


def test_all_keeps_catalog_order():
    all_items = IngredientCatalog().all()
    assert all_items[0].id == "vodka"
    assert len(all_items) == 30


def test_every_abv_in_range():
    for info in INGREDIENTS.values():
        assert 0 <= info.abv <= 100, info.id


def test_table_is_read_only():
    with pytest.raises(TypeError):
        INGREDIENTS["gin"] = None  # type: ignore[index]


def test_ingredient_info_is_frozen():
    info = IngredientCatalog().get("gin")
    try:
        info.abv = 0
        assert False, "Should not allow mutation"
    except AttributeError:
        pass


def test_custom_catalog_entries():
    extra = IngredientInfo(
        id="mezcal",
        display_name="Mezcal",
        local_name="梅斯卡爾",
        color=Color(240.0, 230.0, 200.0),
        abv=45.0,
        category=IngredientCategory.BASE_SPIRIT,
    )
    catalog = IngredientCatalog({"mezcal": extra})
    assert len(catalog) == 1
    assert catalog.require("mezcal") is extra


def test_contains_normalizes_like_get():
    catalog = IngredientCatalog()
    assert "Gin" in catalog
    assert " campari " in catalog
    assert 42 not in catalog
