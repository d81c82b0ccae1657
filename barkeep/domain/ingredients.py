"""
Ingredient catalog for the bar.

Provides the fixed set of 30 pourable ingredients with display names, local
(Traditional Chinese) labels, base colors, alcohol-by-volume and category.
The catalog is built once and never mutated.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from barkeep.core.color import Color
from barkeep.errors import UnknownIngredientError


class IngredientCategory(str, Enum):
    """Categories for grouping ingredients."""
    BASE_SPIRIT = "base_spirit"
    LIQUEUR = "liqueur"
    JUICE = "juice"
    MIXER = "mixer"
    SYRUP = "syrup"
    BITTERS = "bitters"


@dataclass(frozen=True)
class IngredientInfo:
    """
    Metadata for a single ingredient.

    Attributes:
        id: Machine-readable snake_case identifier.
        display_name: Human-readable English name.
        local_name: Label shown on the bottle in the bar.
        color: Base color of the liquid.
        abv: Alcohol by volume, 0-100.
        category: The ingredient category.
    """
    id: str
    display_name: str
    local_name: str
    color: Color
    abv: float
    category: IngredientCategory

    @property
    def is_alcoholic(self) -> bool:
        return self.abv > 0


_S = IngredientCategory.BASE_SPIRIT
_L = IngredientCategory.LIQUEUR
_J = IngredientCategory.JUICE
_M = IngredientCategory.MIXER
_Y = IngredientCategory.SYRUP
_B = IngredientCategory.BITTERS

# id -> (display name, local name, hex color, abv, category)
_INGREDIENT_TABLE: dict[str, tuple[str, str, int, float, IngredientCategory]] = {
    # Base spirits
    "vodka": ("Vodka", "伏特加", 0xF0F0F0, 40.0, _S),
    "gin": ("Gin", "琴酒", 0xE8F4F8, 40.0, _S),
    "rum": ("Rum", "蘭姆酒", 0xD4A574, 40.0, _S),
    "whiskey": ("Whiskey", "威士忌", 0xB87333, 40.0, _S),
    "tequila": ("Tequila", "龍舌蘭", 0xF5DEB3, 40.0, _S),
    "brandy": ("Brandy", "白蘭地", 0x8B4513, 40.0, _S),
    # Souring agents and syrups
    "lemon_juice": ("Lemon Juice", "檸檬汁", 0xFFF44F, 0.0, _M),
    "lime_juice": ("Lime Juice", "萊姆汁", 0x32CD32, 0.0, _M),
    "simple_syrup": ("Simple Syrup", "糖漿", 0xFFE4B5, 0.0, _Y),
    "grenadine": ("Grenadine", "紅石榴糖漿", 0xFF0000, 0.0, _Y),
    "angostura_bitters": ("Angostura Bitters", "安格仕苦精", 0x8B0000, 44.7, _B),
    # Juices
    "orange_juice": ("Orange Juice", "柳橙汁", 0xFFA500, 0.0, _J),
    "pineapple_juice": ("Pineapple Juice", "鳳梨汁", 0xFFEB3B, 0.0, _J),
    "cranberry_juice": ("Cranberry Juice", "蔓越莓汁", 0xDC143C, 0.0, _J),
    "tomato_juice": ("Tomato Juice", "番茄汁", 0xFF6347, 0.0, _J),
    "grapefruit_juice": ("Grapefruit Juice", "葡萄柚汁", 0xFF69B4, 0.0, _J),
    # Mixers
    "soda_water": ("Soda Water", "蘇打水", 0xE0FFFF, 0.0, _M),
    "tonic_water": ("Tonic Water", "通寧水", 0xF0FFFF, 0.0, _M),
    "cola": ("Cola", "可樂", 0x3E2723, 0.0, _M),
    "coconut_cream": ("Coconut Cream", "椰漿", 0xFFFAF0, 0.0, _M),
    # Liqueurs and vermouths
    "liqueur": ("Liqueur", "利口酒", 0xFF6B9D, 20.0, _L),
    "vermouth_dry": ("Dry Vermouth", "不甜香艾酒", 0xE8E8D0, 18.0, _L),
    "vermouth_sweet": ("Sweet Vermouth", "甜香艾酒", 0x8B4513, 18.0, _L),
    "campari": ("Campari", "金巴利", 0xDC143C, 25.0, _L),
    "triple_sec": ("Triple Sec", "橙皮酒", 0xFFA500, 40.0, _L),
    "coffee_liqueur": ("Coffee Liqueur", "咖啡利口酒", 0x3E2723, 20.0, _L),
    "amaretto": ("Amaretto", "杏仁利口酒", 0xD2691E, 28.0, _L),
    "baileys": ("Baileys", "貝禮詩奶酒", 0xD2B48C, 17.0, _L),
    "blue_curacao": ("Blue Curaçao", "藍柑橘酒", 0x0000FF, 21.0, _L),
    "peach_schnapps": ("Peach Schnapps", "水蜜桃酒", 0xFFDAB9, 20.0, _L),
}


def _build_catalog() -> Mapping[str, IngredientInfo]:
    """Build the read-only mapping of IngredientInfo objects."""
    catalog: dict[str, IngredientInfo] = {}
    for ingredient_id, (display, local, color, abv, category) in _INGREDIENT_TABLE.items():
        catalog[ingredient_id] = IngredientInfo(
            id=ingredient_id,
            display_name=display,
            local_name=local,
            color=Color.from_hex(color),
            abv=abv,
            category=category,
        )
    return MappingProxyType(catalog)


INGREDIENTS: Mapping[str, IngredientInfo] = _build_catalog()


class IngredientCatalog:
    """
    Read-only catalog of every ingredient the bar stocks.

    Provides lookup by id and category filtering. Instances share the
    module-level ``INGREDIENTS`` table.
    """

    def __init__(self, entries: Mapping[str, IngredientInfo] = INGREDIENTS) -> None:
        self._by_id = entries

    def get(self, ingredient_id: str) -> Optional[IngredientInfo]:
        """
        Look up an ingredient by id.

        Args:
            ingredient_id: The snake_case id (e.g. ``"gin"``).

        Returns:
            The ``IngredientInfo`` if found, otherwise ``None``.
        """
        return self._by_id.get(ingredient_id.lower().strip())

    def require(self, ingredient_id: str) -> IngredientInfo:
        """
        Look up an ingredient by id, failing loudly when it is unknown.

        Raises:
            UnknownIngredientError: If the id is not in the catalog.
        """
        info = self.get(ingredient_id)
        if info is None:
            raise UnknownIngredientError(ingredient_id, sorted(self._by_id))
        return info

    def list_category(self, category: IngredientCategory) -> list[IngredientInfo]:
        """Return all ingredients of a category, sorted by id."""
        return sorted(
            (i for i in self._by_id.values() if i.category == category),
            key=lambda i: i.id,
        )

    def all(self) -> list[IngredientInfo]:
        """Return all ingredients in catalog order."""
        return list(self._by_id.values())

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, item: object) -> bool:
        return isinstance(item, str) and self.get(item) is not None


DEFAULT_CATALOG = IngredientCatalog()
