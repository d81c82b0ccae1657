"""
Reference recipe book.

The classic recipes are shipped as ``barkeep/resources/recipes.json`` and
decoded once into frozen dataclasses. This catalog is for display only; the
recognition rules in ``barkeep.recognition`` do not read it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Optional

from barkeep.domain.ingredients import DEFAULT_CATALOG, IngredientCatalog
from barkeep.resources import load_recipe_book

_ML_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*ml\s*$", re.IGNORECASE)


class PreparationMethod(str, Enum):
    """How a recipe is put together."""
    STIR = "stir"
    SHAKE = "shake"
    BUILD = "build"
    BLEND = "blend"
    MUDDLE = "muddle"
    ROLL = "roll"


@dataclass(frozen=True)
class RecipeIngredient:
    """
    One line of a recipe.

    Attributes:
        ingredient_id: Catalog id of the ingredient.
        amount_ml: Measured amount, or ``None`` for dashes and top-ups.
        note: The amount as written on the card (e.g. ``"2 dashes"``).
    """
    ingredient_id: str
    amount_ml: Optional[float]
    note: str


@dataclass(frozen=True)
class RecipeDefinition:
    key: str
    name: str
    local_name: str
    ingredients: tuple[RecipeIngredient, ...]
    method: PreparationMethod
    instructions: str
    glass: str
    garnish: Optional[str] = None

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.local_name}".strip()

    @property
    def ingredient_ids(self) -> frozenset[str]:
        return frozenset(i.ingredient_id for i in self.ingredients)

    @property
    def measured_volume(self) -> float:
        return sum(i.amount_ml for i in self.ingredients if i.amount_ml is not None)


def parse_amount(text: str) -> Optional[float]:
    """
    Parse an amount note such as ``"60ml"``.

    Returns:
        The amount in millilitres, or ``None`` for unmeasured notes.
    """
    m = _ML_PATTERN.match(text)
    if not m:
        return None
    return float(m.group(1))


def decode_recipe(entry: dict[str, Any], catalog: IngredientCatalog = DEFAULT_CATALOG) -> RecipeDefinition:
    """
    Decode one recipe entry from the recipe book.

    Raises:
        UnknownIngredientError: If the entry names an ingredient missing from
            the catalog.
        ValueError: If the preparation method is not recognised.
    """
    lines = []
    for item in entry.get("ingredients", []):
        info = catalog.require(item["id"])
        note = str(item.get("amount", ""))
        lines.append(RecipeIngredient(ingredient_id=info.id, amount_ml=parse_amount(note), note=note))
    return RecipeDefinition(
        key=entry["key"],
        name=entry["name"],
        local_name=entry.get("local_name", ""),
        ingredients=tuple(lines),
        method=PreparationMethod(entry["method"]),
        instructions=entry.get("instructions", ""),
        glass=entry.get("glass", ""),
        garnish=entry.get("garnish"),
    )


@lru_cache
def list_known_recipes() -> tuple[RecipeDefinition, ...]:
    """Return the recipe book in card order."""
    book = load_recipe_book()
    return tuple(decode_recipe(entry) for entry in book.get("recipes", []))


def get_recipe(key: str) -> Optional[RecipeDefinition]:
    for recipe in list_known_recipes():
        if recipe.key == key:
            return recipe
    return None
