"""
Per-vessel liquid contents.

A ``ContainerContent`` holds one coalesced ``IngredientQuantity`` per
ingredient. Volume and blended color are derived from the ingredient list on
every read, so they can never drift from it.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Iterable, Protocol

from barkeep.core.color import NEUTRAL_COLOR, Color, blend_colors
from barkeep.domain.ingredients import DEFAULT_CATALOG, IngredientCatalog
from barkeep.errors import InvalidAmountError

# Below this much free space a vessel counts as full.
FULL_TOLERANCE = 1e-9


@dataclass(frozen=True)
class IngredientQuantity:
    """
    An amount of one ingredient inside a vessel.

    Attributes:
        ingredient_id: Catalog id of the ingredient.
        amount: Volume units, always positive.
        color: Base color of the ingredient, carried so blends need no lookup.
    """
    ingredient_id: str
    amount: float
    color: Color = NEUTRAL_COLOR


class HasIngredients(Protocol):
    @property
    def ingredients(self) -> tuple[IngredientQuantity, ...]: ...


@dataclass(frozen=True)
class ContentSnapshot:
    """Read-only copy of a vessel's contents for presentation."""
    ingredients: tuple[IngredientQuantity, ...]
    volume: float
    capacity: float
    color: Color
    is_mixed: bool = False

    @property
    def ingredient_ids(self) -> list[str]:
        return [q.ingredient_id for q in self.ingredients]

    @property
    def fill_fraction(self) -> float:
        return self.volume / self.capacity if self.capacity else 0.0

    def amount_of(self, ingredient_id: str) -> float:
        return _amount_of(self.ingredients, ingredient_id)

    def is_empty(self) -> bool:
        return not self.ingredients


def _amount_of(ingredients: Iterable[IngredientQuantity], ingredient_id: str) -> float:
    for q in ingredients:
        if q.ingredient_id == ingredient_id:
            return q.amount
    return 0.0


@dataclass
class ContainerContent:
    """
    Mutable contents of one registered vessel.

    Attributes:
        capacity: Fixed maximum volume, set at registration.
        prune_epsilon: Entries smaller than this are dropped after a draw.
        is_mixed: Set once the vessel has been shaken long enough; reset by
            any later addition.
    """
    capacity: float
    prune_epsilon: float = 0.01
    is_mixed: bool = False
    _ingredients: list[IngredientQuantity] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if not math.isfinite(self.capacity) or self.capacity <= 0:
            raise InvalidAmountError(f"capacity must be positive, got {self.capacity}")

    # --- derived views ---
    @property
    def ingredients(self) -> tuple[IngredientQuantity, ...]:
        return tuple(self._ingredients)

    @property
    def volume(self) -> float:
        return sum(q.amount for q in self._ingredients)

    @property
    def remaining(self) -> float:
        return max(0.0, self.capacity - self.volume)

    @property
    def fill_fraction(self) -> float:
        return min(1.0, self.volume / self.capacity)

    @property
    def blended_color(self) -> Color:
        return blend_colors((q.color, q.amount) for q in self._ingredients)

    @property
    def ingredient_ids(self) -> list[str]:
        return [q.ingredient_id for q in self._ingredients]

    def amount_of(self, ingredient_id: str) -> float:
        return _amount_of(self._ingredients, ingredient_id)

    def is_full(self) -> bool:
        return self.volume >= self.capacity - FULL_TOLERANCE

    def is_empty(self) -> bool:
        return not self._ingredients

    # --- mutation ---
    def add_ingredient(self, ingredient_id: str, amount: float, color: Color = NEUTRAL_COLOR) -> float:
        """
        Add an ingredient, coalescing with an existing entry of the same id.

        The amount is clamped to the remaining capacity; the excess is dropped.

        Args:
            ingredient_id: Catalog id of the ingredient.
            amount: Requested amount, must be positive.
            color: Base color of the ingredient.

        Returns:
            The amount actually added (``0.0`` when the vessel is full).

        Raises:
            InvalidAmountError: If ``amount`` is not a positive finite number.
        """
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidAmountError(f"amount must be positive and finite, got {amount}")
        added = min(amount, self.remaining)
        if added <= 0:
            return 0.0
        for index, q in enumerate(self._ingredients):
            if q.ingredient_id == ingredient_id:
                self._ingredients[index] = replace(q, amount=q.amount + added)
                break
        else:
            self._ingredients.append(IngredientQuantity(ingredient_id, added, color))
        self.is_mixed = False
        return added

    def remove_fraction(self, fraction: float) -> list[IngredientQuantity]:
        """
        Draw the same fraction of every ingredient.

        Entries left below ``prune_epsilon`` are pruned afterwards.

        Args:
            fraction: Share of the contents to remove, between 0 and 1.

        Returns:
            The removed quantities, in ingredient order, for a destination to
            receive. Zero-sized draws are omitted.

        Raises:
            InvalidAmountError: If ``fraction`` is outside ``[0, 1]``.
        """
        if not 0 <= fraction <= 1:
            raise InvalidAmountError(f"fraction must be within [0, 1], got {fraction}")
        removed: list[IngredientQuantity] = []
        kept: list[IngredientQuantity] = []
        for q in self._ingredients:
            taken = q.amount if fraction == 1 else q.amount * fraction
            if taken > 0:
                removed.append(replace(q, amount=taken))
            left = q.amount - taken
            if left > self.prune_epsilon:
                kept.append(replace(q, amount=left))
        self._ingredients = kept
        return removed

    def clear(self) -> None:
        self._ingredients = []
        self.is_mixed = False

    def snapshot(self) -> ContentSnapshot:
        return ContentSnapshot(
            ingredients=self.ingredients,
            volume=self.volume,
            capacity=self.capacity,
            color=self.blended_color,
            is_mixed=self.is_mixed,
        )


def calculate_alcohol_content(
    content: HasIngredients,
    catalog: IngredientCatalog = DEFAULT_CATALOG,
) -> float:
    """
    Volume-weighted average ABV of the contents, as a percentage.

    Ingredients missing from the catalog count as non-alcoholic.

    Returns:
        The ABV percentage, ``0.0`` for an empty vessel.
    """
    volume = 0.0
    alcohol = 0.0
    for q in content.ingredients:
        volume += q.amount
        info = catalog.get(q.ingredient_id)
        if info is not None:
            alcohol += q.amount * info.abv / 100.0
    if volume <= 0:
        return 0.0
    return alcohol / volume * 100.0


def describe_ingredients(
    content: HasIngredients,
    catalog: IngredientCatalog = DEFAULT_CATALOG,
) -> list[tuple[str, float]]:
    """Return ``(display name, amount)`` pairs, falling back to the raw id."""
    rows = []
    for q in content.ingredients:
        info = catalog.get(q.ingredient_id)
        name = info.display_name if info is not None else q.ingredient_id
        rows.append((name, q.amount))
    return rows
