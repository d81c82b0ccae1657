from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

BASE_SPIRITS = frozenset({"vodka", "gin", "rum", "whiskey", "tequila", "brandy"})
FRUIT_JUICES = frozenset({
    "orange_juice",
    "cranberry_juice",
    "pineapple_juice",
    "tomato_juice",
    "grapefruit_juice",
})


@dataclass(frozen=True)
class RatioConstraint:
    """``amount(numerator) / amount(denominator)`` must fall within ``[minimum, maximum]``."""
    numerator: str
    denominator: str
    minimum: float
    maximum: float

    def validate(self) -> None:
        if self.numerator == self.denominator:
            raise ValueError("ratio needs two different ingredients")
        if self.minimum < 0 or self.maximum < self.minimum:
            raise ValueError(f"invalid ratio band [{self.minimum}, {self.maximum}]")

    def holds(self, amounts: Mapping[str, float]) -> bool:
        denominator = amounts.get(self.denominator, 0.0)
        if denominator <= 0:
            return False
        ratio = amounts.get(self.numerator, 0.0) / denominator
        return self.minimum <= ratio <= self.maximum


@dataclass(frozen=True)
class BalanceConstraint:
    """Every listed amount must deviate from their mean by less than ``tolerance`` (relative)."""
    ingredient_ids: tuple[str, ...]
    tolerance: float

    def validate(self) -> None:
        if len(self.ingredient_ids) < 2:
            raise ValueError("balance needs at least two ingredients")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be positive")

    def holds(self, amounts: Mapping[str, float]) -> bool:
        values = [amounts.get(i, 0.0) for i in self.ingredient_ids]
        mean = sum(values) / len(values)
        if mean <= 0:
            return False
        return all(abs(v - mean) / mean < self.tolerance for v in values)


@dataclass(frozen=True)
class RecipeRule:
    """
    Pattern that recognises one named drink.

    Attributes:
        name: Name returned when the rule matches.
        required: Ingredient ids that must all be present.
        excluded: Ingredient ids that must all be absent.
        allowed_extras: When set, every ingredient outside ``required`` must
            belong to this set.
        exact_count: When set, the number of distinct ingredients must equal it.
        ratios: Amount ratios that must hold.
        balance: Equal-parts constraint, if any.
        recipe_key: Key of the matching entry in the recipe book, if any.
    """
    name: str
    required: frozenset[str]
    excluded: frozenset[str] = frozenset()
    allowed_extras: Optional[frozenset[str]] = None
    exact_count: Optional[int] = None
    ratios: tuple[RatioConstraint, ...] = ()
    balance: Optional[BalanceConstraint] = None
    recipe_key: Optional[str] = None

    def validate(self) -> None:
        if not self.required:
            raise ValueError(f"rule '{self.name}' has no required ingredients")
        if self.required & self.excluded:
            raise ValueError(f"rule '{self.name}' both requires and excludes {sorted(self.required & self.excluded)}")
        if self.exact_count is not None and self.exact_count < len(self.required):
            raise ValueError(f"rule '{self.name}' exact_count below required size")
        for ratio in self.ratios:
            ratio.validate()
            if {ratio.numerator, ratio.denominator} - self.required:
                raise ValueError(f"rule '{self.name}' ratio references a non-required ingredient")
        if self.balance is not None:
            self.balance.validate()
            if set(self.balance.ingredient_ids) - self.required:
                raise ValueError(f"rule '{self.name}' balance references a non-required ingredient")

    @property
    def specificity(self) -> int:
        return len(self.required) + len(self.ratios) + (1 if self.balance else 0)

    def matches(self, amounts: Mapping[str, float]) -> bool:
        present = set(amounts)
        if not self.required <= present:
            return False
        if self.excluded & present:
            return False
        if self.allowed_extras is not None and not (present - self.required) <= self.allowed_extras:
            return False
        if self.exact_count is not None and len(present) != self.exact_count:
            return False
        if not all(ratio.holds(amounts) for ratio in self.ratios):
            return False
        if self.balance is not None and not self.balance.holds(amounts):
            return False
        return True


def _rule(name: str, *required: str, **kwargs) -> RecipeRule:
    rule = RecipeRule(name=name, required=frozenset(required), **kwargs)
    rule.validate()
    return rule


# Evaluated top to bottom, first match wins. A rule never appears after one
# whose required set is a strict subset of its own.
RULES: tuple[RecipeRule, ...] = (
    _rule(
        "Long Island Iced Tea", "vodka", "rum", "gin", "tequila", "triple_sec",
        recipe_key="long_island_iced_tea",
    ),
    _rule(
        "Cosmopolitan", "vodka", "triple_sec", "cranberry_juice", "lime_juice",
        recipe_key="cosmopolitan",
    ),
    _rule(
        "Mojito", "rum", "lime_juice", "simple_syrup", "soda_water",
        recipe_key="mojito",
    ),
    _rule(
        "Negroni", "gin", "campari", "vermouth_sweet",
        balance=BalanceConstraint(("gin", "campari", "vermouth_sweet"), tolerance=0.3),
        recipe_key="negroni",
    ),
    _rule(
        "Martini", "gin", "vermouth_dry",
        excluded=(BASE_SPIRITS - {"gin"}) | {"campari"} | FRUIT_JUICES,
        allowed_extras=frozenset({"lemon_juice", "lime_juice", "simple_syrup"}),
        ratios=(RatioConstraint("gin", "vermouth_dry", 2.0, 3.0),),
        recipe_key="martini",
    ),
    _rule(
        "Vodka Martini", "vodka", "vermouth_dry",
        excluded=(BASE_SPIRITS - {"vodka"}) | {"campari"},
        ratios=(RatioConstraint("vodka", "vermouth_dry", 2.0, 3.0),),
        recipe_key="vodka_martini",
    ),
    _rule("Margarita", "tequila", "triple_sec", "lime_juice", recipe_key="margarita"),
    _rule("Mai Tai", "rum", "triple_sec", "lime_juice", recipe_key="mai_tai"),
    _rule("Tequila Sunrise", "tequila", "orange_juice", "grenadine", recipe_key="tequila_sunrise"),
    _rule("Piña Colada", "rum", "pineapple_juice", "coconut_cream", recipe_key="pina_colada"),
    _rule("Whiskey Sour", "whiskey", "lemon_juice", "simple_syrup", recipe_key="whiskey_sour"),
    _rule("Daiquiri", "rum", "lime_juice", "simple_syrup", recipe_key="daiquiri"),
    _rule("Bloody Mary", "vodka", "tomato_juice", recipe_key="bloody_mary"),
    _rule("Manhattan", "whiskey", "vermouth_sweet", recipe_key="manhattan"),
    _rule("Screwdriver", "vodka", "orange_juice", exact_count=2, recipe_key="screwdriver"),
    _rule("Tropical Cocktail", "rum", "liqueur"),
    _rule("Sex on the Beach", "vodka", "liqueur"),
)

TWO_INGREDIENT_MIX = "Two-Ingredient Mix"
CUSTOM_MIX = "Custom Mix"
