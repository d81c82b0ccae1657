"""
Recipe recognition.

``identify`` walks the ordered rule cascade in ``rules.RULES`` against a
vessel's contents and returns the first matching drink name, falling back to
a generic label based on how many distinct ingredients are present.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from barkeep.domain.content import HasIngredients
from barkeep.domain.ingredients import DEFAULT_CATALOG, IngredientCatalog
from barkeep.recognition.rules import CUSTOM_MIX, RULES, TWO_INGREDIENT_MIX, RecipeRule


@dataclass(frozen=True)
class Classification:
    """
    Result of recognising a mixture.

    Attributes:
        name: The drink or generic classification name.
        rule: The matching rule, or ``None`` for a generic classification.
    """
    name: str
    rule: Optional[RecipeRule] = None

    @property
    def is_generic(self) -> bool:
        return self.rule is None


def _coalesce(content: HasIngredients, catalog: IngredientCatalog) -> dict[str, float]:
    """Sum amounts per ingredient, keyed by catalog id where the id is known."""
    amounts: dict[str, float] = {}
    for q in content.ingredients:
        if q.amount > 0:
            info = catalog.get(q.ingredient_id)
            key = info.id if info is not None else q.ingredient_id
            amounts[key] = amounts.get(key, 0.0) + q.amount
    return amounts


def classify(
    content: HasIngredients,
    rules: Sequence[RecipeRule] = RULES,
    catalog: IngredientCatalog = DEFAULT_CATALOG,
) -> Optional[Classification]:
    """
    Classify a mixture against the rule cascade.

    Ingredients missing from the catalog are invisible to the named rules and
    only count towards the generic fallback.

    Returns:
        A ``Classification``, or ``None`` for an empty vessel.
    """
    amounts = _coalesce(content, catalog)
    if not amounts:
        return None

    known = {k: v for k, v in amounts.items() if k in catalog}
    if known:
        for rule in rules:
            if rule.matches(known):
                return Classification(name=rule.name, rule=rule)

    if len(amounts) == 1:
        (ingredient_id,) = amounts
        info = catalog.get(ingredient_id)
        label = info.display_name if info is not None else ingredient_id
        return Classification(name=f"{label} neat")
    if len(amounts) == 2:
        return Classification(name=TWO_INGREDIENT_MIX)
    return Classification(name=CUSTOM_MIX)


def identify(
    content: HasIngredients,
    rules: Sequence[RecipeRule] = RULES,
    catalog: IngredientCatalog = DEFAULT_CATALOG,
) -> Optional[str]:
    """
    Return the recipe or classification name for a mixture.

    Pure and deterministic: the same contents always yield the same name.

    Returns:
        The name, or ``None`` when the vessel is empty.
    """
    result = classify(content, rules=rules, catalog=catalog)
    return result.name if result is not None else None
