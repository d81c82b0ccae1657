"""
Recipe recognition for mixed drinks.

Rules are declarative (required, excluded and allowed ingredients, ratio and
balance constraints) and evaluated in a fixed priority order.
"""
from barkeep.recognition.identify import Classification, classify, identify
from barkeep.recognition.rules import (
    BalanceConstraint,
    CUSTOM_MIX,
    RULES,
    RatioConstraint,
    RecipeRule,
    TWO_INGREDIENT_MIX,
)

__all__ = [
    "BalanceConstraint",
    "CUSTOM_MIX",
    "Classification",
    "RULES",
    "RatioConstraint",
    "RecipeRule",
    "TWO_INGREDIENT_MIX",
    "classify",
    "identify",
]
