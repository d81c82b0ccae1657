"""
Core domain models for barkeep: the ingredient catalog, the reference recipe
book and the per-vessel container content model.
"""
from barkeep.domain.content import (
    ContainerContent,
    ContentSnapshot,
    IngredientQuantity,
    calculate_alcohol_content,
)
from barkeep.domain.ingredients import (
    DEFAULT_CATALOG,
    INGREDIENTS,
    IngredientCatalog,
    IngredientCategory,
    IngredientInfo,
)
from barkeep.domain.recipes import (
    PreparationMethod,
    RecipeDefinition,
    RecipeIngredient,
    list_known_recipes,
)

__all__ = [
    "ContainerContent",
    "ContentSnapshot",
    "DEFAULT_CATALOG",
    "INGREDIENTS",
    "IngredientCatalog",
    "IngredientCategory",
    "IngredientInfo",
    "IngredientQuantity",
    "PreparationMethod",
    "RecipeDefinition",
    "RecipeIngredient",
    "calculate_alcohol_content",
    "list_known_recipes",
]
