from barkeep.resources.recipe_book import load_recipe_book

__all__ = ["load_recipe_book"]
