"""Meal plan grocery list engine."""

from grocerylist.normalize.parser import parse_ingredient_line
from grocerylist.plan.grocery_list import recompute

__version__ = "0.1.0"

__all__ = ["__version__", "parse_ingredient_line", "recompute"]
