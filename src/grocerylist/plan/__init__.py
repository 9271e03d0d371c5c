"""Grocery list aggregation, reconciliation and ordering."""

from grocerylist.plan.aggregation import (
    UNIT_CONFLICT,
    AggregatedIngredient,
    aggregate_meal_plan,
)
from grocerylist.plan.categorize import (
    CATEGORY_KEYWORDS,
    auto_categorize,
    resolve_default_category_id,
    sort_items,
)
from grocerylist.plan.grocery_list import recompute
from grocerylist.plan.reconcile import ReconcileResult, reconcile

__all__ = [
    "CATEGORY_KEYWORDS",
    "UNIT_CONFLICT",
    "AggregatedIngredient",
    "ReconcileResult",
    "aggregate_meal_plan",
    "auto_categorize",
    "reconcile",
    "recompute",
    "resolve_default_category_id",
    "sort_items",
]
