"""Data schemas shared by the parser, the grocery list engine and the API.

Every model reads and writes camelCase JSON (``canonicalKey``, ``servingsDefault``)
while also accepting snake_case field names from Python callers.
"""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


class CamelModel(BaseModel):
    """Base model with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Recipes and Meal Plans
# =============================================================================


class ParsedIngredient(CamelModel):
    """Structured result of parsing one ingredient line."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    name: str
    quantity: float | None = None
    unit: str | None = None
    modifiers: tuple[str, ...] = ()
    optional: bool = False
    confidence: float = Field(default=0.8, ge=0.0, le=1.0)


class IngredientLine(CamelModel):
    """One raw ingredient line of a recipe, with its cached parse if any."""

    id: str
    raw_text: str
    parsed: ParsedIngredient | None = None


class Recipe(CamelModel):
    """Recipe as consumed by the grocery list engine."""

    id: str
    title: str | None = None
    servings_default: float
    ingredients: list[IngredientLine] = Field(default_factory=list)


class MealPlanEntry(CamelModel):
    """One scheduled use of a recipe."""

    id: str
    plan_id: str | None = None
    scheduled_date: date | None = Field(default=None, alias="date")
    meal_type: MealType | None = None
    recipe_id: str
    servings_override: float | None = None
    include_in_grocery: bool = True
    notes: str | None = None
    batch_cook: bool = False


class MealPlan(CamelModel):
    """A user's meal plan with its entries for the requested range."""

    id: str
    user_id: str
    start_date: date | None = None
    entries: list[MealPlanEntry] = Field(default_factory=list)


# =============================================================================
# Categories and Overrides
# =============================================================================


class Category(CamelModel):
    """Grocery aisle category."""

    id: str
    name: str
    sort_order: int
    user_custom: bool = False


DEFAULT_CATEGORIES: tuple[tuple[str, int], ...] = (
    ("Produce", 1),
    ("Dairy", 2),
    ("Meat", 3),
    ("Pantry", 4),
    ("Spices", 5),
    ("Frozen", 6),
    ("Bakery", 7),
    ("Beverages", 8),
    ("Other", 9),
)


def default_categories() -> list[Category]:
    """Build the stock category list, using lower-cased names as ids."""
    return [
        Category(id=name.lower(), name=name, sort_order=sort_order)
        for name, sort_order in DEFAULT_CATEGORIES
    ]


class UserOverrides(CamelModel):
    """Per-user corrections applied during recompute."""

    user_id: str | None = None
    ingredient_canonical_map: dict[str, str] = Field(
        default_factory=dict, description="Raw ingredient text -> canonical key"
    )
    category_map: dict[str, str] = Field(
        default_factory=dict, description="Canonical key -> category id"
    )


# =============================================================================
# Grocery Lists
# =============================================================================


class GroceryAmount(CamelModel):
    """Quantity and unit as written in the source recipe."""

    quantity: float | None = None
    unit: str | None = None


class GrocerySource(CamelModel):
    """Provenance of one contribution to a grocery item."""

    recipe_id: str
    meal_plan_entry_id: str
    ingredient_line_id: str
    amount: GroceryAmount = Field(default_factory=GroceryAmount)


class GroceryItem(CamelModel):
    """A single line of the grocery list."""

    id: str
    canonical_key: str
    display_name: str
    quantity: float | None = None
    unit: str | None = None
    category_id: str
    checked: bool = False
    pinned: bool = False
    notes: str | None = None
    sources: list[GrocerySource] = Field(default_factory=list)
    suppressed: bool = False


class GroceryScope(CamelModel):
    """Date range a grocery list covers."""

    date_range_start: date
    date_range_end: date

    def contains(self, day: date) -> bool:
        """Check whether a day falls inside the range (inclusive)."""
        return self.date_range_start <= day <= self.date_range_end


class GroceryList(CamelModel):
    """One computed version of a user's grocery list for a scope."""

    id: str
    user_id: str
    scope: GroceryScope
    items: list[GroceryItem] = Field(default_factory=list)
    version: int = Field(default=1, ge=1)
    computed_at: datetime
    updated_at: datetime
    suppressed_keys: list[str] = Field(
        default_factory=list, description="Canonical keys the user removed from this scope"
    )

    def item_for(self, canonical_key: str) -> GroceryItem | None:
        """Get the first item with the given canonical key."""
        for item in self.items:
            if item.canonical_key == canonical_key:
                return item
        return None
