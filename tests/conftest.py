"""Pytest configuration and shared fixtures."""

from datetime import date, datetime, timezone
from itertools import count

import pytest

from grocerylist.schemas import (
    Category,
    IngredientLine,
    MealPlan,
    MealPlanEntry,
    Recipe,
    default_categories,
)

FIXED_NOW = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)
RANGE_START = date(2026, 1, 5)
RANGE_END = date(2026, 1, 11)

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "api: marks tests that exercise the HTTP layer")


# =============================================================================
# Recipe and Meal Plan Fixtures
# =============================================================================


@pytest.fixture
def make_recipe():
    """Factory building a recipe from raw ingredient lines."""

    def _make_recipe(recipe_id: str, lines: list[str], servings: float = 2) -> Recipe:
        return Recipe(
            id=recipe_id,
            title=f"Recipe {recipe_id}",
            servings_default=servings,
            ingredients=[
                IngredientLine(id=f"{recipe_id}-line-{i}", raw_text=text)
                for i, text in enumerate(lines, start=1)
            ],
        )

    return _make_recipe


@pytest.fixture
def make_entry():
    """Factory building a meal plan entry inside the default range."""
    entry_ids = count(1)

    def _make_entry(
        recipe_id: str,
        servings_override: float | None = None,
        include_in_grocery: bool = True,
        day: date = RANGE_START,
    ) -> MealPlanEntry:
        return MealPlanEntry(
            id=f"entry-{next(entry_ids)}",
            plan_id="plan-1",
            date=day,
            meal_type="dinner",
            recipe_id=recipe_id,
            servings_override=servings_override,
            include_in_grocery=include_in_grocery,
        )

    return _make_entry


@pytest.fixture
def make_plan():
    """Factory building a meal plan for user-1."""

    def _make_plan(entries: list[MealPlanEntry]) -> MealPlan:
        return MealPlan(id="plan-1", user_id="user-1", start_date=RANGE_START, entries=entries)

    return _make_plan


# =============================================================================
# Grocery List Fixtures
# =============================================================================


@pytest.fixture
def categories() -> list[Category]:
    """Stock categories: Produce, Dairy, Meat, Pantry, ..., Other."""
    return default_categories()


@pytest.fixture
def fixed_clock():
    """Clock that always returns the same instant."""
    return lambda: FIXED_NOW


@pytest.fixture
def id_factory():
    """Deterministic id factory: id-1, id-2, ..."""
    ids = count(1)
    return lambda: f"id-{next(ids)}"
