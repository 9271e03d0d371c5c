"""Grocery list recomputation from meal plans."""

from collections.abc import Callable, Iterable, Mapping, Sequence
from datetime import date, datetime, timezone

from grocerylist.config import get_settings
from grocerylist.errors import ScopeMismatchError, StaleGroceryListError
from grocerylist.logging_config import LoggingContext, get_logger
from grocerylist.plan.aggregation import aggregate_meal_plan
from grocerylist.plan.categorize import sort_items
from grocerylist.plan.reconcile import mint_id, reconcile
from grocerylist.schemas import (
    Category,
    GroceryList,
    GroceryScope,
    MealPlan,
    Recipe,
    UserOverrides,
)

logger = get_logger(__name__)


def _build_scope(
    date_range_start: date | str | None,
    date_range_end: date | str | None,
) -> GroceryScope:
    if date_range_start is None or date_range_end is None:
        raise ValueError("date_range_start and date_range_end are required")

    scope = GroceryScope(date_range_start=date_range_start, date_range_end=date_range_end)
    if scope.date_range_start > scope.date_range_end:
        raise ValueError(
            f"Invalid date range: {scope.date_range_start} is after {scope.date_range_end}"
        )
    return scope


def _check_existing_list(
    existing_list: GroceryList | None,
    meal_plan: MealPlan,
    scope: GroceryScope,
    expected_version: int | None,
) -> None:
    if existing_list is not None:
        if existing_list.scope != scope:
            raise ScopeMismatchError(
                f"Grocery list {existing_list.id} covers "
                f"{existing_list.scope.date_range_start}..{existing_list.scope.date_range_end}, "
                f"not {scope.date_range_start}..{scope.date_range_end}",
                list_id=existing_list.id,
            )
        if existing_list.user_id != meal_plan.user_id:
            raise ScopeMismatchError(
                f"Grocery list {existing_list.id} belongs to another user",
                list_id=existing_list.id,
            )

    if expected_version is not None:
        actual = existing_list.version if existing_list is not None else 0
        if actual != expected_version:
            raise StaleGroceryListError(
                f"Expected grocery list version {expected_version}, found {actual}",
                expected=expected_version,
                actual=actual,
            )


def recompute(
    meal_plan: MealPlan,
    recipes: Mapping[str, Recipe] | Iterable[Recipe],
    existing_list: GroceryList | None = None,
    user_overrides: UserOverrides | None = None,
    categories: Sequence[Category] | None = None,
    date_range_start: date | str | None = None,
    date_range_end: date | str | None = None,
    *,
    expected_version: int | None = None,
    clock: Callable[[], datetime] | None = None,
    id_factory: Callable[[], str] | None = None,
) -> GroceryList:
    """
    Recompute the grocery list for a user's date range.

    A pure function of its inputs: it parses and aggregates every included
    recipe, reconciles the result with the prior list for the same scope and
    returns a new list version for the caller to persist wholesale.

    Args:
        meal_plan: Meal plan with entries for the range.
        recipes: Recipes by id, or an iterable of recipes.
        existing_list: The previously persisted list for the same scope.
        user_overrides: Canonical key and category corrections.
        categories: Ordered category list.
        date_range_start: First day of the range (date or ISO string).
        date_range_end: Last day of the range (date or ISO string).
        expected_version: Optional optimistic check against the prior version.
        clock: Returns the timestamp for computedAt/updatedAt.
        id_factory: Mints ids for new lists and items.

    Returns:
        The new GroceryList version.

    Raises:
        ScopeMismatchError: The prior list is for another range or user.
        StaleGroceryListError: The prior version differs from expected_version.
    """
    settings = get_settings()
    categories = list(categories or [])
    scope = _build_scope(date_range_start, date_range_end)

    _check_existing_list(existing_list, meal_plan, scope, expected_version)

    if existing_list is not None:
        list_id = existing_list.id
    elif id_factory is not None:
        list_id = id_factory()
    else:
        list_id = mint_id(settings.list_id_prefix)

    with LoggingContext(user_id=meal_plan.user_id, list_id=list_id):
        logger.info(
            f"Recomputing grocery list for plan {meal_plan.id} "
            f"({scope.date_range_start}..{scope.date_range_end})"
        )

        aggregated = aggregate_meal_plan(meal_plan, recipes, user_overrides, scope)

        result = reconcile(
            aggregated,
            existing_list=existing_list,
            category_overrides=user_overrides.category_map if user_overrides else None,
            categories=categories,
            id_factory=id_factory,
        )

        items = sort_items(result.items, categories)
        version = (existing_list.version if existing_list is not None else 0) + 1
        now = clock() if clock is not None else datetime.now(timezone.utc)

        if not items:
            logger.warning(f"Grocery list {list_id} has no items after recompute")

        logger.info(
            f"Computed grocery list version {version}: {len(items)} items, "
            f"{len(result.suppressed_keys)} suppressed"
        )

    return GroceryList(
        id=list_id,
        user_id=meal_plan.user_id,
        scope=scope,
        items=items,
        version=version,
        computed_at=now,
        updated_at=now,
        suppressed_keys=result.suppressed_keys,
    )
