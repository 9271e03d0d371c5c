"""API routes for grocery list recomputation."""

from datetime import date

from fastapi import APIRouter, HTTPException, status
from pydantic import Field

from grocerylist.errors import ScopeMismatchError, StaleGroceryListError
from grocerylist.logging_config import get_logger
from grocerylist.plan.grocery_list import recompute
from grocerylist.schemas import (
    CamelModel,
    Category,
    GroceryList,
    MealPlan,
    Recipe,
    UserOverrides,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/grocery-lists", tags=["grocery-lists"])


class RecomputeRequest(CamelModel):
    """Everything a recompute needs, fetched by the caller beforehand."""

    meal_plan: MealPlan
    recipes: list[Recipe] = Field(default_factory=list)
    existing_list: GroceryList | None = None
    user_overrides: UserOverrides | None = None
    categories: list[Category] = Field(default_factory=list)
    date_range_start: date
    date_range_end: date
    expected_version: int | None = Field(
        None, description="Reject the recompute if the prior list has another version"
    )


@router.post("/recompute", response_model=GroceryList, response_model_by_alias=True)
async def recompute_grocery_list(request: RecomputeRequest) -> GroceryList:
    """
    Recompute a grocery list from a meal plan.

    Stateless: the caller supplies the prior list and persists the result.
    """
    logger.info(
        f"Recompute requested for user {request.meal_plan.user_id} "
        f"({request.date_range_start}..{request.date_range_end})"
    )

    try:
        return recompute(
            request.meal_plan,
            request.recipes,
            existing_list=request.existing_list,
            user_overrides=request.user_overrides,
            categories=request.categories,
            date_range_start=request.date_range_start,
            date_range_end=request.date_range_end,
            expected_version=request.expected_version,
        )
    except (ScopeMismatchError, StaleGroceryListError) as e:
        logger.warning(f"Recompute rejected: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
