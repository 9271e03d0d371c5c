"""API routers for the grocerylist service."""

from grocerylist.routers.grocery_lists import router as grocery_lists_router
from grocerylist.routers.ingredients import router as ingredients_router

__all__ = [
    "grocery_lists_router",
    "ingredients_router",
]
