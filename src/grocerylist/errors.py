"""Exceptions raised by the grocery list engine."""


class GroceryListError(Exception):
    """Base exception for grocery list errors."""


class CanonicalKeyError(GroceryListError, ValueError):
    """Raised when a canonical key is requested without a parsed ingredient."""


class ScopeMismatchError(GroceryListError):
    """Raised when the prior list belongs to a different user or date range."""

    def __init__(self, message: str, list_id: str | None = None):
        super().__init__(message)
        self.list_id = list_id


class StaleGroceryListError(GroceryListError):
    """Raised when the prior list version does not match the caller's expectation."""

    def __init__(self, message: str, expected: int | None = None, actual: int | None = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual
