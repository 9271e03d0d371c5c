"""Reconcile freshly aggregated ingredients with the user's prior grocery list."""

import uuid
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from grocerylist.config import get_settings
from grocerylist.logging_config import get_logger
from grocerylist.plan.aggregation import UNIT_CONFLICT, AggregatedIngredient
from grocerylist.plan.categorize import auto_categorize, resolve_default_category_id
from grocerylist.schemas import Category, GroceryItem, GroceryList

logger = get_logger(__name__)


def mint_id(prefix: str) -> str:
    """Create a new unique identifier with the given prefix."""
    return f"{prefix}_{uuid.uuid4().hex[:16]}"


@dataclass
class ReconcileResult:
    """Items for the new list version plus the keys the user has removed."""

    items: list[GroceryItem] = field(default_factory=list)
    suppressed_keys: list[str] = field(default_factory=list)


def _index_existing(existing_list: GroceryList | None) -> dict[str, GroceryItem]:
    existing: dict[str, GroceryItem] = {}
    if existing_list is None:
        return existing
    for item in existing_list.items:
        if item.canonical_key in existing:
            logger.warning(
                f"Duplicate canonical key {item.canonical_key!r} in list {existing_list.id}, "
                "keeping the first item"
            )
            continue
        existing[item.canonical_key] = item
    return existing


def _collect_suppressed(existing_list: GroceryList | None) -> list[str]:
    if existing_list is None:
        return []
    keys = list(dict.fromkeys(existing_list.suppressed_keys))
    for item in existing_list.items:
        if item.suppressed and item.canonical_key not in keys:
            keys.append(item.canonical_key)
    return keys


def notes_from_modifiers(modifiers: Sequence[str]) -> str | None:
    """Join modifiers into a note, leaving out the unit-conflict marker."""
    notes = ", ".join(modifier for modifier in modifiers if modifier != UNIT_CONFLICT)
    return notes or None


def resolve_category_id(
    ingredient: AggregatedIngredient,
    existing: GroceryItem | None,
    category_overrides: Mapping[str, str],
    categories: Sequence[Category],
    default_id: str,
) -> str:
    """
    Pick the category for an aggregated ingredient.

    Order: the user's override for the key, the category the existing item
    already has, keyword auto-categorization, the default category.
    """
    override = category_overrides.get(ingredient.canonical_key)
    if override:
        return override
    if existing is not None and existing.category_id:
        return existing.category_id
    return auto_categorize(ingredient.display_name, categories, default_id)


def reconcile(
    aggregated: Mapping[str, AggregatedIngredient],
    existing_list: GroceryList | None = None,
    category_overrides: Mapping[str, str] | None = None,
    categories: Sequence[Category] = (),
    id_factory: Callable[[], str] | None = None,
) -> ReconcileResult:
    """
    Merge aggregated ingredients with the prior list without losing user edits.

    - Suppressed keys are dropped and stay suppressed.
    - Pinned items keep their stored quantity and unit.
    - Checked, pinned, notes and display name carry over from the prior item.
    - Pinned items no longer produced by any recipe are kept unchanged.
    """
    settings = get_settings()
    category_overrides = category_overrides or {}
    if id_factory is None:
        id_factory = lambda: mint_id(settings.item_id_prefix)  # noqa: E731

    existing_items = _index_existing(existing_list)
    suppressed_keys = _collect_suppressed(existing_list)
    suppressed = set(suppressed_keys)
    default_id = resolve_default_category_id(categories)

    result = ReconcileResult(suppressed_keys=suppressed_keys)

    for canonical_key, ingredient in aggregated.items():
        existing = existing_items.get(canonical_key)

        if canonical_key in suppressed:
            logger.debug(f"Skipping suppressed item {canonical_key!r}")
            continue

        category_id = resolve_category_id(
            ingredient, existing, category_overrides, categories, default_id
        )

        if existing is not None and existing.pinned:
            quantity, unit = existing.quantity, existing.unit
        else:
            quantity = ingredient.quantity
            if quantity is not None:
                quantity = round(quantity, settings.quantity_precision)
            unit = ingredient.unit

        if existing is not None and existing.notes:
            notes = existing.notes
        else:
            notes = notes_from_modifiers(ingredient.modifiers)

        if existing is not None:
            item_id, display_name = existing.id, existing.display_name
            checked, pinned = existing.checked, existing.pinned
        else:
            item_id, display_name = id_factory(), ingredient.display_name
            checked, pinned = False, False

        result.items.append(
            GroceryItem(
                id=item_id,
                canonical_key=canonical_key,
                display_name=display_name,
                quantity=quantity,
                unit=unit,
                category_id=category_id,
                checked=checked,
                pinned=pinned,
                notes=notes,
                sources=list(ingredient.sources),
                suppressed=False,
            )
        )

    # Manually added or pinned items whose recipes left the plan
    for canonical_key, item in existing_items.items():
        if item.pinned and canonical_key not in aggregated and canonical_key not in suppressed:
            result.items.append(item.model_copy(deep=True))

    return result
