"""Aggregation of meal plan ingredients into one entry per canonical key."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from grocerylist.logging_config import get_logger
from grocerylist.normalize.canonical import generate_canonical_key
from grocerylist.normalize.parser import parse_ingredient_line
from grocerylist.normalize.units import are_units_compatible, normalize_unit
from grocerylist.schemas import (
    GroceryAmount,
    GroceryScope,
    GrocerySource,
    IngredientLine,
    MealPlan,
    MealPlanEntry,
    ParsedIngredient,
    Recipe,
    UserOverrides,
)

logger = get_logger(__name__)

# Marker added to an ingredient's modifiers when quantities in different unit
# families were summed. The total is misleading; the marker flags it.
UNIT_CONFLICT = "unit-conflict"


@dataclass
class AggregatedIngredient:
    """An ingredient with quantities combined from every scheduled recipe."""

    canonical_key: str
    display_name: str
    quantity: float | None
    unit: str | None
    modifiers: list[str] = field(default_factory=list)
    optional: bool = False
    confidence: float = 0.0
    sources: list[GrocerySource] = field(default_factory=list)

    @property
    def has_unit_conflict(self) -> bool:
        """Check if incompatible units were summed into this ingredient."""
        return UNIT_CONFLICT in self.modifiers

    def merge(
        self,
        quantity: float | None,
        unit: str | None,
        parsed: ParsedIngredient,
        source: GrocerySource,
    ) -> None:
        """
        Fold another contribution into this ingredient.

        Known quantities are always summed, even across unit families; in that
        case the unit-conflict marker is added and the first unit is kept.
        """
        if self.quantity is not None and quantity is not None:
            if not are_units_compatible(self.unit, unit) and UNIT_CONFLICT not in self.modifiers:
                self.modifiers.append(UNIT_CONFLICT)
            self.quantity += quantity
        elif quantity is not None:
            self.quantity = quantity
            self.unit = unit

        self.sources.append(source)

        for modifier in parsed.modifiers:
            if modifier not in self.modifiers:
                self.modifiers.append(modifier)

        self.confidence = max(self.confidence, parsed.confidence)
        self.optional = self.optional and parsed.optional


def servings_multiplier(entry: MealPlanEntry, recipe: Recipe) -> float:
    """Ratio between the servings planned for an entry and the recipe's default."""
    default = recipe.servings_default
    if default <= 0:
        logger.warning(
            f"Recipe {recipe.id} has non-positive servingsDefault {default}, not scaling"
        )
        return 1.0

    servings = entry.servings_override if entry.servings_override is not None else default
    return servings / default


def _index_recipes(recipes: Mapping[str, Recipe] | Iterable[Recipe]) -> Mapping[str, Recipe]:
    if isinstance(recipes, Mapping):
        return recipes
    return {recipe.id: recipe for recipe in recipes}


def _resolve_key(
    line: IngredientLine,
    parsed: ParsedIngredient,
    overrides: UserOverrides | None,
) -> str:
    if overrides is not None:
        override = overrides.ingredient_canonical_map.get(line.raw_text)
        if override:
            return override
    return generate_canonical_key(parsed)


def aggregate_meal_plan(
    meal_plan: MealPlan,
    recipes: Mapping[str, Recipe] | Iterable[Recipe],
    user_overrides: UserOverrides | None = None,
    scope: GroceryScope | None = None,
) -> dict[str, AggregatedIngredient]:
    """
    Aggregate the ingredients of every included meal plan entry.

    Args:
        meal_plan: Meal plan with its resolved entries.
        recipes: Recipes by id, or an iterable of recipes.
        user_overrides: Optional per-user raw text -> canonical key corrections.
        scope: When given, dated entries outside the range are ignored.

    Returns:
        Dict mapping canonical keys to AggregatedIngredient, in first-seen order.
    """
    recipe_map = _index_recipes(recipes)
    aggregated: dict[str, AggregatedIngredient] = {}
    lines_used = 0

    for entry in meal_plan.entries:
        if not entry.include_in_grocery:
            continue

        if scope is not None and entry.scheduled_date is not None:
            if not scope.contains(entry.scheduled_date):
                logger.debug(
                    f"Entry {entry.id} on {entry.scheduled_date} is outside the list range"
                )
                continue

        recipe = recipe_map.get(entry.recipe_id)
        if recipe is None:
            logger.warning(f"Recipe {entry.recipe_id} for entry {entry.id} not found, skipping")
            continue

        multiplier = servings_multiplier(entry, recipe)

        for line in recipe.ingredients:
            parsed = line.parsed
            if parsed is None:
                parsed = parse_ingredient_line(line.raw_text)

            canonical_key = _resolve_key(line, parsed, user_overrides)
            if not canonical_key:
                logger.warning(
                    f"Skipping unusable ingredient line {line.id} of recipe {recipe.id}: "
                    f"{line.raw_text!r}"
                )
                continue

            quantity = parsed.quantity * multiplier if parsed.quantity is not None else None
            unit = normalize_unit(parsed.unit)

            source = GrocerySource(
                recipe_id=recipe.id,
                meal_plan_entry_id=entry.id,
                ingredient_line_id=line.id,
                amount=GroceryAmount(quantity=parsed.quantity, unit=parsed.unit),
            )

            existing = aggregated.get(canonical_key)
            if existing is not None:
                existing.merge(quantity, unit, parsed, source)
            else:
                aggregated[canonical_key] = AggregatedIngredient(
                    canonical_key=canonical_key,
                    display_name=parsed.name or canonical_key,
                    quantity=quantity,
                    unit=unit,
                    modifiers=list(parsed.modifiers),
                    optional=parsed.optional,
                    confidence=parsed.confidence,
                    sources=[source],
                )
            lines_used += 1

    logger.info(
        f"Aggregated {lines_used} ingredient lines into {len(aggregated)} items "
        f"for meal plan {meal_plan.id}"
    )

    return aggregated
