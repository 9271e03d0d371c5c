"""Unit tests for reconciling aggregated ingredients with a prior list."""

from datetime import date, datetime, timezone

import pytest

from grocerylist.plan.aggregation import UNIT_CONFLICT, AggregatedIngredient
from grocerylist.plan.categorize import (
    auto_categorize,
    resolve_default_category_id,
    sort_items,
)
from grocerylist.plan.reconcile import mint_id, notes_from_modifiers, reconcile
from grocerylist.schemas import Category, GroceryItem, GroceryList, GroceryScope

NOW = datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


def ingredient(key: str, quantity: float | None = 1.0, unit: str | None = None, **kwargs):
    """Build an aggregated ingredient, named after its key unless told otherwise."""
    kwargs.setdefault("display_name", key)
    return AggregatedIngredient(canonical_key=key, quantity=quantity, unit=unit, **kwargs)


def existing_item(key: str, **kwargs) -> GroceryItem:
    """Build a prior grocery item."""
    defaults = {"id": f"old-{key}", "display_name": key, "category_id": "pantry"}
    defaults.update(kwargs)
    return GroceryItem(canonical_key=key, **defaults)


def prior_list(items: list[GroceryItem], suppressed_keys: list[str] | None = None) -> GroceryList:
    """Build a prior grocery list for user-1."""
    return GroceryList(
        id="list-1",
        user_id="user-1",
        scope=GroceryScope(date_range_start=date(2026, 1, 5), date_range_end=date(2026, 1, 11)),
        items=items,
        version=1,
        computed_at=NOW,
        updated_at=NOW,
        suppressed_keys=suppressed_keys or [],
    )


class TestCategoryResolution:
    """Tests for the category precedence: override, existing, keyword, default."""

    def test_keyword_match(self, categories):
        """Test keyword auto-categorization."""
        result = reconcile({"chicken breast": ingredient("chicken breast")}, categories=categories)
        assert result.items[0].category_id == "meat"

    def test_user_override_wins(self, categories):
        """Test that the user's category mapping beats everything else."""
        prior = prior_list([existing_item("chicken breast", category_id="bakery")])
        result = reconcile(
            {"chicken breast": ingredient("chicken breast")},
            existing_list=prior,
            category_overrides={"chicken breast": "frozen"},
            categories=categories,
        )
        assert result.items[0].category_id == "frozen"

    def test_existing_category_kept(self, categories):
        """Test that a category the user picked earlier survives."""
        prior = prior_list([existing_item("chicken breast", category_id="bakery")])
        result = reconcile(
            {"chicken breast": ingredient("chicken breast")},
            existing_list=prior,
            categories=categories,
        )
        assert result.items[0].category_id == "bakery"

    def test_default_category(self, categories):
        """Test that unmatched names land in Pantry."""
        result = reconcile({"quinoa": ingredient("quinoa")}, categories=categories)
        assert result.items[0].category_id == "pantry"

    def test_first_category_when_no_pantry(self):
        """Test the fallback to the first category."""
        aisles = [Category(id="a", name="Aisle A", sort_order=1)]
        assert resolve_default_category_id(aisles) == "a"

    def test_literal_fallback_without_categories(self):
        """Test the fallback id when no categories exist."""
        result = reconcile({"quinoa": ingredient("quinoa")})
        assert result.items[0].category_id == "default"

    def test_category_list_order_decides(self, categories):
        """Test that the first matching category in list order wins."""
        # "pepper" is both a Produce and a Pantry keyword
        assert auto_categorize("black pepper", categories, "pantry") == "produce"

    def test_custom_keywords(self, categories):
        """Test passing a custom keyword table."""
        keywords = {"frozen": ["peas"]}
        assert auto_categorize("green peas", categories, "pantry", keywords) == "frozen"


class TestUserEditsPreserved:
    """Tests for carrying user state across recomputes."""

    def test_pinned_quantity_kept(self, categories):
        """Test that a pinned item keeps the quantity the user set."""
        prior = prior_list([existing_item("egg", quantity=5, unit="each", pinned=True)])
        result = reconcile(
            {"egg": ingredient("egg", quantity=3)}, existing_list=prior, categories=categories
        )

        egg = result.items[0]
        assert egg.quantity == 5
        assert egg.unit == "each"
        assert egg.pinned is True

    def test_unpinned_quantity_recomputed(self, categories):
        """Test that an unpinned item takes the new total."""
        prior = prior_list([existing_item("egg", quantity=5)])
        result = reconcile(
            {"egg": ingredient("egg", quantity=3)}, existing_list=prior, categories=categories
        )
        assert result.items[0].quantity == 3

    def test_checked_id_and_name_kept(self, categories):
        """Test that check state, id and display name carry over."""
        prior = prior_list([existing_item("egg", display_name="Eggs (large)", checked=True)])
        result = reconcile(
            {"egg": ingredient("egg", display_name="eggs")},
            existing_list=prior,
            categories=categories,
        )

        egg = result.items[0]
        assert egg.id == "old-egg"
        assert egg.checked is True
        assert egg.display_name == "Eggs (large)"

    def test_existing_notes_kept(self, categories):
        """Test that user notes are not overwritten by modifiers."""
        prior = prior_list([existing_item("onion", notes="the big ones")])
        result = reconcile(
            {"onion": ingredient("onion", modifiers=["chopped"])},
            existing_list=prior,
            categories=categories,
        )
        assert result.items[0].notes == "the big ones"

    def test_notes_from_modifiers(self, categories):
        """Test that new items get modifiers as notes, without the conflict marker."""
        result = reconcile(
            {"onion": ingredient("onion", modifiers=["chopped", UNIT_CONFLICT, "diced"])},
            categories=categories,
        )
        assert result.items[0].notes == "chopped, diced"

    def test_no_modifiers_no_notes(self):
        """Test that no modifiers means no notes."""
        assert notes_from_modifiers([]) is None
        assert notes_from_modifiers([UNIT_CONFLICT]) is None

    def test_sources_replaced(self, categories):
        """Test that sources always come from the fresh aggregation."""
        prior = prior_list([existing_item("egg")])
        result = reconcile({"egg": ingredient("egg")}, existing_list=prior, categories=categories)
        assert result.items[0].sources == []


class TestSuppression:
    """Tests for items the user removed."""

    def test_suppressed_item_dropped_and_recorded(self, categories):
        """Test that a suppressed item is not re-added."""
        prior = prior_list([existing_item("milk", suppressed=True)])
        result = reconcile(
            {"milk": ingredient("milk"), "egg": ingredient("egg")},
            existing_list=prior,
            categories=categories,
        )

        assert [item.canonical_key for item in result.items] == ["egg"]
        assert result.suppressed_keys == ["milk"]

    def test_recorded_key_stays_suppressed(self, categories):
        """Test that a key in the ledger stays suppressed without an item."""
        prior = prior_list([], suppressed_keys=["milk"])
        result = reconcile({"milk": ingredient("milk")}, existing_list=prior, categories=categories)

        assert result.items == []
        assert result.suppressed_keys == ["milk"]

    def test_suppressed_pinned_item_not_carried(self, categories):
        """Test that suppression beats pinning."""
        prior = prior_list([existing_item("candles", pinned=True, suppressed=True)])
        result = reconcile({}, existing_list=prior, categories=categories)

        assert result.items == []
        assert result.suppressed_keys == ["candles"]


class TestCarryThrough:
    """Tests for prior items no recipe produces any more."""

    def test_pinned_item_kept(self, categories):
        """Test that a pinned manual item survives unchanged."""
        towels = existing_item("paper towel", quantity=2, pinned=True, checked=True)
        prior = prior_list([towels])
        result = reconcile({"egg": ingredient("egg")}, existing_list=prior, categories=categories)

        kept = [item for item in result.items if item.canonical_key == "paper towel"]
        assert kept == [towels]
        assert kept[0] is not towels

    def test_unpinned_item_dropped(self, categories):
        """Test that an unpinned item without recipes disappears."""
        prior = prior_list([existing_item("paper towel")])
        result = reconcile({}, existing_list=prior, categories=categories)
        assert result.items == []

    def test_duplicate_prior_keys_first_wins(self, categories):
        """Test that only the first prior item per key is used."""
        prior = prior_list(
            [
                existing_item("egg", id="first", checked=True),
                existing_item("egg", id="second"),
            ]
        )
        result = reconcile({"egg": ingredient("egg")}, existing_list=prior, categories=categories)

        assert len(result.items) == 1
        assert result.items[0].id == "first"
        assert result.items[0].checked is True


class TestNewItems:
    """Tests for items seen for the first time."""

    def test_ids_from_factory(self, categories, id_factory):
        """Test that new ids come from the given factory."""
        result = reconcile(
            {"egg": ingredient("egg"), "milk": ingredient("milk")},
            categories=categories,
            id_factory=id_factory,
        )
        assert [item.id for item in result.items] == ["id-1", "id-2"]

    def test_minted_ids_unique(self):
        """Test the default id minting."""
        first, second = mint_id("item"), mint_id("item")
        assert first.startswith("item_")
        assert first != second

    def test_quantity_rounded(self, categories):
        """Test that float noise is rounded away."""
        result = reconcile({"milk": ingredient("milk", quantity=0.1 + 0.2)}, categories=categories)
        assert result.items[0].quantity == 0.3

    def test_new_item_defaults(self, categories):
        """Test the state of a brand new item."""
        item = reconcile({"egg": ingredient("egg")}, categories=categories).items[0]
        assert item.checked is False
        assert item.pinned is False
        assert item.suppressed is False


class TestSortItems:
    """Tests for sort_items function."""

    def test_sorted_by_category_then_name(self, categories):
        """Test ordering by category sort order, then display name."""
        items = [
            existing_item("salt", category_id="pantry"),
            existing_item("milk", category_id="dairy"),
            existing_item("butter", category_id="dairy"),
            existing_item("onion", category_id="produce"),
        ]
        ordered = sort_items(items, categories)
        assert [item.canonical_key for item in ordered] == ["onion", "butter", "milk", "salt"]

    def test_unknown_category_last(self, categories):
        """Test that items with an unknown category go to the end."""
        items = [
            existing_item("zzz", category_id="gone"),
            existing_item("beer", category_id="beverages"),
        ]
        ordered = sort_items(items, categories)
        assert [item.canonical_key for item in ordered] == ["beer", "zzz"]

    def test_name_order_ignores_case(self, categories):
        """Test that capitalised names interleave with lowercase ones."""
        items = [
            existing_item("whole milk", display_name="Whole Milk", category_id="dairy"),
            existing_item("cream", display_name="cream", category_id="dairy"),
            existing_item("buttermilk", display_name="Buttermilk", category_id="dairy"),
        ]
        ordered = sort_items(items, categories)
        assert [item.display_name for item in ordered] == ["Buttermilk", "cream", "Whole Milk"]

    @pytest.mark.parametrize("reverse", [False, True])
    def test_ties_broken_by_key(self, categories, reverse):
        """Test that equal names are ordered by canonical key regardless of input order."""
        items = [
            existing_item("a", display_name="Same"),
            existing_item("b", display_name="Same"),
        ]
        if reverse:
            items.reverse()
        assert [item.canonical_key for item in sort_items(items, categories)] == ["a", "b"]
