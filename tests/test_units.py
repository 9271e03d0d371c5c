"""Unit tests for quantity parsing and unit normalization."""

import pytest

from grocerylist.normalize.units import (
    are_units_compatible,
    identify_unit_family,
    normalize_unit,
    parse_quantity_string,
)


class TestParseQuantityString:
    """Tests for parse_quantity_string function."""

    def test_parse_integer(self):
        """Test parsing simple integers."""
        assert parse_quantity_string("2") == 2.0
        assert parse_quantity_string("10") == 10.0

    def test_parse_decimal(self):
        """Test parsing decimal numbers."""
        assert parse_quantity_string("1.5") == 1.5
        assert parse_quantity_string("0.25") == 0.25

    def test_parse_fraction(self):
        """Test parsing simple fractions."""
        assert parse_quantity_string("1/2") == 0.5
        assert parse_quantity_string("3/4") == 0.75

    def test_parse_mixed_fraction(self):
        """Test parsing mixed fractions like '1 1/2'."""
        assert parse_quantity_string("1 1/2") == 1.5
        assert parse_quantity_string("2 1/4") == 2.25

    def test_parse_unicode_fraction(self):
        """Test parsing unicode vulgar fractions."""
        assert parse_quantity_string("½") == 0.5
        assert parse_quantity_string("1½") == 1.5
        assert parse_quantity_string("2 ¼") == 2.25
        assert parse_quantity_string("⅓") == pytest.approx(1 / 3)

    def test_parse_range(self):
        """Test parsing ranges like '2-3' as their average."""
        assert parse_quantity_string("2-3") == 2.5
        assert parse_quantity_string("1 - 2") == 1.5

    def test_parse_invalid(self):
        """Test that non-quantities give None instead of raising."""
        assert parse_quantity_string("") is None
        assert parse_quantity_string(None) is None
        assert parse_quantity_string("some") is None
        assert parse_quantity_string("1/0") is None


class TestNormalizeUnit:
    """Tests for normalize_unit function."""

    def test_synonyms_collapse(self):
        """Test that unit spellings map to one canonical name."""
        assert normalize_unit("tbsp") == "tablespoon"
        assert normalize_unit("Tablespoons") == "tablespoon"
        assert normalize_unit("cups") == "cup"
        assert normalize_unit("g") == "gram"
        assert normalize_unit("lbs") == "pound"
        assert normalize_unit("pieces") == "each"

    def test_trailing_period(self):
        """Test abbreviations written with a period."""
        assert normalize_unit("tsp.") == "teaspoon"
        assert normalize_unit("oz.") == "ounce"

    def test_two_word_unit(self):
        """Test multi-word units."""
        assert normalize_unit("fl oz") == "fluid ounce"
        assert normalize_unit("Fluid  Ounces") == "fluid ounce"

    def test_unknown_passes_through_lowercased(self):
        """Test that unknown tokens are lower-cased and otherwise unchanged."""
        assert normalize_unit("Splash") == "splash"

    def test_empty(self):
        """Test that missing units stay missing."""
        assert normalize_unit(None) is None
        assert normalize_unit("") is None
        assert normalize_unit("   ") is None


class TestIdentifyUnitFamily:
    """Tests for identify_unit_family function."""

    def test_weight(self):
        """Test weight units."""
        assert identify_unit_family("gram") == "weight"
        assert identify_unit_family("kg") == "weight"
        assert identify_unit_family("ounce") == "weight"

    def test_volume(self):
        """Test volume units."""
        assert identify_unit_family("cup") == "volume"
        assert identify_unit_family("ml") == "volume"
        assert identify_unit_family("teaspoon") == "volume"

    def test_count(self):
        """Test count units, including containers."""
        assert identify_unit_family("each") == "count"
        assert identify_unit_family("cans") == "count"
        assert identify_unit_family("clove") == "count"

    def test_missing_unit_is_bare_count(self):
        """Test that a missing unit counts items."""
        assert identify_unit_family(None) == "count"

    def test_unknown(self):
        """Test units outside the lookup table."""
        assert identify_unit_family("splash") == "unknown"


class TestAreUnitsCompatible:
    """Tests for are_units_compatible function."""

    def test_same_family(self):
        """Test that units of one family are compatible."""
        assert are_units_compatible("cup", "cup")
        assert are_units_compatible("cup", "tablespoon")
        assert are_units_compatible("gram", "pound")
        assert are_units_compatible("each", "can")

    def test_different_families(self):
        """Test that units of different families are not compatible."""
        assert not are_units_compatible("cup", "gram")
        assert not are_units_compatible("each", "liter")

    def test_unknown_unit_incompatible_with_itself(self):
        """Test that an unrecognized unit matches nothing, not even itself."""
        assert not are_units_compatible("splash", "splash")
        assert not are_units_compatible("splash", "cup")

    def test_missing_units(self):
        """Test bare counts."""
        assert are_units_compatible(None, None)
        assert are_units_compatible(None, "each")
        assert not are_units_compatible(None, "cup")
