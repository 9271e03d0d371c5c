"""Parse and normalize ingredient text, units and names."""

from grocerylist.normalize.canonical import (
    generate_canonical_key,
    get_canonical_name,
    normalize_to_canonical_key,
    singularize,
)
from grocerylist.normalize.parser import extract_modifiers, parse_ingredient_line
from grocerylist.normalize.units import (
    are_units_compatible,
    identify_unit_family,
    normalize_unit,
    parse_quantity_string,
)

__all__ = [
    "are_units_compatible",
    "extract_modifiers",
    "generate_canonical_key",
    "get_canonical_name",
    "identify_unit_family",
    "normalize_to_canonical_key",
    "normalize_unit",
    "parse_ingredient_line",
    "parse_quantity_string",
    "singularize",
]
