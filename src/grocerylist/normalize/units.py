"""Unit normalization and quantity parsing utilities."""

import re


# =============================================================================
# Unit Tables
# =============================================================================

# Unit token -> canonical unit name
UNIT_SYNONYMS: dict[str, str] = {
    # Weight
    "g": "gram",
    "gr": "gram",
    "gram": "gram",
    "grams": "gram",
    "kg": "kilogram",
    "kgs": "kilogram",
    "kilogram": "kilogram",
    "kilograms": "kilogram",
    "mg": "milligram",
    "milligram": "milligram",
    "milligrams": "milligram",
    "oz": "ounce",
    "ounce": "ounce",
    "ounces": "ounce",
    "lb": "pound",
    "lbs": "pound",
    "pound": "pound",
    "pounds": "pound",
    # Volume
    "ml": "milliliter",
    "milliliter": "milliliter",
    "milliliters": "milliliter",
    "millilitre": "milliliter",
    "millilitres": "milliliter",
    "l": "liter",
    "liter": "liter",
    "liters": "liter",
    "litre": "liter",
    "litres": "liter",
    "dl": "deciliter",
    "deciliter": "deciliter",
    "deciliters": "deciliter",
    "c": "cup",
    "cup": "cup",
    "cups": "cup",
    "tbsp": "tablespoon",
    "tbs": "tablespoon",
    "tbl": "tablespoon",
    "tablespoon": "tablespoon",
    "tablespoons": "tablespoon",
    "tsp": "teaspoon",
    "teaspoon": "teaspoon",
    "teaspoons": "teaspoon",
    "fl oz": "fluid ounce",
    "fluid ounce": "fluid ounce",
    "fluid ounces": "fluid ounce",
    "pt": "pint",
    "pint": "pint",
    "pints": "pint",
    "qt": "quart",
    "quart": "quart",
    "quarts": "quart",
    "gal": "gallon",
    "gallon": "gallon",
    "gallons": "gallon",
    "pinch": "pinch",
    "pinches": "pinch",
    "dash": "dash",
    "dashes": "dash",
    # Count
    "each": "each",
    "ea": "each",
    "piece": "each",
    "pieces": "each",
    "pc": "each",
    "pcs": "each",
    "item": "each",
    "items": "each",
    "can": "can",
    "cans": "can",
    "package": "package",
    "packages": "package",
    "pkg": "package",
    "pack": "package",
    "packs": "package",
    "jar": "jar",
    "jars": "jar",
    "bottle": "bottle",
    "bottles": "bottle",
    "clove": "clove",
    "cloves": "clove",
    "bunch": "bunch",
    "bunches": "bunch",
    "head": "head",
    "heads": "head",
    "slice": "slice",
    "slices": "slice",
    "sprig": "sprig",
    "sprigs": "sprig",
    "stick": "stick",
    "sticks": "stick",
}

WEIGHT_UNITS: frozenset[str] = frozenset({"gram", "kilogram", "milligram", "ounce", "pound"})

VOLUME_UNITS: frozenset[str] = frozenset(
    {
        "milliliter",
        "liter",
        "deciliter",
        "cup",
        "tablespoon",
        "teaspoon",
        "fluid ounce",
        "pint",
        "quart",
        "gallon",
        "pinch",
        "dash",
    }
)

COUNT_UNITS: frozenset[str] = frozenset(
    {
        "each",
        "can",
        "package",
        "jar",
        "bottle",
        "clove",
        "bunch",
        "head",
        "slice",
        "sprig",
        "stick",
    }
)

UNICODE_FRACTIONS: dict[str, float] = {
    "½": 0.5,
    "⅓": 1 / 3,
    "⅔": 2 / 3,
    "¼": 0.25,
    "¾": 0.75,
    "⅛": 0.125,
    "⅜": 0.375,
    "⅝": 0.625,
    "⅞": 0.875,
}

_FRACTION_CHARS = "".join(UNICODE_FRACTIONS)

# One quantity token: mixed fraction, simple fraction, number with a unicode
# fraction, bare unicode fraction, or a plain integer/decimal.
NUMBER_PATTERN = (
    r"(?:\d+\s+\d+\s*/\s*\d+"
    r"|\d+\s*/\s*\d+"
    rf"|\d+(?:\.\d+)?\s*[{_FRACTION_CHARS}]"
    rf"|[{_FRACTION_CHARS}]"
    r"|\d+(?:\.\d+)?"
    r"|\.\d+)"
)

# A leading quantity, optionally a range like "2-3".
QUANTITY_PATTERN = re.compile(rf"^\s*({NUMBER_PATTERN}(?:\s*[-–]\s*{NUMBER_PATTERN})?)")

_RANGE_PATTERN = re.compile(rf"^({NUMBER_PATTERN})\s*[-–]\s*({NUMBER_PATTERN})$")
_MIXED_PATTERN = re.compile(r"^(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION_PATTERN = re.compile(r"^(\d+)\s*/\s*(\d+)$")
_UNICODE_PATTERN = re.compile(rf"^(\d+(?:\.\d+)?)?\s*([{_FRACTION_CHARS}])$")
_DECIMAL_PATTERN = re.compile(r"^(?:\d+(?:\.\d+)?|\.\d+)$")


# =============================================================================
# Parsing Functions
# =============================================================================


def parse_quantity_string(quantity_str: str | None) -> float | None:
    """
    Parse a quantity string into a float.

    Handles formats like:
    - "2"
    - "1.5"
    - "1/2"
    - "1 1/2" (one and a half)
    - "1½" and "½"
    - "2-3" (range, returns average)

    Returns None when the string is not a quantity.
    """
    if not quantity_str:
        return None

    quantity_str = quantity_str.strip()
    if not quantity_str:
        return None

    range_match = _RANGE_PATTERN.match(quantity_str)
    if range_match:
        low = parse_quantity_string(range_match.group(1))
        high = parse_quantity_string(range_match.group(2))
        if low is None or high is None:
            return low if high is None else high
        return (low + high) / 2

    mixed_match = _MIXED_PATTERN.match(quantity_str)
    if mixed_match:
        whole = int(mixed_match.group(1))
        num = int(mixed_match.group(2))
        denom = int(mixed_match.group(3))
        if denom == 0:
            return None
        return whole + (num / denom)

    frac_match = _FRACTION_PATTERN.match(quantity_str)
    if frac_match:
        num = int(frac_match.group(1))
        denom = int(frac_match.group(2))
        if denom == 0:
            return None
        return num / denom

    unicode_match = _UNICODE_PATTERN.match(quantity_str)
    if unicode_match:
        whole = float(unicode_match.group(1)) if unicode_match.group(1) else 0.0
        return whole + UNICODE_FRACTIONS[unicode_match.group(2)]

    if _DECIMAL_PATTERN.match(quantity_str):
        return float(quantity_str)

    return None


def normalize_unit(unit: str | None) -> str | None:
    """
    Map a unit token to its canonical unit name.

    Unrecognized tokens pass through lower-cased; empty input gives None.
    """
    if not unit:
        return None

    normalized = " ".join(unit.lower().split()).rstrip(".")
    if not normalized:
        return None

    return UNIT_SYNONYMS.get(normalized, normalized)


def is_known_unit(token: str) -> bool:
    """Check whether a token is in the unit vocabulary."""
    return " ".join(token.lower().split()).rstrip(".") in UNIT_SYNONYMS


def identify_unit_family(unit: str | None) -> str:
    """
    Identify the family of a unit.

    Returns:
        "weight", "volume" or "count"; "unknown" when the unit is not in the
        lookup table. A missing unit is a bare count ("2 onions").
    """
    if not unit:
        return "count"

    canonical = normalize_unit(unit)
    if canonical in WEIGHT_UNITS:
        return "weight"
    if canonical in VOLUME_UNITS:
        return "volume"
    if canonical in COUNT_UNITS:
        return "count"
    return "unknown"


def are_units_compatible(unit1: str | None, unit2: str | None) -> bool:
    """
    Check if two quantities can be meaningfully summed.

    Both units must belong to the same known family. An unknown unit is
    incompatible with everything, including a unit with the same name.
    """
    family1 = identify_unit_family(unit1)
    family2 = identify_unit_family(unit2)

    if family1 == "unknown" or family2 == "unknown":
        return False

    return family1 == family2
