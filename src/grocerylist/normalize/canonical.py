"""Canonical keys for ingredient deduplication."""

import re

from grocerylist.errors import CanonicalKeyError
from grocerylist.normalize.vocabulary import (
    ES_PLURALS,
    INGREDIENT_SYNONYMS,
    MODIFIER_WORDS,
)
from grocerylist.schemas import ParsedIngredient

# Periods are stripped too, so a decimal left in a name loses its point:
# "14.5 oz can tomatoes" keys as "145 oz can tomato".
_PUNCTUATION_PATTERN = re.compile(r"[.,;:!?'\"()]")
_MODIFIER_PATTERN = re.compile(
    rf"\b(?:{'|'.join(re.escape(word) for word in MODIFIER_WORDS)})\b",
    re.IGNORECASE,
)


def get_canonical_name(name: str) -> str:
    """Collapse a known variant spelling to its canonical ingredient name."""
    normalized = name.lower().strip()
    return INGREDIENT_SYNONYMS.get(normalized, normalized)


def singularize(word: str) -> str:
    """
    Naive singular form of one word.

    "cherries" -> "cherry", "tomatoes" -> "tomato", "onions" -> "onion",
    "swiss" stays "swiss".
    """
    if word.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if word in ES_PLURALS:
        return word[:-2]
    if word.endswith("s") and len(word) > 2 and not word.endswith("ss"):
        return word[:-1]
    return word


def normalize_to_canonical_key(text: str) -> str:
    """
    Normalize ingredient text to a canonical key.

    Steps: lowercase and trim, strip punctuation, apply synonyms, singularize
    each word, strip modifier words. Synonyms are looked up again at the end
    so that plural variants ("scallions") land on the same key.
    """
    normalized = text.lower().strip()
    normalized = _PUNCTUATION_PATTERN.sub("", normalized)
    normalized = " ".join(normalized.split())

    normalized = get_canonical_name(normalized)

    normalized = " ".join(singularize(word) for word in normalized.split())

    normalized = _MODIFIER_PATTERN.sub("", normalized)
    normalized = " ".join(normalized.split())

    return get_canonical_name(normalized)


def generate_canonical_key(parsed: ParsedIngredient | None) -> str:
    """Generate the deduplication key for a parsed ingredient."""
    if parsed is None:
        raise CanonicalKeyError("Cannot generate canonical key: parsed ingredient is required")
    return normalize_to_canonical_key(parsed.name)
