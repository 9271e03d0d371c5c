"""Heuristic parsing of free-text ingredient lines."""

import re

from grocerylist.logging_config import get_logger
from grocerylist.normalize.units import (
    QUANTITY_PATTERN,
    is_known_unit,
    normalize_unit,
    parse_quantity_string,
)
from grocerylist.normalize.vocabulary import (
    LEADING_ARTICLES,
    MODIFIER_WORDS,
    OPTIONAL_MARKERS,
)
from grocerylist.schemas import ParsedIngredient

logger = get_logger(__name__)

BASE_CONFIDENCE = 0.8
NO_AMOUNT_CONFIDENCE = 0.5
SHORT_NAME_CONFIDENCE = 0.3
OPTIONAL_CONFIDENCE = 0.6

_PARENTHETICAL_PATTERN = re.compile(r"\([^)]*\)")
_ARTICLE_PATTERN = re.compile(rf"^(?:{'|'.join(LEADING_ARTICLES)})\s+", re.IGNORECASE)
_MODIFIER_PATTERNS: dict[str, re.Pattern[str]] = {
    word: re.compile(rf"\b{re.escape(word)}\b", re.IGNORECASE) for word in MODIFIER_WORDS
}


def extract_modifiers(text: str) -> list[str]:
    """Collect every modifier word that appears in the text."""
    if not text:
        return []
    return [word for word, pattern in _MODIFIER_PATTERNS.items() if pattern.search(text)]


def strip_parentheticals(text: str) -> str:
    """Remove parenthetical asides like "(14 oz)"."""
    return " ".join(_PARENTHETICAL_PATTERN.sub(" ", text).split())


def _split_unit(text: str) -> tuple[str | None, str]:
    """
    Split a leading unit token off the text.

    Two-word units ("fl oz") are tried before single words. The unit is only
    taken when something is left over to serve as the name.
    """
    tokens = text.split()
    for width in (2, 1):
        if len(tokens) <= width:
            continue
        candidate = " ".join(tokens[:width])
        if is_known_unit(candidate):
            return normalize_unit(candidate), " ".join(tokens[width:])
    return None, text


def _clean_name(text: str) -> str:
    """Turn the text left after quantity and unit into an ingredient name."""
    name = strip_parentheticals(text)
    name = _ARTICLE_PATTERN.sub("", name)
    return name.strip(" ,;:-")


def _score_confidence(quantity: float | None, unit: str | None, name: str, optional: bool) -> float:
    # Later rules overwrite earlier ones rather than compounding.
    confidence = BASE_CONFIDENCE
    if quantity is None and unit is None:
        confidence = NO_AMOUNT_CONFIDENCE
    if len(name) < 2:
        confidence = SHORT_NAME_CONFIDENCE
    if optional:
        confidence = OPTIONAL_CONFIDENCE
    return confidence


def parse_ingredient_line(raw_text: str | None) -> ParsedIngredient:
    """
    Parse a raw ingredient line into structured data.

    Never raises: text that cannot be understood produces a result with a
    low confidence score instead.

    Examples:
        "1 1/2 cups flour" -> quantity 1.5, unit "cup", name "flour"
        "2 cloves garlic, minced" -> quantity 2, unit "clove", modifiers ["minced"]
        "salt to taste" -> no quantity, optional, confidence 0.6
    """
    text = (raw_text or "").strip()

    quantity: float | None = None
    remaining = text
    quantity_match = QUANTITY_PATTERN.match(text)
    if quantity_match:
        quantity = parse_quantity_string(quantity_match.group(1))
        remaining = text[quantity_match.end() :].strip()

    unit, rest = _split_unit(strip_parentheticals(remaining))

    modifiers = extract_modifiers(remaining)
    name = _clean_name(rest)

    lowered = text.lower()
    optional = any(marker in lowered for marker in OPTIONAL_MARKERS)

    confidence = _score_confidence(quantity, unit, name, optional)

    if confidence < BASE_CONFIDENCE:
        logger.debug(f"Low-confidence parse ({confidence}) for ingredient line {text!r}")

    return ParsedIngredient(
        name=name,
        quantity=quantity,
        unit=unit,
        modifiers=tuple(modifiers),
        optional=optional,
        confidence=confidence,
    )
