"""Category resolution and ordering of grocery items."""

from collections.abc import Iterable, Mapping, Sequence

from grocerylist.config import get_settings
from grocerylist.schemas import Category, GroceryItem

# Category name -> substrings that place an ingredient in that category
CATEGORY_KEYWORDS: dict[str, tuple[str, ...]] = {
    "Produce": (
        "onion",
        "pepper",
        "tomato",
        "lettuce",
        "spinach",
        "carrot",
        "celery",
        "garlic",
        "ginger",
        "potato",
        "apple",
        "banana",
        "orange",
        "lemon",
        "lime",
        "avocado",
        "cucumber",
        "zucchini",
        "broccoli",
        "cauliflower",
    ),
    "Dairy": ("milk", "cheese", "butter", "yogurt", "cream", "sour cream", "cottage cheese"),
    "Meat": ("chicken", "beef", "pork", "turkey", "lamb", "bacon", "sausage", "ground"),
    "Pantry": (
        "flour",
        "sugar",
        "salt",
        "pepper",
        "oil",
        "vinegar",
        "pasta",
        "rice",
        "beans",
        "canned",
        "tomato paste",
    ),
    "Spices": (
        "paprika",
        "cumin",
        "coriander",
        "turmeric",
        "cinnamon",
        "nutmeg",
        "oregano",
        "basil",
        "thyme",
        "rosemary",
        "parsley",
    ),
    "Frozen": ("frozen",),
    "Bakery": ("bread", "roll", "bagel", "croissant"),
    "Beverages": ("juice", "soda", "water", "wine", "beer"),
}

_KEYWORDS_BY_NAME: dict[str, tuple[str, ...]] = {
    name.lower(): keywords for name, keywords in CATEGORY_KEYWORDS.items()
}


def resolve_default_category_id(
    categories: Sequence[Category],
    default_name: str | None = None,
    fallback_id: str | None = None,
) -> str:
    """
    Get the catch-all category id.

    The category named "Pantry" wins, then the first category, then a literal
    fallback id when no categories are configured.
    """
    settings = get_settings()
    default_name = default_name or settings.default_category_name
    fallback_id = fallback_id or settings.fallback_category_id

    for category in categories:
        if category.name == default_name:
            return category.id
    if categories:
        return categories[0].id
    return fallback_id


def auto_categorize(
    name: str,
    categories: Iterable[Category],
    default_id: str,
    keywords: Mapping[str, Sequence[str]] | None = None,
) -> str:
    """
    Pick a category for an ingredient name by keyword.

    Categories are tried in list order; the first whose keyword set has a
    substring match in the name wins.
    """
    if keywords is None:
        keywords_by_name = _KEYWORDS_BY_NAME
    else:
        keywords_by_name = {key.lower(): tuple(words) for key, words in keywords.items()}

    lower_name = name.lower()
    for category in categories:
        category_keywords = keywords_by_name.get(category.name.lower(), ())
        if any(keyword in lower_name for keyword in category_keywords):
            return category.id

    return default_id


def sort_items(items: Iterable[GroceryItem], categories: Iterable[Category]) -> list[GroceryItem]:
    """
    Order items by category sort order, then display name ignoring case.

    Items whose category is unknown sort after every known category. The
    canonical key breaks remaining ties so the order is reproducible.
    """
    sort_orders = {category.id: category.sort_order for category in categories}

    def sort_key(item: GroceryItem) -> tuple[bool, int, str, str, str]:
        order = sort_orders.get(item.category_id)
        name = item.display_name
        return (order is None, order or 0, name.casefold(), name, item.canonical_key)

    return sorted(items, key=sort_key)
