"""Read-only word lists shared by the ingredient parser and key generator."""

# Descriptive preparation words. Used both to extract modifiers from an
# ingredient line and to strip them from canonical keys.
MODIFIER_WORDS: tuple[str, ...] = (
    "fresh",
    "chopped",
    "diced",
    "minced",
    "sliced",
    "grated",
    "crushed",
    "whole",
    "halved",
    "quartered",
    "julienned",
    "cubed",
    "shredded",
    "peeled",
    "seeded",
    "stemmed",
    "trimmed",
    "boneless",
    "skinless",
)

# Variant spellings -> canonical ingredient name. Values must already be in
# canonical form (lowercase, singular, no modifiers).
INGREDIENT_SYNONYMS: dict[str, str] = {
    # Vegetables and herbs
    "scallion": "green onion",
    "green onion": "green onion",
    "spring onion": "green onion",
    "cilantro": "coriander",
    "coriander": "coriander",
    "bell pepper": "bell pepper",
    "capsicum": "bell pepper",
    "sweet pepper": "bell pepper",
    "aubergine": "eggplant",
    "courgette": "zucchini",
    "rocket": "arugula",
    "garbanzo bean": "chickpea",
    # Proteins
    "ground beef": "ground beef",
    "minced beef": "ground beef",
    "beef mince": "ground beef",
    "hamburger": "ground beef",
    "prawn": "shrimp",
    # Dairy
    "double cream": "heavy cream",
    "whipping cream": "heavy cream",
    # Baking
    "icing sugar": "powdered sugar",
    "confectioners sugar": "powdered sugar",
    "caster sugar": "superfine sugar",
    "bicarbonate of soda": "baking soda",
    "plain flour": "all-purpose flour",
}

# Plurals whose "-es" ending is dropped as a whole.
ES_PLURALS: frozenset[str] = frozenset(
    {
        "tomatoes",
        "potatoes",
        "mangoes",
        "peaches",
        "radishes",
        "squashes",
        "sandwiches",
        "bunches",
        "pinches",
        "dashes",
        "boxes",
    }
)

# Words dropped from the start of an ingredient name.
LEADING_ARTICLES: tuple[str, ...] = ("of", "a", "an")

# Phrases that mark an ingredient as optional.
OPTIONAL_MARKERS: tuple[str, ...] = ("optional", "to taste")
