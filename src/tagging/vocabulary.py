import logging
from pathlib import Path

from models import CategoryDefault, Marker, Vocabulary

logger = logging.getLogger(__name__)

# Multi-word colours come before the single words they contain
COLOURS = [
    "Off White", "Navy Blue", "Sky Blue", "Dark Blue", "Light Blue", "Royal Blue",
    "Dark Green", "Light Green", "Bottle Green", "Light Pink", "Baby Pink", "Dark Grey",
    "Black", "White", "Grey", "Blue", "Navy", "Red", "Maroon", "Green", "Olive",
    "Yellow", "Mustard", "Pink", "Peach", "Purple", "Lavender", "Orange", "Brown",
    "Cream", "Beige", "Golden", "Silver", "Wine", "Multicolour",
]

# "Girls" before "Girl" and "Mens" before "Men" so the plural is removed whole
GENDER_MARKERS = [
    Marker(token="Girls", gender="Female", age_group="Girl"),
    Marker(token="Girl", gender="Female", age_group="Girl"),
    Marker(token="Ladies", gender="Female", age_group="Ladies"),
    Marker(token="Womens", gender="Female", age_group="Ladies"),
    Marker(token="Women", gender="Female", age_group="Ladies"),
    Marker(token="Boys", gender="Male", age_group="Boy"),
    Marker(token="Boy", gender="Male", age_group="Boy"),
    Marker(token="Mens", gender="Male", age_group="Mens"),
    Marker(token="Men", gender="Male", age_group="Mens"),
    Marker(token="Gents", gender="Male", age_group="Mens"),
]

AGE_MARKERS = [
    Marker(token="Baby", age_group="Baby"),
    Marker(token="Child", age_group="Kids"),
    Marker(token="Kids", age_group="Kids"),
    Marker(token="Little", age_group="Kids"),
]

COMPANIES = [
    "Lee Cooper", "Pepe Jeans", "Allen Solly", "Peter England", "Van Heusen",
    "Louis Philippe", "Being Human", "Amul Macho", "Lux Cozi",
    "Nike", "Adidas", "Puma", "Reebok", "Levis", "Jockey", "Raymond", "Wrangler",
    "Spykar", "Dollar", "Rupa", "Zara", "H&M", "Roadster", "Biba", "Max",
]

CATEGORIES = [
    "T-Shirt", "Shirt", "Sweatshirt", "Jeans", "Half Pant", "Track Pant", "Pant",
    "Panties", "Track Suit", "Set", "Frock", "Top", "Kurta", "Kurti", "Leggings",
    "Shorts", "Jacket", "Sweater", "Hoodie", "Vest", "Bra", "Nightsuit", "Nighty",
    "Pyjama", "Skirt", "Saree", "Dupatta", "Salwar", "Capri", "Cap", "Socks",
    "Romper", "Trouser", "Blazer", "Lower",
]

# Keys are in the title-cased form produced by normalize_description
ALIASES = {
    "Tshirt": "T-Shirt",
    "T Shirt": "T-Shirt",
    "Tshirts": "T-Shirt",
    "Shirts": "Shirt",
    "Pants": "Pant",
    "Jean": "Jeans",
    "Tops": "Top",
    "Legging": "Leggings",
    "Sock": "Socks",
    "Gray": "Grey",
    "Men's": "Mens",
    "Women's": "Womens",
    "Levi's": "Levis",
}

DEFAULT_VOCABULARY = Vocabulary(
    colours=COLOURS,
    gender_markers=GENDER_MARKERS,
    age_markers=AGE_MARKERS,
    companies=COMPANIES,
    categories=CATEGORIES,
    aliases=ALIASES,
)

_MENS = CategoryDefault(gender="Male", age_group="Mens")
_LADIES = CategoryDefault(gender="Female", age_group="Ladies")

# Category -> demographics assumed when the description does not say
DEFAULT_CATEGORY_DEFAULTS = {
    "T-Shirt": _MENS,
    "Shirt": _MENS,
    "Jeans": _MENS,
    "Track Pant": _MENS,
    "Half Pant": _MENS,
    "Track Suit": _MENS,
    "Trouser": _MENS,
    "Blazer": _MENS,
    "Vest": _MENS,
    "Lower": _MENS,
    "Kurti": _LADIES,
    "Leggings": _LADIES,
    "Saree": _LADIES,
    "Dupatta": _LADIES,
    "Salwar": _LADIES,
    "Bra": _LADIES,
    "Panties": _LADIES,
    "Skirt": _LADIES,
    "Top": _LADIES,
    "Nighty": _LADIES,
    "Frock": CategoryDefault(gender="Female", age_group="Girl"),
    "Romper": CategoryDefault(age_group="Baby"),
}


def load_vocabulary(path=None) -> Vocabulary:
    """
    Return the default vocabulary, or one read from a JSON file.

    The file holds the same fields as Vocabulary; fields it leaves out are empty,
    not inherited from the defaults.
    """
    if path is None:
        return DEFAULT_VOCABULARY

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Vocabulary file not found at {path}")

    vocabulary = Vocabulary.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info("Loaded vocabulary from %s (%d colours, %d companies, %d categories)",
                path, len(vocabulary.colours), len(vocabulary.companies), len(vocabulary.categories))
    return vocabulary
