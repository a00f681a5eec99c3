import logging
from typing import List, Optional, Tuple

import pandas as pd

from config import TAG_COLUMNS
from models import Marker, TagSet, Vocabulary
from tagging.normalizer import collapse_whitespace
from tagging.vocabulary import DEFAULT_VOCABULARY

logger = logging.getLogger(__name__)

SET_CATEGORY = "Set"
SHIRT_OVER_JEANS = frozenset({"Jeans", "Shirt"})


def remove_token(text: str, token: str) -> str:
    return text.replace(token, " ")


def first_match(text: str, tokens: List[str]) -> Tuple[Optional[str], str]:
    # First token in list order that occurs in the text wins and is removed
    for token in tokens:
        if token and token in text:
            return token, remove_token(text, token)
    return None, text


def match_colour(text: str, colours: List[str]) -> Tuple[Optional[str], str]:
    return first_match(text, colours)


def match_company(text: str, companies: List[str]) -> Tuple[Optional[str], str]:
    return first_match(text, companies)


def match_marker(text: str, markers: List[Marker]) -> Tuple[Optional[Marker], str]:
    for marker in markers:
        if marker.token and marker.token in text:
            return marker, remove_token(text, marker.token)
    return None, text


def match_gender_age(text: str, markers: List[Marker]) -> Tuple[Optional[Marker], str]:
    """Gender markers ("Girl", "Ladies", "Mens", ...) set gender and age group together."""
    return match_marker(text, markers)


def match_age_group(text: str, markers: List[Marker], age_group: Optional[str] = None) -> Tuple[Optional[str], str]:
    """
    Age-only markers ("Baby", "Kids", ...). Only consulted while the age group is still unknown;
    a description already carrying "Girl" keeps "Baby" in its details.
    """
    if age_group is not None:
        return age_group, text
    marker, text = match_marker(text, markers)
    return (marker.age_group if marker else None), text


def match_categories(text: str, categories: List[str]) -> List[str]:
    # Every category found counts, resolve_category picks among them
    return [category for category in categories if category and category in text]


def resolve_category(candidates: List[str]) -> Optional[str]:
    """
    Pick one category out of everything that matched.

    - one candidate: that one
    - two: "Set" if present, "Shirt" over "Jeans", otherwise the candidate containing
      the other ("T-Shirt" over "Shirt", "Panties" over "Pant"); None when neither contains the other
    - more than two: "Set" if present, otherwise None
    """
    unique = list(dict.fromkeys(candidates))
    if not unique:
        return None
    if len(unique) == 1:
        return unique[0]
    if SET_CATEGORY in unique:
        return SET_CATEGORY
    if len(unique) > 2:
        return None

    first, second = unique
    if frozenset(unique) == SHIRT_OVER_JEANS:
        return "Shirt"
    if first in second:
        return second
    if second in first:
        return first
    return None


def match_category(text: str, categories: List[str]) -> Tuple[Optional[str], str]:
    category = resolve_category(match_categories(text, categories))
    if category is None:
        return None, text
    return category, remove_token(text, category)


def residual_details(text: str) -> str:
    return collapse_whitespace(text)


def extract(description, vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> TagSet:
    """
    Tag a single description.

    Passes run in a fixed order over the shrinking remaining text: colour, gender/age,
    age only, company, then category last so the earlier removals cannot feed it
    false positives ("Pepe Jeans" is a company, not jeans).
    """
    if not isinstance(description, str):
        description = "" if pd.api.types.is_scalar(description) and pd.isna(description) else str(description)

    colour, remaining = match_colour(description, vocabulary.colours)

    marker, remaining = match_gender_age(remaining, vocabulary.gender_markers)
    gender = marker.gender if marker else None
    age_group = marker.age_group if marker else None

    age_group, remaining = match_age_group(remaining, vocabulary.age_markers, age_group)
    company, remaining = match_company(remaining, vocabulary.companies)
    category, remaining = match_category(remaining, vocabulary.categories)

    return TagSet(
        colour=colour,
        category=category,
        company=company,
        details=residual_details(remaining),
        gender=gender,
        age_group=age_group,
    )


class DescriptionTagger:
    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary
        self.logger = logging.getLogger(__name__)

    def tag(self, description) -> TagSet:
        tags = extract(description, self.vocabulary)
        self.logger.debug("Tagged %r -> %s", description, tags)
        return tags

    def tag_series(self, descriptions: pd.Series) -> pd.DataFrame:
        """Tag every description; the result is index-aligned with the input series."""
        rows = [self.tag(desc).as_row() for desc in descriptions]
        return pd.DataFrame(rows, index=descriptions.index, columns=TAG_COLUMNS, dtype=object)


# Optional standalone function interface
default_tagger = DescriptionTagger()


def tag_description(description) -> TagSet:
    return default_tagger.tag(description)
