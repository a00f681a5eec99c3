import logging
from typing import Dict

import pandas as pd

from models import CategoryDefault, TagSet
from tagging.vocabulary import DEFAULT_CATEGORY_DEFAULTS

logger = logging.getLogger(__name__)


def backfill_demographics(tags: TagSet, defaults: Dict[str, CategoryDefault] = DEFAULT_CATEGORY_DEFAULTS) -> TagSet:
    """
    Fill a missing gender and/or age group from the category's usual buyer.

    This is a guess, not a derivation: an untagged "T-Shirt" is assumed to be a men's one.
    Values already present on the tag set are never replaced.
    """
    default = defaults.get(tags.category) if tags.category else None
    if default is None:
        return tags

    updates = {}
    if tags.gender is None and default.gender is not None:
        updates["gender"] = default.gender
    if tags.age_group is None and default.age_group is not None:
        updates["age_group"] = default.age_group
    if not updates:
        return tags
    return tags.model_copy(update=updates)


def backfill_frame(df: pd.DataFrame, defaults: Dict[str, CategoryDefault] = DEFAULT_CATEGORY_DEFAULTS) -> pd.DataFrame:
    # Same rule over the Gender / AgeGroup columns of a tagged table
    df = df.copy()
    df["Gender"] = df["Gender"].astype(object)
    df["AgeGroup"] = df["AgeGroup"].astype(object)
    default_gender = df["Category"].map({k: v.gender for k, v in defaults.items()})
    default_age = df["Category"].map({k: v.age_group for k, v in defaults.items()})

    missing_gender = df["Gender"].isna() & default_gender.notna()
    missing_age = df["AgeGroup"].isna() & default_age.notna()

    df.loc[missing_gender, "Gender"] = default_gender[missing_gender]
    df.loc[missing_age, "AgeGroup"] = default_age[missing_age]

    logger.info("Backfilled gender on %d rows and age group on %d rows from category",
                int(missing_gender.sum()), int(missing_age.sum()))
    return df
