import os
import logging
import traceback

import pandas as pd

from config import (
    DESCRIPTION_COL, PAYMENT_TIME_COL, QUANTITY_COL, REQUIRED_COLUMNS, SIZE_COL,
    TAG_COLUMNS, TAGGED_SALES_FILE, UNIT_PRICE_COL,
)
from tagging.backfill import backfill_frame
from tagging.extractor import DescriptionTagger
from tagging.normalizer import normalize_description
from tagging.vocabulary import DEFAULT_CATEGORY_DEFAULTS, DEFAULT_VOCABULARY


class SalesManager:
    def __init__(self, data_path, output_dir="data", vocabulary=DEFAULT_VOCABULARY,
                 category_defaults=DEFAULT_CATEGORY_DEFAULTS):
        os.makedirs(output_dir, exist_ok=True)

        self.data_path = data_path
        self.output_dir = output_dir
        self.vocabulary = vocabulary
        self.category_defaults = category_defaults
        self.tagger = DescriptionTagger(vocabulary)
        self.logger = logging.getLogger(__name__)

        self.df = None

    def load_dataset(self):
        # Load and clean the hand-entered sales export
        try:
            # Sizes stay text so waist size 32 is not read back as 32.0
            df = pd.read_csv(self.data_path, dtype={SIZE_COL: str})

            missing = set(REQUIRED_COLUMNS) - set(df.columns)
            if missing:
                raise ValueError(
                    f"Sales data '{self.data_path}' is missing required columns: {sorted(missing)}. "
                    f"Found columns: {list(df.columns)}"
                )

            before = len(df)
            df = df.dropna(subset=[DESCRIPTION_COL]).drop_duplicates().copy()

            # Quantity and price were typed by hand, anything unreadable or non-positive is dropped
            df[QUANTITY_COL] = pd.to_numeric(df[QUANTITY_COL], errors="coerce")
            df[UNIT_PRICE_COL] = pd.to_numeric(df[UNIT_PRICE_COL], errors="coerce")
            df = df[(df[QUANTITY_COL] > 0) & (df[UNIT_PRICE_COL] > 0)].copy()

            df[PAYMENT_TIME_COL] = pd.to_datetime(df[PAYMENT_TIME_COL], errors="coerce")

            # Sizes were not recorded for the first days of collection
            df[SIZE_COL] = df[SIZE_COL].astype(object).where(df[SIZE_COL].notna(), "Unknown").astype(str)

            df[DESCRIPTION_COL] = df[DESCRIPTION_COL].apply(
                lambda text: normalize_description(text, self.vocabulary.aliases)
            )
            df = df[df[DESCRIPTION_COL] != ""].reset_index(drop=True)

            self.df = df
            self.logger.info("Dataset loaded with %d rows (%d dropped during cleaning)", len(df), before - len(df))
            return self.df
        except Exception:
            self.logger.error("Failed to load and clean dataset from %s", self.data_path)
            self.logger.error(traceback.format_exc())
            raise

    def _require_dataset(self):
        if self.df is None:
            raise ValueError("Dataset not loaded. Please run load_dataset() first.")

    def tag_descriptions(self):
        self._require_dataset()
        tags = self.tagger.tag_series(self.df[DESCRIPTION_COL])

        # Re-tagging replaces earlier tag columns instead of duplicating them
        self.df = pd.concat([self.df.drop(columns=TAG_COLUMNS, errors="ignore"), tags], axis=1)

        coverage = tags[["Colour", "Category", "Company", "Gender"]].notna().mean()
        self.logger.info("Tagged %d descriptions. Coverage: %s", len(tags),
                         ", ".join(f"{col} {share:.0%}" for col, share in coverage.items()))
        return self.df

    def backfill_demographics(self):
        self._require_dataset()
        if "Category" not in self.df.columns:
            raise ValueError("Descriptions not tagged. Please run tag_descriptions() first.")
        self.df = backfill_frame(self.df, self.category_defaults)
        return self.df

    def add_revenue(self):
        self._require_dataset()
        self.df["TotalPrice"] = self.df[QUANTITY_COL] * self.df[UNIT_PRICE_COL]
        self.logger.info("Total revenue over the period: %.2f", self.df["TotalPrice"].sum())
        return self.df

    def save(self, output_name=TAGGED_SALES_FILE):
        self._require_dataset()
        output_path = os.path.join(self.output_dir, output_name)
        try:
            self.df.to_csv(output_path, index=False)
            self.logger.info("Tagged sales saved to %s", output_path)
            return output_path
        except Exception:
            self.logger.error("Failed to save tagged sales to %s", output_path)
            self.logger.error(traceback.format_exc())
            raise

    def run(self):
        self.load_dataset()
        self.tag_descriptions()
        self.backfill_demographics()
        self.add_revenue()
        self.save()
        return self.df
