import os
import logging
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Columns of the 30-day sales export
INVOICE_COL = "InvoiceNo"
DESCRIPTION_COL = "Description"
SIZE_COL = "Size"
QUANTITY_COL = "Quantity"
UNIT_PRICE_COL = "UnitPrice"
PAYMENT_MODE_COL = "PaymentMode"
PAYMENT_TIME_COL = "PaymentTime"

REQUIRED_COLUMNS = [
    INVOICE_COL, DESCRIPTION_COL, SIZE_COL, QUANTITY_COL,
    UNIT_PRICE_COL, PAYMENT_MODE_COL, PAYMENT_TIME_COL,
]

# Columns appended by the tagger, row-aligned with Description
TAG_COLUMNS = ["Colour", "Category", "Company", "Details", "Gender", "AgeGroup"]

TAGGED_SALES_FILE = "tagged_sales.csv"
CATEGORY_SEGMENTS_FILE = "category_segments.csv"
ELBOW_PLOT_FILE = "elbow_plot.png"
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


class Settings(BaseModel):
    data_path: str = "data/sales.csv"
    output_dir: str = "data"
    log_dir: str = "logs"
    vocabulary_path: Optional[str] = None
    elbow_max_k: int = Field(default=8, ge=1)

    @classmethod
    def from_env(cls, env_file=None):
        # Values in .env never override variables already set in the environment
        load_dotenv(env_file)
        return cls(
            data_path=os.getenv("SALES_DATA_PATH", cls.model_fields["data_path"].default),
            output_dir=os.getenv("OUTPUT_DIR", cls.model_fields["output_dir"].default),
            log_dir=os.getenv("LOG_DIR", cls.model_fields["log_dir"].default),
            vocabulary_path=os.getenv("TAG_VOCABULARY_PATH") or None,
            elbow_max_k=os.getenv("ELBOW_MAX_K", cls.model_fields["elbow_max_k"].default),
        )


def setup_logging(log_dir="logs", log_file="pipeline.log", level=logging.INFO):
    # Log to both file and console
    os.makedirs(log_dir, exist_ok=True)
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(os.path.join(log_dir, log_file)),
            logging.StreamHandler()
        ]
    )
    return logging.getLogger("pipeline")
