"""
CSV Dataset Loader

Loads food items from a flat CSV file with the header
id,name,ingredients,allergens_raw,allergens_mapped.
"""

import csv
from pathlib import Path
from typing import List

from allergen_bench.domain.exceptions import DatasetError
from allergen_bench.domain.interfaces import FoodItem, IDatasetLoader
from allergen_bench.logging_utils import get_logger

logger = get_logger(__name__)

REQUIRED_COLUMNS = ("id", "name", "ingredients")
OPTIONAL_COLUMNS = ("allergens_raw", "allergens_mapped")


class CsvDatasetLoader(IDatasetLoader):
    """
    Dataset loader for CSV files.

    Column names are matched case-insensitively after trimming. The two
    allergen columns are optional and default to empty text. Rows without
    an id are skipped.
    """

    def __init__(self, encoding: str = "utf-8-sig"):
        # utf-8-sig strips the BOM spreadsheet tools like to add
        self._encoding = encoding

    def load(self, source: str) -> List[FoodItem]:
        path = Path(source)
        if not path.is_file():
            raise DatasetError(f"Dataset not found: {source}")

        try:
            with open(path, "r", encoding=self._encoding, newline="") as f:
                reader = csv.DictReader(f)
                if reader.fieldnames is None:
                    raise DatasetError(f"Dataset is empty: {source}")

                columns = {name.strip().lower(): name for name in reader.fieldnames if name}
                missing = [c for c in REQUIRED_COLUMNS if c not in columns]
                if missing:
                    raise DatasetError(
                        f"Dataset {source} is missing required columns: {', '.join(missing)}"
                    )

                items = []
                for line_no, row in enumerate(reader, start=2):
                    values = {
                        key: (row.get(columns[key]) or "").strip() if key in columns else ""
                        for key in REQUIRED_COLUMNS + OPTIONAL_COLUMNS
                    }
                    if not values["id"]:
                        logger.warning(f"Skipping row {line_no} of {source}: no id")
                        continue
                    items.append(FoodItem(
                        id=values["id"],
                        name=values["name"],
                        ingredients=values["ingredients"],
                        allergens_raw=values["allergens_raw"],
                        allergens_mapped=values["allergens_mapped"],
                    ))
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise DatasetError(f"Cannot read dataset {source}: {e}") from e

        logger.info(f"Loaded {len(items)} items from {source}")
        return items
