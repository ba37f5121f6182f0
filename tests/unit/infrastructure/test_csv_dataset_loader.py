"""
Unit tests for CsvDatasetLoader.
"""

import pytest

from allergen_bench.domain.exceptions import DatasetError
from allergen_bench.infrastructure.datasets import CsvDatasetLoader


class TestCsvDatasetLoader:

    def test_loads_items_in_order(self, dataset_csv, food_items):
        items = CsvDatasetLoader().load(str(dataset_csv))

        assert items == food_items

    def test_quoted_fields_with_commas(self, tmp_path):
        path = tmp_path / "foods.csv"
        path.write_text(
            'id,name,ingredients,allergens_raw,allergens_mapped\n'
            '7,"Pad Thai","rice noodles, peanuts, egg","Peanuts, Eggs","peanut, egg"\n',
            encoding="utf-8",
        )

        (item,) = CsvDatasetLoader().load(str(path))

        assert item.ingredients == "rice noodles, peanuts, egg"
        assert item.allergens_mapped == "peanut, egg"

    def test_optional_columns_and_header_case(self, tmp_path):
        path = tmp_path / "foods.csv"
        path.write_text("\ufeffID, Name ,Ingredients\n1,Rice,rice\n,Blank,\n", encoding="utf-8")

        items = CsvDatasetLoader().load(str(path))

        assert len(items) == 1
        assert items[0].id == "1"
        assert items[0].allergens_raw == ""
        assert items[0].allergens_mapped == ""

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetError, match="not found"):
            CsvDatasetLoader().load(str(tmp_path / "nope.csv"))

    def test_missing_required_columns(self, tmp_path):
        path = tmp_path / "foods.csv"
        path.write_text("id,name\n1,Rice\n", encoding="utf-8")

        with pytest.raises(DatasetError, match="ingredients"):
            CsvDatasetLoader().load(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "foods.csv"
        path.write_text("", encoding="utf-8")

        with pytest.raises(DatasetError, match="empty"):
            CsvDatasetLoader().load(str(path))
