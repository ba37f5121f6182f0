"""
Dataset Loader Interface

This interface defines how food-item datasets are loaded for a benchmark run.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class FoodItem:
    """
    One food item with its ground-truth allergens.

    Attributes:
        id: Dataset identifier for the item
        name: Food name
        ingredients: Ingredient text embedded in the prompt
        allergens_raw: Allergen text as published by the source dataset
        allergens_mapped: Ground truth mapped onto the fixed vocabulary
    """
    id: str
    name: str
    ingredients: str
    allergens_raw: str = ""
    allergens_mapped: str = ""


class IDatasetLoader(ABC):
    """
    Interface for loading benchmark datasets.

    Loaders MUST return items in a stable order: the orchestrator processes
    them in index order and reports progress against that order.

    Implementations:
    - CsvDatasetLoader: Flat CSV files
    """

    @abstractmethod
    def load(self, source: str) -> List[FoodItem]:
        """
        Load all items from a dataset source.

        Args:
            source: Location of the dataset (e.g. a file path)

        Returns:
            Food items in dataset order

        Raises:
            DatasetError: If the source is missing or malformed
        """
        pass
