"""Dataset loader adapters"""
from .csv_dataset_loader import CsvDatasetLoader

__all__ = ["CsvDatasetLoader"]
