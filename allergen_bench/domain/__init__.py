"""
Benchmark Domain Layer

Core domain interfaces, services and value objects for the allergen benchmark.
"""

from .interfaces import (
    IInferenceEngine,
    IRecordStore,
    IDatasetLoader,
    IMemoryProbe,
    FoodItem,
    MemorySnapshot,
)
from .exceptions import (
    AllergenBenchError,
    InferenceError,
    DatasetError,
    RecordStoreError,
)

__all__ = [
    # Interfaces
    'IInferenceEngine',
    'IRecordStore',
    'IDatasetLoader',
    'IMemoryProbe',

    # Data Classes
    'FoodItem',
    'MemorySnapshot',

    # Errors
    'AllergenBenchError',
    'InferenceError',
    'DatasetError',
    'RecordStoreError',
]
