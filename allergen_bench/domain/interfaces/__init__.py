"""
Benchmark Domain Interfaces

These interfaces define the contracts for the benchmark's external
collaborators. All implementations must adhere to these interfaces to ensure:
- Consistent behavior across different implementations
- Easy mocking for testing
- Decoupling from infrastructure details
"""

from .inference_engine import IInferenceEngine
from .record_store import IRecordStore
from .dataset_loader import IDatasetLoader, FoodItem
from .memory_probe import IMemoryProbe, MemorySnapshot

__all__ = [
    # Inference
    'IInferenceEngine',

    # Storage
    'IRecordStore',

    # Datasets
    'IDatasetLoader',
    'FoodItem',

    # Memory
    'IMemoryProbe',
    'MemorySnapshot',
]
