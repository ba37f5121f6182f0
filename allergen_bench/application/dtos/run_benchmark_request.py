"""
RunBenchmarkRequest DTO

Encapsulates all parameters needed to benchmark one model on one dataset.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class RunBenchmarkRequest:
    """
    Request to run a benchmark.

    Attributes:
        dataset_path: Dataset source handed to the dataset loader
        model_ref: Model reference handed to the inference engine
            (a model file path or a served model name)
        model_name: Identifier stored on every record; defaults to the file
            name of model_ref

    Design Notes:
        - The inference engine is NOT part of the request; it is injected
          into the use case once per process
    """
    dataset_path: str
    model_ref: str
    model_name: Optional[str] = None

    def __post_init__(self):
        """Validate request parameters"""
        if not self.dataset_path:
            raise ValueError("dataset_path cannot be empty")
        if not self.model_ref:
            raise ValueError("model_ref cannot be empty")

    @property
    def resolved_model_name(self) -> str:
        return self.model_name or Path(self.model_ref).name
