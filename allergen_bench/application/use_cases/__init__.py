"""
Benchmark Application Use Cases

Use cases orchestrate domain logic and infrastructure adapters.
"""

from .run_benchmark_use_case import RunBenchmarkUseCase
from .evaluate_models_use_case import EvaluateModelsUseCase
from .export_reports_use_case import ExportReportsUseCase

__all__ = [
    'RunBenchmarkUseCase',
    'EvaluateModelsUseCase',
    'ExportReportsUseCase',
]
