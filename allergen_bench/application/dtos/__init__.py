"""
Benchmark Application DTOs

Data Transfer Objects for benchmark use cases.
"""

from .run_benchmark_request import RunBenchmarkRequest
from .run_benchmark_response import RunBenchmarkResponse
from .progress import RunState, BenchmarkProgress, CancellationToken
from .evaluate_models_response import EvaluateModelsResponse
from .export_reports import ExportReportsRequest, ExportReportsResponse

__all__ = [
    'RunBenchmarkRequest',
    'RunBenchmarkResponse',
    'RunState',
    'BenchmarkProgress',
    'CancellationToken',
    'EvaluateModelsResponse',
    'ExportReportsRequest',
    'ExportReportsResponse',
]
