"""
Benchmark Factories

Factory classes for creating fully-wired benchmark components.
"""

from .benchmark_factory import BenchmarkFactory

__all__ = [
    'BenchmarkFactory',
]
