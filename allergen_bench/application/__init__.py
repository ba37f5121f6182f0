"""
Benchmark Application Layer

Use cases, DTOs and application services for benchmark runs, evaluation
and report export.
"""
