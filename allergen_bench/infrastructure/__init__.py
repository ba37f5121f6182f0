"""
Benchmark Infrastructure

Infrastructure implementations for benchmarks (engines, storage, datasets,
exporters, probes, factories).
"""
