"""
allergen-bench

Benchmarking of small language models on food-allergen detection.

Architecture:
- domain: allergen vocabulary, record model, result codec, metrics and ranking
- application: run / evaluate / export use cases and their DTOs
- infrastructure: HTTP inference, record stores, CSV datasets, exporters
- presentation: command-line interface
"""

__version__ = "0.1.0"
