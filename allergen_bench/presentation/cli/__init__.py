"""Command-line interface for allergen-bench."""
