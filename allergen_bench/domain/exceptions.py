"""
Domain exceptions for allergen-bench.

Only failures that callers can act on get their own type. Missing fields,
unparsable metrics and empty denominators are absorbed into default values
and never raise.
"""


class AllergenBenchError(Exception):
    """Base class for all allergen-bench errors."""


class InferenceError(AllergenBenchError):
    """The inference engine could not produce a result for a prompt."""


class DatasetError(AllergenBenchError):
    """A benchmark dataset could not be read or is malformed."""


class RecordStoreError(AllergenBenchError):
    """A benchmark record could not be written to or read from the store."""
