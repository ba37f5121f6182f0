"""
Value object representing multi-label quality and safety statistics.

This is a pure data structure with no I/O dependencies.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class QualityResult:
    """
    Quality bundle for one model, computed from its (ground truth, prediction) pairs.

    Attributes:
        precision: tp / (tp + fp)
        recall: tp / (tp + fn)
        micro_f1: 2tp / (2tp + fp + fn) over pooled counts
        macro_f1: Mean per-label F1 over the nine vocabulary labels
        fnr: False negative rate, fn / (tp + fn)
        hallucination_rate: Micro-level fp / (fp + tp); distinct from the
            document-level rate carried by ModelSummary
        over_prediction_rate: fp / total (false positives per item)
        abstention_rate: Fraction of items with an empty prediction
        exact_match_rate: Fraction of items whose predicted set equals ground truth
        hamming_loss: Mean symmetric-difference size per item
        tp: Pooled true positives
        fp: Pooled false positives
        fn: Pooled false negatives
        total: Number of pairs evaluated
    """
    precision: float = 0.0
    recall: float = 0.0
    micro_f1: float = 0.0
    macro_f1: float = 0.0
    fnr: float = 0.0
    hallucination_rate: float = 0.0
    over_prediction_rate: float = 0.0
    abstention_rate: float = 0.0
    exact_match_rate: float = 0.0
    hamming_loss: float = 0.0
    tp: int = 0
    fp: int = 0
    fn: int = 0
    total: int = 0

    RATIO_FIELDS = (
        "precision", "recall", "micro_f1", "macro_f1", "fnr",
        "hallucination_rate", "abstention_rate", "exact_match_rate",
    )

    def __post_init__(self):
        """Validate invariants."""
        for name in self.RATIO_FIELDS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0.0, 1.0], got {value}")

        # per-item averages of label counts: unbounded above
        for name in ("over_prediction_rate", "hamming_loss"):
            if getattr(self, name) < 0.0:
                raise ValueError(f"{name} cannot be negative, got {getattr(self, name)}")

    @property
    def f1_score(self) -> float:
        """Alias of micro_f1."""
        return self.micro_f1

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
