"""
Value objects for per-model aggregates.

ModelSummary is recomputed from the full record set on every evaluation
pass and is never persisted.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict

from .quality_result import QualityResult


@dataclass(frozen=True)
class EfficiencyStats:
    """
    Averaged efficiency fields for one model.

    Each average only includes values that were actually measured (> 0);
    0.0 means the field was unavailable for every record.
    """
    latency_ms: float = 0.0
    ttft_ms: float = 0.0
    itps: float = 0.0
    otps: float = 0.0
    oet_ms: float = 0.0
    total_time_ms: float = 0.0
    java_heap_kb: float = 0.0
    native_heap_kb: float = 0.0
    pss_kb: float = 0.0


@dataclass(frozen=True)
class ModelSummary:
    """
    Aggregated view of one model's benchmark records.

    Attributes:
        model: Model identifier
        total: Number of trials
        correct: Trials whose mapped-allergen text equals the predicted text
        accuracy: correct / total (string-exact, not set-exact)
        avg_latency_ms: Mean wall-clock latency
        avg_ttft_ms: Mean time to first token (0.0 if never reported)
        hallucination_rate: Fraction of trials whose prediction contains a
            label absent from the ground truth (document-level)
        over_prediction_rate: Fraction of trials predicting more labels than
            the ground truth holds (document-level)
        quality: Multi-label quality bundle from MetricsEngine
        efficiency: Averaged efficiency fields
        score: Composite leaderboard score, set by LeaderboardRanker
    """
    model: str
    total: int
    correct: int
    accuracy: float
    avg_latency_ms: float
    avg_ttft_ms: float
    hallucination_rate: float
    over_prediction_rate: float
    quality: QualityResult = field(default_factory=QualityResult)
    efficiency: EfficiencyStats = field(default_factory=EfficiencyStats)
    score: float = 0.0

    def __post_init__(self):
        """Validate invariants."""
        if self.total < 0 or self.correct < 0 or self.correct > self.total:
            raise ValueError(
                f"correct must be within [0, total], got {self.correct}/{self.total}"
            )
        for name in ("accuracy", "hallucination_rate", "over_prediction_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0.0, 1.0], got {value}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)
