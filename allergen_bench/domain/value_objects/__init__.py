"""Value objects for the allergen benchmark domain."""

from .allergen_set import (
    ALLERGEN_LABELS,
    EMPTY_SENTINEL,
    AllergenSet,
    extract_allergen_set,
    approximate_lexical_match,
    format_allergen_text,
)
from .benchmark_record import BenchmarkRecord, UNAVAILABLE
from .quality_result import QualityResult
from .model_summary import ModelSummary, EfficiencyStats
from .leaderboard import Leaderboard, LeaderboardEntry, Badge, RankingMetric

__all__ = [
    "ALLERGEN_LABELS",
    "EMPTY_SENTINEL",
    "AllergenSet",
    "extract_allergen_set",
    "approximate_lexical_match",
    "format_allergen_text",
    "BenchmarkRecord",
    "UNAVAILABLE",
    "QualityResult",
    "ModelSummary",
    "EfficiencyStats",
    "Leaderboard",
    "LeaderboardEntry",
    "Badge",
    "RankingMetric",
]
