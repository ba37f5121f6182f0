"""
Benchmark Domain Services

Pure, stateless services: no I/O, safe to share across threads.
"""

from .result_codec import ResultCodec, DecodedResult, METRIC_KEYS
from .prompt_builder import PromptBuilder
from .metrics_engine import MetricsEngine, safe_ratio
from .summary_builder import SummaryBuilder, group_by_model
from .leaderboard_ranker import LeaderboardRanker, ScoringWeights

__all__ = [
    "ResultCodec",
    "DecodedResult",
    "METRIC_KEYS",
    "PromptBuilder",
    "MetricsEngine",
    "safe_ratio",
    "SummaryBuilder",
    "group_by_model",
    "LeaderboardRanker",
    "ScoringWeights",
]
