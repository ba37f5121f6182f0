"""
Value objects for the ranked, badged leaderboard view.

This is a pure data structure with no I/O dependencies.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from .model_summary import ModelSummary


class RankingMetric(str, Enum):
    """Metrics with an independent per-metric ranking."""
    LATENCY = "latency"
    TTFT = "ttft"
    ACCURACY = "accuracy"
    HALLUCINATION = "hallucination"
    OVER_PREDICTION = "over_prediction"

    @property
    def badge_title(self) -> str:
        return _BADGE_TITLES[self]


_BADGE_TITLES = {
    RankingMetric.LATENCY: "Fastest Latency",
    RankingMetric.TTFT: "Fastest TTFT",
    RankingMetric.ACCURACY: "Best Accuracy",
    RankingMetric.HALLUCINATION: "Lowest Hallucination",
    RankingMetric.OVER_PREDICTION: "Lowest Over-Prediction",
}


@dataclass(frozen=True)
class Badge:
    """A top-N placement in one per-metric ranking."""
    metric: RankingMetric
    rank: int

    @property
    def label(self) -> str:
        return f"#{self.rank} {self.metric.badge_title}"


@dataclass(frozen=True)
class LeaderboardEntry:
    """
    One model's position on the leaderboard.

    Attributes:
        position: 1-based overall position by composite score
        summary: The model's summary, with score filled in
        latency_norm: avg latency divided by the slowest model's avg latency
        ranks: 1-based rank of this model in every per-metric ranking
        badges: Badges earned, in RankingMetric order
    """
    position: int
    summary: ModelSummary
    latency_norm: float
    ranks: Dict[RankingMetric, int] = field(default_factory=dict)
    badges: List[Badge] = field(default_factory=list)

    @property
    def model(self) -> str:
        return self.summary.model

    @property
    def score(self) -> float:
        return self.summary.score

    @property
    def strengths(self) -> str:
        return (
            f"#{self.ranks[RankingMetric.ACCURACY]} Accuracy\n"
            f"#{self.ranks[RankingMetric.LATENCY]} Latency"
        )

    @property
    def weaknesses(self) -> str:
        return (
            f"#{self.ranks[RankingMetric.HALLUCINATION]} Hallucination\n"
            f"#{self.ranks[RankingMetric.OVER_PREDICTION]} Over-Prediction"
        )


@dataclass(frozen=True)
class Leaderboard:
    """
    Ranked view over all models of one evaluation pass.

    Attributes:
        entries: Entries in overall leaderboard order
        rankings: Model identifiers in order for each per-metric ranking
    """
    entries: List[LeaderboardEntry] = field(default_factory=list)
    rankings: Dict[RankingMetric, List[str]] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def models(self) -> List[str]:
        return [entry.model for entry in self.entries]

    def get(self, model: str) -> Optional[LeaderboardEntry]:
        for entry in self.entries:
            if entry.model == model:
                return entry
        return None
