"""
Pure leaderboard ranking with no I/O dependencies.

Combines the ModelSummaries of one evaluation pass into a composite-score
leaderboard, independent per-metric rankings and top-N badges.
"""

from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Sequence

from allergen_bench.domain.value_objects import (
    Badge,
    Leaderboard,
    LeaderboardEntry,
    ModelSummary,
    RankingMetric,
)
from .metrics_engine import safe_ratio


@dataclass(frozen=True)
class ScoringWeights:
    """
    Weights of the composite score.

    score = accuracy·w_acc − latency_norm·w_lat − hallucination·w_hal − over_prediction·w_op
    """
    accuracy: float = 0.5
    latency: float = 0.2
    hallucination: float = 0.2
    over_prediction: float = 0.1


def _ttft_sort_key(summary: ModelSummary) -> tuple:
    # models that never reported TTFT sort after every measured model
    unavailable = summary.avg_ttft_ms <= 0
    return (unavailable, summary.avg_ttft_ms)


_RANKING_KEYS: Dict[RankingMetric, Callable[[ModelSummary], object]] = {
    RankingMetric.LATENCY: lambda s: s.avg_latency_ms,
    RankingMetric.TTFT: _ttft_sort_key,
    RankingMetric.ACCURACY: lambda s: -s.accuracy,
    RankingMetric.HALLUCINATION: lambda s: s.hallucination_rate,
    RankingMetric.OVER_PREDICTION: lambda s: s.over_prediction_rate,
}


class LeaderboardRanker:
    """
    Ranks models for the leaderboard.

    All orderings are stable sorts, so ties keep the input order of the
    summaries.
    """

    def __init__(self, weights: ScoringWeights = ScoringWeights(), badge_top_n: int = 3):
        if badge_top_n < 0:
            raise ValueError(f"badge_top_n cannot be negative, got {badge_top_n}")
        self._weights = weights
        self._badge_top_n = badge_top_n

    @property
    def weights(self) -> ScoringWeights:
        return self._weights

    def latency_norms(self, summaries: Sequence[ModelSummary]) -> List[float]:
        """avg latency over the slowest model's avg latency (0 when that is 0)."""
        if not summaries:
            return []
        max_latency = max(s.avg_latency_ms for s in summaries)
        return [safe_ratio(s.avg_latency_ms, max_latency) for s in summaries]

    def score(self, summary: ModelSummary, latency_norm: float) -> float:
        """Composite score of one model."""
        w = self._weights
        return (
            w.accuracy * summary.accuracy
            - w.latency * latency_norm
            - w.hallucination * summary.hallucination_rate
            - w.over_prediction * summary.over_prediction_rate
        )

    def rank(self, summaries: Sequence[ModelSummary]) -> Leaderboard:
        """
        Build the leaderboard for one evaluation pass.

        Args:
            summaries: One summary per model, in input order

        Returns:
            Leaderboard with scored entries, per-metric rankings and badges
        """
        if not summaries:
            return Leaderboard()

        norms = self.latency_norms(summaries)
        scored = [
            replace(summary, score=self.score(summary, norm))
            for summary, norm in zip(summaries, norms)
        ]
        norm_by_index = dict(enumerate(norms))

        # per-metric positions are tracked by input index, model names may repeat
        indexed = list(enumerate(scored))
        rankings: Dict[RankingMetric, List[str]] = {}
        positions: Dict[RankingMetric, Dict[int, int]] = {}
        for metric, key in _RANKING_KEYS.items():
            ordered = sorted(indexed, key=lambda pair: key(pair[1]))
            rankings[metric] = [summary.model for _, summary in ordered]
            positions[metric] = {index: rank for rank, (index, _) in enumerate(ordered, start=1)}

        overall = sorted(indexed, key=lambda pair: -pair[1].score)

        entries = []
        for position, (index, summary) in enumerate(overall, start=1):
            ranks = {metric: positions[metric][index] for metric in RankingMetric}
            badges = [
                Badge(metric=metric, rank=rank)
                for metric, rank in ranks.items()
                if rank <= self._badge_top_n
            ]
            entries.append(LeaderboardEntry(
                position=position,
                summary=summary,
                latency_norm=norm_by_index[index],
                ranks=ranks,
                badges=badges,
            ))

        return Leaderboard(entries=entries, rankings=rankings)
