"""
EvaluateModelsResponse DTO

Encapsulates the result of one evaluation pass over the record store.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from allergen_bench.domain.value_objects import BenchmarkRecord, Leaderboard, ModelSummary


@dataclass
class EvaluateModelsResponse:
    """
    Response from evaluating every model in the record store.

    Attributes:
        leaderboard: Ranked, badged view of all models
        summaries: Scored summaries in first-appearance order of their model
        records: Normalised records the evaluation was computed from
        defaulted_fields: Per field name, how many documents lacked it
        error: Error message if the store could not be read
    """
    leaderboard: Leaderboard = field(default_factory=Leaderboard)
    summaries: List[ModelSummary] = field(default_factory=list)
    records: List[BenchmarkRecord] = field(default_factory=list)
    defaulted_fields: Dict[str, int] = field(default_factory=dict)
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records
