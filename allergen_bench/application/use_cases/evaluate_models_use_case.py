"""
Evaluate Models Use Case

Builds the cross-model leaderboard from every record in the store.
"""

import logging
import uuid
from collections import Counter
from typing import Optional

from allergen_bench.application.dtos import EvaluateModelsResponse
from allergen_bench.domain.interfaces import IRecordStore
from allergen_bench.domain.services import LeaderboardRanker, SummaryBuilder
from allergen_bench.domain.value_objects import BenchmarkRecord
from allergen_bench.logging_utils import StructuredLogger
from allergen_bench.models import ComponentType, EventType


class EvaluateModelsUseCase:
    """
    Use case for scoring and ranking every benchmarked model.

    Workflow:
    1. Read every document from the record store
    2. Normalise each document into a BenchmarkRecord (defaults applied)
    3. Aggregate per-model summaries
    4. Score, rank and badge the models

    Steps 2-4 are pure; only step 1 touches I/O.
    """

    def __init__(
        self,
        record_store: IRecordStore,
        summary_builder: Optional[SummaryBuilder] = None,
        ranker: Optional[LeaderboardRanker] = None,
    ):
        self._record_store = record_store
        self._summary_builder = summary_builder or SummaryBuilder()
        self._ranker = ranker or LeaderboardRanker()
        self._logger = StructuredLogger(ComponentType.EVALUATOR)

    def execute(self) -> EvaluateModelsResponse:
        """
        Evaluate all models in the record store.

        Returns:
            EvaluateModelsResponse; an empty store yields an empty leaderboard.
            Store read failures are returned in response.error.
        """
        trace_id = str(uuid.uuid4())[:8]

        try:
            documents = self._record_store.list_all()
        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)}"
            self._logger.log_event(trace_id, EventType.EVALUATION_FAILED, error_msg, level=logging.ERROR)
            return EvaluateModelsResponse(error=error_msg)

        records = [BenchmarkRecord.from_document(document) for document in documents]

        defaulted: Counter = Counter()
        for record in records:
            defaulted.update(record.missing_fields)

        summaries = self._summary_builder.build_all(records)
        leaderboard = self._ranker.rank(summaries)
        scored = [leaderboard.get(summary.model).summary for summary in summaries]

        self._logger.log_event(
            trace_id,
            EventType.EVALUATION_COMPLETED,
            leaderboard.models,
            metrics={"records": len(records), "models": len(summaries)},
        )

        return EvaluateModelsResponse(
            leaderboard=leaderboard,
            summaries=scored,
            records=records,
            defaulted_fields=dict(defaulted),
        )
