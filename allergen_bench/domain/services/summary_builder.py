"""
Per-model summary aggregation.

Groups normalised benchmark records by model and computes the
report-layer statistics that sit beside the MetricsEngine bundle:
string-exact accuracy, document-level hallucination and over-prediction
rates, and averaged efficiency fields.
"""

from typing import Dict, Iterable, List, Optional, Sequence

import numpy as np

from allergen_bench.domain.value_objects import (
    BenchmarkRecord,
    EfficiencyStats,
    ModelSummary,
)
from .metrics_engine import MetricsEngine, safe_ratio


def group_by_model(records: Iterable[BenchmarkRecord]) -> Dict[str, List[BenchmarkRecord]]:
    """Group records by model identifier, preserving first-appearance order."""
    grouped: Dict[str, List[BenchmarkRecord]] = {}
    for record in records:
        grouped.setdefault(record.model_name, []).append(record)
    return grouped


def mean_available(values: Iterable[int]) -> float:
    """Mean of the measured (> 0) values; 0.0 if none were measured."""
    measured = np.fromiter((v for v in values if v > 0), dtype=float)
    if measured.size == 0:
        return 0.0
    return float(measured.mean())


def is_string_exact_match(record: BenchmarkRecord) -> bool:
    """Mapped-allergen text is non-blank and identical to the predicted text."""
    return bool(record.mapped_allergens.strip()) and record.mapped_allergens == record.predicted_allergens


def has_document_hallucination(record: BenchmarkRecord) -> bool:
    """The prediction names at least one label absent from the ground truth."""
    predicted = record.predicted_set
    return bool(predicted) and bool(predicted - record.ground_truth_set)


def has_document_over_prediction(record: BenchmarkRecord) -> bool:
    """The prediction holds more labels than the ground truth."""
    return len(record.predicted_set) > len(record.ground_truth_set)


class SummaryBuilder:
    """
    Builds ModelSummary objects from benchmark records.

    Stateless apart from the injected MetricsEngine; safe to share.
    """

    def __init__(self, metrics_engine: Optional[MetricsEngine] = None):
        self._metrics_engine = metrics_engine or MetricsEngine()

    def build(self, model: str, records: Sequence[BenchmarkRecord]) -> ModelSummary:
        """
        Summarise one model's records.

        Args:
            model: Model identifier
            records: All records of that model (at least one)

        Returns:
            ModelSummary with score 0.0; LeaderboardRanker fills the score

        Raises:
            ValueError: If records is empty
        """
        total = len(records)
        if total == 0:
            raise ValueError(f"No records to summarise for model '{model}'")

        quality = self._metrics_engine.calculate(
            (record.ground_truth_set, record.predicted_set) for record in records
        )

        correct = sum(1 for record in records if is_string_exact_match(record))
        hallucinated = sum(1 for record in records if has_document_hallucination(record))
        over_predicted = sum(1 for record in records if has_document_over_prediction(record))

        avg_latency = float(np.mean([record.latency_ms for record in records]))

        return ModelSummary(
            model=model,
            total=total,
            correct=correct,
            accuracy=safe_ratio(correct, total),
            avg_latency_ms=avg_latency,
            avg_ttft_ms=mean_available(record.ttft_ms for record in records),
            hallucination_rate=safe_ratio(hallucinated, total),
            over_prediction_rate=safe_ratio(over_predicted, total),
            quality=quality,
            efficiency=self._efficiency(records),
        )

    def build_all(self, records: Iterable[BenchmarkRecord]) -> List[ModelSummary]:
        """Summarise every model present in records, in first-appearance order."""
        return [
            self.build(model, model_records)
            for model, model_records in group_by_model(records).items()
        ]

    @staticmethod
    def _efficiency(records: Sequence[BenchmarkRecord]) -> EfficiencyStats:
        latency = mean_available(record.latency_ms for record in records)
        oet = mean_available(record.oet_ms for record in records)
        return EfficiencyStats(
            latency_ms=latency,
            ttft_ms=mean_available(record.ttft_ms for record in records),
            itps=mean_available(record.itps for record in records),
            otps=mean_available(record.otps for record in records),
            oet_ms=oet,
            total_time_ms=latency + oet,
            java_heap_kb=mean_available(record.java_heap_kb for record in records),
            native_heap_kb=mean_available(record.native_heap_kb for record in records),
            pss_kb=mean_available(record.pss_kb for record in records),
        )
