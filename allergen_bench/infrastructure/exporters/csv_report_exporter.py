"""
CSV Report Exporter

Writes the per-record prediction export and the stacked per-model metrics
export.
"""

import csv
from pathlib import Path
from typing import List, Optional, Sequence

from allergen_bench.application.interfaces import IReportExporter
from allergen_bench.domain.value_objects import BenchmarkRecord, ModelSummary

PREDICTION_HEADER = [
    "ID", "Model", "FoodName", "Ingredients", "RawAllergens",
    "MappedAllergens", "PredictedAllergens", "Outcome",
]

SAFETY_HEADER = ["Model", "HallucinationRate%", "OverPredictionRate%", "AbstentionRate%"]
QUALITY_HEADER = [
    "Model", "Precision%", "Recall%", "MicroF1", "MacroF1",
    "ExactMatch%", "HammingLoss", "FNR%",
]
EFFICIENCY_HEADER = [
    "Model", "LatencyMs", "TTFTms", "ITPS", "OTPS", "OETms",
    "TotalTimeMs", "JavaHeapKB", "NativeHeapKB", "PSSKB",
]

# every metrics row has the same width so spreadsheet imports line up
METRICS_COLUMNS = 11

MATCH = "MATCH"
MISMATCH = "MISMATCH"


def prediction_outcome(record: BenchmarkRecord) -> str:
    """MATCH when the mapped and predicted allergen sets are equal."""
    return MATCH if record.ground_truth_set == record.predicted_set else MISMATCH


def _pad(row: List[str]) -> List[str]:
    return row + [""] * (METRICS_COLUMNS - len(row))


def _pct(value: float) -> str:
    return f"{value * 100:.2f}"


def _num(value: float, digits: int = 4) -> str:
    return f"{value:.{digits}f}"


class CsvReportExporter(IReportExporter):
    """
    CSV implementation of IReportExporter.

    Prediction rows quote every field. The metrics file holds three
    sections (safety, quality, efficiency), each introduced by a title row
    and a header row and separated by one blank row.

    The safety section reports the document-level hallucination rate and
    the micro over-prediction rate (false positives per item).
    """

    def export_predictions(
        self,
        records: Sequence[BenchmarkRecord],
        output_path: Path,
        model_filter: Optional[str] = None,
    ) -> int:
        rows = 0
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f, quoting=csv.QUOTE_ALL)
            writer.writerow(PREDICTION_HEADER)
            for record in records:
                if model_filter is not None and record.model_name != model_filter:
                    continue
                writer.writerow([
                    record.data_id,
                    record.model_name,
                    record.food_name,
                    record.ingredients,
                    record.raw_allergens,
                    record.mapped_allergens,
                    record.predicted_allergens,
                    prediction_outcome(record),
                ])
                rows += 1
        return rows

    def export_metrics(self, summaries: Sequence[ModelSummary], output_path: Path) -> None:
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)

            writer.writerow(_pad(["SAFETY METRICS"]))
            writer.writerow(_pad(SAFETY_HEADER))
            for s in summaries:
                writer.writerow(_pad([
                    s.model,
                    _pct(s.hallucination_rate),
                    _pct(s.quality.over_prediction_rate),
                    _pct(s.quality.abstention_rate),
                ]))

            writer.writerow(_pad([]))
            writer.writerow(_pad(["QUALITY METRICS"]))
            writer.writerow(_pad(QUALITY_HEADER))
            for s in summaries:
                q = s.quality
                writer.writerow(_pad([
                    s.model,
                    _pct(q.precision),
                    _pct(q.recall),
                    _num(q.micro_f1),
                    _num(q.macro_f1),
                    _pct(q.exact_match_rate),
                    _num(q.hamming_loss),
                    _pct(q.fnr),
                ]))

            writer.writerow(_pad([]))
            writer.writerow(_pad(["EFFICIENCY METRICS"]))
            writer.writerow(_pad(EFFICIENCY_HEADER))
            for s in summaries:
                e = s.efficiency
                writer.writerow(_pad([
                    s.model,
                    _num(e.latency_ms, 1),
                    _num(e.ttft_ms, 1),
                    _num(e.itps, 1),
                    _num(e.otps, 1),
                    _num(e.oet_ms, 1),
                    _num(e.total_time_ms, 1),
                    _num(e.java_heap_kb, 1),
                    _num(e.native_heap_kb, 1),
                    _num(e.pss_kb, 1),
                ]))
