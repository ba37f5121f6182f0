"""
Unit tests for the CSV and Markdown report exporters.
"""

import csv

import pytest

from conftest import make_record

from allergen_bench.domain.services import LeaderboardRanker, SummaryBuilder
from allergen_bench.infrastructure.exporters import (
    CsvReportExporter,
    MarkdownReportGenerator,
    prediction_outcome,
)
from allergen_bench.infrastructure.exporters.csv_report_exporter import (
    EFFICIENCY_HEADER,
    METRICS_COLUMNS,
    PREDICTION_HEADER,
    QUALITY_HEADER,
    SAFETY_HEADER,
)


@pytest.fixture
def records():
    return [
        make_record(model="alpha", data_id="1", mapped="milk, egg", predicted="egg, milk",
                    latency_ms=200, ttft_ms=80, oet_ms=600, pss_kb=2048),
        make_record(model="alpha", data_id="2", mapped="soy", predicted="EMPTY", latency_ms=100),
        make_record(model="beta", data_id="1", mapped="milk, egg", predicted="milk",
                    food_name='Quiche "Lorraine"', latency_ms=400),
    ]


@pytest.fixture
def summaries(records):
    return SummaryBuilder().build_all(records)


def read_rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestPredictionOutcome:

    def test_set_equality(self):
        assert prediction_outcome(make_record(mapped="milk, egg", predicted="Egg, milk")) == "MATCH"
        assert prediction_outcome(make_record(mapped="", predicted="EMPTY")) == "MATCH"
        assert prediction_outcome(make_record(mapped="milk", predicted="milk, soy")) == "MISMATCH"


class TestPredictionExport:
    """Tests for CsvReportExporter.export_predictions()"""

    def test_rows(self, records, tmp_path):
        path = tmp_path / "predictions.csv"

        count = CsvReportExporter().export_predictions(records, path)

        rows = read_rows(path)
        assert count == 3
        assert rows[0] == PREDICTION_HEADER
        assert rows[1] == ["1", "alpha", "Food 1", "flour, water", "milk, egg", "milk, egg",
                           "egg, milk", "MATCH"]
        assert rows[2][-1] == "MISMATCH"
        assert rows[3][2] == 'Quiche "Lorraine"'

    def test_every_field_quoted(self, records, tmp_path):
        path = tmp_path / "predictions.csv"

        CsvReportExporter().export_predictions(records[:1], path)

        header_line = path.read_text(encoding="utf-8").splitlines()[0]
        assert header_line.startswith('"ID","Model"')

    def test_model_filter(self, records, tmp_path):
        path = tmp_path / "predictions.csv"

        count = CsvReportExporter().export_predictions(records, path, model_filter="beta")

        rows = read_rows(path)
        assert count == 1
        assert [row[1] for row in rows[1:]] == ["beta"]

    def test_unwritable_destination_raises_oserror(self, records, tmp_path):
        with pytest.raises(OSError):
            CsvReportExporter().export_predictions(records, tmp_path / "missing" / "p.csv")


class TestMetricsExport:
    """Tests for CsvReportExporter.export_metrics()"""

    def test_sections(self, summaries, tmp_path):
        path = tmp_path / "metrics.csv"

        CsvReportExporter().export_metrics(summaries, path)

        rows = read_rows(path)
        assert all(len(row) == METRICS_COLUMNS for row in rows)

        titles = [row[0] for row in rows if row[0].endswith("METRICS")]
        assert titles == ["SAFETY METRICS", "QUALITY METRICS", "EFFICIENCY METRICS"]

        assert rows[1][:len(SAFETY_HEADER)] == SAFETY_HEADER
        quality_start = rows.index([r for r in rows if r[0] == "QUALITY METRICS"][0])
        assert rows[quality_start - 1] == [""] * METRICS_COLUMNS
        assert rows[quality_start + 1][:len(QUALITY_HEADER)] == QUALITY_HEADER
        efficiency_start = rows.index([r for r in rows if r[0] == "EFFICIENCY METRICS"][0])
        assert rows[efficiency_start + 1][:len(EFFICIENCY_HEADER)] == EFFICIENCY_HEADER

    def test_values(self, summaries, tmp_path):
        path = tmp_path / "metrics.csv"

        CsvReportExporter().export_metrics(summaries, path)

        rows = read_rows(path)
        alpha_safety = rows[2]
        assert alpha_safety[:4] == ["alpha", "0.00", "0.00", "50.00"]

        quality_rows = [r for r in rows if r[0] == "alpha"]
        alpha_quality = quality_rows[1]
        assert alpha_quality[1] == "100.00"        # precision
        assert alpha_quality[2] == "66.67"         # recall
        assert alpha_quality[5] == "50.00"         # exact match

        alpha_efficiency = quality_rows[2]
        assert alpha_efficiency[1] == "150.0"      # latency
        assert alpha_efficiency[2] == "80.0"       # ttft
        assert alpha_efficiency[6] == "750.0"      # latency + oet
        assert alpha_efficiency[9] == "2048.0"     # pss


class TestMarkdownReport:
    """Tests for MarkdownReportGenerator"""

    def test_report_sections(self, summaries, tmp_path):
        board = LeaderboardRanker().rank(summaries)
        path = tmp_path / "LEADERBOARD.md"

        MarkdownReportGenerator().generate(board, path)

        text = path.read_text(encoding="utf-8")
        assert text.startswith("# Allergen Detection Benchmark Leaderboard")
        for heading in ("## Leaderboard", "## Model Details", "## Quality", "## Safety", "## Efficiency"):
            assert heading in text
        assert "| 1 | alpha |" in text
        assert "#1 Best Accuracy" in text
        assert "Fastest Latency: alpha > beta" in text

    def test_empty_leaderboard(self, tmp_path):
        path = tmp_path / "LEADERBOARD.md"

        MarkdownReportGenerator().generate(LeaderboardRanker().rank([]), path)

        assert "No benchmark records found." in path.read_text(encoding="utf-8")
