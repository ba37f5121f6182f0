"""
Unit tests for SummaryBuilder and its record-level predicates.
"""

import pytest

from conftest import make_record

from allergen_bench.domain.services import SummaryBuilder, group_by_model
from allergen_bench.domain.services.summary_builder import (
    has_document_hallucination,
    has_document_over_prediction,
    is_string_exact_match,
    mean_available,
)


class TestRecordPredicates:
    """Tests for the per-record predicates"""

    def test_string_exact_match_is_textual(self):
        assert is_string_exact_match(make_record(mapped="milk, egg", predicted="milk, egg"))
        # same set, different text
        assert not is_string_exact_match(make_record(mapped="egg, milk", predicted="milk, egg"))

    def test_blank_ground_truth_never_matches(self):
        assert not is_string_exact_match(make_record(mapped="", predicted="EMPTY"))
        assert not is_string_exact_match(make_record(mapped="  ", predicted="  "))

    def test_document_hallucination(self):
        assert has_document_hallucination(make_record(mapped="milk", predicted="milk, soy"))
        assert not has_document_hallucination(make_record(mapped="milk, soy", predicted="milk"))
        assert not has_document_hallucination(make_record(mapped="milk", predicted="EMPTY"))

    def test_document_over_prediction(self):
        assert has_document_over_prediction(make_record(mapped="milk", predicted="milk, egg"))
        assert not has_document_over_prediction(make_record(mapped="milk", predicted="egg"))


class TestMeanAvailable:
    """Tests for mean_available()"""

    def test_ignores_unavailable_and_zero(self):
        assert mean_available([-1, 0, 100, 300]) == 200.0

    def test_nothing_measured(self):
        assert mean_available([-1, -1]) == 0.0
        assert mean_available([]) == 0.0


class TestGroupByModel:
    def test_first_appearance_order(self):
        records = [make_record(model="b"), make_record(model="a"), make_record(model="b")]

        grouped = group_by_model(records)

        assert list(grouped) == ["b", "a"]
        assert len(grouped["b"]) == 2


class TestBuild:
    """Tests for SummaryBuilder.build()"""

    def test_summary_fields(self):
        records = [
            make_record(data_id="1", mapped="milk", predicted="milk", latency_ms=100, ttft_ms=50,
                        oet_ms=400, pss_kb=1000),
            make_record(data_id="2", mapped="egg", predicted="egg, soy", latency_ms=300, ttft_ms=-1,
                        oet_ms=-1, pss_kb=3000),
            make_record(data_id="3", mapped="", predicted="EMPTY", latency_ms=200),
        ]

        summary = SummaryBuilder().build("model-a", records)

        assert summary.model == "model-a"
        assert summary.total == 3
        assert summary.correct == 1
        assert summary.accuracy == pytest.approx(1 / 3)
        assert summary.avg_latency_ms == 200.0
        assert summary.avg_ttft_ms == 50.0
        assert summary.hallucination_rate == pytest.approx(1 / 3)
        assert summary.over_prediction_rate == pytest.approx(1 / 3)
        assert summary.score == 0.0

        # set-exact: items 1 and 3 match
        assert summary.quality.exact_match_rate == pytest.approx(2 / 3)
        assert summary.quality.tp == 2
        assert summary.quality.fp == 1

    def test_efficiency_averages(self):
        records = [
            make_record(latency_ms=100, oet_ms=400, itps=20, java_heap_kb=-1),
            make_record(latency_ms=300, oet_ms=-1, itps=40, java_heap_kb=-1),
        ]

        efficiency = SummaryBuilder().build("m", records).efficiency

        assert efficiency.latency_ms == 200.0
        assert efficiency.oet_ms == 400.0
        assert efficiency.total_time_ms == 600.0
        assert efficiency.itps == 30.0
        assert efficiency.java_heap_kb == 0.0
        assert efficiency.ttft_ms == 0.0

    def test_empty_records_rejected(self):
        with pytest.raises(ValueError):
            SummaryBuilder().build("m", [])

    def test_build_all(self):
        records = [make_record(model="a"), make_record(model="b"), make_record(model="a")]

        summaries = SummaryBuilder().build_all(records)

        assert [summary.model for summary in summaries] == ["a", "b"]
        assert [summary.total for summary in summaries] == [2, 1]
