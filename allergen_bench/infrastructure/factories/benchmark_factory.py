"""
Benchmark Factory

Factory for creating fully-wired benchmark use cases with all dependencies.

This factory handles the dependency injection needed for benchmark runs,
evaluation and export, making it easy to create properly configured use
cases in different contexts (CLI, tests, notebooks, etc.).
"""

import os
from typing import Any, Dict, Optional

from allergen_bench.application.interfaces import IProgressObserver
from allergen_bench.application.use_cases import (
    EvaluateModelsUseCase,
    ExportReportsUseCase,
    RunBenchmarkUseCase,
)
from allergen_bench.config import get_config
from allergen_bench.domain.interfaces import IInferenceEngine, IRecordStore
from allergen_bench.domain.services import LeaderboardRanker, ScoringWeights
from allergen_bench.infrastructure.datasets import CsvDatasetLoader
from allergen_bench.infrastructure.engines import HttpInferenceEngine
from allergen_bench.infrastructure.exporters import CsvReportExporter, MarkdownReportGenerator
from allergen_bench.infrastructure.probes import PsutilMemoryProbe
from allergen_bench.infrastructure.storage import JsonlRecordStore


class BenchmarkFactory:
    """
    Factory to create fully-wired benchmark use cases.

    Design Principles:
    1. **Environment-Aware**: Uses environment variables over config file values
    2. **Explicit Overrides**: Explicit parameters win over both
    3. **Sensible Defaults**: benchmark_config.yaml holds the defaults

    Environment Variables:
    - INFERENCE_URL: Completion server URL (default: inference.url)
    - RECORD_STORE_PATH: JSON-lines record file (default: storage.path)
    - EXPORT_DIR: Report output directory (default: export.directory)
    """

    @staticmethod
    def _config() -> Dict[str, Any]:
        return get_config()

    @staticmethod
    def resolve_store_path(store_path: Optional[str] = None) -> str:
        storage = BenchmarkFactory._config().get("storage") or {}
        return store_path or os.getenv("RECORD_STORE_PATH") or storage.get(
            "path", "benchmark_results/records.jsonl"
        )

    @staticmethod
    def resolve_export_dir(output_dir: Optional[str] = None) -> str:
        export = BenchmarkFactory._config().get("export") or {}
        return output_dir or os.getenv("EXPORT_DIR") or export.get(
            "directory", "benchmark_results/exports"
        )

    @staticmethod
    def create_record_store(store_path: Optional[str] = None) -> IRecordStore:
        """Create the JSON-lines record store."""
        return JsonlRecordStore(BenchmarkFactory.resolve_store_path(store_path))

    @staticmethod
    def create_inference_engine(
        inference_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> IInferenceEngine:
        """
        Create the HTTP inference engine.

        Args:
            inference_url: Completion server URL
            timeout: Request timeout in seconds

        Returns:
            Configured HttpInferenceEngine
        """
        inference = BenchmarkFactory._config().get("inference") or {}
        return HttpInferenceEngine(
            base_url=inference_url or os.getenv("INFERENCE_URL") or inference.get(
                "url", "http://localhost:8080"
            ),
            timeout=timeout if timeout is not None else float(inference.get("timeout", 120.0)),
            n_predict=int(inference.get("n_predict", 64)),
            temperature=float(inference.get("temperature", 0.0)),
        )

    @staticmethod
    def create_ranker() -> LeaderboardRanker:
        """Create the leaderboard ranker with the configured weights."""
        scoring = BenchmarkFactory._config().get("scoring") or {}
        weights = scoring.get("weights") or {}
        defaults = ScoringWeights()
        return LeaderboardRanker(
            weights=ScoringWeights(
                accuracy=float(weights.get("accuracy", defaults.accuracy)),
                latency=float(weights.get("latency", defaults.latency)),
                hallucination=float(weights.get("hallucination", defaults.hallucination)),
                over_prediction=float(weights.get("over_prediction", defaults.over_prediction)),
            ),
            badge_top_n=int(scoring.get("badge_top_n", 3)),
        )

    @staticmethod
    def create_benchmark_use_case(
        inference_url: Optional[str] = None,
        store_path: Optional[str] = None,
        engine: Optional[IInferenceEngine] = None,
        record_store: Optional[IRecordStore] = None,
        observer: Optional[IProgressObserver] = None,
    ) -> RunBenchmarkUseCase:
        """
        Create a fully-wired RunBenchmarkUseCase.

        Args:
            inference_url: Completion server URL (ignored when engine is given)
            store_path: Record file (ignored when record_store is given)
            engine: Pre-built inference engine
            record_store: Pre-built record store
            observer: Optional progress observer

        Returns:
            Configured RunBenchmarkUseCase ready to execute

        Examples:
            # Local llama.cpp server
            use_case = BenchmarkFactory.create_benchmark_use_case(
                inference_url="http://localhost:8080"
            )

            # Test mode with fakes
            use_case = BenchmarkFactory.create_benchmark_use_case(
                engine=FakeInferenceEngine(),
                record_store=InMemoryRecordStore(),
            )
        """
        storage = BenchmarkFactory._config().get("storage") or {}
        return RunBenchmarkUseCase(
            engine=engine or BenchmarkFactory.create_inference_engine(inference_url),
            dataset_loader=CsvDatasetLoader(),
            record_store=record_store or BenchmarkFactory.create_record_store(store_path),
            memory_probe=PsutilMemoryProbe(),
            observer=observer,
            write_queue_size=int(storage.get("write_queue_size", 64)),
        )

    @staticmethod
    def create_evaluate_use_case(
        store_path: Optional[str] = None,
        record_store: Optional[IRecordStore] = None,
    ) -> EvaluateModelsUseCase:
        """Create an EvaluateModelsUseCase over the configured record store."""
        return EvaluateModelsUseCase(
            record_store=record_store or BenchmarkFactory.create_record_store(store_path),
            ranker=BenchmarkFactory.create_ranker(),
        )

    @staticmethod
    def create_export_use_case(
        store_path: Optional[str] = None,
        record_store: Optional[IRecordStore] = None,
    ) -> ExportReportsUseCase:
        """Create an ExportReportsUseCase writing CSV and Markdown reports."""
        return ExportReportsUseCase(
            evaluate_use_case=BenchmarkFactory.create_evaluate_use_case(store_path, record_store),
            exporter=CsvReportExporter(),
            report_generator=MarkdownReportGenerator(),
        )
