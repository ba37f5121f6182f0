"""
Run Benchmark Use Case

Benchmarks one model against one food-item dataset.

This use case is the orchestrator of a benchmark run. It coordinates
dataset loading, prompt construction, inference, result decoding, memory
sampling, record persistence and progress reporting.
"""

import asyncio
import logging
import time
import uuid
from typing import List, Optional

import numpy as np

from allergen_bench.application.dtos import (
    BenchmarkProgress,
    CancellationToken,
    RunBenchmarkRequest,
    RunBenchmarkResponse,
    RunState,
)
from allergen_bench.application.interfaces import IProgressObserver
from allergen_bench.application.services import RecordWriter
from allergen_bench.domain.exceptions import InferenceError
from allergen_bench.domain.interfaces import (
    FoodItem,
    IDatasetLoader,
    IInferenceEngine,
    IMemoryProbe,
    IRecordStore,
)
from allergen_bench.domain.services import MetricsEngine, PromptBuilder, ResultCodec
from allergen_bench.domain.services.metrics_engine import LabelPair
from allergen_bench.domain.value_objects import (
    BenchmarkRecord,
    approximate_lexical_match,
    format_allergen_text,
)
from allergen_bench.logging_utils import StructuredLogger
from allergen_bench.models import ComponentType, EventType


class RunBenchmarkUseCase:
    """
    Use case for running one model over one dataset.

    Workflow per item, strictly in dataset order and one at a time:
    1. Build the fixed allergen prompt from the item's ingredients
    2. Invoke the inference engine in a worker thread and time the call
    3. Decode the raw result and lexically match it onto the vocabulary
    4. Sample process memory
    5. Build the record, queue it for persistence, notify the observer

    Design Principles:
    1. **Dependency Injection**: Engine, loader, store and probe injected via constructor
    2. **Single Responsibility**: Only orchestrates; metrics live in MetricsEngine
    3. **Testability**: Every collaborator is an interface
    4. **Async Support**: Inference runs off the event loop, persistence in the background

    Error Handling:
    - An InferenceError fails only its item; the run continues
    - Store failures are counted in the response, never raised
    - Anything else (e.g. an unreadable dataset) ends the run in FAILED
      with the message in response.error
    """

    def __init__(
        self,
        engine: IInferenceEngine,
        dataset_loader: IDatasetLoader,
        record_store: IRecordStore,
        memory_probe: IMemoryProbe,
        prompt_builder: Optional[PromptBuilder] = None,
        codec: Optional[ResultCodec] = None,
        metrics_engine: Optional[MetricsEngine] = None,
        observer: Optional[IProgressObserver] = None,
        write_queue_size: int = 64,
    ):
        """
        Initialize the use case with dependencies.

        Args:
            engine: Inference engine, shared across runs
            dataset_loader: Loader for food-item datasets
            record_store: Destination of benchmark records
            memory_probe: Process memory sampler
            prompt_builder: Prompt template (defaults to PromptBuilder)
            codec: Raw result decoder (defaults to ResultCodec)
            metrics_engine: Run-level quality metrics (defaults to MetricsEngine)
            observer: Optional per-item progress observer
            write_queue_size: Capacity of the record write queue
        """
        self._engine = engine
        self._dataset_loader = dataset_loader
        self._record_store = record_store
        self._memory_probe = memory_probe
        self._prompt_builder = prompt_builder or PromptBuilder()
        self._codec = codec or ResultCodec()
        self._metrics_engine = metrics_engine or MetricsEngine()
        self._observer = observer
        self._write_queue_size = write_queue_size
        self._logger = StructuredLogger(ComponentType.ORCHESTRATOR)
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        """State of the most recent run."""
        return self._state

    async def execute(
        self,
        request: RunBenchmarkRequest,
        cancellation: Optional[CancellationToken] = None,
    ) -> RunBenchmarkResponse:
        """
        Execute a benchmark run.

        Args:
            request: Dataset and model to benchmark
            cancellation: Token checked before each item; an in-flight item
                always finishes

        Returns:
            RunBenchmarkResponse with run-level quality metrics and write counts.
            No exceptions propagate to the caller.
        """
        run_id = str(uuid.uuid4())[:8]
        model_name = request.resolved_model_name
        self._state = RunState.RUNNING

        records: List[BenchmarkRecord] = []
        pairs: List[LabelPair] = []
        errors: List[str] = []
        failed_items = 0
        total_items = 0

        writer = RecordWriter(self._record_store, max_size=self._write_queue_size, trace_id=run_id)

        try:
            items = await asyncio.to_thread(self._dataset_loader.load, request.dataset_path)
            total_items = len(items)
            self._logger.log_event(
                run_id,
                EventType.RUN_STARTED,
                {"model": model_name, "dataset": request.dataset_path},
                metrics={"total_items": total_items},
            )

            writer.start()
            for index, item in enumerate(items):
                if cancellation is not None and cancellation.cancelled:
                    self._state = RunState.CANCELLED
                    break

                try:
                    record = await self._run_item(item, request.model_ref, model_name)
                except InferenceError as e:
                    failed_items += 1
                    message = f"{item.id}: {e}"
                    errors.append(message)
                    self._logger.log_event(
                        run_id, EventType.ITEM_FAILED, message,
                        metrics={"index": index}, level=logging.WARNING,
                    )
                    self._notify(BenchmarkProgress(run_id, model_name, RunState.RUNNING, index, total_items))
                    continue

                records.append(record)
                pairs.append((record.ground_truth_set, record.predicted_set))
                await writer.submit(record)

                self._logger.log_event(
                    run_id, EventType.ITEM_COMPLETED, record.data_id,
                    metrics={"index": index, "latency_ms": record.latency_ms},
                    level=logging.DEBUG,
                )
                self._notify(BenchmarkProgress(run_id, model_name, RunState.RUNNING, index, total_items, record))

            if self._state == RunState.RUNNING:
                self._state = RunState.COMPLETED

            report = await writer.close()
            errors.extend(report.errors)

            quality = self._metrics_engine.calculate(pairs)
            mean_latency = float(np.mean([r.latency_ms for r in records])) if records else 0.0

            event = EventType.RUN_CANCELLED if self._state == RunState.CANCELLED else EventType.RUN_COMPLETED
            self._logger.log_event(
                run_id, event, {"model": model_name},
                metrics={
                    "completed_items": len(records),
                    "failed_items": failed_items,
                    "micro_f1": quality.micro_f1,
                    "mean_latency_ms": mean_latency,
                },
            )

            return RunBenchmarkResponse(
                run_id=run_id,
                model_name=model_name,
                state=self._state,
                total_items=total_items,
                completed_items=len(records),
                failed_items=failed_items,
                quality=quality,
                mean_latency_ms=mean_latency,
                records_written=report.written,
                write_failures=report.failed,
                errors=errors,
            )

        except Exception as e:
            # Capture error and return failed response
            error_msg = f"{type(e).__name__}: {str(e)}"
            self._state = RunState.FAILED
            report = await writer.close()
            self._logger.log_event(
                run_id, EventType.RUN_FAILED, error_msg,
                metrics={"completed_items": len(records)}, level=logging.ERROR,
            )

            return RunBenchmarkResponse(
                run_id=run_id,
                model_name=model_name,
                state=RunState.FAILED,
                total_items=total_items,
                completed_items=len(records),
                failed_items=failed_items,
                records_written=report.written,
                write_failures=report.failed,
                errors=errors + report.errors,
                error=error_msg,
            )

    async def _run_item(self, item: FoodItem, model_ref: str, model_name: str) -> BenchmarkRecord:
        prompt = self._prompt_builder.build_allergen_prompt(item.ingredients)

        start = time.perf_counter()
        raw = await asyncio.to_thread(self._engine.infer, prompt, model_ref)
        latency_ms = max(1, int((time.perf_counter() - start) * 1000))

        decoded = self._codec.decode(raw)
        predicted = format_allergen_text(approximate_lexical_match(decoded.prediction_text))
        memory = self._memory_probe.snapshot()

        return BenchmarkRecord(
            model_name=model_name,
            data_id=item.id,
            food_name=item.name,
            ingredients=item.ingredients,
            raw_allergens=item.allergens_raw,
            mapped_allergens=item.allergens_mapped,
            predicted_allergens=predicted,
            latency_ms=latency_ms,
            ttft_ms=decoded.ttft_ms,
            itps=decoded.itps,
            otps=decoded.otps,
            oet_ms=decoded.oet_ms,
            java_heap_kb=memory.java_heap_kb,
            native_heap_kb=memory.native_heap_kb,
            pss_kb=memory.pss_kb,
            timestamp=int(time.time() * 1000),
        )

    def _notify(self, progress: BenchmarkProgress) -> None:
        if self._observer is None:
            return
        try:
            self._observer.on_progress(progress)
        except Exception as e:
            self._logger.log_event(
                progress.run_id,
                EventType.OBSERVER_FAILED,
                f"observer error: {type(e).__name__}: {e}",
                metrics={"index": progress.index},
                level=logging.WARNING,
            )
