"""
Record Writer

Bounded, asynchronous persistence of benchmark records.

The orchestrator submits each record as soon as it is built and moves on
to the next item; a single background task drains the queue and calls the
(blocking) record store in a worker thread. A full queue makes submit()
wait, so a slow store applies backpressure to the run instead of growing
memory without bound.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from allergen_bench.domain.interfaces import IRecordStore
from allergen_bench.domain.value_objects import BenchmarkRecord
from allergen_bench.logging_utils import StructuredLogger
from allergen_bench.models import ComponentType, EventType


@dataclass
class WriteReport:
    """
    Outcome of draining a RecordWriter.

    Attributes:
        written: Records the store accepted
        failed: Records the store rejected
        errors: One message per rejected record
    """
    written: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)

    @property
    def submitted(self) -> int:
        return self.written + self.failed


class RecordWriter:
    """
    Single-consumer write queue in front of an IRecordStore.

    Usage:
        writer = RecordWriter(store, max_size=64, trace_id=run_id)
        writer.start()
        await writer.submit(record)
        report = await writer.close()

    Failed writes are logged and counted; they are never retried.
    """

    def __init__(self, store: IRecordStore, max_size: int = 64, trace_id: str = "record-writer"):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self._store = store
        self._queue: "asyncio.Queue[Optional[BenchmarkRecord]]" = asyncio.Queue(maxsize=max_size)
        self._task: Optional[asyncio.Task] = None
        self._trace_id = trace_id
        self._report = WriteReport()
        self._closed = False
        self._logger = StructuredLogger(ComponentType.RECORD_WRITER)

    @property
    def report(self) -> WriteReport:
        return self._report

    def start(self) -> None:
        """Start the background drain task. Must be called from a running loop."""
        if self._task is None:
            self._task = asyncio.create_task(self._drain())

    async def submit(self, record: BenchmarkRecord) -> None:
        """Queue a record for persistence, waiting while the queue is full."""
        if self._closed:
            raise RuntimeError("RecordWriter is closed")
        self.start()
        await self._queue.put(record)

    async def close(self) -> WriteReport:
        """Flush every queued record, stop the drain task and return the report."""
        if not self._closed:
            self._closed = True
            if self._task is not None:
                await self._queue.put(None)
                await self._task
        return self._report

    async def _drain(self) -> None:
        while True:
            record = await self._queue.get()
            try:
                if record is None:
                    break
                await self._write(record)
            finally:
                self._queue.task_done()

    async def _write(self, record: BenchmarkRecord) -> None:
        document = record.to_document()
        try:
            await asyncio.to_thread(self._store.append, document)
        except Exception as e:
            message = f"{record.model_name}/{record.data_id}: {type(e).__name__}: {e}"
            self._report.failed += 1
            self._report.errors.append(message)
            self._logger.log_event(
                self._trace_id,
                EventType.WRITE_FAILED,
                message,
                metrics={"failed": self._report.failed},
                level=logging.ERROR,
            )
        else:
            self._report.written += 1
