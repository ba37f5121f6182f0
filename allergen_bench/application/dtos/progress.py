"""
Run progress DTOs

Run state, per-item progress notifications and the cancellation token.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from allergen_bench.domain.value_objects import BenchmarkRecord


class RunState(str, Enum):
    """Lifecycle of one benchmark run."""
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class BenchmarkProgress:
    """
    Progress notification delivered to observers after each item.

    Attributes:
        run_id: Run identifier
        model_name: Model being benchmarked
        state: Current run state
        index: 0-based index of the item just processed (-1 before the first item)
        total: Number of items in the dataset
        record: Record produced for the item, None if the item failed
    """
    run_id: str
    model_name: str
    state: RunState
    index: int
    total: int
    record: Optional[BenchmarkRecord] = None

    @property
    def completed(self) -> int:
        return self.index + 1

    @property
    def percent(self) -> int:
        if self.total == 0:
            return 0
        return (self.completed * 100) // self.total


class CancellationToken:
    """
    Thread-safe cancellation flag.

    The orchestrator checks it before each item; an item already in flight
    always finishes.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
