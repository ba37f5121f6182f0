"""
RunBenchmarkResponse DTO

Encapsulates results from one benchmark run.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from allergen_bench.domain.value_objects import QualityResult
from .progress import RunState


@dataclass
class RunBenchmarkResponse:
    """
    Response from running a benchmark.

    Attributes:
        run_id: Unique identifier for this run
        model_name: Model identifier written on every record
        state: Final run state (COMPLETED, CANCELLED or FAILED)
        total_items: Items in the dataset
        completed_items: Items that produced a record
        failed_items: Items whose inference call failed
        quality: Quality bundle over the completed items
        mean_latency_ms: Mean inference latency over the completed items
        records_written: Records acknowledged by the record store
        write_failures: Records the store rejected
        errors: Per-item and per-write error messages
        error: Fatal error message if the run could not proceed

    Design Notes:
        - Success/failure indicated by error field and state
        - Write failures do not fail the run; they are reported here
    """
    run_id: str
    model_name: str
    state: RunState
    total_items: int = 0
    completed_items: int = 0
    failed_items: int = 0
    quality: QualityResult = field(default_factory=QualityResult)
    mean_latency_ms: float = 0.0
    records_written: int = 0
    write_failures: int = 0
    errors: List[str] = field(default_factory=list)
    error: Optional[str] = None

    def __post_init__(self):
        """Validate response values"""
        for name in ("total_items", "completed_items", "failed_items",
                     "records_written", "write_failures"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative, got {getattr(self, name)}")
        if self.mean_latency_ms < 0:
            raise ValueError(f"mean_latency_ms cannot be negative, got {self.mean_latency_ms}")

    @property
    def succeeded(self) -> bool:
        """Check if the run finished every item without a fatal error"""
        return self.error is None and self.state == RunState.COMPLETED
