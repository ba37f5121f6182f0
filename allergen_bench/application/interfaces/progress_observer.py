"""
IProgressObserver Interface

Receives per-item progress notifications from a running benchmark.
"""

from abc import ABC, abstractmethod

from allergen_bench.application.dtos import BenchmarkProgress


class IProgressObserver(ABC):
    """
    Interface for benchmark progress observers.

    Observers are called on the orchestrator's task after every item,
    whether the item produced a record or failed. An observer that raises
    is logged and ignored; it can never abort the run.
    """

    @abstractmethod
    def on_progress(self, progress: BenchmarkProgress) -> None:
        """
        Handle one progress notification.

        Args:
            progress: Run state, item index and the record produced (if any)
        """
        pass
