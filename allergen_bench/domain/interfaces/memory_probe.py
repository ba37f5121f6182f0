"""
Memory Probe Interface

Captures a process memory snapshot after each inference call.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class MemorySnapshot:
    """
    Memory snapshot in kilobytes; -1 marks a value the platform cannot report.

    Attributes:
        java_heap_kb: Managed (interpreter) heap in use
        native_heap_kb: Native heap in use
        pss_kb: Proportional set size of the process
    """
    java_heap_kb: int = -1
    native_heap_kb: int = -1
    pss_kb: int = -1


class IMemoryProbe(ABC):
    """
    Interface for sampling process memory.

    snapshot() MUST NOT raise: unavailable values are reported as -1.
    """

    @abstractmethod
    def snapshot(self) -> MemorySnapshot:
        """Take a memory snapshot of the current process."""
        pass
