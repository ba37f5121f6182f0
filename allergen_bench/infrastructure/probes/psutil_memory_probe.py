"""
psutil Memory Probe

Process memory sampling for benchmark records.

Mapping onto the record's memory fields:
- java_heap_kb: Python heap traced by tracemalloc (-1 unless tracing)
- native_heap_kb: unique set size (USS) of the process
- pss_kb: proportional set size, RSS where the platform has no PSS
"""

import tracemalloc
from typing import Optional

import psutil

from allergen_bench.domain.interfaces import IMemoryProbe, MemorySnapshot
from allergen_bench.logging_utils import get_logger

logger = get_logger(__name__)

UNAVAILABLE = -1


def _to_kb(value: Optional[int]) -> int:
    if value is None:
        return UNAVAILABLE
    return int(value) // 1024


class PsutilMemoryProbe(IMemoryProbe):
    """Memory probe for the current (or a given) process."""

    def __init__(self, pid: Optional[int] = None):
        self._process = psutil.Process(pid)

    def snapshot(self) -> MemorySnapshot:
        heap_kb = UNAVAILABLE
        if tracemalloc.is_tracing():
            current, _ = tracemalloc.get_traced_memory()
            heap_kb = _to_kb(current)

        try:
            info = self._process.memory_full_info()
        except psutil.Error as e:
            logger.warning(f"Memory snapshot unavailable: {e}")
            return MemorySnapshot(java_heap_kb=heap_kb)

        uss = getattr(info, "uss", None)
        pss = getattr(info, "pss", None)
        if pss is None:
            pss = getattr(info, "rss", None)

        return MemorySnapshot(
            java_heap_kb=heap_kb,
            native_heap_kb=_to_kb(uss),
            pss_kb=_to_kb(pss),
        )
