"""
Unit tests for PsutilMemoryProbe.
"""

import tracemalloc
from collections import namedtuple
from unittest.mock import MagicMock, patch

import psutil

from allergen_bench.domain.interfaces import MemorySnapshot
from allergen_bench.infrastructure.probes import PsutilMemoryProbe

LinuxInfo = namedtuple("LinuxInfo", "rss vms uss pss swap")
MacInfo = namedtuple("MacInfo", "rss vms uss")


def probe_with(info=None, error=None):
    probe = PsutilMemoryProbe()
    probe._process = MagicMock()
    if error is not None:
        probe._process.memory_full_info.side_effect = error
    else:
        probe._process.memory_full_info.return_value = info
    return probe


class TestPsutilMemoryProbe:

    def test_real_process_snapshot(self):
        snapshot = PsutilMemoryProbe().snapshot()

        assert isinstance(snapshot, MemorySnapshot)
        assert snapshot.pss_kb == -1 or snapshot.pss_kb > 0

    def test_maps_uss_and_pss(self):
        probe = probe_with(LinuxInfo(rss=8192 * 1024, vms=0, uss=2048 * 1024, pss=4096 * 1024, swap=0))

        with patch.object(tracemalloc, "is_tracing", return_value=False):
            snapshot = probe.snapshot()

        assert snapshot == MemorySnapshot(java_heap_kb=-1, native_heap_kb=2048, pss_kb=4096)

    def test_falls_back_to_rss_without_pss(self):
        probe = probe_with(MacInfo(rss=8192 * 1024, vms=0, uss=1024 * 1024))

        snapshot = probe.snapshot()

        assert snapshot.pss_kb == 8192
        assert snapshot.native_heap_kb == 1024

    def test_access_denied(self):
        probe = probe_with(error=psutil.AccessDenied())

        snapshot = probe.snapshot()

        assert snapshot.native_heap_kb == -1
        assert snapshot.pss_kb == -1

    def test_managed_heap_when_tracing(self):
        probe = probe_with(LinuxInfo(rss=0, vms=0, uss=0, pss=0, swap=0))

        with patch.object(tracemalloc, "is_tracing", return_value=True), \
                patch.object(tracemalloc, "get_traced_memory", return_value=(10 * 1024, 20 * 1024)):
            snapshot = probe.snapshot()

        assert snapshot.java_heap_kb == 10
