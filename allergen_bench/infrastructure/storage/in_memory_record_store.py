"""
In-memory Record Store

Keeps record documents in a list. Used for tests and dry runs.
"""

import copy
import threading
from typing import Any, Dict, List

from allergen_bench.domain.interfaces import IRecordStore


class InMemoryRecordStore(IRecordStore):
    """Thread-safe list-backed store; documents are copied on the way in and out."""

    def __init__(self):
        self._documents: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

    def append(self, document: Dict[str, Any]) -> None:
        with self._lock:
            self._documents.append(copy.deepcopy(document))

    def list_all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._documents)

    def __len__(self) -> int:
        with self._lock:
            return len(self._documents)
