"""
Record Store Interface

This interface defines how benchmark records are persisted and read back.
The store is an append-only document collection with no schema enforcement.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class IRecordStore(ABC):
    """
    Interface for an append-only store of benchmark record documents.

    DESIGN PRINCIPLES:

    1. **Append-only**: Records are written once and never updated.
    2. **Schemaless**: Documents may lack fields. Readers must normalise via
       BenchmarkRecord.from_document rather than trusting the shape.
    3. **Portable**: Documents are JSON-compatible dictionaries using the
       camelCase keys produced by BenchmarkRecord.to_document().

    Implementations:
    - JsonlRecordStore: Local JSON-lines file
    - InMemoryRecordStore: Memory only (testing)
    """

    @abstractmethod
    def append(self, document: Dict[str, Any]) -> None:
        """
        Append one record document.

        Args:
            document: JSON-compatible record document

        Raises:
            RecordStoreError: If the write fails
        """
        pass

    @abstractmethod
    def list_all(self) -> List[Dict[str, Any]]:
        """
        Return every stored document in insertion order.

        Raises:
            RecordStoreError: If the store cannot be read
        """
        pass
