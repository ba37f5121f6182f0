"""
JSON-lines Record Store

Append-only local persistence for benchmark record documents, one JSON
object per line.
"""

import json
import threading
from pathlib import Path
from typing import Any, Dict, List, Union

from allergen_bench.domain.exceptions import RecordStoreError
from allergen_bench.domain.interfaces import IRecordStore
from allergen_bench.logging_utils import get_logger

logger = get_logger(__name__)


class JsonlRecordStore(IRecordStore):
    """
    Record store backed by a .jsonl file.

    The file and its parent directory are created on first append. Lines
    that are not JSON objects are skipped on read with a warning, so one
    corrupt line never hides the rest of the store.
    """

    def __init__(self, path: Union[str, Path]):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, document: Dict[str, Any]) -> None:
        line = json.dumps(document, ensure_ascii=False, default=str)
        with self._lock:
            try:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with open(self._path, "a", encoding="utf-8") as f:
                    f.write(line + "\n")
            except OSError as e:
                raise RecordStoreError(f"Cannot append to {self._path}: {e}") from e

    def list_all(self) -> List[Dict[str, Any]]:
        if not self._path.exists():
            return []

        documents: List[Dict[str, Any]] = []
        with self._lock:
            try:
                with open(self._path, "rb") as f:
                    lines = f.readlines()
            except OSError as e:
                raise RecordStoreError(f"Cannot read {self._path}: {e}") from e

        for line_no, raw in enumerate(lines, start=1):
            raw = raw.strip()
            if not raw:
                continue
            try:
                document = json.loads(raw.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as e:
                logger.warning(f"Skipping malformed record at {self._path}:{line_no}: {e}")
                continue
            if not isinstance(document, dict):
                logger.warning(f"Skipping non-object record at {self._path}:{line_no}")
                continue
            documents.append(document)

        return documents

    def clear(self) -> None:
        """Remove every stored document."""
        with self._lock:
            if self._path.exists():
                self._path.unlink()
