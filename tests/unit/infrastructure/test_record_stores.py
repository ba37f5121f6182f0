"""
Unit tests for the record store adapters.
"""

import json

import pytest

from allergen_bench.domain.exceptions import RecordStoreError
from allergen_bench.infrastructure.storage import InMemoryRecordStore, JsonlRecordStore


class TestJsonlRecordStore:
    """Tests for JsonlRecordStore"""

    def test_missing_file_is_empty(self, tmp_path):
        assert JsonlRecordStore(tmp_path / "records.jsonl").list_all() == []

    def test_append_then_list(self, tmp_path):
        store = JsonlRecordStore(tmp_path / "nested" / "records.jsonl")

        store.append({"modelName": "a", "latencyMs": 10})
        store.append({"modelName": "b", "predictedAllergens": "milk, egg"})

        assert store.list_all() == [
            {"modelName": "a", "latencyMs": 10},
            {"modelName": "b", "predictedAllergens": "milk, egg"},
        ]
        assert len(store.path.read_text(encoding="utf-8").splitlines()) == 2

    def test_skips_corrupt_lines(self, tmp_path):
        path = tmp_path / "records.jsonl"
        path.write_text(
            json.dumps({"dataId": "1"}) + "\n"
            "{not json\n"
            "\n"
            "[1, 2]\n"
            + json.dumps({"dataId": "2"}) + "\n",
            encoding="utf-8",
        )

        documents = JsonlRecordStore(path).list_all()

        assert [doc["dataId"] for doc in documents] == ["1", "2"]

    def test_skips_lines_with_invalid_utf8(self, tmp_path):
        path = tmp_path / "records.jsonl"
        path.write_bytes(
            b'{"dataId": "1"}\n'
            b'{"modelName": "b\xff"}\n'
            b'{"dataId": "2"}\n'
        )

        documents = JsonlRecordStore(path).list_all()

        assert [doc["dataId"] for doc in documents] == ["1", "2"]

    def test_unicode(self, tmp_path):
        store = JsonlRecordStore(tmp_path / "records.jsonl")
        store.append({"foodName": "Crème brûlée"})

        assert store.list_all()[0]["foodName"] == "Crème brûlée"

    def test_append_failure_raises_store_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        store = JsonlRecordStore(blocker / "records.jsonl")

        with pytest.raises(RecordStoreError):
            store.append({"dataId": "1"})

    def test_clear(self, tmp_path):
        store = JsonlRecordStore(tmp_path / "records.jsonl")
        store.append({"dataId": "1"})

        store.clear()

        assert store.list_all() == []


class TestInMemoryRecordStore:
    """Tests for InMemoryRecordStore"""

    def test_documents_are_copied(self):
        store = InMemoryRecordStore()
        document = {"dataId": "1"}

        store.append(document)
        document["dataId"] = "changed"
        listed = store.list_all()
        listed[0]["dataId"] = "changed again"

        assert store.list_all() == [{"dataId": "1"}]
        assert len(store) == 1
