"""
Shared test fixtures and test doubles for allergen-bench tests
"""

import csv
from typing import Callable, Dict, List, Optional, Union

import pytest

from allergen_bench.application.dtos import BenchmarkProgress
from allergen_bench.application.interfaces import IProgressObserver
from allergen_bench.domain.exceptions import DatasetError, InferenceError, RecordStoreError
from allergen_bench.domain.interfaces import (
    FoodItem,
    IDatasetLoader,
    IInferenceEngine,
    IMemoryProbe,
    IRecordStore,
    MemorySnapshot,
)
from allergen_bench.domain.value_objects import BenchmarkRecord
from allergen_bench.infrastructure.storage import InMemoryRecordStore


class FakeInferenceEngine(IInferenceEngine):
    """
    Inference engine returning canned raw results.

    responses maps an ingredient substring to the raw result; the first
    key found in the prompt wins. Values that are exceptions are raised.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Union[str, Exception]]] = None,
        default: str = "EMPTY",
        on_call: Optional[Callable[[int], None]] = None,
    ):
        self._responses = responses or {}
        self._default = default
        self._on_call = on_call
        self.calls: List[tuple] = []

    @property
    def engine_id(self) -> str:
        return "fake"

    def infer(self, prompt: str, model_ref: str) -> str:
        self.calls.append((prompt, model_ref))
        if self._on_call is not None:
            self._on_call(len(self.calls))
        for needle, result in self._responses.items():
            if needle in prompt:
                if isinstance(result, Exception):
                    raise result
                return result
        return self._default


class StaticMemoryProbe(IMemoryProbe):
    """Memory probe returning a fixed snapshot."""

    def __init__(self, snapshot: MemorySnapshot = MemorySnapshot(1024, 2048, 4096)):
        self._snapshot = snapshot

    def snapshot(self) -> MemorySnapshot:
        return self._snapshot


class ListDatasetLoader(IDatasetLoader):
    """Dataset loader serving an in-memory list; raises DatasetError for unknown sources."""

    def __init__(self, items: List[FoodItem], source: str = "foods.csv"):
        self._items = items
        self._source = source

    def load(self, source: str) -> List[FoodItem]:
        if source != self._source:
            raise DatasetError(f"Dataset not found: {source}")
        return list(self._items)


class FlakyRecordStore(InMemoryRecordStore):
    """In-memory store that rejects the documents of the given data ids."""

    def __init__(self, reject_ids=()):
        super().__init__()
        self._reject_ids = set(reject_ids)

    def append(self, document):
        if document.get("dataId") in self._reject_ids:
            raise RecordStoreError(f"rejected {document.get('dataId')}")
        super().append(document)


class UnreadableRecordStore(IRecordStore):
    """Store whose reads always fail."""

    def append(self, document):
        pass

    def list_all(self):
        raise RecordStoreError("store offline")


class RecordingObserver(IProgressObserver):
    """Observer that keeps every notification."""

    def __init__(self):
        self.events: List[BenchmarkProgress] = []

    def on_progress(self, progress: BenchmarkProgress) -> None:
        self.events.append(progress)


def make_record(
    model: str = "model-a",
    data_id: str = "1",
    mapped: str = "milk",
    predicted: str = "milk",
    latency_ms: int = 100,
    **kwargs,
) -> BenchmarkRecord:
    """Build a BenchmarkRecord with sensible defaults for tests."""
    return BenchmarkRecord(
        model_name=model,
        data_id=data_id,
        food_name=kwargs.pop("food_name", f"Food {data_id}"),
        ingredients=kwargs.pop("ingredients", "flour, water"),
        raw_allergens=kwargs.pop("raw_allergens", mapped),
        mapped_allergens=mapped,
        predicted_allergens=predicted,
        latency_ms=latency_ms,
        **kwargs,
    )


@pytest.fixture
def food_items():
    """Three food items: one dairy, one egg, one allergen-free"""
    return [
        FoodItem(id="1", name="Cheese Toast", ingredients="bread, cheddar cheese, butter",
                 allergens_raw="Milk, Wheat", allergens_mapped="milk, wheat"),
        FoodItem(id="2", name="Omelette", ingredients="eggs, salt, pepper",
                 allergens_raw="Eggs", allergens_mapped="egg"),
        FoodItem(id="3", name="Fruit Salad", ingredients="apple, banana, orange",
                 allergens_raw="", allergens_mapped=""),
    ]


@pytest.fixture
def dataset_loader(food_items):
    return ListDatasetLoader(food_items)


@pytest.fixture
def memory_probe():
    return StaticMemoryProbe()


@pytest.fixture
def record_store():
    return InMemoryRecordStore()


@pytest.fixture
def fake_engine():
    """Engine answering correctly for cheese and omelette, abstaining on fruit"""
    return FakeInferenceEngine(responses={
        "cheddar": "TTFT_MS=120;ITPS=30;OTPS=12;OET_MS=400|milk, wheat",
        "eggs": "TTFT_MS=100;ITPS=28;OTPS=10;OET_MS=350|Egg",
        "apple": "TTFT_MS=90;ITPS=31;OTPS=11;OET_MS=300|EMPTY",
    })


@pytest.fixture
def dataset_csv(tmp_path, food_items):
    """Write the food items to a CSV file and return its path"""
    path = tmp_path / "foods.csv"
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["id", "name", "ingredients", "allergens_raw", "allergens_mapped"])
        for item in food_items:
            writer.writerow([item.id, item.name, item.ingredients,
                             item.allergens_raw, item.allergens_mapped])
    return path


@pytest.fixture
def inference_failure():
    return InferenceError("server unavailable")
