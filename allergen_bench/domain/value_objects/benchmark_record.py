"""
Value object representing one (model, food item) benchmark trial.

Records are immutable once created. Documents read back from the record
store carry no schema guarantees, so BenchmarkRecord.from_document is the
single normalisation step: absent or unparsable fields resolve to the
defaults below before any metric is computed.
"""

import math
from typing import Any, FrozenSet, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .allergen_set import AllergenSet, EMPTY_SENTINEL, extract_allergen_set

# Timing, throughput and memory fields use -1 for "unavailable";
# latency is always measured by the orchestrator and defaults to 0.
UNAVAILABLE = -1

_TEXT_FIELDS = (
    "model_name", "data_id", "food_name", "ingredients",
    "raw_allergens", "mapped_allergens", "predicted_allergens",
)
_INT_FIELDS = (
    "latency_ms", "ttft_ms", "itps", "otps", "oet_ms",
    "java_heap_kb", "native_heap_kb", "pss_kb", "timestamp",
)


def _coerce_int(value: Any, default: int) -> int:
    """Best-effort integer conversion that never raises."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default

    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return default


class BenchmarkRecord(BaseModel):
    """
    One benchmark trial as persisted in the record store.

    Field aliases are the document keys used by the store; either the alias
    or the attribute name is accepted on input.

    Attributes:
        model_name: Model identifier the trial ran against
        data_id: Dataset item identifier
        food_name: Human-readable food name
        ingredients: Ingredient text that was embedded in the prompt
        raw_allergens: Ground-truth allergen text as found in the dataset
        mapped_allergens: Ground truth mapped onto the fixed vocabulary
        predicted_allergens: Canonical predicted text ("EMPTY" if none)
        latency_ms: Wall-clock inference latency
        ttft_ms: Time to first token, -1 if unavailable
        itps: Input tokens per second, -1 if unavailable
        otps: Output tokens per second, -1 if unavailable
        oet_ms: Overall execution time reported by the engine, -1 if unavailable
        java_heap_kb: Managed heap snapshot
        native_heap_kb: Native heap snapshot
        pss_kb: Proportional set size snapshot
        timestamp: Creation time in epoch milliseconds
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        protected_namespaces=(),
    )

    model_name: str = Field("Unknown", alias="modelName")
    data_id: str = Field("UNKNOWN", alias="dataId")
    food_name: str = Field("Unknown", alias="foodName")
    ingredients: str = Field("", alias="ingredients")
    raw_allergens: str = Field("", alias="rawAllergens")
    mapped_allergens: str = Field("", alias="mappedAllergens")
    predicted_allergens: str = Field(EMPTY_SENTINEL, alias="predictedAllergens")

    latency_ms: int = Field(0, alias="latencyMs")
    ttft_ms: int = Field(UNAVAILABLE, alias="ttftMs")
    itps: int = Field(UNAVAILABLE, alias="itps")
    otps: int = Field(UNAVAILABLE, alias="otps")
    oet_ms: int = Field(UNAVAILABLE, alias="oetMs")

    java_heap_kb: int = Field(UNAVAILABLE, alias="javaHeapKb")
    native_heap_kb: int = Field(UNAVAILABLE, alias="nativeHeapKb")
    pss_kb: int = Field(UNAVAILABLE, alias="pssKb")

    timestamp: int = Field(0, alias="timestamp")

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, value: Any, info) -> str:
        if value is None:
            return cls.model_fields[info.field_name].default
        return value if isinstance(value, str) else str(value)

    @field_validator(*_INT_FIELDS, mode="before")
    @classmethod
    def _coerce_number(cls, value: Any, info) -> int:
        return _coerce_int(value, cls.model_fields[info.field_name].default)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "BenchmarkRecord":
        """
        Normalise a schemaless store document into a fully-defaulted record.

        Never raises for missing or malformed fields. Keys holding null are
        treated as absent, so they take defaults and show in missing_fields.
        """
        return cls.model_validate({key: value for key, value in document.items() if value is not None})

    def to_document(self) -> dict:
        """Serialize using the store's document keys."""
        return self.model_dump(by_alias=True)

    @property
    def missing_fields(self) -> FrozenSet[str]:
        """Fields that were absent (or null) in the source document and took defaults."""
        return frozenset(type(self).model_fields) - self.model_fields_set

    @property
    def ground_truth_set(self) -> AllergenSet:
        return extract_allergen_set(self.mapped_allergens)

    @property
    def predicted_set(self) -> AllergenSet:
        return extract_allergen_set(self.predicted_allergens)
