"""
Domain Service: Result Codec

Parses the inference engine's raw result string into prediction text and
timing metrics. Pure business logic with no infrastructure dependencies.

Wire format (canonical order, metrics first):

    TTFT_MS=120;ITPS=30;OTPS=12;OET_MS=900|milk, egg

A string without the separator is a bare prediction with no metrics.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

SEPARATOR = "|"
PAIR_DELIMITER = ";"
UNAVAILABLE = -1

TTFT_MS = "TTFT_MS"
ITPS = "ITPS"
OTPS = "OTPS"
OET_MS = "OET_MS"

METRIC_KEYS = (TTFT_MS, ITPS, OTPS, OET_MS)


@dataclass(frozen=True)
class DecodedResult:
    """
    Decoded inference result.

    Attributes:
        prediction_text: Model output with the metrics segment removed
        metrics: Recognised metric keys mapped to integer values. Empty when
            the raw string carried no metrics segment.
    """
    prediction_text: str
    metrics: Dict[str, int] = field(default_factory=dict)

    def metric(self, key: str) -> int:
        return self.metrics.get(key, UNAVAILABLE)

    @property
    def ttft_ms(self) -> int:
        return self.metric(TTFT_MS)

    @property
    def itps(self) -> int:
        return self.metric(ITPS)

    @property
    def otps(self) -> int:
        return self.metric(OTPS)

    @property
    def oet_ms(self) -> int:
        return self.metric(OET_MS)


class ResultCodec:
    """
    Domain service for the inference result wire format.

    decode() never raises: malformed segments resolve to -1 per key.
    """

    def decode(self, raw: Optional[str]) -> DecodedResult:
        """
        Split a raw result into prediction text and metrics.

        Args:
            raw: Raw string returned by the inference engine

        Returns:
            DecodedResult. Every recognised key is present in the metrics map
            whenever a metrics segment exists; missing or unparsable values
            are -1.
        """
        if not raw:
            return DecodedResult(prediction_text="")

        if SEPARATOR not in raw:
            return DecodedResult(prediction_text=raw)

        meta, _, prediction = raw.partition(SEPARATOR)
        return DecodedResult(
            prediction_text=prediction,
            metrics=self.parse_metrics(meta),
        )

    def parse_metrics(self, meta: str) -> Dict[str, int]:
        """
        Parse a "KEY=VALUE;KEY=VALUE" segment.

        Unrecognised keys are ignored; recognised keys default to -1.
        """
        metrics = {key: UNAVAILABLE for key in METRIC_KEYS}

        for pair in meta.split(PAIR_DELIMITER):
            key, sep, value = pair.partition("=")
            key = key.strip()
            if not sep or key not in metrics:
                continue
            metrics[key] = self._parse_int(value)

        return metrics

    def encode(self, prediction: str, metrics: Mapping[str, int]) -> str:
        """
        Build a raw result string in canonical order.

        Recognised keys missing from metrics are written as -1.
        """
        meta = PAIR_DELIMITER.join(
            f"{key}={int(metrics.get(key, UNAVAILABLE))}" for key in METRIC_KEYS
        )
        return f"{meta}{SEPARATOR}{prediction}"

    @staticmethod
    def _parse_int(value: str) -> int:
        try:
            return int(value.strip())
        except ValueError:
            return UNAVAILABLE
