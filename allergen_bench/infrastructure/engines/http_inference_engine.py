"""
Infrastructure: HTTP Inference Engine

Concrete implementation of IInferenceEngine for a llama.cpp-compatible
server (POST /completion).
"""

import logging
from typing import Any, Dict, Optional

import requests

from allergen_bench.domain.exceptions import InferenceError
from allergen_bench.domain.interfaces import IInferenceEngine
from allergen_bench.domain.services import ResultCodec
from allergen_bench.domain.services.result_codec import ITPS, OET_MS, OTPS, TTFT_MS, UNAVAILABLE
from allergen_bench.logging_utils import StructuredLogger
from allergen_bench.models import ComponentType, EventType


def _timing(timings: Dict[str, Any], key: str) -> int:
    value = timings.get(key)
    if value is None:
        return UNAVAILABLE
    try:
        return int(round(float(value)))
    except (TypeError, ValueError):
        return UNAVAILABLE


class HttpInferenceEngine(IInferenceEngine):
    """
    HTTP client for a llama.cpp-style completion server.

    The server's "timings" block is mapped onto the result wire format:
    prompt_ms -> TTFT_MS, prompt_per_second -> ITPS,
    predicted_per_second -> OTPS, predicted_ms -> OET_MS.
    Missing timings are reported as -1.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 120.0,
        n_predict: int = 64,
        temperature: float = 0.0,
        codec: Optional[ResultCodec] = None,
    ):
        """
        Initialize HTTP inference engine.

        Args:
            base_url: Base URL of the completion server
            timeout: Request timeout in seconds
            n_predict: Maximum tokens to generate
            temperature: Sampling temperature
            codec: Result encoder (defaults to ResultCodec)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.n_predict = n_predict
        self.temperature = temperature
        self._codec = codec or ResultCodec()
        self.logger = StructuredLogger(ComponentType.INFERENCE)

    @property
    def engine_id(self) -> str:
        return f"http:{self.base_url}"

    def infer(self, prompt: str, model_ref: str) -> str:
        """
        Run one completion request.

        Raises:
            InferenceError: On transport errors, non-200 responses or a
                response body without content
        """
        payload = {
            "prompt": prompt,
            "n_predict": self.n_predict,
            "temperature": self.temperature,
            "model": model_ref,
            "cache_prompt": False,
        }

        try:
            response = requests.post(
                f"{self.base_url}/completion",
                json=payload,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            self.logger.logger.error(f"Inference request failed: {e}")
            raise InferenceError(f"Request failed: {e}") from e

        if response.status_code != 200:
            self.logger.logger.error(
                f"Inference server error {response.status_code}: {response.text[:200]}"
            )
            raise InferenceError(f"Server returned {response.status_code}: {response.text[:200]}")

        try:
            body = response.json()
        except ValueError as e:
            raise InferenceError(f"Invalid JSON from inference server: {e}") from e

        content = body.get("content")
        if content is None:
            raise InferenceError("Inference server response has no 'content'")

        timings = body.get("timings") or {}
        metrics = {
            TTFT_MS: _timing(timings, "prompt_ms"),
            ITPS: _timing(timings, "prompt_per_second"),
            OTPS: _timing(timings, "predicted_per_second"),
            OET_MS: _timing(timings, "predicted_ms"),
        }

        self.logger.log_event(
            model_ref,
            EventType.ITEM_COMPLETED,
            content,
            metrics=metrics,
            level=logging.DEBUG,
        )

        return self._codec.encode(str(content).strip(), metrics)
