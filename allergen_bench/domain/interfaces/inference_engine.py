"""
Inference Engine Interface

This interface defines how the benchmark invokes an on-device language model.
The engine itself (model loading, tokenization, generation) is external;
the benchmark only sees a prompt going in and a raw result string coming out.
"""

from abc import ABC, abstractmethod


class IInferenceEngine(ABC):
    """
    Interface for running one allergen-detection prompt against a model.

    CRITICAL IMPLEMENTATION REQUIREMENTS:

    1. **Synchronous**: infer() blocks until the model has finished. The
       orchestrator measures wall-clock latency around this call, so the
       engine must not return early or defer work.

    2. **One call at a time**: The orchestrator never calls infer()
       concurrently. Implementations need not be thread-safe but must tolerate
       being called from a worker thread.

    3. **Result format**: The returned string follows the ResultCodec wire
       format, "TTFT_MS=..;ITPS=..;OTPS=..;OET_MS=..|<prediction>", or is a
       bare prediction when the engine reports no timings.

    4. **Errors**: Failures raise InferenceError. Do not encode errors as
       prediction text.

    Implementations:
    - HttpInferenceEngine: llama.cpp-compatible HTTP server
    - Test doubles in tests/
    """

    @abstractmethod
    def infer(self, prompt: str, model_ref: str) -> str:
        """
        Run the prompt against the referenced model.

        Args:
            prompt: Fully-built allergen detection prompt
            model_ref: Resolved model reference (path or served model name)

        Returns:
            Raw result string in ResultCodec format

        Raises:
            InferenceError: If the engine cannot produce a result
        """
        pass

    @property
    @abstractmethod
    def engine_id(self) -> str:
        """
        Return identifier for this engine.

        Used in logs only; it MUST be stable across runs.
        """
        pass
