"""
Unit tests for HttpInferenceEngine

Tests the llama.cpp-style HTTP adapter with requests.post patched.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from allergen_bench.domain.exceptions import InferenceError
from allergen_bench.domain.services import ResultCodec
from allergen_bench.infrastructure.engines import HttpInferenceEngine


def mock_response(status=200, json_data=None, text=""):
    response = MagicMock()
    response.status_code = status
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def engine():
    return HttpInferenceEngine(base_url="http://localhost:8080/", timeout=5.0, n_predict=32)


class TestHttpInferenceEngine:
    """Test HttpInferenceEngine implementation"""

    def test_initialization(self, engine):
        assert engine.base_url == "http://localhost:8080"
        assert engine.engine_id == "http:http://localhost:8080"

    def test_successful_completion(self, engine):
        body = {
            "content": " milk, egg\n",
            "timings": {
                "prompt_ms": 119.6,
                "prompt_per_second": 30.2,
                "predicted_ms": 812.0,
                "predicted_per_second": 11.7,
            },
        }
        with patch("requests.post", return_value=mock_response(json_data=body)) as post:
            raw = engine.infer("prompt text", "qwen.gguf")

        assert raw == "TTFT_MS=120;ITPS=30;OTPS=12;OET_MS=812|milk, egg"

        args, kwargs = post.call_args
        assert args[0] == "http://localhost:8080/completion"
        assert kwargs["timeout"] == 5.0
        assert kwargs["json"]["prompt"] == "prompt text"
        assert kwargs["json"]["model"] == "qwen.gguf"
        assert kwargs["json"]["n_predict"] == 32
        assert kwargs["json"]["cache_prompt"] is False

    def test_result_decodes(self, engine):
        body = {"content": "EMPTY", "timings": {"prompt_ms": 50}}
        with patch("requests.post", return_value=mock_response(json_data=body)):
            decoded = ResultCodec().decode(engine.infer("p", "m"))

        assert decoded.prediction_text == "EMPTY"
        assert decoded.ttft_ms == 50
        assert decoded.otps == -1

    def test_missing_timings(self, engine):
        with patch("requests.post", return_value=mock_response(json_data={"content": "soy"})):
            raw = engine.infer("p", "m")

        assert raw == "TTFT_MS=-1;ITPS=-1;OTPS=-1;OET_MS=-1|soy"

    def test_http_error_status(self, engine):
        with patch("requests.post", return_value=mock_response(status=503, text="loading model")):
            with pytest.raises(InferenceError, match="503"):
                engine.infer("p", "m")

    def test_connection_error(self, engine):
        with patch("requests.post", side_effect=requests.exceptions.ConnectionError("refused")):
            with pytest.raises(InferenceError, match="refused"):
                engine.infer("p", "m")

    def test_timeout(self, engine):
        with patch("requests.post", side_effect=requests.exceptions.Timeout("slow")):
            with pytest.raises(InferenceError):
                engine.infer("p", "m")

    def test_invalid_json(self, engine):
        with patch("requests.post", return_value=mock_response(json_data=ValueError("bad json"))):
            with pytest.raises(InferenceError, match="Invalid JSON"):
                engine.infer("p", "m")

    def test_missing_content(self, engine):
        with patch("requests.post", return_value=mock_response(json_data={"timings": {}})):
            with pytest.raises(InferenceError, match="content"):
                engine.infer("p", "m")
