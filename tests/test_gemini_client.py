"""Tests for the Gemini client."""

import json

import httpx
import pytest

from sheetshift.llm import GeminiClient, TransportError


def _client(handler) -> GeminiClient:
    return GeminiClient(
        api_key="test-key",
        model="gemini-2.0-flash",
        base_url="https://example.test/v1beta",
        transport=httpx.MockTransport(handler),
    )


def _success(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGeminiClient:
    """Tests for GeminiClient."""

    def test_request_shape(self):
        """Test URL, key parameter and body follow the generateContent API."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = request.url
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_success("hello"))

        _client(handler).generate("the prompt", temperature=0.3, max_output_tokens=2048)

        assert seen["url"].path == "/v1beta/models/gemini-2.0-flash:generateContent"
        assert seen["url"].params["key"] == "test-key"
        assert seen["body"] == {
            "contents": [{"parts": [{"text": "the prompt"}]}],
            "generationConfig": {"temperature": 0.3, "maxOutputTokens": 2048},
        }

    def test_returns_first_candidate_text(self):
        """Test the text at candidates[0].content.parts[0].text is returned."""
        response = _client(lambda request: httpx.Response(200, json=_success("answer"))).generate(
            "p", temperature=0.3, max_output_tokens=10
        )

        assert response.text == "answer"
        assert response.model == "gemini-2.0-flash"
        assert response.duration_ms is not None

    def test_model_override(self):
        """Test a per-call model replaces the default in the URL."""
        paths = []

        def handler(request):
            paths.append(request.url.path)
            return httpx.Response(200, json=_success("x"))

        _client(handler).generate("p", temperature=0.3, max_output_tokens=10, model="other")

        assert paths == ["/v1beta/models/other:generateContent"]

    def test_missing_candidates_give_empty_text(self):
        """Test a success body without candidates yields ''."""
        response = _client(lambda request: httpx.Response(200, json={"candidates": []})).generate(
            "p", temperature=0.3, max_output_tokens=10
        )
        assert response.text == ""

    def test_error_message_from_body(self):
        """Test the provider's error.message is used on failure."""
        body = {"error": {"message": "API key not valid"}}

        with pytest.raises(TransportError) as exc_info:
            _client(lambda request: httpx.Response(400, json=body)).generate(
                "p", temperature=0.3, max_output_tokens=10
            )

        assert "API key not valid" in str(exc_info.value)
        assert exc_info.value.status_code == 400

    def test_status_text_when_body_is_not_json(self):
        """Test the HTTP reason phrase is used when there is no error body."""
        with pytest.raises(TransportError, match="Internal Server Error"):
            _client(lambda request: httpx.Response(500, text="oops")).generate(
                "p", temperature=0.3, max_output_tokens=10
            )

    def test_network_failure(self):
        """Test connection errors become TransportError."""

        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError, match="connection refused"):
            _client(handler).generate("p", temperature=0.3, max_output_tokens=10)

    def test_non_json_success_body(self):
        """Test a 200 with a non-JSON body is a transport failure."""
        with pytest.raises(TransportError):
            _client(lambda request: httpx.Response(200, text="<html>")).generate(
                "p", temperature=0.3, max_output_tokens=10
            )
