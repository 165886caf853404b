"""Gemini generateContent client."""

import logging
import time
from typing import Optional

import httpx

from .base import GenerationResponse, TextGenerationClient
from .errors import TransportError

logger = logging.getLogger(__name__)


class GeminiClient(TextGenerationClient):
    """Gemini REST API client."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # Tests pass an httpx.MockTransport here
        self._transport = transport

    def generate(
        self,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
        model: Optional[str] = None,
    ) -> GenerationResponse:
        """Call generateContent and return the first candidate's text."""
        model = model or self.model
        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }

        start = time.time()
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(
                    f"{self.base_url}/models/{model}:generateContent",
                    params={"key": self.api_key},
                    headers={"Content-Type": "application/json"},
                    json=payload,
                )
        except httpx.HTTPError as e:
            raise TransportError(f"Request to inference service failed: {e}") from e
        duration = (time.time() - start) * 1000

        data = self._parse_body(response)

        if not response.is_success:
            raise TransportError(
                f"API error: {self._error_message(response, data)}",
                status_code=response.status_code,
            )

        if data is None:
            raise TransportError(
                "Inference service returned a non-JSON body",
                status_code=response.status_code,
            )

        return GenerationResponse(
            text=self._extract_text(data),
            model=model,
            usage=data.get("usageMetadata") or {},
            duration_ms=duration,
        )

    def _parse_body(self, response: httpx.Response) -> Optional[dict]:
        try:
            data = response.json()
        except ValueError:
            return None
        return data if isinstance(data, dict) else None

    def _error_message(self, response: httpx.Response, data: Optional[dict]) -> str:
        """Prefer the provider's error.message, falling back to the status text."""
        if data:
            error = data.get("error")
            if isinstance(error, dict) and error.get("message"):
                return str(error["message"])
        return response.reason_phrase or f"HTTP {response.status_code}"

    def _extract_text(self, data: dict) -> str:
        """Read candidates[0].content.parts[0].text; missing pieces give ''."""
        try:
            text = data["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError):
            logger.warning("Inference response has no candidate text")
            return ""
        return text if isinstance(text, str) else ""
