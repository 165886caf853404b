"""Mapping inference client: ask the model for a column mapping and parse the reply."""

import logging
from typing import Optional

from ..config import Settings
from ..llm import (
    ConfigurationError,
    EmptyResponseError,
    GeminiClient,
    GenerationResponse,
    InferenceCallLogger,
    InferenceError,
    TextGenerationClient,
    TransportError,
)
from ..tables.models import CellValue
from .extraction import decode_payload, extract_json_object
from .models import MappingPayload, MappingResult, TemplatePayload, TemplateResult
from .prompts import build_mapping_prompt, build_template_prompt

logger = logging.getLogger(__name__)

# Upper bound on rows sent to the inference service, whatever the settings say
MAX_SAMPLE_ROWS = 3


class MappingInferenceClient:
    """Proposes column mappings and templates from natural-language descriptions.

    Neither operation raises. Configuration, transport and parsing failures
    are all turned into an empty result that carries a readable message.
    """

    def __init__(
        self,
        settings: Settings,
        llm_client: Optional[TextGenerationClient] = None,
        call_logger: Optional[InferenceCallLogger] = None,
    ):
        self.settings = settings
        self.call_logger = call_logger

        self.configuration_error: Optional[ConfigurationError] = None
        if llm_client is None and not settings.gemini_api_key:
            self.configuration_error = ConfigurationError(
                "The inference API key is not configured (set GEMINI_API_KEY)."
            )
            logger.warning(str(self.configuration_error))
        elif llm_client is None:
            llm_client = GeminiClient(
                api_key=settings.gemini_api_key,
                model=settings.gemini_model,
                base_url=settings.gemini_base_url,
                timeout=settings.request_timeout_seconds,
            )
        self.llm_client = llm_client

    @property
    def configured(self) -> bool:
        return self.configuration_error is None

    def analyze_mapping(
        self,
        headers: list[str],
        sample_rows: list[list[CellValue]],
        target_description: str,
    ) -> MappingResult:
        """Ask for a target -> source column mapping plus suggestions.

        At most ``settings.sample_row_limit`` rows, capped at three, are sent. The
        returned mapping is not checked against ``headers``.
        """
        limit = min(self.settings.sample_row_limit, MAX_SAMPLE_ROWS)
        rows = [list(row) for row in sample_rows[:limit]]
        prompt = build_mapping_prompt(list(headers), rows, target_description or "")

        try:
            text = self._generate(
                "analyze_mapping",
                prompt,
                self.settings.mapping_temperature,
                self.settings.mapping_max_output_tokens,
            )
            payload = decode_payload(extract_json_object(text), MappingPayload)
        except InferenceError as e:
            logger.error(f"Mapping analysis failed ({type(e).__name__}): {e}")
            return MappingResult.failed(e)

        logger.info(
            f"Mapping analysis returned {len(payload.column_mapping)} column(s) "
            f"and {len(payload.suggestions)} suggestion(s)"
        )
        return MappingResult(
            column_mapping=payload.column_mapping,
            suggestions=payload.suggestions,
        )

    def generate_template(self, description: str) -> TemplateResult:
        """Propose a header set and one sample row from a description alone."""
        prompt = build_template_prompt(description or "")

        try:
            text = self._generate(
                "generate_template",
                prompt,
                self.settings.template_temperature,
                self.settings.template_max_output_tokens,
            )
            payload = decode_payload(extract_json_object(text), TemplatePayload)
        except InferenceError as e:
            logger.error(f"Template generation failed ({type(e).__name__}): {e}")
            return TemplateResult(error=str(e))

        return TemplateResult(headers=payload.headers, sample_row=payload.sample_row)

    def _generate(
        self, operation: str, prompt: str, temperature: float, max_output_tokens: int
    ) -> str:
        """Run one generation call and return non-empty text.

        Raises:
            ConfigurationError: If no API key was configured.
            TransportError: If the call fails.
            EmptyResponseError: If the call succeeded without text.
        """
        if self.configuration_error is not None:
            raise ConfigurationError(str(self.configuration_error))

        logger.info(f"Calling inference service for {operation} ({len(prompt)} chars)")
        response: Optional[GenerationResponse] = None
        try:
            response = self.llm_client.generate(
                prompt=prompt,
                temperature=temperature,
                max_output_tokens=max_output_tokens,
            )
            if not response.text.strip():
                raise EmptyResponseError("The AI response was empty.")
        except InferenceError as e:
            self._record(operation, prompt, type(e).__name__, response)
            raise
        except Exception as e:
            self._record(operation, prompt, "TransportError", response)
            raise TransportError(f"AI analysis error: {e}") from e

        self._record(operation, prompt, "ok", response)
        return response.text

    def _record(
        self,
        operation: str,
        prompt: str,
        status: str,
        response: Optional[GenerationResponse],
    ):
        if self.call_logger is None:
            return
        self.call_logger.log_call(
            operation=operation,
            model=response.model if response else self.settings.gemini_model,
            prompt_chars=len(prompt),
            status=status,
            duration_ms=response.duration_ms if response else None,
            usage=response.usage if response else None,
        )
