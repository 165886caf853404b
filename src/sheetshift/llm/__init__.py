"""Text-generation client module."""

from .base import GenerationResponse, TextGenerationClient
from .call_logging import InferenceCallLogger, InferenceCallRecord
from .errors import (
    ConfigurationError,
    DecodeError,
    EmptyResponseError,
    ExtractionError,
    InferenceError,
    TransportError,
)
from .gemini_client import GeminiClient

__all__ = [
    "GenerationResponse",
    "TextGenerationClient",
    "InferenceCallLogger",
    "InferenceCallRecord",
    "ConfigurationError",
    "DecodeError",
    "EmptyResponseError",
    "ExtractionError",
    "InferenceError",
    "TransportError",
    "GeminiClient",
]
