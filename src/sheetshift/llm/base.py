"""Base text-generation client interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class GenerationResponse:
    """Text returned by a generation call."""

    text: str
    model: str
    usage: dict = field(default_factory=dict)
    duration_ms: Optional[float] = None


class TextGenerationClient(ABC):
    """Abstract base class for text-generation clients."""

    @abstractmethod
    def generate(
        self,
        prompt: str,
        temperature: float,
        max_output_tokens: int,
        model: Optional[str] = None,
    ) -> GenerationResponse:
        """Send a single prompt and return the generated text.

        Raises:
            TransportError: If the request fails or returns a non-success status.
        """
        pass
