"""Pull a structured JSON object out of free-form model output."""

import json
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ..llm.errors import DecodeError, ExtractionError

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def extract_json_object(text: str) -> str:
    """Return the span from the leftmost '{' to the rightmost '}'.

    Raises:
        ExtractionError: If the text has no such span.
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        raise ExtractionError("Could not parse the AI response: no JSON object found.")
    return text[start : end + 1]


def decode_payload(fragment: str, model: type[PayloadT]) -> PayloadT:
    """Decode ``fragment`` and validate it against ``model``.

    Raises:
        DecodeError: If the fragment is not valid JSON or does not match the
            expected structure.
    """
    try:
        data = json.loads(fragment)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Could not parse the AI response: {e.msg}.") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(part) for part in err["loc"]) or "<root>" for err in e.errors()
        )
        raise DecodeError(
            f"Could not parse the AI response: unexpected structure ({fields})."
        ) from e
