"""Mapping inference: prompts, response extraction and the client."""

from .client import MappingInferenceClient
from .extraction import decode_payload, extract_json_object
from .models import MappingPayload, MappingResult, TemplatePayload, TemplateResult
from .prompts import build_mapping_prompt, build_template_prompt, render_sample_rows

__all__ = [
    "MappingInferenceClient",
    "decode_payload",
    "extract_json_object",
    "MappingPayload",
    "MappingResult",
    "TemplatePayload",
    "TemplateResult",
    "build_mapping_prompt",
    "build_template_prompt",
    "render_sample_rows",
]
