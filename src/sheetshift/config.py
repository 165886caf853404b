"""Configuration management for SheetShift."""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _parse_cors_origins() -> list[str]:
    """Parse CORS origins from environment variable."""
    cors_env = os.getenv("CORS_ALLOW_ORIGINS")
    if cors_env:
        return cors_env.split(",")
    return ["*"]


class Settings(BaseModel):
    """Application settings."""

    # Gemini text-generation API (key is passed as a query-string parameter)
    gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY")
    gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    gemini_base_url: str = os.getenv(
        "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
    )
    request_timeout_seconds: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "60"))

    # Generation parameters per operation
    mapping_temperature: float = float(os.getenv("MAPPING_TEMPERATURE", "0.3"))
    mapping_max_output_tokens: int = int(os.getenv("MAPPING_MAX_OUTPUT_TOKENS", "2048"))
    template_temperature: float = float(os.getenv("TEMPLATE_TEMPERATURE", "0.5"))
    template_max_output_tokens: int = int(os.getenv("TEMPLATE_MAX_OUTPUT_TOKENS", "1024"))

    # Rows sent to the inference service (never more than three)
    sample_row_limit: int = int(os.getenv("SAMPLE_ROW_LIMIT", "3"))
    preview_row_limit: int = int(os.getenv("PREVIEW_ROW_LIMIT", "5"))

    default_output_filename: str = os.getenv("DEFAULT_OUTPUT_FILENAME", "output.xlsx")

    # Server settings
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "8000"))
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"

    # CORS settings (comma-separated list of allowed origins, or * for all)
    cors_allow_origins: list[str] = _parse_cors_origins()

    # Inference call log (JSONL)
    enable_call_logging: bool = os.getenv("ENABLE_CALL_LOGGING", "false").lower() == "true"
    call_log_path: Path = Path(os.getenv("CALL_LOG_PATH", "logs/inference_calls.jsonl"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def inference_configured(self) -> bool:
        return bool(self.gemini_api_key)


# Request URLs carry the API key as a query parameter
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO"):
    """Configure root logging for CLI and server entry points."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


settings = Settings()
