"""Pytest configuration and shared fixtures."""

import io
from pathlib import Path
from unittest.mock import Mock

import pytest
from openpyxl import Workbook

from sheetshift.config import Settings
from sheetshift.llm import GenerationResponse, TextGenerationClient
from sheetshift.tables import Table


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Create settings with test values."""
    return Settings(
        gemini_api_key="test-key-123",
        gemini_model="gemini-2.0-flash",
        gemini_base_url="https://example.test/v1beta",
        request_timeout_seconds=5.0,
        mapping_temperature=0.3,
        mapping_max_output_tokens=2048,
        template_temperature=0.5,
        template_max_output_tokens=1024,
        sample_row_limit=3,
        preview_row_limit=5,
        default_output_filename="output.xlsx",
        enable_call_logging=False,
        call_log_path=tmp_path / "calls.jsonl",
        cors_allow_origins=["*"],
    )


@pytest.fixture
def unconfigured_settings(mock_settings: Settings) -> Settings:
    """Settings with no inference API key."""
    return mock_settings.model_copy(update={"gemini_api_key": None})


@pytest.fixture
def staff_table() -> Table:
    """A small source table with Korean headers."""
    return Table(
        headers=["성명", "부서", "직급"],
        rows=[
            ["김철수", "개발팀", "대리"],
            ["이영희", "영업팀", "과장"],
            ["박민수", "인사팀", None],
        ],
        sheet_name="직원",
    )


@pytest.fixture
def mock_llm_client() -> Mock:
    """Create a mocked text-generation client."""
    client = Mock(spec=TextGenerationClient)
    client.generate = Mock(
        return_value=GenerationResponse(
            text='{"columnMapping": {}, "suggestions": []}',
            model="gemini-2.0-flash",
        )
    )
    return client


@pytest.fixture
def multi_sheet_xlsx() -> bytes:
    """An xlsx workbook with two sheets."""
    workbook = Workbook()
    first = workbook.active
    first.title = "Staff"
    first.append(["Name", "Age", "Team"])
    first.append(["Kim", 31, "Dev"])
    first.append(["Lee", 28.5, None])

    second = workbook.create_sheet("Other")
    second.append(["Code"])
    second.append(["X1"])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
