"""API routes for SheetShift."""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel, Field

from .. import __version__
from ..config import settings
from ..inference import MappingInferenceClient
from ..llm import InferenceCallLogger
from ..tables import (
    CellValue,
    ReadError,
    Table,
    TablePreview,
    first_sheet,
    project,
    read_workbook,
    unresolved_columns,
    write_workbook,
)

logger = logging.getLogger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# Global inference client instance
_inference_client: Optional[MappingInferenceClient] = None


def get_inference_client() -> MappingInferenceClient:
    """Get the global inference client instance."""
    global _inference_client
    if _inference_client is None:
        call_logger = None
        if settings.enable_call_logging:
            call_logger = InferenceCallLogger(settings.call_log_path)
        _inference_client = MappingInferenceClient(settings, call_logger=call_logger)
    return _inference_client


class ParseResponse(BaseModel):
    """Response for an uploaded file."""

    table: Table
    sheet_count: int
    preview: TablePreview


class AnalyzeRequest(BaseModel):
    """Request to analyze a mapping."""

    headers: list[str]
    rows: list[list[CellValue]] = Field(default_factory=list)
    target_description: str = ""


class AnalyzeResponse(BaseModel):
    column_mapping: dict[str, str]
    suggestions: list[str]


class ApplyRequest(BaseModel):
    """Request to project a table through a mapping."""

    table: Table
    column_mapping: dict[str, str]
    output_headers: Optional[list[str]] = None


class ApplyResponse(BaseModel):
    table: Table
    unresolved_columns: list[str] = Field(default_factory=list)


class ExportRequest(ApplyRequest):
    """Request to project a table and download it as xlsx."""

    filename: Optional[str] = None


class TemplateRequest(BaseModel):
    description: str


class TemplateResponse(BaseModel):
    headers: list[str]
    sample_row: list[str]
    error: Optional[str] = None


@router.get("/health")
def health():
    """Report service status."""
    client = get_inference_client()
    return {
        "status": "ok",
        "version": __version__,
        "inference_configured": client.configured,
        "inference_calls": (
            client.call_logger.get_session_summary() if client.call_logger else None
        ),
    }


@router.post("/tables/parse", response_model=ParseResponse)
def parse_table(file: UploadFile = File(...)):
    """Parse an uploaded spreadsheet and return its first sheet."""
    data = file.file.read()
    try:
        tables = read_workbook(data, file.filename or "")
        table = first_sheet(tables)
    except ReadError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return ParseResponse(
        table=table,
        sheet_count=len(tables),
        preview=table.preview(settings.preview_row_limit),
    )


@router.post("/mapping/analyze", response_model=AnalyzeResponse)
def analyze_mapping(request: AnalyzeRequest):
    """Ask the inference service for a column mapping. Failures come back as suggestions."""
    result = get_inference_client().analyze_mapping(
        request.headers, request.rows, request.target_description
    )
    return AnalyzeResponse(
        column_mapping=result.column_mapping,
        suggestions=result.suggestions,
    )


@router.post("/mapping/apply", response_model=ApplyResponse)
def apply_mapping(request: ApplyRequest):
    """Project a table through a mapping."""
    output = project(request.table, request.column_mapping, request.output_headers)
    return ApplyResponse(
        table=output,
        unresolved_columns=unresolved_columns(request.table, request.column_mapping),
    )


@router.post("/mapping/export")
def export_mapping(request: ExportRequest):
    """Project a table through a mapping and return an xlsx download."""
    if not request.column_mapping:
        raise HTTPException(status_code=400, detail="No column mapping is available")

    output = project(request.table, request.column_mapping, request.output_headers)
    filename = request.filename or settings.default_output_filename
    if not filename.lower().endswith(".xlsx"):
        filename = f"{filename}.xlsx"

    return Response(
        content=write_workbook([output]),
        media_type=XLSX_MEDIA_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"
        },
    )


@router.post("/templates/generate", response_model=TemplateResponse)
def generate_template(request: TemplateRequest):
    """Propose headers and a sample row for a described layout."""
    result = get_inference_client().generate_template(request.description)
    return TemplateResponse(
        headers=result.headers,
        sample_row=result.sample_row,
        error=result.error,
    )
