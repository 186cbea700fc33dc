"""
FastAPI router for data export endpoints.

This module provides REST API endpoints for downloading finished generation
results, writing them to the output directory as CSV or Parquet, and
exporting text tokens as TXT, CSV or JSON.
"""

import logging
from datetime import UTC, datetime
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from ..config.models import DatagenConfig
from ..generators.controller import GenerationController
from ..generators.tokens import generate_tokens, token_filename
from ..services.export_service import (
    TOKEN_MEDIA_TYPES,
    ExportService,
    default_filename,
    render_tokens,
)
from ..shared.dependencies import get_config, get_result, get_task_status
from ..shared.models import GenerationResult, TokenRequest
from .export_models import ExportOperationResult, ExportRequest, TokenExportFormat

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Export"])


def _finished_result(task_id: str) -> GenerationResult:
    """Cached result of a finished task, or the matching HTTP error."""
    result = get_result(task_id)
    if result is not None:
        return result

    task_status = get_task_status(task_id)
    if task_status is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    if task_status.status == "running":
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Task {task_id} is still running",
        )
    raise HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"No result available for task {task_id} (status: {task_status.status})",
    )


def _attachment(filename: str) -> dict[str, str]:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


# ================================
# GENERATION RESULTS
# ================================


@router.get(
    "/generate/{task_id}/download",
    summary="Download a generation result",
    description="Download the delimited text of a finished generation task",
)
async def download_result(
    task_id: str,
    bom: bool = Query(False, description="Prefix the file with a UTF-8 byte-order mark"),
):
    """
    Download a finished result as UTF-8 text.

    Example:
        GET /api/generate/generate_1a2b3c4d/download?bom=true
    """
    result = _finished_result(task_id)
    return Response(
        content=result.to_text(bom=bom).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers=_attachment(default_filename(result)),
    )


@router.post(
    "/generate/{task_id}/export",
    response_model=ExportOperationResult,
    summary="Export a generation result to a file",
    description=(
        "Write a finished result into the configured output directory. "
        "Supports CSV and Parquet formats."
    ),
)
async def export_result(
    task_id: str,
    request: ExportRequest,
    config: DatagenConfig = Depends(get_config),
):
    """
    Write a finished result to the output directory.

    Example:
        POST /api/generate/generate_1a2b3c4d/export
        {"format": "parquet"}
    """
    result = _finished_result(task_id)
    service = ExportService(base_dir=Path(config.output.output_dir))
    bom = config.output.bom if request.bom is None else request.bom

    try:
        path = service.export_result(
            result,
            format=request.format,
            bom=bom,
            filename=request.filename,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except OSError as e:
        logger.error(f"Export of task {task_id} failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Export failed: {e}",
        )

    return ExportOperationResult(
        task_id=task_id,
        format=request.format,
        path=str(path),
        record_count=result.record_count,
        size_bytes=path.stat().st_size,
        exported_at=datetime.now(UTC),
    )


# ================================
# TOKENS
# ================================


@router.post(
    "/tokens/export",
    summary="Generate and export text tokens",
    description="Generate tokens and return them as a TXT, CSV or JSON download",
)
async def export_tokens(
    token_request: TokenRequest,
    format: TokenExportFormat = Query("txt", description="txt, csv or json"),
    config: DatagenConfig = Depends(get_config),
):
    """
    Generate tokens and return the rendered file.

    Example:
        POST /api/tokens/export?format=json
        {"count": 100, "length": 12, "pool_types": ["numbers", "english"]}
    """
    result = await generate_tokens(
        token_request, controller=GenerationController(config.engine)
    )
    content = render_tokens(result, format)
    return Response(
        content=content.encode("utf-8"),
        media_type=f"{TOKEN_MEDIA_TYPES[format]}; charset=utf-8",
        headers=_attachment(token_filename(result.count, result.length, format)),
    )


@router.get(
    "/export/formats",
    summary="Get supported export formats",
    description="Get list of supported export formats and their descriptions",
)
async def get_export_formats():
    """Supported formats for results and tokens."""
    return {
        "results": [
            {
                "name": "csv",
                "description": "Delimited text, RFC 4180 quoting, optional byte-order mark",
                "extension": ".csv",
            },
            {
                "name": "parquet",
                "description": "Apache Parquet (columnar, compressed, efficient)",
                "extension": ".parquet",
                "compression": "snappy",
            },
        ],
        "tokens": [
            {"name": name, "media_type": media_type, "extension": f".{name}"}
            for name, media_type in TOKEN_MEDIA_TYPES.items()
        ],
    }
