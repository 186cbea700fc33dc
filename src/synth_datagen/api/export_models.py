"""
Pydantic models for data export API endpoints.

This module contains the request and response models for writing finished
generation results to the output directory.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ================================
# TYPE DEFINITIONS
# ================================

ExportFormat = Literal["csv", "parquet"]
TokenExportFormat = Literal["txt", "csv", "json"]


# ================================
# REQUEST MODELS
# ================================


class ExportRequest(BaseModel):
    """Request model for exporting a finished generation result."""

    format: ExportFormat = Field("csv", description="Output file format")
    bom: bool | None = Field(
        None,
        description="Prefix CSV output with a UTF-8 byte-order mark (config default when omitted)",
    )
    filename: str | None = Field(
        None,
        description="File name inside the output directory; derived from the result when omitted",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"format": "parquet", "filename": "users.parquet"}
        }
    )

    @field_validator("filename")
    @classmethod
    def validate_filename(cls, v: str | None) -> str | None:
        """Only plain file names are accepted."""
        if v is None:
            return v
        v = v.strip()
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("filename must be a plain file name")
        return v


# ================================
# RESPONSE MODELS
# ================================


class ExportOperationResult(BaseModel):
    """Response model for a completed export."""

    task_id: str = Field(..., description="Generation task whose result was exported")
    format: ExportFormat
    path: str = Field(..., description="Written file")
    record_count: int = Field(..., ge=0)
    size_bytes: int = Field(..., ge=0, description="Size of the written file")
    exported_at: datetime
