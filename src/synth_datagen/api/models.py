"""
Pydantic models for FastAPI requests and responses.

This module contains the response models of the synthetic data generator API:
validation and preview results, background generation status, the field type
and preset catalogs, token results and the error envelopes.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..shared.models import PreviewResult, TokenResult


class GenerationStatus(str, Enum):
    """Status of a background generation task."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


# ================================
# GENERATION RESPONSE MODELS
# ================================


class ValidationResponse(BaseModel):
    """Response model for request validation."""

    valid: bool = Field(..., description="Whether the request can be generated")
    violations: list[str] = Field(
        default_factory=list, description="Every problem found in the request"
    )


class PreviewResponse(BaseModel):
    """Sample records plus size and time estimates for the full run."""

    header_line: str | None = Field(None, description="Header line, when requested")
    lines: list[str] = Field(..., description="Serialized sample records")
    sample_size: int = Field(..., ge=0, description="Number of sample records")
    estimated_bytes: int = Field(..., ge=0, description="Estimated full output size")
    estimated_size: str = Field(..., description="Estimated size, human readable")
    estimated_ms: float = Field(..., ge=0.0, description="Estimated generation time")
    estimated_time: str = Field(..., description="Estimated time, human readable")

    @classmethod
    def from_result(cls, result: PreviewResult) -> "PreviewResponse":
        return cls(
            header_line=result.header_line,
            lines=list(result.lines),
            sample_size=result.sample_size,
            estimated_bytes=result.estimated_bytes,
            estimated_size=result.estimated_size,
            estimated_ms=result.estimated_ms,
            estimated_time=result.estimated_time,
        )


class GenerationStartResponse(BaseModel):
    """Response model for a started background generation."""

    task_id: str = Field(..., description="Identifier for status, cancel and download")
    status: GenerationStatus = Field(GenerationStatus.RUNNING)
    record_count: int = Field(..., ge=1)
    field_count: int = Field(..., ge=1)
    strategy: str = Field(..., description="'sync' or 'batched'")
    message: str = Field(..., description="Human-readable status message")
    started_at: datetime = Field(..., description="When the task was created")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "task_id": "generate_1a2b3c4d",
                "status": "running",
                "record_count": 100000,
                "field_count": 4,
                "strategy": "batched",
                "message": "Generation of 100,000 records started",
                "started_at": "2025-10-21T14:28:15.123Z",
            }
        }
    )


class TaskStatusResponse(BaseModel):
    """Response model for the status of a background task."""

    task_id: str
    status: GenerationStatus = Field(..., description="Current task status")
    progress: float = Field(
        ..., ge=0.0, le=1.0, description="Progress as a value between 0.0 and 1.0"
    )
    message: str = Field(..., description="Human-readable status message")
    records_processed: int | None = Field(None, ge=0)
    records_total: int | None = Field(None, ge=0)
    sequence: int | None = Field(
        None,
        description="Monotonic update sequence (drop older updates on UI if needed)",
    )
    started_at: datetime | None = None
    completed_at: datetime | None = None
    last_update_timestamp: datetime | None = None
    error_message: str | None = Field(
        None, description="Error message if status is FAILED"
    )
    result: dict[str, Any] | None = Field(
        None, description="Summary of the finished result"
    )
    download_url: str | None = Field(
        None, description="Where the finished result can be downloaded"
    )


class ActiveTasksResponse(BaseModel):
    """Response model for listing running tasks."""

    active_tasks: list[TaskStatusResponse] = Field(default_factory=list)
    count: int = Field(..., ge=0)


# ================================
# CATALOG RESPONSE MODELS
# ================================


class FieldTypeListResponse(BaseModel):
    """Response model for the field type catalog."""

    field_types: list[dict[str, Any]] = Field(
        ..., description="Supported types with their options"
    )
    count: int = Field(..., ge=0, description="Number of supported types")


class PresetListResponse(BaseModel):
    """Response model for listing presets."""

    presets: list[dict[str, Any]] = Field(..., description="Preset summaries")
    count: int = Field(..., ge=0, description="Number of presets")


# ================================
# TOKEN RESPONSE MODELS
# ================================


class TokenResponse(BaseModel):
    """Response model for generated text tokens."""

    tokens: list[str]
    count: int = Field(..., ge=0)
    length: int = Field(..., ge=0)
    pool_types: list[str]
    pool_info: list[str] = Field(default_factory=list)
    elapsed_ms: float = Field(..., ge=0.0)
    is_email: bool = False

    @classmethod
    def from_result(cls, result: TokenResult) -> "TokenResponse":
        return cls(
            tokens=list(result.tokens),
            count=result.count,
            length=result.length,
            pool_types=list(result.pool_types),
            pool_info=list(result.pool_info),
            elapsed_ms=round(result.elapsed_ms, 2),
            is_email=result.is_email,
        )


class TokenPreviewResponse(BaseModel):
    """Response model for a token preview."""

    preview: list[str]
    pool_info: str
    total_chars: int = Field(..., ge=0)
    estimated_ms: float = Field(..., ge=0.0)
    estimated_time: str
    is_email: bool
    has_emoji: bool


# ================================
# SYSTEM RESPONSE MODELS
# ================================


class HealthCheckResponse(BaseModel):
    """Response model for health checks."""

    status: str = Field(..., description="Overall health status")
    timestamp: datetime = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")
    checks: dict[str, dict[str, Any]] = Field(
        ..., description="Individual component health checks"
    )


class ErrorResponse(BaseModel):
    """Standard error response model."""

    error: str = Field(..., description="Error type or code")
    message: str = Field(..., description="Human-readable error message")
    violations: list[str] | None = Field(
        None, description="Every violation, for rejected generation requests"
    )
    details: dict[str, Any] | None = Field(None, description="Additional error details")
    timestamp: datetime = Field(..., description="Error timestamp")


class ValidationErrorResponse(BaseModel):
    """Response model for request body validation errors."""

    error: str = Field(..., description="Error type")
    message: str = Field(..., description="General error message")
    field_errors: list[dict[str, Any]] = Field(
        ..., description="Detailed field validation errors"
    )
    timestamp: datetime = Field(..., description="Error timestamp")


class OperationResult(BaseModel):
    """Generic operation result model."""

    success: bool = Field(..., description="Whether the operation succeeded")
    message: str = Field(..., description="Operation result message")
    operation_id: str | None = Field(
        None, description="Unique identifier for tracking the operation"
    )
