"""
FastAPI router for record generation endpoints.

This module provides REST API endpoints for validating and previewing
generation requests, starting background generation runs, and cancelling
them.
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from ...api.models import (
    GenerationStartResponse,
    OperationResult,
    PreviewResponse,
    ValidationResponse,
)
from ...config.models import DatagenConfig
from ...shared.dependencies import (
    cancel_task,
    create_background_task,
    enforce_rate_limit,
    get_config,
    get_task_status,
    store_result,
    update_task_progress,
)
from ...shared.exceptions import GenerationValidationError
from ...shared.models import GenerationRequest
from ..controller import GenerationController
from .common import new_task_id

logger = logging.getLogger(__name__)

router = APIRouter()


# ================================
# VALIDATION AND PREVIEW
# ================================


@router.post(
    "/validate",
    response_model=ValidationResponse,
    summary="Validate a generation request",
    description="Report every violation in a request without generating anything",
)
async def validate_generation_request(
    generation_request: GenerationRequest,
    config: DatagenConfig = Depends(get_config),
):
    """Validate a generation request."""
    violations = GenerationController(config.engine).validate(generation_request)
    return ValidationResponse(valid=not violations, violations=violations)


@router.post(
    "/preview",
    response_model=PreviewResponse,
    summary="Preview a generation request",
    description=(
        "Generate a few sample records and estimate the size and duration "
        "of the full run"
    ),
)
async def preview_generation(
    generation_request: GenerationRequest,
    sample_size: int | None = Query(
        None, ge=1, le=1000, description="Sample records to generate"
    ),
    config: DatagenConfig = Depends(get_config),
):
    """Preview a generation request."""
    result = GenerationController(config.engine).preview(generation_request, sample_size)
    return PreviewResponse.from_result(result)


# ================================
# BACKGROUND GENERATION
# ================================


@router.post(
    "/generate",
    response_model=GenerationStartResponse,
    summary="Start generating records",
    description=(
        "Validate the request and generate it in the background. "
        "Returns a task ID for tracking progress and downloading the result."
    ),
)
async def start_generation(
    request: Request,
    generation_request: GenerationRequest,
    config: DatagenConfig = Depends(get_config),
):
    """Start a background generation run."""
    enforce_rate_limit(
        request,
        config.api.generate_rate_limit,
        config.api.generate_rate_window,
        scope="generate",
    )

    controller = GenerationController(config.engine)
    violations = controller.validate(generation_request)
    if violations:
        raise GenerationValidationError(violations)

    task_id = new_task_id()
    record_count = generation_request.record_count
    strategy = controller.choose_strategy(record_count)

    async def generation_task():
        """Background task for one generation run."""

        def progress_callback(percent: int, processed: int, total: int):
            update_task_progress(
                task_id,
                percent / 100,
                f"Generated {processed:,} of {total:,} records",
                records_processed=processed,
                records_total=total,
            )

        logger.info(f"Starting generation task {task_id}")
        result = await controller.run(generation_request, progress_callback)
        store_result(task_id, result)
        update_task_progress(
            task_id,
            1.0,
            f"Generated {result.record_count:,} records",
            records_processed=result.record_count,
        )
        logger.info(f"Generation task {task_id} completed: {result.summary()}")
        return result.summary()

    create_background_task(
        task_id,
        generation_task(),
        description=f"Generate {record_count:,} records",
        controller=controller,
        records_total=record_count,
    )

    return GenerationStartResponse(
        task_id=task_id,
        record_count=record_count,
        field_count=len(generation_request.fields),
        strategy=strategy.value,
        message=f"Generation of {record_count:,} records started",
        started_at=datetime.now(UTC),
    )


@router.post(
    "/generate/{task_id}/cancel",
    response_model=OperationResult,
    summary="Cancel a generation run",
    description="Stop a running generation at its next batch boundary",
)
async def cancel_generation(task_id: str):
    """Cancel a running generation task."""
    if get_task_status(task_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )

    if not cancel_task(task_id):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Task {task_id} has already finished",
        )

    return OperationResult(
        success=True,
        message=f"Cancellation of {task_id} requested",
        operation_id=task_id,
    )
