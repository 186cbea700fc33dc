"""
Common constants and utilities for generator routers.

This module contains shared helpers used across the generation, catalog and
token endpoints.
"""

import logging
from uuid import uuid4

from ...api.models import TaskStatusResponse
from ...shared.dependencies import TaskStatus, get_result

logger = logging.getLogger(__name__)

GENERATE_TASK_PREFIX = "generate"
DOWNLOAD_URL_TEMPLATE = "/api/generate/{task_id}/download"


def new_task_id(prefix: str = GENERATE_TASK_PREFIX) -> str:
    """Short unique task id such as ``generate_1a2b3c4d``."""
    return f"{prefix}_{uuid4().hex[:8]}"


def download_url(task_id: str) -> str | None:
    """Download URL when the task's result is still cached."""
    if get_result(task_id) is None:
        return None
    return DOWNLOAD_URL_TEMPLATE.format(task_id=task_id)


def task_status_response(task_id: str, task_status: TaskStatus) -> TaskStatusResponse:
    """Convert the internal task status into the API response model."""
    result = task_status.result if isinstance(task_status.result, dict) else None
    return TaskStatusResponse(
        task_id=task_id,
        status=task_status.status,
        progress=task_status.progress,
        message=task_status.message,
        records_processed=task_status.records_processed,
        records_total=task_status.records_total,
        sequence=task_status.sequence,
        started_at=task_status.started_at,
        completed_at=task_status.completed_at,
        last_update_timestamp=task_status.last_updated,
        error_message=task_status.error,
        result=result,
        download_url=download_url(task_id) if task_status.status == "completed" else None,
    )
