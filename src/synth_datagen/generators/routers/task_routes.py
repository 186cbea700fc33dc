"""
FastAPI router for background task status.

Generation and token tasks share one registry, so these endpoints report on
any task id handed out by the generation routes.
"""

from fastapi import APIRouter, HTTPException, status

from ...api.models import ActiveTasksResponse, TaskStatusResponse
from ...shared.dependencies import get_active_tasks, get_task_status
from .common import task_status_response

router = APIRouter(prefix="/tasks")


@router.get(
    "/active",
    response_model=ActiveTasksResponse,
    summary="List running tasks",
)
async def list_active_tasks():
    active = [
        task_status_response(task_id, task_status)
        for task_id, task_status in get_active_tasks().items()
    ]
    return ActiveTasksResponse(active_tasks=active, count=len(active))


@router.get(
    "/{task_id}/status",
    response_model=TaskStatusResponse,
    summary="Get task status",
    description="Progress, record counts and, once finished, the outcome of a task",
)
async def get_task(task_id: str):
    """Status of one task; 404 when the id is unknown or was cleaned up."""
    task_status = get_task_status(task_id)
    if task_status is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Task {task_id} not found",
        )
    return task_status_response(task_id, task_status)
