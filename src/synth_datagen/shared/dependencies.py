"""
FastAPI dependencies and background task management for the synthetic data generator.

This module provides the shared configuration dependency, background
generation task tracking, the cache of finished results awaiting download,
and rate limiting for the FastAPI application.
"""

import asyncio
import logging
import os
import threading
import time
from datetime import UTC, datetime, timedelta
from functools import wraps
from pathlib import Path
from typing import Any

from cachetools import TTLCache
from fastapi import HTTPException, Request, status
from pydantic import BaseModel, Field

from ..config.models import DatagenConfig
from ..config.settings import load_config
from ..generators.controller import GenerationController
from .exceptions import GenerationCancelledError
from .models import GenerationResult

logger = logging.getLogger(__name__)


# ================================
# TASK STATUS MODEL
# ================================


class TaskStatus(BaseModel):
    """Status of a background generation task."""

    status: str  # "running", "completed", "failed", "cancelled"
    progress: float = Field(default=0.0, ge=0.0, le=1.0)  # 0.0 to 1.0
    message: str = ""
    started_at: datetime | None = None
    completed_at: datetime | None = None
    last_updated: datetime | None = None
    description: str = ""
    error: str | None = None
    result: Any = None
    records_processed: int | None = Field(
        default=None, description="Records generated so far"
    )
    records_total: int | None = Field(default=None, description="Records requested")
    # Monotonic sequence number for UI to de-dup/out-of-order
    sequence: int | None = Field(
        default=None, description="Monotonic update sequence per task"
    )

    def get(self, key: str, default: Any = None) -> Any:
        """Support dict.get() style access."""
        return getattr(self, key, default)


# Global instances (will be initialized on startup)
_config: DatagenConfig | None = None

# Background task tracking
_background_tasks: dict[str, asyncio.Task] = {}
_task_status: dict[str, TaskStatus] = {}
_task_controllers: dict[str, GenerationController] = {}

# Lock for thread-safe cleanup operations
_cleanup_lock = threading.Lock()

# Track last cleanup time for cooldown logic
_last_cleanup_time: datetime | None = None

# Finished results awaiting download, keyed by task id
_result_cache: TTLCache | None = None


# ================================
# ENVIRONMENT VARIABLE PARSING
# ================================


def _parse_env_int(name: str, default: int, min_val: int, max_val: int) -> int:
    """Parse integer environment variable with validation and fallback.

    Args:
        name: Environment variable name
        default: Default value if not set or invalid
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Validated integer value within bounds
    """
    try:
        value = int(os.getenv(name, str(default)))
        return max(min_val, min(max_val, value))
    except ValueError:
        logger.warning(
            f"Invalid {name} value, using default {default}",
            extra={"env_var": name, "default": default},
        )
        return default


# Task cleanup configuration
# Bounds: max age 1-720 hours, threshold 100-100000 tasks
MAX_TASK_AGE_HOURS = 720
TASK_CLEANUP_MAX_AGE_HOURS = _parse_env_int(
    "TASK_CLEANUP_MAX_AGE_HOURS", 24, 1, MAX_TASK_AGE_HOURS
)
TASK_CLEANUP_THRESHOLD = _parse_env_int("TASK_CLEANUP_THRESHOLD", 1000, 100, 100000)
TASK_CLEANUP_COOLDOWN_SECONDS = 300

# Rate limiting storage configuration
# Bounds: maxsize 100-100000, TTL 60-86400 seconds
RATE_LIMIT_MAXSIZE = _parse_env_int("RATE_LIMIT_MAXSIZE", 10000, 100, 100000)
RATE_LIMIT_TTL = _parse_env_int("RATE_LIMIT_TTL", 3600, 60, 86400)

# Entries expire RATE_LIMIT_TTL seconds after insertion; in-place list
# updates do not reset the timer.
_rate_limit_storage: TTLCache = TTLCache(maxsize=RATE_LIMIT_MAXSIZE, ttl=RATE_LIMIT_TTL)


# ================================
# CONFIGURATION DEPENDENCIES
# ================================


def _build_result_cache(config: DatagenConfig) -> TTLCache:
    return TTLCache(
        maxsize=config.api.result_cache_size, ttl=config.api.result_ttl_seconds
    )


async def get_config() -> DatagenConfig:
    """Get the current configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


async def update_config(new_config: DatagenConfig) -> None:
    """Replace the global configuration.

    The result cache is rebuilt with the new bounds; downloadable results are
    carried over.
    """
    global _config, _result_cache
    _config = new_config

    with _cleanup_lock:
        previous = dict(_result_cache.items()) if _result_cache is not None else {}
        _result_cache = _build_result_cache(new_config)
        for task_id, result in previous.items():
            _result_cache[task_id] = result


async def get_controller() -> GenerationController:
    """A fresh, request-scoped generation controller."""
    config = await get_config()
    return GenerationController(config.engine)


# ================================
# RESULT CACHE
# ================================


def store_result(task_id: str, result: GenerationResult) -> None:
    """Keep a finished result available for download."""
    global _result_cache
    with _cleanup_lock:
        if _result_cache is None:
            _result_cache = _build_result_cache(_config or DatagenConfig())
        _result_cache[task_id] = result


def get_result(task_id: str) -> GenerationResult | None:
    """Finished result of a task, or None once expired or unknown."""
    with _cleanup_lock:
        if _result_cache is None:
            return None
        return _result_cache.get(task_id)


# ================================
# BACKGROUND TASK MANAGEMENT
# ================================


def _cleanup_old_tasks_locked(max_age_hours: int) -> int:
    """Remove finished tasks older than max_age_hours (lock held)."""
    global _last_cleanup_time

    cutoff = datetime.now(UTC) - timedelta(hours=max_age_hours)
    cleaned_count = 0

    for task_id, task_stat in list(_task_status.items()):
        if task_stat.completed_at and task_stat.completed_at < cutoff:
            _task_status.pop(task_id, None)
            _background_tasks.pop(task_id, None)
            _task_controllers.pop(task_id, None)
            cleaned_count += 1

    _last_cleanup_time = datetime.now(UTC)

    if cleaned_count > 0:
        logger.info(
            f"Cleaned up {cleaned_count} old background tasks",
            extra={"cleaned_count": cleaned_count, "cutoff_hours": max_age_hours},
        )

    return cleaned_count


def cleanup_old_tasks(max_age_hours: int | None = None) -> int:
    """
    Remove finished tasks older than ``max_age_hours``.

    Raises:
        ValueError: If max_age_hours is negative
    """
    if max_age_hours is not None and max_age_hours < 0:
        raise ValueError("max_age_hours must be non-negative")
    age = TASK_CLEANUP_MAX_AGE_HOURS if max_age_hours is None else max_age_hours
    with _cleanup_lock:
        return _cleanup_old_tasks_locked(age)


def _finish_status(task_id: str, **fields: Any) -> None:
    """Record the terminal state of a task (lock held)."""
    current = _task_status.get(task_id)
    if current is None:
        return
    _task_status[task_id] = current.model_copy(
        update={
            **fields,
            "completed_at": datetime.now(UTC),
            "last_updated": datetime.now(UTC),
        }
    )


def create_background_task(
    task_id: str,
    coro,
    description: str = "",
    controller: GenerationController | None = None,
    records_total: int | None = None,
) -> str:
    """Create and track a background task.

    When a controller is given, cancelling a running task asks the controller
    to stop at its next batch boundary.

    Thread-safe: Uses _cleanup_lock to protect all dictionary operations.
    """
    with _cleanup_lock:
        should_cleanup = len(_task_status) >= TASK_CLEANUP_THRESHOLD
        if should_cleanup and _last_cleanup_time is not None:
            elapsed = (datetime.now(UTC) - _last_cleanup_time).total_seconds()
            should_cleanup = elapsed >= TASK_CLEANUP_COOLDOWN_SECONDS
        if should_cleanup:
            _cleanup_old_tasks_locked(TASK_CLEANUP_MAX_AGE_HOURS)

        if task_id in _background_tasks and not _background_tasks[task_id].done():
            coro.close()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Task {task_id} is already running",
            )

        task = asyncio.create_task(coro)
        _background_tasks[task_id] = task
        if controller is not None:
            _task_controllers[task_id] = controller
        _task_status[task_id] = TaskStatus(
            status="running",
            started_at=datetime.now(UTC),
            description=description,
            progress=0.0,
            message="Task started",
            records_processed=0 if records_total is not None else None,
            records_total=records_total,
            sequence=0,
        )

    def task_done_callback(future: asyncio.Future):
        with _cleanup_lock:
            _task_controllers.pop(task_id, None)
            if future.cancelled():
                _finish_status(task_id, status="cancelled", message="Task was cancelled")
                return

            error = future.exception()
            if error is None:
                _finish_status(
                    task_id,
                    status="completed",
                    progress=1.0,
                    message="Task completed successfully",
                    result=future.result(),
                )
            elif isinstance(error, GenerationCancelledError):
                _finish_status(task_id, status="cancelled", message=str(error))
            else:
                logger.error(f"Background task {task_id} failed: {error}")
                _finish_status(
                    task_id,
                    status="failed",
                    message=f"Task failed: {error}",
                    error=str(error),
                )

    task.add_done_callback(task_done_callback)
    return task_id


def get_task_status(task_id: str) -> TaskStatus | None:
    """Get the status of a background task."""
    with _cleanup_lock:
        return _task_status.get(task_id)


def get_active_tasks() -> dict[str, TaskStatus]:
    """Statuses of tasks that are still running."""
    with _cleanup_lock:
        return {
            task_id: task_stat
            for task_id, task_stat in _task_status.items()
            if task_stat.status == "running"
        }


def cancel_task(task_id: str) -> bool:
    """Request cancellation of a running background task.

    A generation already running stops cooperatively at its next batch
    boundary; a task that has not started yet is cancelled outright.

    Returns:
        True when a running task was asked to stop
    """
    with _cleanup_lock:
        task = _background_tasks.get(task_id)
        if task is None or task.done():
            return False

        controller = _task_controllers.get(task_id)
        if controller is not None and controller.is_running:
            controller.cancel()
        else:
            task.cancel()

        current = _task_status.get(task_id)
        if current is not None:
            _task_status[task_id] = current.model_copy(
                update={
                    "message": "Cancellation requested",
                    "last_updated": datetime.now(UTC),
                }
            )
        return True


def update_task_progress(
    task_id: str,
    progress: float,
    message: str = "",
    records_processed: int | None = None,
    records_total: int | None = None,
) -> None:
    """Update progress for a background task.

    Progress is clamped to [0, 1] and never moves backwards.
    """
    with _cleanup_lock:
        current = _task_status.get(task_id)
        if current is None:
            return

        updated_fields: dict[str, Any] = {
            "progress": max(current.progress, max(0.0, min(1.0, progress))),
            "message": message,
            "last_updated": datetime.now(UTC),
            "sequence": (current.sequence or 0) + 1,
        }
        if records_processed is not None:
            updated_fields["records_processed"] = max(
                current.records_processed or 0, records_processed
            )
        if records_total is not None:
            updated_fields["records_total"] = records_total

        _task_status[task_id] = current.model_copy(update=updated_fields)


# ================================
# RATE LIMITING
# ================================


def enforce_rate_limit(
    request: Request | None, max_requests: int, window_seconds: int, scope: str = ""
) -> None:
    """Record a request from this client and reject it once over the limit.

    Raises:
        HTTPException: 429 when the client exceeded ``max_requests`` in the window
    """
    if request is None or request.client is None:
        return

    key = f"{scope}:{request.client.host}" if scope else request.client.host
    current_time = time.time()

    request_times = _rate_limit_storage.setdefault(key, [])

    cutoff_time = current_time - window_seconds
    request_times[:] = [t for t in request_times if t > cutoff_time]

    if len(request_times) >= max_requests:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=(
                f"Rate limit exceeded: {max_requests} requests "
                f"per {window_seconds} seconds"
            ),
        )

    request_times.append(current_time)


def rate_limit(max_requests: int = 100, window_seconds: int = 60):
    """Rate limiting decorator."""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            request = kwargs.get("request")
            if request is None:
                for arg in args:
                    if isinstance(arg, Request):
                        request = arg
                        break

            enforce_rate_limit(request, max_requests, window_seconds, func.__name__)
            return await func(*args, **kwargs)

        return wrapper

    return decorator


# ================================
# HEALTH CHECK HELPERS
# ================================


async def check_file_system_health() -> dict[str, Any]:
    """Check that the output directory is writable."""
    try:
        config = await get_config()
        path = Path(config.output.output_dir)
        target = path if path.exists() else path.resolve().parent
        writable = os.access(target, os.W_OK)
        return {
            "status": "healthy" if writable else "degraded",
            "details": {
                "path": str(path),
                "exists": path.exists(),
                "writable": writable,
            },
        }
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}
