"""
Configuration management endpoints.

The running configuration lives in ``shared.dependencies``; updates apply to
the next request. Writing it back to disk is opt-in per request.
"""

import logging
import os
from datetime import UTC, datetime
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..config.models import DatagenConfig
from ..config.settings import CONFIG_FILE_ENV
from ..shared.dependencies import get_config, update_config
from .models import OperationResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/config")


def _config_file_path() -> Path:
    return Path(os.getenv(CONFIG_FILE_ENV, "config.json"))


@router.get("", summary="Get configuration")
async def get_current_config(config: DatagenConfig = Depends(get_config)):
    """The configuration new generations will use."""
    return config.model_dump()


@router.put("", summary="Update configuration", response_model=OperationResult)
async def update_current_config(
    new_config: DatagenConfig,
    persist: bool = Query(False, description="Also write the configuration file"),
):
    """Swap in a new configuration; running generations keep their settings."""
    await update_config(new_config)
    logger.info(
        f"Configuration updated: sync_threshold={new_config.engine.sync_threshold}, "
        f"output_dir={new_config.output.output_dir}"
    )

    if not persist:
        return OperationResult(success=True, message="Configuration updated")

    config_path = _config_file_path()
    try:
        new_config.to_file(config_path)
    except OSError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to save configuration to {config_path}: {e}",
        )
    return OperationResult(
        success=True,
        message=f"Configuration updated and saved to {config_path}",
    )


@router.post("/reset", summary="Reset configuration", response_model=OperationResult)
async def reset_config():
    await update_config(DatagenConfig())
    return OperationResult(success=True, message="Configuration reset to defaults")


@router.post("/validate", summary="Validate configuration")
async def validate_config(config_data: DatagenConfig):
    """
    Check a configuration without applying it.

    Invalid bodies never reach the handler; they are answered with 422 by the
    request validation handler.
    """
    return {"valid": True, "checked_at": datetime.now(UTC)}
