"""
FastAPI router for the field type and preset catalogs.
"""

import logging

from fastapi import APIRouter, Query

from ...api.models import FieldTypeListResponse, PresetListResponse
from ..catalog import list_field_types
from ..presets import describe_preset, list_presets

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/field-types",
    response_model=FieldTypeListResponse,
    summary="List field types",
    description="Get every supported field type with its options and aliases",
)
async def get_field_types():
    """List all supported field types."""
    field_types = list_field_types()
    return FieldTypeListResponse(field_types=field_types, count=len(field_types))


@router.get(
    "/presets",
    response_model=PresetListResponse,
    summary="List presets",
    description="Get the named request templates",
)
async def get_presets():
    """List all presets."""
    presets = list_presets()
    return PresetListResponse(presets=presets, count=len(presets))


@router.get(
    "/presets/{name}",
    summary="Get a preset",
    description="Get the generation request a preset expands to",
)
async def get_preset_detail(
    name: str,
    rows: int | None = Query(None, ge=1, description="Override the record count"),
):
    """Describe one preset; unknown names map to 404."""
    preset = describe_preset(name)
    if rows is not None:
        preset["request"]["record_count"] = rows
    return preset
