"""
Named generation request templates.

Presets are kept in the column layout used by saved configurations
(``format`` names the type, option keys are camelCase) and are parsed into a
fresh ``GenerationRequest`` on every lookup, so callers may modify what they
get back.
"""

import copy
from typing import Any

from synth_datagen.shared.exceptions import PresetNotFoundError
from synth_datagen.shared.models import GenerationRequest

PRESETS: dict[str, dict[str, Any]] = {
    "default": {
        "description": "Basic example: numeric ID, name, email and creation date",
        "rows": 100,
        "columns": [
            {"name": "ID", "format": "number", "config": {"type": "integer", "min": 1, "max": 10000}},
            {"name": "姓名", "format": "name", "config": {"type": "chinese"}},
            {"name": "邮箱", "format": "email", "config": {"length": 8}},
            {
                "name": "创建日期",
                "format": "date",
                "config": {"format": "YYYY-MM-DD", "startDate": "2020-01-01", "endDate": "2024-12-31"},
            },
        ],
    },
    "user-info": {
        "description": "Complete user profiles",
        "rows": 1000,
        "columns": [
            {"name": "user_id", "format": "uuid", "config": {}},
            {
                "name": "username",
                "format": "text",
                "config": {"length": 8, "type": "english", "caseSensitive": False},
            },
            {"name": "full_name", "format": "name", "config": {"type": "full"}},
            {"name": "email", "format": "email", "config": {"length": 10}},
            {"name": "phone", "format": "phone", "config": {"format": "china", "includeCountryCode": False}},
            {"name": "address", "format": "address", "config": {"type": "chinese", "includePostalCode": True}},
            {
                "name": "birth_date",
                "format": "date",
                "config": {"format": "YYYY-MM-DD", "startDate": "1970-01-01", "endDate": "2005-12-31"},
            },
            {"name": "is_active", "format": "boolean", "config": {"format": "10", "probability": 0.8}},
            {
                "name": "salary",
                "format": "number",
                "config": {"type": "currency", "min": 3000, "max": 50000, "decimals": 2},
            },
            {"name": "company", "format": "company", "config": {"type": "chinese"}},
            {
                "name": "registration_time",
                "format": "date",
                "config": {"format": "datetime", "startDate": "2020-01-01", "endDate": "2024-12-31"},
            },
            {"name": "last_login_ip", "format": "ip", "config": {"type": "ipv4"}},
        ],
    },
    "product": {
        "description": "E-commerce product catalog",
        "rows": 500,
        "columns": [
            {"name": "product_id", "format": "text", "config": {"length": 10, "type": "mixed"}},
            {"name": "product_name", "format": "text", "config": {"length": 15, "type": "chinese"}},
            {"name": "category", "format": "text", "config": {"length": 8, "type": "chinese"}},
            {
                "name": "price",
                "format": "number",
                "config": {"type": "currency", "min": 10, "max": 9999, "decimals": 2},
            },
            {"name": "stock_quantity", "format": "number", "config": {"type": "integer", "min": 0, "max": 1000}},
            {"name": "supplier", "format": "company", "config": {"type": "chinese"}},
            {"name": "color", "format": "color", "config": {"format": "name"}},
            {
                "name": "launch_date",
                "format": "date",
                "config": {"format": "YYYY-MM-DD", "startDate": "2020-01-01", "endDate": "2024-12-31"},
            },
            {"name": "is_available", "format": "boolean", "config": {"format": "yesno", "probability": 0.9}},
            {
                "name": "rating",
                "format": "number",
                "config": {"type": "float", "min": 1.0, "max": 5.0, "decimals": 1},
            },
        ],
    },
    "log": {
        "description": "Application log records",
        "rows": 2000,
        "columns": [
            {"name": "log_id", "format": "uuid", "config": {}},
            {
                "name": "timestamp",
                "format": "date",
                "config": {"format": "datetime", "startDate": "2024-01-01", "endDate": "2024-12-31"},
            },
            {"name": "level", "format": "text", "config": {"length": 5, "type": "english"}},
            {"name": "user_id", "format": "number", "config": {"type": "integer", "min": 1000, "max": 9999}},
            {"name": "ip_address", "format": "ip", "config": {"type": "ipv4"}},
            {"name": "action", "format": "text", "config": {"length": 12, "type": "english"}},
            {"name": "status_code", "format": "number", "config": {"type": "integer", "min": 200, "max": 599}},
            {"name": "response_time", "format": "number", "config": {"type": "integer", "min": 10, "max": 5000}},
            {"name": "error_message", "format": "text", "config": {"length": 50, "type": "english"}},
        ],
    },
}


def preset_names() -> list[str]:
    return list(PRESETS)


def get_preset(name: str, record_count: int | None = None) -> GenerationRequest:
    """
    Build a fresh request from a named preset.

    Args:
        name: Preset name
        record_count: Overrides the preset's default record count

    Raises:
        PresetNotFoundError: If no preset has this name
    """
    if name not in PRESETS:
        raise PresetNotFoundError(name, preset_names())

    preset = copy.deepcopy(PRESETS[name])
    request = GenerationRequest.model_validate(
        {"rows": preset["rows"], "columns": preset["columns"]}
    )
    if record_count is not None:
        request.record_count = record_count
    return request


def describe_preset(name: str) -> dict[str, Any]:
    """Name, description and the request a preset expands to."""
    request = get_preset(name)
    return {
        "name": name,
        "description": PRESETS[name]["description"],
        "request": request.model_dump(),
    }


def list_presets() -> list[dict[str, Any]]:
    """Summaries of every preset."""
    return [
        {
            "name": name,
            "description": preset["description"],
            "record_count": preset["rows"],
            "field_count": len(preset["columns"]),
        }
        for name, preset in PRESETS.items()
    ]
