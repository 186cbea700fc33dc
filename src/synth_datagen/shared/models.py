"""
Core data models for the synthetic data generator.

This module contains the request models (field specifications, generation
and token requests) and the immutable result records produced by a run.
Request models only coerce types; semantic checks live in
``generators.config_validator`` so every violation is reported together.
"""

import re
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, model_validator

from .formatting import format_file_size

UTF8_BOM = "\ufeff"

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(key: str) -> str:
    """Convert a camelCase option name (``startDate``) to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def normalize_config_keys(config: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``config`` with camelCase keys converted to snake_case.

    When both spellings are present the snake_case value wins.
    """
    normalized: dict[str, Any] = {}
    for key, value in config.items():
        snake = to_snake_case(key) if isinstance(key, str) else key
        if snake in normalized and snake != key:
            continue
        normalized[snake] = value
    return normalized


# ================================
# REQUEST MODELS
# ================================


class FieldSpec(BaseModel):
    """Specification of one output field (column).

    Accepts three input shapes:

    - ``{"name": ..., "type": ..., "config": {...}}``
    - ``{"name": ..., "format": ..., "config": {...}}`` where ``format`` names the type
    - ``{"name": ..., "type": ..., "min": 1, "max": 9}`` with options at top level
    """

    name: str = Field(default="", description="Field (column) name")
    type: str = Field(default="", description="Field type tag or alias")
    config: dict[str, Any] = Field(
        default_factory=dict, description="Type-specific generation options"
    )

    @model_validator(mode="before")
    @classmethod
    def fold_flat_options(cls, data: Any) -> Any:
        """Fold top-level options into ``config`` and normalize option keys."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        if "type" not in data and "format" in data:
            data["type"] = data.pop("format")

        config = dict(data.get("config") or {})
        for key in [k for k in data if k not in ("name", "type", "config")]:
            config.setdefault(key, data.pop(key))

        data["config"] = normalize_config_keys(config)
        return data


class GenerationRequest(BaseModel):
    """Request to generate delimited records."""

    record_count: int = Field(
        default=100,
        validation_alias=AliasChoices("record_count", "recordCount", "rows"),
        description="Number of records to generate",
    )
    fields: list[FieldSpec] = Field(
        default_factory=list,
        validation_alias=AliasChoices("fields", "columns"),
        description="Ordered field specifications",
    )
    delimiter: str = Field(default=",", description="Single-character field separator")
    include_header: bool = Field(
        default=True,
        validation_alias=AliasChoices("include_header", "includeHeader"),
        description="Emit a header line of field names",
    )
    seed: int | None = Field(
        default=None, description="Optional seed for reproducible output"
    )


class EmailTokenConfig(BaseModel):
    """Email mode for token generation."""

    domain: str = Field(default="@gmail.com", description="Domain appended to usernames")
    username_types: list[str] = Field(
        default_factory=lambda: ["numbers", "english"],
        validation_alias=AliasChoices("username_types", "usernameTypes"),
        description="Character pools used for the username",
    )
    username_length: int = Field(
        default=8,
        validation_alias=AliasChoices("username_length", "usernameLength"),
        description="Username length",
    )


class TokenRequest(BaseModel):
    """Request to generate standalone text tokens."""

    count: int = Field(default=100, description="Number of tokens to generate")
    length: int = Field(default=10, description="Characters per token")
    pool_types: list[str] = Field(
        default_factory=lambda: ["numbers", "english"],
        validation_alias=AliasChoices("pool_types", "poolTypes", "types"),
        description="Character pools to draw from",
    )
    email: EmailTokenConfig | None = Field(
        default=None, description="Generate email addresses instead of free text"
    )
    seed: int | None = Field(default=None, description="Optional seed")


# ================================
# RESULT RECORDS
# ================================


@dataclass(frozen=True)
class GenerationResult:
    """Immutable output of one generation run."""

    header_line: str | None
    lines: tuple[str, ...]
    record_count: int
    field_count: int
    elapsed_ms: float
    byte_size: int
    delimiter: str = ","

    @cached_property
    def content(self) -> str:
        """Header (when present) and record lines joined by newlines."""
        if self.header_line is None:
            return "\n".join(self.lines)
        return "\n".join((self.header_line, *self.lines))

    def to_text(self, bom: bool = False) -> str:
        """Return the content, prefixed with a UTF-8 BOM when requested."""
        return UTF8_BOM + self.content if bom else self.content

    @property
    def formatted_size(self) -> str:
        return format_file_size(self.byte_size)

    def summary(self) -> dict[str, Any]:
        """Summary suitable for logs and API responses."""
        return {
            "record_count": self.record_count,
            "field_count": self.field_count,
            "elapsed_ms": round(self.elapsed_ms, 2),
            "byte_size": self.byte_size,
            "size": self.formatted_size,
            "has_header": self.header_line is not None,
        }


@dataclass(frozen=True)
class PreviewResult:
    """Sample records plus size and time estimates for a full run."""

    header_line: str | None
    lines: tuple[str, ...]
    sample_size: int
    estimated_bytes: int
    estimated_size: str
    estimated_ms: float
    estimated_time: str


@dataclass(frozen=True)
class TokenResult:
    """Generated tokens with the settings that produced them."""

    tokens: tuple[str, ...]
    count: int
    length: int
    pool_types: tuple[str, ...]
    elapsed_ms: float
    pool_info: tuple[str, ...] = field(default_factory=tuple)
    is_email: bool = False
