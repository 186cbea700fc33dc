"""
Configuration models for the synthetic data generator.

These models define the structure and validation for the config.json file.
Every section has defaults, so an empty file (or no file) is a valid
configuration.
"""

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "SYNTH_DATAGEN_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineConfig(BaseModel):
    """Configuration for the generation engine."""

    sync_threshold: int = Field(
        5000,
        ge=0,
        description="Runs with at most this many records generate in one synchronous pass",
    )
    min_batch_size: int = Field(
        100, gt=0, description="Smallest batch in the batched strategy"
    )
    max_batch_size: int = Field(
        1000, gt=0, description="Largest batch in the batched strategy"
    )
    target_batches: int = Field(
        100, gt=0, description="Approximate number of batches per batched run"
    )
    max_records: int = Field(
        1_000_000, gt=0, description="Largest record count a request may ask for"
    )
    preview_rows: int = Field(10, gt=0, le=1000, description="Rows generated by preview")
    ms_per_thousand_rows: float = Field(
        50.0,
        gt=0.0,
        description="Per-row processing heuristic used for time estimates",
    )
    allow_unknown_types: bool = Field(
        False,
        description="Generate default text for unknown field types instead of rejecting",
    )

    @model_validator(mode="after")
    def validate_batch_bounds(self) -> "EngineConfig":
        """Ensure the batch bounds are ordered."""
        if self.min_batch_size > self.max_batch_size:
            raise ValueError(
                f"min_batch_size ({self.min_batch_size}) must not exceed "
                f"max_batch_size ({self.max_batch_size})"
            )
        return self

    def batch_size_for(self, record_count: int) -> int:
        """Batch size giving roughly ``target_batches`` batches within the bounds."""
        return min(
            self.max_batch_size,
            max(self.min_batch_size, record_count // self.target_batches),
        )


class OutputConfig(BaseModel):
    """Configuration for generated output files."""

    delimiter: str = Field(",", min_length=1, max_length=1, description="Default delimiter")
    include_header: bool = Field(True, description="Emit a header line by default")
    bom: bool = Field(False, description="Prefix files with a UTF-8 byte-order mark")
    output_dir: str = Field(
        "output", min_length=1, description="Directory for files written by the API"
    )

    @field_validator("delimiter")
    @classmethod
    def validate_delimiter(cls, v: str) -> str:
        """Reject delimiters that would break quoting."""
        if v in ('"', "\r", "\n"):
            raise ValueError("Delimiter cannot be a quote or newline character")
        return v

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        """Validate that the path is not empty or whitespace only."""
        if not v.strip():
            raise ValueError("Path cannot be empty or whitespace only")
        return v.strip()


class ApiConfig(BaseModel):
    """Configuration for the HTTP API."""

    result_cache_size: int = Field(
        32, gt=0, description="Finished results kept for download"
    )
    result_ttl_seconds: int = Field(
        3600, gt=0, description="Seconds a finished result stays downloadable"
    )
    generate_rate_limit: int = Field(
        10, gt=0, description="Generation requests allowed per client per window"
    )
    generate_rate_window: int = Field(
        60, gt=0, description="Rate limit window in seconds"
    )


class DatagenConfig(BaseModel):
    """Main configuration model for the synthetic data generator."""

    engine: EngineConfig = Field(
        default_factory=EngineConfig, description="Generation engine settings"
    )
    output: OutputConfig = Field(
        default_factory=OutputConfig, description="Output file settings"
    )
    api: ApiConfig = Field(default_factory=ApiConfig, description="HTTP API settings")
    log_level: str = Field(
        default_factory=lambda: os.getenv(LOG_LEVEL_ENV, "INFO"),
        validate_default=True,
        description="Root log level",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @classmethod
    def from_file(cls, file_path: str | Path) -> "DatagenConfig":
        """
        Load configuration from a JSON file.

        Args:
            file_path: Path to the configuration JSON file

        Returns:
            DatagenConfig instance

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the JSON is invalid or doesn't match the schema
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")

        logger.debug(f"Loaded configuration from {path}")
        return cls(**data)

    def to_file(self, file_path: str | Path) -> None:
        """
        Save configuration to a JSON file.

        Args:
            file_path: Path where to save the configuration file
        """
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with path.open("w", encoding="utf-8") as f:
            json.dump(self.model_dump(), f, indent=2)
