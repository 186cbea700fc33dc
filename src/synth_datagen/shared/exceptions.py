"""
Custom exceptions for the synthetic data generator.

This module contains specialized exception classes for handling request
validation failures, unsupported field types, cancelled or overlapping runs,
and generator failures that occur mid-run.
"""

from typing import Any


class DatagenError(Exception):
    """Base exception for all synthetic data generator errors."""

    pass


class GenerationValidationError(DatagenError):
    """Exception raised when a generation request is rejected.

    Carries every violation found so callers can report them all at once.
    """

    def __init__(self, violations: list[str], message: str | None = None):
        self.violations = list(violations)

        if message is None:
            count = len(self.violations)
            message = f"Generation request rejected with {count} violation(s)"

        if self.violations:
            message = f"{message}: {'; '.join(self.violations)}"

        super().__init__(message)


class UnsupportedFieldTypeError(GenerationValidationError):
    """Exception raised when a field type tag is not in the catalog."""

    def __init__(self, field_type: Any, known_types: list[str] | None = None):
        self.field_type = field_type
        self.known_types = sorted(known_types or [])

        violation = f"Unsupported field type '{field_type}'"
        if self.known_types:
            violation = f"{violation}. Supported types: {', '.join(self.known_types)}"

        super().__init__([violation], message="Unsupported field type")


class GenerationCancelledError(DatagenError):
    """Exception raised when a batched run observes a cancellation request."""

    def __init__(self, processed: int = 0, total: int = 0):
        self.processed = processed
        self.total = total

        message = "Generation cancelled"
        if total:
            message = f"{message} after {processed:,} of {total:,} records"

        super().__init__(message)


class GenerationInProgressError(DatagenError):
    """Exception raised when a controller is asked to run while already running."""

    def __init__(self, message: str = "A generation run is already in progress"):
        super().__init__(message)


class FieldGenerationError(DatagenError):
    """Exception raised when a field generator fails while producing a record."""

    def __init__(
        self,
        field_name: str,
        row_index: int,
        original_error: Exception | None = None,
    ):
        self.field_name = field_name
        self.row_index = row_index
        self.original_error = original_error

        message = f"Failed to generate field '{field_name}' for record {row_index}"

        if original_error:
            message = f"{message} (Original error: {original_error})"

        super().__init__(message)


class PresetNotFoundError(DatagenError):
    """Exception raised when a named preset does not exist."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = list(available or [])

        message = f"Preset '{name}' not found"

        if self.available:
            message = f"{message}. Available presets: {', '.join(self.available)}"

        super().__init__(message)
