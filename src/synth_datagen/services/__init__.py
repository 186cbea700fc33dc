"""
Services module for the synthetic data generator.

This module provides reusable service components for exporting generated
records and tokens to files.
"""

from .export_service import (
    ExportService,
    default_filename,
    render_tokens,
    result_to_dataframe,
    write_result,
    write_tokens,
)
from .file_manager import ExportFileManager
from .writers import BaseWriter, ParquetWriter

__all__ = [
    # Export service
    "ExportService",
    "default_filename",
    "render_tokens",
    "result_to_dataframe",
    "write_result",
    "write_tokens",
    # File management
    "ExportFileManager",
    # Writers
    "BaseWriter",
    "ParquetWriter",
]
