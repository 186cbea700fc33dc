"""
Data format writers for export functionality.

This module provides a unified interface for writing generated records,
as pandas DataFrames, to analytic file formats.
"""

from synth_datagen.services.writers.base_writer import BaseWriter
from synth_datagen.services.writers.parquet_writer import ParquetWriter

__all__ = [
    "BaseWriter",
    "ParquetWriter",
]
