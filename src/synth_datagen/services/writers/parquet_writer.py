"""
Parquet format writer.

Generated values are text, so records are stored as string columns. The run
summary (record count, field count, generator version) travels in the file's
key-value metadata for consumers that catalogue synthetic datasets.
"""

import logging
from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from synth_datagen.services.writers.base_writer import BaseWriter

logger = logging.getLogger(__name__)

METADATA_PREFIX = "synth_datagen."


class ParquetWriter(BaseWriter):
    """Writes a DataFrame of strings to one Parquet file through pyarrow."""

    extension = "parquet"

    def __init__(self, compression: str = "snappy", metadata: dict[str, str] | None = None):
        self.compression = compression
        self.metadata = dict(metadata or {})

    def _schema_metadata(self, table: pa.Table) -> dict[bytes, bytes]:
        merged = dict(table.schema.metadata or {})
        for key, value in self.metadata.items():
            merged[f"{METADATA_PREFIX}{key}".encode()] = str(value).encode()
        return merged

    def write(self, df: pd.DataFrame, output_path: Path, **kwargs) -> None:
        """
        Write ``df`` with every column cast to string.

        Raises:
            ValueError: If the DataFrame is empty
            IOError: If the file cannot be written
        """
        if df.empty:
            raise ValueError("Cannot write empty DataFrame")

        schema = pa.schema([pa.field(str(column), pa.string()) for column in df.columns])
        table = pa.Table.from_pandas(df.astype(str), schema=schema, preserve_index=False)
        table = table.replace_schema_metadata(self._schema_metadata(table))

        output_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            pq.write_table(
                table, output_path, compression=kwargs.get("compression", self.compression)
            )
        except (OSError, pa.ArrowException) as e:
            logger.error(f"Failed to write Parquet to {output_path}: {e}")
            raise IOError(f"Failed to write Parquet file: {e}") from e

        logger.info(f"Wrote {table.num_rows:,} records to {output_path}")
