"""
Export service for generated data.

This module turns in-memory generation results into files:

- delimited text, UTF-8 with an optional byte-order mark
- Parquet through the DataFrame writers
- text tokens as TXT (commented header and numbered lines), CSV or JSON

Usage:
    from pathlib import Path
    from synth_datagen.services import ExportService

    service = ExportService(base_dir=Path("output"))
    csv_path = service.export_result(result, format="csv", bom=True)
    parquet_path = service.export_result(result, format="parquet")
    txt_path = service.export_tokens(token_result, format="txt")
"""

import io
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Literal

import pandas as pd

from synth_datagen import __version__
from synth_datagen.generators.serializer import serialize_record
from synth_datagen.generators.tokens import analyze_charset, token_filename
from synth_datagen.services.file_manager import ExportFileManager
from synth_datagen.services.writers import BaseWriter, ParquetWriter
from synth_datagen.shared.models import GenerationResult, TokenResult

logger = logging.getLogger(__name__)

ExportFormat = Literal["csv", "parquet"]
TokenFormat = Literal["txt", "csv", "json"]

TOKEN_FORMATS = ("txt", "csv", "json")
TOKEN_CSV_HEADER = ("index", "text", "length", "generated_at")
TOKEN_MEDIA_TYPES = {
    "txt": "text/plain",
    "csv": "text/csv",
    "json": "application/json",
}


# ================================
# DELIMITED RESULTS
# ================================


def default_filename(result: GenerationResult, now: datetime | None = None) -> str:
    """``csv_data_{rows}x{cols}_{YYYYMMDD_HHMMSS}.csv``"""
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"csv_data_{result.record_count}x{result.field_count}_{timestamp}.csv"


def write_result(result: GenerationResult, path: str | Path, *, bom: bool = False) -> Path:
    """
    Write a result as UTF-8 text, creating parent directories.

    Args:
        result: Generation result
        path: Destination file
        bom: Prefix the file with a UTF-8 byte-order mark

    Returns:
        The written path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as f:
        f.write(result.to_text(bom=bom))
    logger.info(f"Wrote {result.record_count:,} records ({result.formatted_size}) to {path}")
    return path


def result_to_dataframe(result: GenerationResult) -> pd.DataFrame:
    """
    Read a result back into a DataFrame of strings, using its own delimiter.

    Columns are named from the header line, with repeated names suffixed
    ``.1``, ``.2`` and so on, or ``field_1..field_n`` when the result has none.
    Every value stays the exact text that was generated.
    """
    has_header = result.header_line is not None
    return pd.read_csv(
        io.StringIO(result.content),
        sep=result.delimiter,
        header=0 if has_header else None,
        names=None if has_header else [f"field_{i}" for i in range(1, result.field_count + 1)],
        dtype=str,
        keep_default_na=False,
        na_filter=False,
        skip_blank_lines=False,
    )


# ================================
# TOKENS
# ================================


def _timestamp(generated_at: datetime | None) -> str:
    return (generated_at or datetime.now()).isoformat(timespec="seconds")


def render_tokens_txt(result: TokenResult, generated_at: datetime | None = None) -> str:
    """Commented header, a blank line, then one numbered token per line."""
    lines = [
        "# Text generation result",
        f"# Generated at: {_timestamp(generated_at)}",
        f"# Count: {result.count}",
        f"# Length: {result.length}",
        f"# Pools: {', '.join(result.pool_types)}",
        f"# Duration: {round(result.elapsed_ms)}ms",
        "",
    ]
    lines.extend(f"{index}. {token}" for index, token in enumerate(result.tokens, start=1))
    return "\n".join(lines) + "\n"


def render_tokens_csv(result: TokenResult, generated_at: datetime | None = None) -> str:
    """``index,text,length,generated_at`` rows with standard quoting."""
    timestamp = _timestamp(generated_at)
    lines = [serialize_record(TOKEN_CSV_HEADER)]
    lines.extend(
        serialize_record([index, token, len(token), timestamp])
        for index, token in enumerate(result.tokens, start=1)
    )
    return "\n".join(lines) + "\n"


def render_tokens_json(result: TokenResult, generated_at: datetime | None = None) -> str:
    """Metadata block plus one entry per token with its character breakdown."""
    document = {
        "metadata": {
            "title": "Text generation result",
            "generated_at": _timestamp(generated_at),
            "count": result.count,
            "config": {
                "count": result.count,
                "length": result.length,
                "pool_types": list(result.pool_types),
                "is_email": result.is_email,
            },
            "duration_ms": round(result.elapsed_ms, 2),
            "pool_info": list(result.pool_info),
            "version": "1.0",
        },
        "data": [
            {
                "id": index,
                "text": token,
                "length": len(token),
                "charset": analyze_charset(token),
            }
            for index, token in enumerate(result.tokens, start=1)
        ],
    }
    return json.dumps(document, ensure_ascii=False, indent=2)


TOKEN_RENDERERS = {
    "txt": render_tokens_txt,
    "csv": render_tokens_csv,
    "json": render_tokens_json,
}


def render_tokens(
    result: TokenResult, format: TokenFormat, generated_at: datetime | None = None
) -> str:
    """
    Render tokens in one of the token export formats.

    Raises:
        ValueError: If the format is not txt, csv or json
    """
    renderer = TOKEN_RENDERERS.get(format)
    if renderer is None:
        raise ValueError(
            f"Unsupported token format: {format}. Use one of {', '.join(TOKEN_FORMATS)}"
        )
    return renderer(result, generated_at)


def write_tokens(result: TokenResult, path: str | Path, format: TokenFormat) -> Path:
    """Write rendered tokens as UTF-8, creating parent directories."""
    content = render_tokens(result, format)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info(f"Wrote {result.count:,} tokens to {path}")
    return path


# ================================
# SERVICE
# ================================


class ExportService:
    """
    Writes generation and token results into one output directory.

    Attributes:
        base_dir: Directory receiving all exported files
        file_manager: Path resolution and rollback of partially written files
    """

    def __init__(self, base_dir: Path):
        self.base_dir = Path(base_dir)
        self.file_manager = ExportFileManager(self.base_dir)
        logger.info(f"ExportService initialized with base_dir: {self.base_dir}")

    def _get_writer(self, format: ExportFormat, result: GenerationResult) -> BaseWriter:
        if format == "parquet":
            return ParquetWriter(
                metadata={
                    "record_count": str(result.record_count),
                    "field_count": str(result.field_count),
                    "generator_version": __version__,
                }
            )
        raise ValueError(f"Unsupported format: {format}")

    def export_result(
        self,
        result: GenerationResult,
        format: ExportFormat = "csv",
        *,
        bom: bool = False,
        filename: str | None = None,
    ) -> Path:
        """
        Export a generation result.

        Args:
            result: Generation result
            format: "csv" writes the delimited text, "parquet" a Parquet table
            bom: Prefix delimited text with a UTF-8 byte-order mark
            filename: Output file name; derived from the result when omitted

        Returns:
            Path of the written file

        Raises:
            ValueError: If the format is unsupported or the path escapes base_dir
            IOError: If the file cannot be written
        """
        if filename is None:
            filename = default_filename(result)
            if format == "parquet":
                filename = filename.removesuffix(".csv") + ".parquet"

        path = self.file_manager.get_output_path(filename)
        self.file_manager.ensure_directory(path)
        self.file_manager.track_file(path)

        try:
            if format == "csv":
                write_result(result, path, bom=bom)
            else:
                writer = self._get_writer(format, result)
                writer.write(result_to_dataframe(result), path)
        except Exception as e:
            logger.error(f"Result export failed: {e}", exc_info=True)
            logger.info("Attempting to cleanup partial export")
            self.file_manager.cleanup()
            raise

        self.file_manager.reset_tracking()
        return path

    def export_tokens(
        self,
        result: TokenResult,
        format: TokenFormat = "txt",
        *,
        filename: str | None = None,
    ) -> Path:
        """Export tokens as TXT, CSV or JSON inside ``base_dir``."""
        filename = filename or token_filename(result.count, result.length, format)
        path = self.file_manager.get_output_path(filename)
        self.file_manager.ensure_directory(path)
        return write_tokens(result, path, format)
