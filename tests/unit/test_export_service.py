"""
Unit tests for ExportService and the export helpers.

Tests delimited text with and without a byte-order mark, Parquet through the
DataFrame writer, and the three token export formats.
"""

import json
from datetime import datetime

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq
import pytest

from synth_datagen.services.export_service import (
    ExportService,
    default_filename,
    render_tokens,
    result_to_dataframe,
    write_result,
)
from synth_datagen.services.writers import ParquetWriter
from synth_datagen.shared.models import GenerationResult, TokenResult


@pytest.fixture
def result() -> GenerationResult:
    """Two records with a header and a quoted value."""
    lines = ("1,A", '2,"B, second"')
    content = "\n".join(("ID,Name", *lines))
    return GenerationResult(
        header_line="ID,Name",
        lines=lines,
        record_count=2,
        field_count=2,
        elapsed_ms=0.5,
        byte_size=len(content.encode("utf-8")),
    )


@pytest.fixture
def token_result() -> TokenResult:
    return TokenResult(
        tokens=("ab1", 'x"y'),
        count=2,
        length=3,
        pool_types=("numbers", "english"),
        elapsed_ms=1.5,
        pool_info=("numbers: 10 chars", "english: 52 chars"),
    )


GENERATED_AT = datetime(2024, 5, 6, 7, 8, 9)


class TestDelimitedExport:
    """Test delimited text files."""

    def test_default_filename(self, result):
        """Files are named by rows, columns and timestamp."""
        assert default_filename(result, GENERATED_AT) == "csv_data_2x2_20240506_070809.csv"

    def test_write_without_bom(self, result, tmp_path):
        """Content is written as-is in UTF-8."""
        path = write_result(result, tmp_path / "out" / "data.csv")

        assert path.read_bytes() == result.content.encode("utf-8")

    def test_write_with_bom(self, result, tmp_path):
        """bom=True prefixes the UTF-8 byte-order mark."""
        path = write_result(result, tmp_path / "data.csv", bom=True)

        assert path.read_bytes().startswith(b"\xef\xbb\xbf")
        assert path.read_bytes()[3:] == result.content.encode("utf-8")

    def test_dataframe_from_header(self, result):
        """Columns come from the header and quoted values are unescaped."""
        df = result_to_dataframe(result)

        assert list(df.columns) == ["ID", "Name"]
        assert df.iloc[1]["Name"] == "B, second"

    def test_dataframe_without_header(self, result):
        """Headerless results get positional column names."""
        headerless = GenerationResult(
            header_line=None,
            lines=result.lines,
            record_count=2,
            field_count=2,
            elapsed_ms=0.5,
            byte_size=0,
        )

        assert list(result_to_dataframe(headerless).columns) == ["field_1", "field_2"]

    def test_dataframe_uses_result_delimiter(self):
        """Results are parsed with the delimiter they were generated with."""
        semicolons = GenerationResult(
            header_line="ID;Note",
            lines=("1;a,b",),
            record_count=1,
            field_count=2,
            elapsed_ms=0.1,
            byte_size=0,
            delimiter=";",
        )

        assert result_to_dataframe(semicolons).iloc[0].tolist() == ["1", "a,b"]

    def test_dataframe_repeated_names(self):
        """Repeated header names get numeric suffixes so columns stay unique."""
        repeated = GenerationResult(
            header_line="name,name,name",
            lines=("a,b,c",),
            record_count=1,
            field_count=3,
            elapsed_ms=0.1,
            byte_size=0,
        )

        df = result_to_dataframe(repeated)

        assert list(df.columns) == ["name", "name.1", "name.2"]
        assert df.iloc[0].tolist() == ["a", "b", "c"]

    def test_dataframe_keeps_text_values(self):
        """Empty values, leading zeros and NA-like text are not converted."""
        values = GenerationResult(
            header_line="code,note",
            lines=("007,", 'NA,"line\nbreak"'),
            record_count=2,
            field_count=2,
            elapsed_ms=0.1,
            byte_size=0,
        )

        df = result_to_dataframe(values)

        assert df["code"].tolist() == ["007", "NA"]
        assert df["note"].tolist() == ["", "line\nbreak"]


class TestExportService:
    """Test exports through the service."""

    def test_export_csv(self, result, tmp_path):
        """CSV exports land in the base directory."""
        path = ExportService(tmp_path).export_result(result, filename="data.csv")

        assert path == tmp_path.resolve() / "data.csv"
        assert path.read_text(encoding="utf-8") == result.content

    def test_export_parquet(self, result, tmp_path):
        """Parquet exports round-trip the records."""
        path = ExportService(tmp_path).export_result(result, format="parquet")

        assert path.suffix == ".parquet"
        df = pd.read_parquet(path)
        assert df["Name"].tolist() == ["A", "B, second"]

    def test_export_parquet_repeated_names(self, tmp_path):
        """Results with repeated field names still export to Parquet."""
        repeated = GenerationResult(
            header_line="v,v",
            lines=("1,2",),
            record_count=1,
            field_count=2,
            elapsed_ms=0.1,
            byte_size=0,
        )

        path = ExportService(tmp_path).export_result(repeated, format="parquet")

        assert list(pd.read_parquet(path).columns) == ["v", "v.1"]

    def test_failed_write_removes_partial_file(self, result, tmp_path, monkeypatch):
        """A writer failing part way leaves no file behind."""

        class FailingWriter:
            def write(self, df, output_path):
                output_path.write_bytes(b"PAR1")
                raise IOError("disk full")

        service = ExportService(tmp_path)
        monkeypatch.setattr(service, "_get_writer", lambda format, result: FailingWriter())

        with pytest.raises(IOError, match="disk full"):
            service.export_result(result, format="parquet", filename="partial.parquet")

        assert not (tmp_path / "partial.parquet").exists()
        assert service.file_manager.get_tracked_files() == []

    def test_successful_export_stops_tracking(self, result, tmp_path):
        """Written files are kept and no longer tracked for rollback."""
        service = ExportService(tmp_path)
        path = service.export_result(result, filename="kept.csv")

        assert path.exists()
        assert service.file_manager.get_tracked_files() == []

    def test_path_escape_rejected(self, result, tmp_path):
        """File names may not leave the base directory."""
        with pytest.raises(ValueError, match="outside allowed base directory"):
            ExportService(tmp_path / "exports").export_result(result, filename="../escape.csv")

    def test_unsupported_format(self, result, tmp_path):
        """Unknown formats are rejected."""
        with pytest.raises(ValueError, match="Unsupported format"):
            ExportService(tmp_path).export_result(result, format="xlsx", filename="x.xlsx")

    def test_export_tokens(self, token_result, tmp_path):
        """Token exports use the token file naming."""
        path = ExportService(tmp_path).export_tokens(token_result, format="json")

        assert path.name.startswith("textgen_data_2_len3_")
        assert json.loads(path.read_text(encoding="utf-8"))["metadata"]["count"] == 2


class TestParquetWriter:
    """Test the Parquet writer directly."""

    def test_empty_dataframe_rejected(self, tmp_path):
        """Empty frames are not written."""
        with pytest.raises(ValueError, match="empty"):
            ParquetWriter().write(pd.DataFrame(), tmp_path / "empty.parquet")

    def test_string_columns_and_metadata(self, tmp_path):
        """Columns are stored as strings with the run metadata attached."""
        path = tmp_path / "out.parquet"
        ParquetWriter(metadata={"record_count": "2"}).write(
            pd.DataFrame({"n": [1, 2]}), path
        )

        schema = pq.read_schema(path)
        assert schema.field("n").type == pa.string()
        assert schema.metadata[b"synth_datagen.record_count"] == b"2"


class TestTokenRendering:
    """Test TXT, CSV and JSON token rendering."""

    def test_txt(self, token_result):
        """TXT has a commented header, a blank line and numbered tokens."""
        lines = render_tokens(token_result, "txt", GENERATED_AT).splitlines()

        assert lines[0] == "# Text generation result"
        assert lines[1] == "# Generated at: 2024-05-06T07:08:09"
        assert "# Pools: numbers, english" in lines
        assert lines[lines.index("") + 1] == "1. ab1"
        assert lines[-1] == '2. x"y'

    def test_csv(self, token_result):
        """CSV quotes tokens that need it."""
        lines = render_tokens(token_result, "csv", GENERATED_AT).splitlines()

        assert lines[0] == "index,text,length,generated_at"
        assert lines[2] == '2,"x""y",3,2024-05-06T07:08:09'

    def test_json(self, token_result):
        """JSON carries metadata and a character breakdown per token."""
        document = json.loads(render_tokens(token_result, "json", GENERATED_AT))

        assert document["metadata"]["config"]["pool_types"] == ["numbers", "english"]
        assert document["data"][0]["charset"]["english"] == 2
        assert document["data"][0]["charset"]["numbers"] == 1

    def test_unknown_format(self, token_result):
        """Unknown token formats are rejected."""
        with pytest.raises(ValueError, match="Unsupported token format"):
            render_tokens(token_result, "xml")
