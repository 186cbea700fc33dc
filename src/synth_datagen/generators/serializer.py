"""
Delimited text serialization.

Values are quoted RFC 4180 style: a value containing the delimiter, a double
quote, CR or LF is wrapped in double quotes with embedded quotes doubled.
Lines are joined with ``\\n`` and no trailing newline; a byte-order mark is the
sink's concern.
"""

import csv
import io
from decimal import Decimal
from typing import Any, Iterable, Sequence


def stringify(value: Any) -> str:
    """Render one value the way it appears in output text.

    ``None`` renders empty, booleans as ``true``/``false`` and integral floats
    without a fractional part. Other floats use positional notation with their
    shortest round-trip digits, never an exponent.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        text = repr(value)
        if "e" in text:
            return format(Decimal(text), "f")
        return text
    return str(value)


def escape_value(text: str, delimiter: str = ",") -> str:
    if delimiter in text or '"' in text or "\n" in text or "\r" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def serialize_record(values: Sequence[Any], delimiter: str = ",") -> str:
    """Serialize one record to a single delimited line."""
    return delimiter.join(escape_value(stringify(value), delimiter) for value in values)


def serialize_header(names: Sequence[str], delimiter: str = ",") -> str:
    """Serialize field names with the same escaping as records."""
    return serialize_record(names, delimiter)


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def _reader(text: str, delimiter: str):
    return csv.reader(io.StringIO(text, newline=""), delimiter=delimiter, strict=True)


def parse_text(text: str, delimiter: str = ",") -> list[list[str]]:
    """Split serialized output into records of string values.

    Inverse of ``serialize_record`` for string values: quoted values may
    contain the delimiter, doubled quotes and newlines. An empty line is a
    record holding one empty value.

    Raises:
        ValueError: If the text is not well-formed delimited data
    """
    try:
        return [row or [""] for row in _reader(text, delimiter)]
    except csv.Error as e:
        raise ValueError(f"Malformed delimited text: {e}") from e


def parse_record(line: str, delimiter: str = ",") -> list[str]:
    """Split one serialized record back into its string values.

    Raises:
        ValueError: If the line is malformed or holds more than one record
    """
    records = parse_text(line, delimiter)
    if not records:
        return [""]
    if len(records) > 1:
        raise ValueError(f"Expected one record, found {len(records)}")
    return records[0]
