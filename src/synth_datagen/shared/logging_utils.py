"""Structured logging utilities for generation runs."""
import json
import logging
import uuid
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import Any, Iterator, Optional


class StructuredLogger:
    """Structured logger that tags every entry with the active run id."""

    def __init__(self, logger_name: str):
        self.logger = logging.getLogger(logger_name)
        self._correlation_id: Optional[str] = None

    @property
    def correlation_id(self) -> Optional[str]:
        return self._correlation_id

    def set_correlation_id(self, correlation_id: str):
        """Set correlation ID for current run."""
        self._correlation_id = correlation_id

    def clear_correlation_id(self):
        """Clear correlation ID."""
        self._correlation_id = None

    def generate_correlation_id(self) -> str:
        """Generate new run correlation ID."""
        return f"RUN_{uuid.uuid4().hex[:12]}"

    @contextmanager
    def correlation(self, correlation_id: Optional[str] = None) -> Iterator[str]:
        """Tag entries logged inside the block with one correlation ID."""
        previous = self._correlation_id
        self._correlation_id = correlation_id or self.generate_correlation_id()
        try:
            yield self._correlation_id
        finally:
            self._correlation_id = previous

    def _format_message(self, level: str, message: str, **kwargs: Any) -> dict:
        """Format log message with structured data."""
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": level,
            "message": message,
            "correlation_id": self._correlation_id or "none",
        }

        if kwargs:
            log_entry["context"] = kwargs

        return log_entry

    def _emit(self, level: int, message: str, **kwargs: Any):
        if not self.logger.isEnabledFor(level):
            return
        entry = self._format_message(logging.getLevelName(level), message, **kwargs)
        self.logger.log(level, json.dumps(entry, ensure_ascii=False, default=str))

    def info(self, message: str, **kwargs):
        """Log info with structured data."""
        self._emit(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log warning with structured data."""
        self._emit(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log error with structured data."""
        self._emit(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs):
        """Log debug with structured data."""
        self._emit(logging.DEBUG, message, **kwargs)


def get_structured_logger(name: str) -> StructuredLogger:
    """Get or create structured logger."""
    return StructuredLogger(name)
