"""Logging configuration for structured logging."""
import logging
import os
import sys

LOG_LEVEL_ENV = "SYNTH_DATAGEN_LOG_LEVEL"

NOISY_LOGGERS = ("asyncio", "urllib3", "httpx", "multipart", "uvicorn.access")


def resolve_log_level(level: str | None = None) -> str:
    """Pick the explicit level, then the environment, then INFO."""
    candidate = (level or os.getenv(LOG_LEVEL_ENV) or "INFO").upper()
    if not isinstance(logging.getLevelName(candidate), int):
        return "INFO"
    return candidate


def configure_structured_logging(level: str | None = None):
    """Configure structured logging for the application."""
    logging.basicConfig(
        level=getattr(logging, resolve_log_level(level)),
        format="%(message)s",  # JSON already formatted
        stream=sys.stdout,
    )

    # Disable excessive third-party logging
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
