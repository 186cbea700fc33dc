"""
Main FastAPI application entry point for the synthetic data generator.

Wires the generation, catalog, token, task, export and configuration routers
into one application and maps generation errors onto HTTP responses.
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from . import __version__
from .api.config_router import router as config_router
from .api.export_router import router as export_router
from .api.models import ErrorResponse, HealthCheckResponse, ValidationErrorResponse
from .config.models import DatagenConfig
from .config.settings import load_config
from .generators.routers import router as generators_router
from .shared import dependencies
from .shared.dependencies import check_file_system_health, get_config, update_config
from .shared.exceptions import (
    DatagenError,
    GenerationInProgressError,
    GenerationValidationError,
    PresetNotFoundError,
)
from .shared.logging_config import configure_structured_logging

logger = logging.getLogger(__name__)

APP_NAME = "Synthetic Data Generator API"
APP_VERSION = __version__
APP_DESCRIPTION = """
Generate synthetic delimited records and text tokens for testing and demos.

Describe each field by type and options, validate or preview the request,
then run it in the background and download the result. Presets cover common
record shapes. All data is fictitious and the randomness is not
cryptographically secure.
"""

DEFAULT_ORIGINS = ("http://localhost:3000", "http://localhost:5173")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load configuration on startup; cancel unfinished tasks on shutdown."""
    try:
        config = load_config()
    except (OSError, ValueError) as e:
        configure_structured_logging()
        logger.error(f"Failed to load configuration, using defaults: {e}")
        config = DatagenConfig()
    else:
        configure_structured_logging(level=config.log_level)

    await update_config(config)
    logger.info(f"Starting {APP_NAME} v{APP_VERSION}")

    yield

    pending = [task for task in dependencies._background_tasks.values() if not task.done()]
    for task in pending:
        task.cancel()
    logger.info(f"Shutdown complete, cancelled {len(pending)} unfinished task(s)")


app = FastAPI(
    title=APP_NAME,
    version=APP_VERSION,
    description=APP_DESCRIPTION,
    lifespan=lifespan,
    license_info={"name": "MIT License", "url": "https://opensource.org/licenses/MIT"},
)

# ALLOWED_ORIGINS is a comma-separated list
_origins_env = os.getenv("ALLOWED_ORIGINS", "")
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in _origins_env.split(",") if o.strip()]
    or list(DEFAULT_ORIGINS),
    allow_methods=["GET", "POST", "PUT", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


# ================================
# EXCEPTION HANDLERS
# ================================


def _error_response(
    status_code: int,
    error: str,
    message: str,
    violations: list[str] | None = None,
    details: dict | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error=error,
        message=message,
        violations=violations,
        details=details,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


@app.exception_handler(GenerationValidationError)
async def generation_validation_handler(request: Request, exc: GenerationValidationError):
    """Rejected generation requests list every violation."""
    logger.warning(
        f"Rejected {request.method} {request.url.path}: {len(exc.violations)} violation(s)"
    )
    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        "GENERATION_REJECTED",
        "Generation request is invalid",
        violations=exc.violations,
    )


@app.exception_handler(GenerationInProgressError)
async def in_progress_handler(request: Request, exc: GenerationInProgressError):
    return _error_response(status.HTTP_409_CONFLICT, "GENERATION_IN_PROGRESS", str(exc))


@app.exception_handler(PresetNotFoundError)
async def preset_not_found_handler(request: Request, exc: PresetNotFoundError):
    return _error_response(
        status.HTTP_404_NOT_FOUND,
        "PRESET_NOT_FOUND",
        str(exc),
        details={"available": exc.available},
    )


@app.exception_handler(DatagenError)
async def datagen_error_handler(request: Request, exc: DatagenError):
    """Generation failures without a more specific mapping."""
    logger.error(f"Generation error on {request.method} {request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "GENERATION_FAILED",
        str(exc),
        details={"exception_type": type(exc).__name__},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Bodies that do not parse into the request models, field by field."""
    field_errors = [
        {
            "field": ".".join(str(part) for part in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]
    logger.warning(
        f"Invalid body for {request.method} {request.url.path}: {len(field_errors)} error(s)"
    )
    body = ValidationErrorResponse(
        error="VALIDATION_ERROR",
        message="Request validation failed",
        field_errors=field_errors,
        timestamp=datetime.now(UTC),
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(body),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
        details={"exception_type": type(exc).__name__},
    )


# ================================
# MIDDLEWARE
# ================================


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """One log line per request with status and duration."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    client = request.client.host if request.client else "unknown"
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code} "
        f"({elapsed_ms:.1f}ms, client {client})"
    )
    return response


# ================================
# CORE ROUTES
# ================================


@app.get("/api", summary="API index")
async def root():
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "docs_url": "/docs",
        "health_url": "/health",
    }


@app.get("/health", response_model=HealthCheckResponse, summary="Health check")
async def health_check():
    """
    Report configuration and output directory health.

    The overall status is the worst of the individual checks, except that an
    unwritable output directory only degrades the service.
    """
    try:
        config = await get_config()
        config_check = {
            "status": "healthy",
            "details": {"sync_threshold": config.engine.sync_threshold},
        }
    except (OSError, ValueError) as e:
        config_check = {"status": "unhealthy", "error": str(e)}

    fs_check = await check_file_system_health()

    if config_check["status"] != "healthy" or fs_check["status"] == "unhealthy":
        overall = "unhealthy"
    elif fs_check["status"] != "healthy":
        overall = "degraded"
    else:
        overall = "healthy"

    return HealthCheckResponse(
        status=overall,
        timestamp=datetime.now(UTC),
        version=APP_VERSION,
        checks={"configuration": config_check, "file_system": fs_check},
    )


@app.get("/version", summary="Application version")
async def get_version():
    return {"name": APP_NAME, "version": APP_VERSION}


@app.get("/metrics", summary="Prometheus metrics", tags=["Monitoring"])
async def prometheus_metrics():
    """Generation volume and run outcomes in Prometheus exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


# ================================
# ROUTERS
# ================================

app.include_router(generators_router, prefix="/api", tags=["Data Generation"])
app.include_router(export_router, tags=["Data Export"])
app.include_router(config_router, tags=["Configuration"])


def run_dev_server(host: str = "127.0.0.1", port: int = 8000, reload: bool = False):
    """Serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("synth_datagen.main:app", host=host, port=port, reload=reload, log_level="info")


if __name__ == "__main__":
    run_dev_server()
