"""
Generation run orchestration.

``GenerationController`` validates a request and then produces its records
with one of two strategies:

- synchronous: small runs (``record_count <= sync_threshold``) are generated in
  one uninterrupted pass without progress callbacks or cancellation;
- batched: larger runs are generated in batches, yielding to the event loop
  before each batch, checking the cancellation flag and reporting progress
  after each batch.

A controller is request-scoped and not reentrant. Results are returned to the
caller and never kept on the controller.

State transitions:
    IDLE → VALIDATING → REJECTED
    IDLE → VALIDATING → RUNNING → COMPLETED | CANCELLED | FAILED
"""

import asyncio
import logging
import random
import time
from enum import Enum
from typing import Any, Callable

from synth_datagen.config.models import EngineConfig
from synth_datagen.shared.exceptions import (
    GenerationCancelledError,
    GenerationInProgressError,
    GenerationValidationError,
)
from synth_datagen.shared.formatting import format_duration_estimate, format_file_size
from synth_datagen.shared.logging_utils import get_structured_logger
from synth_datagen.shared.metrics import metrics_collector
from synth_datagen.shared.models import GenerationRequest, GenerationResult, PreviewResult

from .config_validator import validate_request
from .row_assembler import RowAssembler
from .serializer import serialize_header, serialize_record

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, int], None]
RecordFormatter = Callable[[list[Any]], str]

# Fraction of the per-row heuristic charged for each field
FIELD_COST_FACTOR = 0.1


class GenerationState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    REJECTED = "rejected"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class GenerationStrategy(str, Enum):
    SYNC = "sync"
    BATCHED = "batched"


def _utf8_size(text: str) -> int:
    return len(text.encode("utf-8"))


class GenerationController:
    """
    Orchestrates validation, record production and result assembly.

    Args:
        config: Engine settings; defaults apply when omitted
    """

    def __init__(self, config: EngineConfig | None = None):
        self.config = config or EngineConfig()
        self._state = GenerationState.IDLE
        self._cancel_requested = False
        self._slog = get_structured_logger(__name__)

    @property
    def state(self) -> GenerationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == GenerationState.RUNNING

    def choose_strategy(self, record_count: int) -> GenerationStrategy:
        if record_count <= self.config.sync_threshold:
            return GenerationStrategy.SYNC
        return GenerationStrategy.BATCHED

    def batch_size_for(self, record_count: int) -> int:
        return self.config.batch_size_for(record_count)

    def validate(self, request: GenerationRequest) -> list[str]:
        """Return every violation in ``request`` without touching run state."""
        return validate_request(
            request,
            max_records=self.config.max_records,
            allow_unknown_types=self.config.allow_unknown_types,
        )

    def cancel(self) -> None:
        """Request cancellation; observed at the next batch boundary."""
        self._cancel_requested = True
        logger.debug("Cancellation requested")

    # ================================
    # RUN LIFECYCLE
    # ================================

    def _begin(self, request: GenerationRequest, strategy: GenerationStrategy) -> None:
        if self._state in (GenerationState.VALIDATING, GenerationState.RUNNING):
            raise GenerationInProgressError()

        self._cancel_requested = False
        self._state = GenerationState.VALIDATING

        violations = self.validate(request)
        if violations:
            self._state = GenerationState.REJECTED
            metrics_collector.request_rejected()
            self._slog.warning(
                "Generation request rejected",
                violation_count=len(violations),
                violations=violations,
            )
            raise GenerationValidationError(violations)

        self._state = GenerationState.RUNNING
        metrics_collector.run_started(self._slog.correlation_id or "")
        self._slog.info(
            "Generation run started",
            record_count=request.record_count,
            field_count=len(request.fields),
            strategy=strategy.value,
            batch_size=(
                self.batch_size_for(request.record_count)
                if strategy == GenerationStrategy.BATCHED
                else request.record_count
            ),
        )

    def _new_assembler(self, request: GenerationRequest) -> RowAssembler:
        return RowAssembler(
            request.fields,
            random.Random(request.seed),
            fallback_unknown=self.config.allow_unknown_types,
        )

    def _formatter_for(
        self, request: GenerationRequest, formatter: RecordFormatter | None
    ) -> RecordFormatter:
        if formatter is not None:
            return formatter
        delimiter = request.delimiter
        return lambda values: serialize_record(values, delimiter)

    def _header_for(self, request: GenerationRequest) -> str | None:
        if not request.include_header:
            return None
        return serialize_header([field.name for field in request.fields], request.delimiter)

    def _complete(
        self,
        request: GenerationRequest,
        lines: list[str],
        started: float,
        strategy: GenerationStrategy,
    ) -> GenerationResult:
        header_line = self._header_for(request)
        all_lines = lines if header_line is None else [header_line, *lines]
        byte_size = sum(_utf8_size(line) for line in all_lines) + max(len(all_lines) - 1, 0)

        result = GenerationResult(
            header_line=header_line,
            lines=tuple(lines),
            record_count=len(lines),
            field_count=len(request.fields),
            elapsed_ms=(time.perf_counter() - started) * 1000,
            byte_size=byte_size,
            delimiter=request.delimiter,
        )

        self._state = GenerationState.COMPLETED
        metrics_collector.run_completed(
            self._slog.correlation_id or "", strategy.value, result.record_count, byte_size
        )
        self._slog.info("Generation run completed", strategy=strategy.value, **result.summary())
        return result

    def _fail(self, strategy: GenerationStrategy, error: BaseException) -> None:
        self._state = GenerationState.FAILED
        metrics_collector.run_failed(self._slog.correlation_id or "", strategy.value)
        self._slog.error(
            "Generation run failed", strategy=strategy.value, error=str(error)
        )

    def _cancelled(self, strategy: GenerationStrategy, processed: int, total: int) -> None:
        self._state = GenerationState.CANCELLED
        metrics_collector.run_cancelled(self._slog.correlation_id or "", strategy.value)
        self._slog.warning(
            "Generation run cancelled",
            strategy=strategy.value,
            processed=processed,
            total=total,
        )

    # ================================
    # STRATEGIES
    # ================================

    def _generate_all(
        self, request: GenerationRequest, formatter: RecordFormatter
    ) -> list[str]:
        assembler = self._new_assembler(request)
        return [
            formatter(assembler.assemble_row(index))
            for index in range(request.record_count)
        ]

    def generate_sync(
        self, request: GenerationRequest, *, formatter: RecordFormatter | None = None
    ) -> GenerationResult:
        """
        Generate every record in one synchronous pass.

        Raises:
            GenerationValidationError: If the request is invalid
            GenerationInProgressError: If a run is already in progress
        """
        strategy = GenerationStrategy.SYNC
        with self._slog.correlation():
            self._begin(request, strategy)
            started = time.perf_counter()
            try:
                lines = self._generate_all(request, self._formatter_for(request, formatter))
            except Exception as e:
                self._fail(strategy, e)
                raise
            return self._complete(request, lines, started, strategy)

    async def run(
        self,
        request: GenerationRequest,
        progress_callback: ProgressCallback | None = None,
        *,
        formatter: RecordFormatter | None = None,
    ) -> GenerationResult:
        """
        Validate and generate ``request``, choosing the strategy by volume.

        Args:
            request: Generation request
            progress_callback: Called with ``(percent, processed, total)`` after
                each batch; never called for synchronous runs
            formatter: Turns a record into one output line (CSV by default)

        Returns:
            GenerationResult for the whole run

        Raises:
            GenerationValidationError: If the request is invalid
            GenerationInProgressError: If a run is already in progress
            GenerationCancelledError: If cancellation was observed between batches
        """
        strategy = self.choose_strategy(request.record_count)
        with self._slog.correlation():
            self._begin(request, strategy)
            started = time.perf_counter()
            line_formatter = self._formatter_for(request, formatter)

            if strategy == GenerationStrategy.SYNC:
                try:
                    lines = self._generate_all(request, line_formatter)
                except Exception as e:
                    self._fail(strategy, e)
                    raise
                return self._complete(request, lines, started, strategy)

            try:
                lines = await self._run_batched(request, line_formatter, progress_callback)
            except GenerationCancelledError as e:
                self._cancelled(strategy, e.processed, e.total)
                raise
            except asyncio.CancelledError:
                self._cancelled(strategy, 0, request.record_count)
                raise
            except Exception as e:
                self._fail(strategy, e)
                raise
            return self._complete(request, lines, started, strategy)

    async def _run_batched(
        self,
        request: GenerationRequest,
        formatter: RecordFormatter,
        progress_callback: ProgressCallback | None,
    ) -> list[str]:
        total = request.record_count
        batch_size = self.batch_size_for(total)
        assembler = self._new_assembler(request)
        lines: list[str] = []
        processed = 0

        while processed < total:
            await asyncio.sleep(0)
            if self._cancel_requested:
                raise GenerationCancelledError(processed, total)

            stop = min(processed + batch_size, total)
            for index in range(processed, stop):
                lines.append(formatter(assembler.assemble_row(index)))
            processed = stop

            if progress_callback is not None:
                progress_callback(round(processed / total * 100), processed, total)

        return lines

    # ================================
    # PREVIEW
    # ================================

    def estimate_duration_ms(self, record_count: int, field_count: int) -> float:
        """Per-row heuristic for the wall-clock time of a full run."""
        return (
            record_count
            / 1000
            * self.config.ms_per_thousand_rows
            * field_count
            * FIELD_COST_FACTOR
        )

    def preview(
        self, request: GenerationRequest, sample_size: int | None = None
    ) -> PreviewResult:
        """
        Generate a small sample and estimate the full run.

        Uses a private assembler and never changes the controller state.

        Raises:
            GenerationValidationError: If the request is invalid
        """
        violations = self.validate(request)
        if violations:
            raise GenerationValidationError(violations)

        sample_size = sample_size or self.config.preview_rows
        rows = min(request.record_count, sample_size)
        assembler = self._new_assembler(request)
        lines = [
            serialize_record(assembler.assemble_row(index), request.delimiter)
            for index in range(rows)
        ]
        header_line = self._header_for(request)

        # Each record line carries one newline separator in the full output
        mean_line_bytes = sum(_utf8_size(line) + 1 for line in lines) / max(len(lines), 1)
        estimated_bytes = round(mean_line_bytes * request.record_count)
        if header_line is not None:
            estimated_bytes += _utf8_size(header_line)
        else:
            estimated_bytes = max(estimated_bytes - 1, 0)

        estimated_ms = self.estimate_duration_ms(request.record_count, len(request.fields))
        return PreviewResult(
            header_line=header_line,
            lines=tuple(lines),
            sample_size=rows,
            estimated_bytes=estimated_bytes,
            estimated_size=format_file_size(estimated_bytes),
            estimated_ms=estimated_ms,
            estimated_time=format_duration_estimate(estimated_ms),
        )
