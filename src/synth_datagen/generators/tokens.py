"""
Standalone text token generation.

Tokens are produced by the same engine as delimited records: a token request
becomes a one-field generation request (a text field, or the username part of
an email address) and runs through ``GenerationController`` with a raw line
formatter, so tokens follow the same synchronous/batched and cancellation
rules as any other run.
"""

import logging
import random
import time
from datetime import datetime
from typing import Any

from synth_datagen.shared.exceptions import GenerationValidationError
from synth_datagen.shared.formatting import format_duration_estimate
from synth_datagen.shared.models import (
    FieldSpec,
    GenerationRequest,
    TokenRequest,
    TokenResult,
)
from synth_datagen.sourcedata.default import CHARACTER_POOLS

from .config_validator import validate_token_request
from .controller import GenerationController, ProgressCallback, RecordFormatter
from .row_assembler import RowAssembler
from .serializer import stringify

logger = logging.getLogger(__name__)

TOKEN_FIELD_NAME = "text"
DEFAULT_PREVIEW_COUNT = 5

# Empirical cost of 1000 tokens of length 10
TOKEN_MS_PER_THOUSAND = 30

EMOJI_RANGES = (
    (0x1F600, 0x1F64F),
    (0x1F300, 0x1F5FF),
    (0x1F680, 0x1F6FF),
    (0x1F700, 0x1F77F),
    (0x1F780, 0x1F7FF),
    (0x1F800, 0x1F8FF),
    (0x1F900, 0x1F9FF),
    (0x1FA00, 0x1FA6F),
    (0x1FA70, 0x1FAFF),
    (0x2600, 0x26FF),
    (0x2700, 0x27BF),
)
SPECIAL_SYMBOLS = frozenset("!@#$%^&*()_+-=[]{}|;':\",./<>?`~\\")


def email_domain(request: TokenRequest) -> str:
    """Email domain of the request with a leading ``@``."""
    domain = request.email.domain if request.email else ""
    return domain if domain.startswith("@") else f"@{domain}"


def token_field(request: TokenRequest) -> FieldSpec:
    """The single field a token request expands to."""
    if request.email is not None:
        return FieldSpec(
            name=TOKEN_FIELD_NAME,
            type="text",
            config={
                "charset": list(request.email.username_types),
                "length": request.email.username_length,
            },
        )
    return FieldSpec(
        name=TOKEN_FIELD_NAME,
        type="text",
        config={"charset": list(request.pool_types), "length": request.length},
    )


def token_generation_request(request: TokenRequest) -> GenerationRequest:
    return GenerationRequest(
        record_count=request.count,
        fields=[token_field(request)],
        include_header=False,
        seed=request.seed,
    )


def token_formatter(request: TokenRequest) -> RecordFormatter:
    """Raw line formatter: tokens are written unquoted."""
    if request.email is not None:
        domain = email_domain(request)
        return lambda values: f"{stringify(values[0])}{domain}"
    return lambda values: stringify(values[0])


def pool_info(request: TokenRequest) -> list[str]:
    """Human-readable size of every selected pool."""
    if request.email is not None:
        return [f"email: {email_domain(request)}"]

    info = []
    for name in request.pool_types:
        pool = CHARACTER_POOLS.get(name)
        if pool is None:
            continue
        unit = "chars" if isinstance(pool, str) else "symbols"
        info.append(f"{name}: {len(pool)} {unit}")
    return info


def total_symbols(request: TokenRequest) -> int:
    names = request.email.username_types if request.email else request.pool_types
    return sum(len(CHARACTER_POOLS[name]) for name in names if name in CHARACTER_POOLS)


def estimate_token_time_ms(count: int, length: int) -> float:
    return count / 1000 * TOKEN_MS_PER_THOUSAND * (length / 10)


def _check(request: TokenRequest) -> None:
    violations = validate_token_request(request)
    if violations:
        raise GenerationValidationError(violations)


async def generate_tokens(
    request: TokenRequest,
    progress_callback: ProgressCallback | None = None,
    controller: GenerationController | None = None,
) -> TokenResult:
    """
    Generate ``request.count`` tokens.

    Args:
        request: Token request
        progress_callback: Progress callback for batched runs
        controller: Controller to run on; a new one is created when omitted

    Raises:
        GenerationValidationError: If the request is invalid
        GenerationCancelledError: If the run was cancelled
    """
    _check(request)
    controller = controller or GenerationController()

    started = time.perf_counter()
    result = await controller.run(
        token_generation_request(request),
        progress_callback,
        formatter=token_formatter(request),
    )
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.info(f"Generated {result.record_count:,} tokens in {elapsed_ms:.1f}ms")
    return TokenResult(
        tokens=result.lines,
        count=result.record_count,
        length=request.email.username_length if request.email else request.length,
        pool_types=tuple(request.pool_types),
        elapsed_ms=elapsed_ms,
        pool_info=tuple(pool_info(request)),
        is_email=request.email is not None,
    )


def preview_tokens(
    request: TokenRequest, preview_count: int = DEFAULT_PREVIEW_COUNT
) -> dict[str, Any]:
    """
    Numbered sample tokens with pool details and a time estimate.

    Raises:
        GenerationValidationError: If the request is invalid
    """
    _check(request)

    formatter = token_formatter(request)
    assembler = RowAssembler([token_field(request)], random.Random(request.seed))
    sample = min(request.count, preview_count)
    preview = [
        f"{index + 1}. {formatter(assembler.assemble_row(index))}" for index in range(sample)
    ]

    estimated_ms = estimate_token_time_ms(request.count, request.length)
    return {
        "preview": preview,
        "pool_info": ", ".join(pool_info(request)),
        "total_chars": total_symbols(request),
        "estimated_ms": estimated_ms,
        "estimated_time": format_duration_estimate(estimated_ms),
        "is_email": request.email is not None,
        "has_emoji": request.email is None and "emoji" in request.pool_types,
    }


def analyze_charset(text: str) -> dict[str, int]:
    """Count the characters of ``text`` per character class."""
    counts = {"numbers": 0, "english": 0, "japanese": 0, "emoji": 0, "special": 0, "other": 0}
    for char in text:
        code = ord(char)
        if char.isascii() and char.isdigit():
            counts["numbers"] += 1
        elif char.isascii() and char.isalpha():
            counts["english"] += 1
        elif 0x3041 <= code <= 0x9FAF:
            # Hiragana, katakana and CJK ideographs
            counts["japanese"] += 1
        elif any(low <= code <= high for low, high in EMOJI_RANGES):
            counts["emoji"] += 1
        elif char in SPECIAL_SYMBOLS:
            counts["special"] += 1
        else:
            counts["other"] += 1
    return counts


def token_filename(
    count: int, length: int, extension: str, now: datetime | None = None
) -> str:
    """``textgen_data_{count}_len{length}_{YYYYMMDD_HHMMSS}.{ext}``"""
    timestamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return f"textgen_data_{count}_len{length}_{timestamp}.{extension}"
