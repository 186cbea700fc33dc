"""
Generation request validation.

Checks a request before any record is generated and returns every violation
found as a human-readable string. Validation never stops at the first
problem and never mutates the request.
"""

import math
import re
from typing import Any, Callable

from synth_datagen.shared.models import FieldSpec, GenerationRequest, TokenRequest
from synth_datagen.sourcedata.default import CHARACTER_POOLS

from . import catalog
from . import field_generators as fg

MAX_RECORDS = 1_000_000
MAX_TOKENS = 1_000_000
MAX_TEXT_LENGTH = 10_000
MAX_USERNAME_LENGTH = 64
MAX_DECIMALS = 15
MAX_PADDING = 64

TEXT_CASES = ("lower", "upper")
NUMBER_TYPES = ("integer", "float", "currency")
FORBIDDEN_DELIMITERS = ('"', "\r", "\n")

DOMAIN_PATTERN = re.compile(
    r"^@?[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
    r"(?:\.[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?)+$"
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _as_int(value: Any) -> int | None:
    """Coerce integral numbers and numeric strings, ``None`` otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_float(value: Any) -> float | None:
    """Coerce finite numbers and numeric strings, ``None`` otherwise."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def is_valid_domain(domain: Any) -> bool:
    """Syntactic domain check; a leading ``@`` is allowed."""
    return isinstance(domain, str) and bool(DOMAIN_PATTERN.match(domain))


# ================================
# TYPE-SPECIFIC CHECKS
# ================================


def _check_int_range(
    config: dict[str, Any], key: str, low: int, high: int, violations: list[str]
) -> None:
    if config.get(key) is None:
        return
    value = _as_int(config[key])
    if value is None or not low <= value <= high:
        violations.append(f"'{key}' must be an integer between {low} and {high}")


def _check_pools(names: Any, violations: list[str]) -> None:
    if isinstance(names, str):
        names = [names]
    if not isinstance(names, (list, tuple)) or not names:
        violations.append("'charset' must be a pool name or a non-empty list of pool names")
        return
    unknown = [str(name) for name in names if name not in CHARACTER_POOLS]
    if unknown:
        violations.append(
            f"Unknown character pool(s): {', '.join(unknown)}. "
            f"Known pools: {', '.join(CHARACTER_POOLS)}"
        )


def _check_text(config: dict[str, Any], violations: list[str]) -> None:
    _check_int_range(config, "length", 1, MAX_TEXT_LENGTH, violations)
    selection = config.get("charset") or config.get("type")
    if selection is not None:
        _check_pools(selection, violations)
    if config.get("case") is not None and config["case"] not in TEXT_CASES:
        violations.append(f"'case' must be one of: {', '.join(TEXT_CASES)}")


def _check_bounds(config: dict[str, Any], violations: list[str]) -> None:
    low = high = None
    if config.get("min") is not None:
        low = _as_float(config["min"])
        if low is None:
            violations.append("'min' must be a number")
    if config.get("max") is not None:
        high = _as_float(config["max"])
        if high is None:
            violations.append("'max' must be a number")
    if low is not None and high is not None and low > high:
        violations.append(f"'min' ({config['min']}) must not be greater than 'max' ({config['max']})")


def _check_integer_range(config: dict[str, Any], violations: list[str]) -> None:
    low, high = fg.integer_bounds(config)
    if low > high:
        violations.append(
            f"'min' and 'max' must enclose at least one integer, "
            f"rounded range {low}..{high} is empty"
        )


def _check_integer(config: dict[str, Any], violations: list[str]) -> None:
    found = len(violations)
    _check_bounds(config, violations)
    if len(violations) == found:
        _check_integer_range(config, violations)


def _check_decimal(config: dict[str, Any], violations: list[str]) -> None:
    if config.get("type") == "integer":
        _check_integer(config, violations)
    else:
        _check_bounds(config, violations)
    _check_int_range(config, "decimals", 0, MAX_DECIMALS, violations)
    if config.get("type") is not None and config["type"] not in NUMBER_TYPES:
        violations.append(f"'type' must be one of: {', '.join(NUMBER_TYPES)}")


def _check_boolean(config: dict[str, Any], violations: list[str]) -> None:
    if config.get("probability") is not None:
        probability = _as_float(config["probability"])
        if probability is None or not 0 <= probability <= 1:
            violations.append("'probability' must be a number between 0 and 1")
    if config.get("format") is not None and str(config["format"]) not in fg.BOOLEAN_FORMATS:
        violations.append(f"'format' must be one of: {', '.join(fg.BOOLEAN_FORMATS)}")


def _check_date(config: dict[str, Any], violations: list[str]) -> None:
    parsed = {}
    for key in ("start_date", "end_date"):
        if config.get(key) is None:
            continue
        try:
            parsed[key] = fg.parse_date_option(config[key])
        except (TypeError, ValueError):
            violations.append(f"'{key}' must be an ISO 8601 date, got {config[key]!r}")

    if len(parsed) == 2 and parsed["start_date"] > parsed["end_date"]:
        violations.append("'start_date' must not be after 'end_date'")
    if config.get("format") is not None and not isinstance(config["format"], str):
        violations.append("'format' must be a string pattern")


def _check_time(config: dict[str, Any], violations: list[str]) -> None:
    if config.get("format") is not None and not isinstance(config["format"], str):
        violations.append("'format' must be a string pattern")


def _check_email(config: dict[str, Any], violations: list[str]) -> None:
    length_key = "username_length" if config.get("username_length") is not None else "length"
    _check_int_range(config, length_key, 1, MAX_USERNAME_LENGTH, violations)
    selection = config.get("charset") or config.get("type")
    if selection is not None:
        _check_pools(selection, violations)

    if config.get("domain") and not is_valid_domain(config["domain"]):
        violations.append(f"Invalid email domain: {config['domain']!r}")
    domains = config.get("domains")
    if domains is not None:
        if not isinstance(domains, (list, tuple)) or not domains:
            violations.append("'domains' must be a non-empty list")
        else:
            invalid = [repr(domain) for domain in domains if not is_valid_domain(domain)]
            if invalid:
                violations.append(f"Invalid email domain(s): {', '.join(invalid)}")


def _check_phone(config: dict[str, Any], violations: list[str]) -> None:
    phone_format = config.get("format")
    if phone_format is None:
        return
    if phone_format not in fg.PHONE_FORMATS:
        violations.append(f"'format' must be one of: {', '.join(fg.PHONE_FORMATS)}")
    elif phone_format == "custom" and not config.get("pattern"):
        violations.append("custom phone format requires a 'pattern'")


def _check_choice(key: str, allowed: tuple[str, ...]) -> Callable[[dict[str, Any], list[str]], None]:
    def check(config: dict[str, Any], violations: list[str]) -> None:
        if config.get(key) is not None and config[key] not in allowed:
            violations.append(f"'{key}' must be one of: {', '.join(allowed)}")

    return check


def _check_ip(config: dict[str, Any], violations: list[str]) -> None:
    version = config.get("version") if config.get("version") is not None else config.get("type")
    if version is not None and version not in fg.IP_VERSIONS:
        violations.append(f"'version' must be one of: {', '.join(fg.IP_VERSIONS)}")


def _check_id(config: dict[str, Any], violations: list[str]) -> None:
    if config.get("start") is not None and _as_int(config["start"]) is None:
        violations.append("'start' must be an integer")
    if config.get("step") is not None:
        step = _as_int(config["step"])
        if step is None:
            violations.append("'step' must be an integer")
        elif step == 0:
            violations.append("'step' must not be 0")
    _check_int_range(config, "padding", 0, MAX_PADDING, violations)


def _check_enum(config: dict[str, Any], violations: list[str]) -> None:
    values = config.get("values")
    if not isinstance(values, (list, tuple)) or not values:
        violations.append("enum field requires a non-empty 'values' list")


def _check_json(config: dict[str, Any], violations: list[str]) -> None:
    if config.get("template") is not None and not isinstance(config["template"], dict):
        violations.append("'template' must be a mapping")


TYPE_CHECKS: dict[str, Callable[[dict[str, Any], list[str]], None]] = {
    "text": _check_text,
    "integer": _check_integer,
    "decimal": _check_decimal,
    "boolean": _check_boolean,
    "date": _check_date,
    "datetime": _check_date,
    "time": _check_time,
    "email": _check_email,
    "phone": _check_phone,
    "name": _check_choice("type", fg.NAME_TYPES),
    "company": _check_choice("type", fg.LOCALE_TYPES),
    "address": _check_choice("type", fg.LOCALE_TYPES),
    "ip": _check_ip,
    "color": _check_choice("format", fg.COLOR_FORMATS),
    "id": _check_id,
    "enum": _check_enum,
    "json": _check_json,
}


# ================================
# REQUEST VALIDATION
# ================================


def validate_field(
    position: int, field_spec: FieldSpec, *, allow_unknown_types: bool = False
) -> list[str]:
    """Validate one field; messages are prefixed ``Field N (name):``."""
    prefix = f"Field {position} ({field_spec.name or '<unnamed>'}):"
    violations: list[str] = []

    if not field_spec.name or not field_spec.name.strip():
        violations.append("name must not be empty")

    if not field_spec.type:
        violations.append("type must not be empty")
    elif catalog.is_known_type(field_spec.type):
        info, config = catalog.effective_config(field_spec.type, field_spec.config)
        check = TYPE_CHECKS.get(info.name)
        if check is not None:
            check(config, violations)
    elif not allow_unknown_types:
        violations.append(
            f"unsupported type '{field_spec.type}'. "
            f"Supported types: {', '.join(catalog.known_types())}"
        )

    return [f"{prefix} {violation}" for violation in violations]


def validate_request(
    request: GenerationRequest,
    *,
    max_records: int = MAX_RECORDS,
    allow_unknown_types: bool = False,
) -> list[str]:
    """
    Validate a generation request.

    Args:
        request: Request to check
        max_records: Upper bound for ``record_count``
        allow_unknown_types: Accept type tags outside the catalog

    Returns:
        Every violation found; empty when the request is valid
    """
    violations: list[str] = []

    if not _is_int(request.record_count) or not 1 <= request.record_count <= max_records:
        violations.append(
            f"record_count must be between 1 and {max_records:,}, got {request.record_count}"
        )

    if not request.fields:
        violations.append("fields must contain at least one field")

    delimiter = request.delimiter
    if len(delimiter) != 1:
        violations.append(f"delimiter must be exactly one character, got {delimiter!r}")
    elif delimiter in FORBIDDEN_DELIMITERS:
        violations.append(f"delimiter must not be a quote or newline, got {delimiter!r}")

    for position, field_spec in enumerate(request.fields, start=1):
        violations.extend(
            validate_field(position, field_spec, allow_unknown_types=allow_unknown_types)
        )

    return violations


def validate_token_request(request: TokenRequest) -> list[str]:
    """Validate a token request; returns every violation found."""
    violations: list[str] = []

    if not 1 <= request.count <= MAX_TOKENS:
        violations.append(f"count must be between 1 and {MAX_TOKENS:,}, got {request.count}")

    if request.email is not None:
        email = request.email
        if not 1 <= email.username_length <= MAX_USERNAME_LENGTH:
            violations.append(
                f"username_length must be between 1 and {MAX_USERNAME_LENGTH}, "
                f"got {email.username_length}"
            )
        if not is_valid_domain(email.domain):
            violations.append(f"Invalid email domain: {email.domain!r}")
        pools = email.username_types
    else:
        if not 1 <= request.length <= MAX_TEXT_LENGTH:
            violations.append(
                f"length must be between 1 and {MAX_TEXT_LENGTH:,}, got {request.length}"
            )
        pools = request.pool_types

    if not pools:
        violations.append("at least one character pool must be selected")
    else:
        _check_pools(pools, violations)

    return violations
