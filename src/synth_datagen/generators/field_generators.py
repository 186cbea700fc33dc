"""
Per-type value generators for synthetic records.

Every generator is a plain function ``(config, context) -> value``. Options are
read from ``config`` (snake_case keys) and all randomness comes from
``context.rng`` so a seeded run is reproducible. Identifier fields are the only
stateful generators: they read and advance the ``SequenceState`` carried by
their context.

Generators assume the configuration already passed
``generators.config_validator``; malformed options raise ``ValueError`` or
``TypeError`` and are wrapped by the row assembler.
"""

import json
import math
import random
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Any, Sequence

from synth_datagen.sourcedata.default import (
    ADDRESS_STREETS,
    CHARACTER_POOLS,
    CHINESE_COMPANY_PREFIXES,
    CHINESE_COMPANY_SUFFIXES,
    CHINESE_GIVEN_NAMES,
    CHINESE_SURNAMES,
    CITIES,
    COLOR_NAMES,
    DISTRICTS,
    EMAIL_DOMAINS,
    ENGLISH_CITIES,
    ENGLISH_COMPANY_PREFIXES,
    ENGLISH_COMPANY_SUFFIXES,
    ENGLISH_FULL_NAMES,
    ENGLISH_STREETS,
    LATIN_LETTERS,
    MOBILE_PREFIXES_CN,
    NUMBERS,
    URL_DOMAINS,
    URL_PATHS,
    URL_PROTOCOLS,
    US_STATES,
)

DEFAULT_TEXT_LENGTH = 10
DEFAULT_TEXT_CHARSET = "mixed"
DEFAULT_USERNAME_LENGTH = 8
DEFAULT_USERNAME_CHARSET = "english"
DEFAULT_DECIMALS = 2
DEFAULT_START_DATE = datetime(2020, 1, 1)

DATE_PATTERN = "YYYY-MM-DD"
DATETIME_PATTERN = "YYYY-MM-DD HH:mm:ss"
TIME_PATTERN = "HH:mm:ss"

# Named formats accepted in place of a literal pattern
NAMED_DATE_FORMATS = {
    "date": DATE_PATTERN,
    "datetime": DATETIME_PATTERN,
    "time": TIME_PATTERN,
}

# Tokens are substituted in this order, first occurrence only
DATE_TOKENS = ("YYYY", "MM", "DD", "HH", "mm", "ss")

BOOLEAN_FORMATS = ("boolean", "10", "number", "yesno", "truefalse", "text")
PHONE_FORMATS = ("china", "us", "international", "custom")
NAME_TYPES = ("chinese", "english", "full")
LOCALE_TYPES = ("chinese", "english")
IP_VERSIONS = ("v4", "v6", "ipv4", "ipv6")
COLOR_FORMATS = ("hex", "rgb", "hsl", "name")

DEFAULT_JSON_TEMPLATE = {"key": "value"}
JSON_RANDOM_NUMBER = "$random_number"
JSON_RANDOM_STRING = "$random_string"


@dataclass
class SequenceState:
    """Mutable counter owned by one identifier field for one run."""

    current: int
    step: int

    def advance(self) -> int:
        """Return the current value and move the counter one step."""
        value = self.current
        self.current += self.step
        return value


@dataclass
class GenerationContext:
    """Per-field context passed to generators.

    Attributes:
        row_index: 0-based index of the record being assembled
        rng: Random source owned by the run
        sequence: Counter for identifier fields, ``None`` for other types
    """

    row_index: int
    rng: random.Random
    sequence: SequenceState | None = None


def _option(config: dict[str, Any], key: str, default: Any) -> Any:
    """Return ``config[key]`` unless it is missing or ``None``."""
    value = config.get(key)
    return default if value is None else value


def _digits(rng: random.Random, count: int) -> str:
    return "".join(rng.choices(NUMBERS, k=count))


# ================================
# TEXT
# ================================


@lru_cache(maxsize=64)
def resolve_charset(names: tuple[str, ...]) -> Sequence[str]:
    """Combine named character pools into one drawable sequence.

    Pools that are plain strings concatenate into a string. When any pool is a
    tuple (emoji span several code points), the result is a tuple of whole
    symbols instead.

    Raises:
        ValueError: If a pool name is unknown
    """
    unknown = [name for name in names if name not in CHARACTER_POOLS]
    if unknown:
        raise ValueError(f"Unknown character pool(s): {', '.join(unknown)}")

    pools = [CHARACTER_POOLS[name] for name in names]
    if all(isinstance(pool, str) for pool in pools):
        return "".join(pools)

    symbols: list[str] = []
    for pool in pools:
        symbols.extend(pool)
    return tuple(symbols)


def charset_names(
    config: dict[str, Any], default: str = DEFAULT_TEXT_CHARSET
) -> tuple[str, ...]:
    """Read the pool selection of a text field as a tuple of pool names."""
    selection = config.get("charset") or config.get("type") or default
    if isinstance(selection, str):
        return (selection,)
    return tuple(selection)


def random_text(rng: random.Random, pool: Sequence[str], length: int) -> str:
    """Draw ``length`` symbols uniformly from ``pool``."""
    return "".join(rng.choices(pool, k=length))


def generate_text(config: dict[str, Any], context: GenerationContext) -> str:
    length = int(_option(config, "length", DEFAULT_TEXT_LENGTH))
    value = random_text(context.rng, resolve_charset(charset_names(config)), length)

    case = config.get("case")
    if case == "upper":
        return value.upper()
    if case == "lower" or config.get("case_sensitive") is False:
        return value.lower()
    return value


# ================================
# NUMBERS AND BOOLEANS
# ================================


def integer_bounds(config: dict[str, Any]) -> tuple[int, int]:
    """Return ``min``/``max`` rounded inward to the integers they enclose."""
    low = _option(config, "min", 0)
    high = _option(config, "max", 100)
    if not isinstance(low, int):
        low = math.ceil(float(low))
    if not isinstance(high, int):
        high = math.floor(float(high))
    return low, high


def generate_integer(config: dict[str, Any], context: GenerationContext) -> int:
    low, high = integer_bounds(config)
    return context.rng.randint(low, high)


def generate_decimal(config: dict[str, Any], context: GenerationContext) -> int | float:
    """Uniform real in ``[min, max]`` rounded to ``decimals``.

    ``type: integer`` delegates to the integer generator and ``type: currency``
    forces two decimals.
    """
    number_type = config.get("type")
    if number_type == "integer":
        return generate_integer(config, context)

    low = float(_option(config, "min", 0))
    high = float(_option(config, "max", 100))
    decimals = int(_option(config, "decimals", DEFAULT_DECIMALS))
    if number_type == "currency":
        decimals = 2

    return round(context.rng.uniform(low, high), decimals)


def generate_boolean(
    config: dict[str, Any], context: GenerationContext
) -> bool | int | str:
    probability = float(_option(config, "probability", 0.5))
    value = context.rng.random() < probability

    output_format = str(_option(config, "format", "boolean"))
    if output_format == "10":
        return "1" if value else "0"
    if output_format == "number":
        return 1 if value else 0
    if output_format == "yesno":
        return "Yes" if value else "No"
    if output_format == "truefalse":
        return "True" if value else "False"
    if output_format == "text":
        if value:
            return str(_option(config, "true_value", "true"))
        return str(_option(config, "false_value", "false"))
    return value


# ================================
# DATES AND TIMES
# ================================


def parse_date_option(value: Any) -> datetime:
    """Parse a ``start_date``/``end_date`` option into a naive datetime.

    Accepts ``datetime``/``date`` objects and ISO 8601 strings. Aware values are
    converted to UTC before the timezone is dropped.

    Raises:
        ValueError: If a string is not ISO 8601
        TypeError: If the value is neither a string nor a date
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    else:
        raise TypeError(f"Expected an ISO date string, got {type(value).__name__}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def date_range(config: dict[str, Any]) -> tuple[datetime, datetime]:
    """Return the ``(start, end)`` window of a date field."""
    start = config.get("start_date")
    end = config.get("end_date")
    start_dt = parse_date_option(start) if start is not None else DEFAULT_START_DATE
    end_dt = parse_date_option(end) if end is not None else datetime.now()
    return start_dt, end_dt


def format_datetime(value: datetime, pattern: str) -> str:
    """Render ``value`` by literal token substitution.

    Only the first occurrence of each token is replaced, so tokens must not
    appear elsewhere in the pattern.
    """
    pattern = NAMED_DATE_FORMATS.get(pattern, pattern)
    replacements = {
        "YYYY": f"{value.year:04d}",
        "MM": f"{value.month:02d}",
        "DD": f"{value.day:02d}",
        "HH": f"{value.hour:02d}",
        "mm": f"{value.minute:02d}",
        "ss": f"{value.second:02d}",
    }
    for token in DATE_TOKENS:
        pattern = pattern.replace(token, replacements[token], 1)
    return pattern


def random_instant(rng: random.Random, start: datetime, end: datetime) -> datetime:
    """Uniform instant in ``[start, end]`` at one-second resolution."""
    span = max(int((end - start).total_seconds()), 0)
    return start + timedelta(seconds=rng.randint(0, span))


def generate_date(config: dict[str, Any], context: GenerationContext) -> str:
    start, end = date_range(config)
    value = random_instant(context.rng, start, end)
    return format_datetime(value, str(_option(config, "format", DATE_PATTERN)))


def generate_datetime(config: dict[str, Any], context: GenerationContext) -> str:
    start, end = date_range(config)
    value = random_instant(context.rng, start, end)
    return format_datetime(value, str(_option(config, "format", DATETIME_PATTERN)))


def generate_time(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    value = datetime.combine(
        date.today(), time(rng.randrange(24), rng.randrange(60), rng.randrange(60))
    )
    return format_datetime(value, str(_option(config, "format", TIME_PATTERN)))


# ================================
# CONTACT DETAILS
# ================================


def generate_email(config: dict[str, Any], context: GenerationContext) -> str:
    """Lower-cased text username at a configured or default domain.

    The username draws from ``charset`` like a text field, english letters
    when no pool is selected.
    """
    rng = context.rng
    length = int(
        _option(config, "username_length", _option(config, "length", DEFAULT_USERNAME_LENGTH))
    )
    pool = resolve_charset(charset_names(config, DEFAULT_USERNAME_CHARSET))
    username = random_text(rng, pool, length).lower()

    domain = config.get("domain")
    if domain:
        domain = str(domain).lstrip("@")
    else:
        domain = rng.choice(config.get("domains") or EMAIL_DOMAINS).lstrip("@")

    return f"{username}@{domain}"


def generate_phone(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    phone_format = str(_option(config, "format", "china"))
    with_country_code = bool(config.get("include_country_code", False))

    if phone_format == "us":
        number = (
            f"({rng.randint(200, 999)}) {rng.randint(200, 999)}-{rng.randint(1000, 9999)}"
        )
        return f"+1 {number}" if with_country_code else number

    if phone_format == "international":
        return f"+{rng.randint(1, 999)} {_digits(rng, 10)}"

    if phone_format == "custom":
        pattern = str(_option(config, "pattern", "###-####-####"))
        return "".join(rng.choice(NUMBERS) if ch == "#" else ch for ch in pattern)

    number = rng.choice(MOBILE_PREFIXES_CN) + _digits(rng, 8)
    return f"+86 {number}" if with_country_code else number


# ================================
# PEOPLE, COMPANIES, PLACES
# ================================


def generate_name(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    name_type = str(_option(config, "type", _option(config, "name_type", "chinese")))
    if name_type == "full":
        name_type = "chinese" if rng.random() > 0.5 else "english"

    if name_type == "english":
        return rng.choice(ENGLISH_FULL_NAMES)
    return rng.choice(CHINESE_SURNAMES) + rng.choice(CHINESE_GIVEN_NAMES)


def generate_company(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    if _option(config, "type", "chinese") == "english":
        return rng.choice(ENGLISH_COMPANY_PREFIXES) + rng.choice(ENGLISH_COMPANY_SUFFIXES)
    return rng.choice(CHINESE_COMPANY_PREFIXES) + rng.choice(CHINESE_COMPANY_SUFFIXES)


def generate_address(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    with_postal_code = bool(config.get("include_postal_code", False))

    if _option(config, "type", "chinese") == "english":
        address = (
            f"{rng.randint(1, 9999)} {rng.choice(ENGLISH_STREETS)}, "
            f"{rng.choice(ENGLISH_CITIES)}, {rng.choice(US_STATES)}"
        )
        return f"{address} {_digits(rng, 5)}" if with_postal_code else address

    address = (
        rng.choice(CITIES)
        + rng.choice(DISTRICTS)
        + rng.choice(ADDRESS_STREETS)
        + f"{rng.randint(1, 999)}号"
    )
    return f"{address} {_digits(rng, 6)}" if with_postal_code else address


# ================================
# INTERNET AND IDENTIFIERS
# ================================


def generate_url(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    protocol = config.get("protocol") or rng.choice(URL_PROTOCOLS)
    domain = rng.choice(config.get("domains") or URL_DOMAINS)
    return f"{protocol}://{domain}{rng.choice(URL_PATHS)}"


def generate_uuid(config: dict[str, Any], context: GenerationContext) -> str:
    return str(uuid.UUID(int=context.rng.getrandbits(128), version=4))


def generate_ip(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    version = str(_option(config, "version", _option(config, "type", "v4")))
    if version in ("v6", "ipv6"):
        return ":".join(format(rng.randrange(65536), "x") for _ in range(8))
    return ".".join(str(rng.randrange(256)) for _ in range(4))


def generate_color(config: dict[str, Any], context: GenerationContext) -> str:
    rng = context.rng
    color_format = str(_option(config, "format", "hex"))
    if color_format == "rgb":
        return f"rgb({rng.randrange(256)}, {rng.randrange(256)}, {rng.randrange(256)})"
    if color_format == "hsl":
        return f"hsl({rng.randrange(360)}, {rng.randint(0, 100)}%, {rng.randint(0, 100)}%)"
    if color_format == "name":
        return rng.choice(COLOR_NAMES)
    return "#" + format(rng.randrange(0x1000000), "06x")


def new_sequence_state(config: dict[str, Any]) -> SequenceState:
    """Fresh counter for an identifier field at the start of a run."""
    return SequenceState(
        current=int(_option(config, "start", 1)), step=int(_option(config, "step", 1))
    )


def generate_id(config: dict[str, Any], context: GenerationContext) -> str | int:
    """``prefix + zero-padded counter + suffix``.

    Reads the context's sequence when present; otherwise the value is derived
    from the row index so the generator also works standalone.
    """
    if context.sequence is not None:
        value = context.sequence.advance()
    else:
        start = int(_option(config, "start", 1))
        step = int(_option(config, "step", 1))
        value = start + context.row_index * step

    padding = int(_option(config, "padding", 0))
    prefix = str(_option(config, "prefix", ""))
    suffix = str(_option(config, "suffix", ""))
    if not (padding or prefix or suffix):
        return value

    text = str(value).zfill(padding) if padding else str(value)
    return f"{prefix}{text}{suffix}"


def generate_enum(config: dict[str, Any], context: GenerationContext) -> Any:
    values = config.get("values") or []
    if not values:
        raise ValueError("enum field requires a non-empty 'values' list")
    return context.rng.choice(list(values))


def _fill_template(template: Any, rng: random.Random) -> Any:
    if isinstance(template, dict):
        return {key: _fill_template(value, rng) for key, value in template.items()}
    if isinstance(template, list):
        return [_fill_template(item, rng) for item in template]
    if template == JSON_RANDOM_NUMBER:
        return rng.randint(0, 99)
    if template == JSON_RANDOM_STRING:
        return random_text(rng, LATIN_LETTERS, 8)
    return template


def generate_json(config: dict[str, Any], context: GenerationContext) -> str:
    """Compact JSON text from ``template`` with placeholder substitution."""
    template = _option(config, "template", DEFAULT_JSON_TEMPLATE)
    document = _fill_template(template, context.rng)
    return json.dumps(document, ensure_ascii=False, separators=(",", ":"))
