"""
Field type catalog.

Maps every supported type tag, and each caller-facing alias, to its generator
together with a label, a description, documented options and the average
rendered length used by preview estimates.

Aliases reconcile the type names used by older field layouts:

- ``number`` and ``float`` resolve to ``decimal``
- ``currency`` resolves to ``decimal`` with ``type: currency``
- ``sequence`` resolves to ``id``
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from synth_datagen.shared.exceptions import UnsupportedFieldTypeError

from . import field_generators as fg
from .field_generators import GenerationContext

logger = logging.getLogger(__name__)

FieldGeneratorFn = Callable[[dict[str, Any], GenerationContext], Any]


@dataclass(frozen=True)
class FieldTypeInfo:
    """Catalog entry for one canonical field type."""

    name: str
    label: str
    description: str
    generator: FieldGeneratorFn
    options: dict[str, str] = field(default_factory=dict)
    average_length: int = 10
    aliases: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label,
            "description": self.description,
            "options": dict(self.options),
            "average_length": self.average_length,
            "aliases": list(self.aliases),
        }


_DATE_OPTIONS = {
    "start_date": "Earliest instant, ISO 8601 (default 2020-01-01)",
    "end_date": "Latest instant, ISO 8601 (default now)",
    "format": "Pattern using YYYY, MM, DD, HH, mm, ss or one of date/datetime/time",
}

FIELD_TYPES: dict[str, FieldTypeInfo] = {
    info.name: info
    for info in (
        FieldTypeInfo(
            name="text",
            label="Random text",
            description="Random characters drawn from one or more character pools",
            generator=fg.generate_text,
            options={
                "length": "Number of characters, 1-10000 (default 10)",
                "charset": "Pool name or list: numbers, english, latin, lowercase, "
                "uppercase, chinese, japanese, special, mixed, emoji, emoticon",
                "case": "Fold case: lower or upper",
                "case_sensitive": "false folds to lower case",
            },
            average_length=10,
        ),
        FieldTypeInfo(
            name="integer",
            label="Integer",
            description="Uniform random integer in [min, max]",
            generator=fg.generate_integer,
            options={"min": "Lower bound (default 0)", "max": "Upper bound (default 100)"},
            average_length=4,
        ),
        FieldTypeInfo(
            name="decimal",
            label="Decimal",
            description="Uniform random real in [min, max] rounded to a fixed precision",
            generator=fg.generate_decimal,
            options={
                "min": "Lower bound (default 0)",
                "max": "Upper bound (default 100)",
                "decimals": "Fraction digits, 0-15 (default 2)",
                "type": "integer, float or currency",
            },
            average_length=8,
            aliases=("number", "float", "currency"),
        ),
        FieldTypeInfo(
            name="boolean",
            label="Boolean",
            description="Bernoulli draw rendered in a configurable format",
            generator=fg.generate_boolean,
            options={
                "probability": "Chance of true, 0-1 (default 0.5)",
                "format": "boolean, 10, number, yesno, truefalse or text",
                "true_value": "Text for true when format is text",
                "false_value": "Text for false when format is text",
            },
            average_length=5,
        ),
        FieldTypeInfo(
            name="date",
            label="Date",
            description="Random date in a window",
            generator=fg.generate_date,
            options=_DATE_OPTIONS,
            average_length=10,
        ),
        FieldTypeInfo(
            name="datetime",
            label="Date and time",
            description="Random date and time in a window",
            generator=fg.generate_datetime,
            options=_DATE_OPTIONS,
            average_length=19,
        ),
        FieldTypeInfo(
            name="time",
            label="Time",
            description="Random time of day",
            generator=fg.generate_time,
            options={"format": "Pattern using HH, mm, ss (default HH:mm:ss)"},
            average_length=8,
        ),
        FieldTypeInfo(
            name="email",
            label="Email address",
            description="Lower-cased text username at a configured or sample domain",
            generator=fg.generate_email,
            options={
                "username_length": "Username length, 1-64 (default 8)",
                "charset": "Username character pool name or list of names (default english)",
                "domain": "Fixed domain, with or without a leading @",
                "domains": "List of domains to pick from",
            },
            average_length=20,
        ),
        FieldTypeInfo(
            name="phone",
            label="Phone number",
            description="Region-specific phone number",
            generator=fg.generate_phone,
            options={
                "format": "china, us, international or custom",
                "pattern": "Custom pattern, # becomes a digit",
                "include_country_code": "Prefix the country code",
            },
            average_length=13,
        ),
        FieldTypeInfo(
            name="name",
            label="Person name",
            description="Chinese surname and given name or an English full name",
            generator=fg.generate_name,
            options={"type": "chinese, english or full"},
            average_length=6,
        ),
        FieldTypeInfo(
            name="company",
            label="Company",
            description="Company prefix with a legal suffix",
            generator=fg.generate_company,
            options={"type": "chinese or english"},
            average_length=12,
        ),
        FieldTypeInfo(
            name="address",
            label="Address",
            description="Street address from sample cities and streets",
            generator=fg.generate_address,
            options={
                "type": "chinese or english",
                "include_postal_code": "Append a postal code",
            },
            average_length=25,
        ),
        FieldTypeInfo(
            name="url",
            label="URL",
            description="Protocol, sample domain and path",
            generator=fg.generate_url,
            options={"protocol": "Fixed protocol", "domains": "List of domains"},
            average_length=25,
        ),
        FieldTypeInfo(
            name="uuid",
            label="UUID",
            description="RFC 4122 version 4 identifier",
            generator=fg.generate_uuid,
            average_length=36,
        ),
        FieldTypeInfo(
            name="ip",
            label="IP address",
            description="IPv4 dotted quad or IPv6 hex groups",
            generator=fg.generate_ip,
            options={"version": "v4 or v6"},
            average_length=15,
        ),
        FieldTypeInfo(
            name="color",
            label="Color",
            description="Color as hex, rgb(), hsl() or a name",
            generator=fg.generate_color,
            options={"format": "hex, rgb, hsl or name"},
            average_length=7,
        ),
        FieldTypeInfo(
            name="id",
            label="Sequential ID",
            description="start + index * step, optionally padded and decorated",
            generator=fg.generate_id,
            options={
                "start": "First value (default 1)",
                "step": "Increment, non-zero (default 1)",
                "padding": "Zero-pad to this many digits, 0-64",
                "prefix": "Literal prefix",
                "suffix": "Literal suffix",
            },
            average_length=6,
            aliases=("sequence",),
        ),
        FieldTypeInfo(
            name="enum",
            label="Enumeration",
            description="Uniform pick from a list of values",
            generator=fg.generate_enum,
            options={"values": "Non-empty list of values"},
            average_length=8,
        ),
        FieldTypeInfo(
            name="json",
            label="JSON",
            description="JSON document from a template with random placeholders",
            generator=fg.generate_json,
            options={
                "template": "Mapping; $random_number and $random_string are replaced"
            },
            average_length=30,
        ),
    )
}

# Alias -> (canonical type, config overrides)
ALIASES: dict[str, tuple[str, dict[str, Any]]] = {
    "number": ("decimal", {}),
    "float": ("decimal", {}),
    "currency": ("decimal", {"type": "currency"}),
    "sequence": ("id", {}),
}


def known_types() -> list[str]:
    """All accepted type tags, canonical names and aliases."""
    return sorted([*FIELD_TYPES, *ALIASES])


def is_known_type(field_type: str) -> bool:
    return field_type in FIELD_TYPES or field_type in ALIASES


def resolve(field_type: str) -> tuple[FieldTypeInfo, dict[str, Any]]:
    """Resolve a tag or alias to its catalog entry and config overrides.

    Raises:
        UnsupportedFieldTypeError: If the tag is not in the catalog
    """
    if field_type in FIELD_TYPES:
        return FIELD_TYPES[field_type], {}
    if field_type in ALIASES:
        canonical, overrides = ALIASES[field_type]
        return FIELD_TYPES[canonical], dict(overrides)
    raise UnsupportedFieldTypeError(field_type, known_types())


def effective_config(
    field_type: str, config: dict[str, Any]
) -> tuple[FieldTypeInfo, dict[str, Any]]:
    """Resolve ``field_type`` and merge alias overrides into a copy of ``config``."""
    info, overrides = resolve(field_type)
    if not overrides:
        return info, config
    merged = dict(config)
    merged.update(overrides)
    return info, merged


def generate(
    field_type: str,
    config: dict[str, Any],
    context: GenerationContext,
    *,
    fallback_unknown: bool = False,
) -> Any:
    """Generate one value of ``field_type``.

    Args:
        field_type: Type tag or alias
        config: Type-specific options
        context: Row index, run random source and sequence state
        fallback_unknown: Generate default text for unknown tags instead of raising

    Raises:
        UnsupportedFieldTypeError: If the tag is unknown and fallback is off
    """
    try:
        info, merged = effective_config(field_type, config)
    except UnsupportedFieldTypeError:
        if not fallback_unknown:
            raise
        logger.warning(f"Unknown field type '{field_type}', generating default text")
        return fg.generate_text({}, context)

    return info.generator(merged, context)


def estimate_average_length(field_type: str, config: dict[str, Any]) -> int:
    """Rough rendered length of one value, used before any sample exists."""
    if not is_known_type(field_type):
        return FIELD_TYPES["text"].average_length
    info, merged = effective_config(field_type, config)
    if info.name == "text":
        return int(merged.get("length") or fg.DEFAULT_TEXT_LENGTH)
    return info.average_length


def list_field_types() -> list[dict[str, Any]]:
    """Catalog listing for the CLI and HTTP API."""
    return [info.to_dict() for info in FIELD_TYPES.values()]
