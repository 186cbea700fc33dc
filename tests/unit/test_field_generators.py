"""
Unit tests for the individual field value generators.

Generators are pure functions of (config, context); every test uses a seeded
context so the assertions hold for any draw.
"""

import json
import re
import uuid
from datetime import datetime

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from synth_datagen.generators.field_generators import (
    SequenceState,
    format_datetime,
    generate_boolean,
    generate_color,
    generate_date,
    generate_datetime,
    generate_decimal,
    generate_email,
    generate_enum,
    generate_id,
    generate_integer,
    generate_ip,
    generate_json,
    generate_name,
    generate_phone,
    generate_text,
    generate_time,
    generate_url,
    generate_uuid,
    parse_date_option,
    resolve_charset,
)
from synth_datagen.generators.serializer import stringify
from synth_datagen.sourcedata.default import (
    CHINESE_SURNAMES,
    COLOR_NAMES,
    ENGLISH_FULL_NAMES,
    MOBILE_PREFIXES_CN,
)


class TestTextGenerator:
    """Test text generation from character pools."""

    def test_length_and_pool(self, make_context):
        """Text has the configured length and draws only from the pool."""
        value = generate_text({"length": 20, "charset": "numbers"}, make_context())

        assert len(value) == 20
        assert value.isdigit()

    def test_default_length(self, make_context):
        """Text defaults to ten symbols."""
        assert len(generate_text({"charset": "english"}, make_context())) == 10

    def test_upper_case(self, make_context):
        """case=upper upper-cases the drawn text."""
        value = generate_text({"length": 30, "charset": "english", "case": "upper"}, make_context())

        assert value == value.upper()

    def test_case_insensitive_lowercases(self, make_context):
        """case_sensitive=False lower-cases the drawn text."""
        value = generate_text(
            {"length": 30, "charset": "english", "case_sensitive": False}, make_context()
        )

        assert value == value.lower()

    def test_multiple_pools(self, make_context):
        """A list of pools draws from their union."""
        value = generate_text({"length": 50, "charset": ["numbers", "lowercase"]}, make_context())

        assert re.fullmatch(r"[0-9a-z]{50}", value)

    def test_symbol_pool_is_tuple(self):
        """Mixing a multi-code-point pool yields whole symbols."""
        pool = resolve_charset(("numbers", "emoji"))

        assert isinstance(pool, tuple)
        assert "7" in pool

    def test_unknown_pool_rejected(self):
        """Unknown pool names raise ValueError."""
        with pytest.raises(ValueError, match="Unknown character pool"):
            resolve_charset(("klingon",))


class TestNumberGenerators:
    """Test integer and decimal generation."""

    @given(
        low=st.integers(min_value=-1000, max_value=1000),
        span=st.integers(min_value=0, max_value=1000),
        seed=st.integers(min_value=0, max_value=2**16),
    )
    @settings(max_examples=50)
    def test_integer_within_bounds(self, low, span, seed):
        """Integers always fall within the inclusive bounds."""
        import random

        from synth_datagen.generators.field_generators import GenerationContext

        context = GenerationContext(0, random.Random(seed))
        value = generate_integer({"min": low, "max": low + span}, context)

        assert low <= value <= low + span

    def test_integer_bounds_inclusive(self, make_context):
        """Both ends of a small integer range are reachable."""
        context = make_context()
        values = {generate_integer({"min": 1, "max": 3}, context) for _ in range(200)}

        assert values == {1, 2, 3}

    def test_equal_bounds(self, make_context):
        """min == max always produces that value."""
        assert generate_integer({"min": 5, "max": 5}, make_context()) == 5

    def test_decimal_rounding(self, make_context):
        """Decimals are rounded to the configured places."""
        context = make_context()
        for _ in range(50):
            value = generate_decimal({"min": 0, "max": 10, "decimals": 3}, context)
            assert 0 <= value <= 10
            assert round(value, 3) == value

    def test_currency_forces_two_decimals(self, make_context):
        """Currency values have two decimals regardless of the option."""
        context = make_context()
        for _ in range(50):
            value = generate_decimal(
                {"type": "currency", "min": 1, "max": 2, "decimals": 5}, context
            )
            assert round(value, 2) == value

    def test_integer_type_delegates(self, make_context):
        """type=integer produces integers."""
        value = generate_decimal({"type": "integer", "min": 0, "max": 9}, make_context())

        assert isinstance(value, int)

    def test_fractional_integer_bounds_round_inward(self, make_context):
        """Fractional bounds narrow to the integers inside them."""
        context = make_context()
        values = {generate_integer({"min": 1.5, "max": 3.9}, context) for _ in range(200)}
        typed = {
            generate_decimal({"type": "integer", "min": -0.5, "max": 0.5}, context)
            for _ in range(20)
        }

        assert values == {2, 3}
        assert typed == {0}

    def test_small_decimals_render_positionally(self, make_context):
        """Tiny decimals keep their digits and print without an exponent."""
        context = make_context()
        for _ in range(50):
            value = generate_decimal({"min": 0, "max": 0.0001, "decimals": 6}, context)
            text = stringify(value)
            assert "e" not in text
            assert float(text) == value
            assert len(text.partition(".")[2]) <= 6


class TestBooleanGenerator:
    """Test boolean generation and its output formats."""

    def test_probability_extremes(self, make_context):
        """Probability 1 is always true and 0 always false."""
        context = make_context()

        assert generate_boolean({"probability": 1.0}, context) is True
        assert generate_boolean({"probability": 0.0}, context) is False

    @pytest.mark.parametrize(
        "output_format,true_value,false_value",
        [
            ("10", "1", "0"),
            ("number", 1, 0),
            ("yesno", "Yes", "No"),
            ("truefalse", "True", "False"),
        ],
    )
    def test_formats(self, make_context, output_format, true_value, false_value):
        """Each format renders true and false its own way."""
        context = make_context()

        assert generate_boolean({"probability": 1.0, "format": output_format}, context) == true_value
        assert generate_boolean({"probability": 0.0, "format": output_format}, context) == false_value

    def test_text_format_custom_values(self, make_context):
        """format=text uses the configured true/false values."""
        config = {"probability": 1.0, "format": "text", "true_value": "on", "false_value": "off"}

        assert generate_boolean(config, make_context()) == "on"


class TestDateGenerators:
    """Test date, datetime and time generation."""

    def test_date_within_range(self, make_context):
        """Dates fall inside the configured window."""
        context = make_context()
        config = {"start_date": "2024-01-01", "end_date": "2024-01-31"}
        for _ in range(50):
            value = datetime.strptime(generate_date(config, context), "%Y-%m-%d")
            assert datetime(2024, 1, 1) <= value <= datetime(2024, 1, 31)

    def test_datetime_default_pattern(self, make_context):
        """Datetimes default to YYYY-MM-DD HH:mm:ss."""
        value = generate_datetime({"start_date": "2024-01-01"}, make_context())

        assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", value)

    def test_time_pattern(self, make_context):
        """Times default to HH:mm:ss."""
        assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", generate_time({}, make_context()))

    def test_named_format(self, make_context):
        """format=datetime selects the named datetime pattern."""
        value = generate_date(
            {"format": "datetime", "start_date": "2024-01-01", "end_date": "2024-12-31"},
            make_context(),
        )

        assert re.fullmatch(r"2024-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", value)

    def test_format_tokens(self):
        """All tokens are substituted with zero padding."""
        value = format_datetime(datetime(2024, 3, 5, 7, 8, 9), "YYYY/MM/DD HH:mm:ss")

        assert value == "2024/03/05 07:08:09"

    def test_format_first_occurrence_only(self):
        """A repeated token is only replaced once."""
        assert format_datetime(datetime(2024, 3, 5), "DD-DD") == "05-DD"

    def test_parse_aware_iso_string(self):
        """Aware ISO strings are converted to naive UTC."""
        assert parse_date_option("2024-01-01T08:00:00+08:00") == datetime(2024, 1, 1)
        assert parse_date_option("2024-01-01T00:00:00Z") == datetime(2024, 1, 1)

    def test_parse_invalid(self):
        """Non-ISO strings and non-date values are rejected."""
        with pytest.raises(ValueError):
            parse_date_option("yesterday")
        with pytest.raises(TypeError):
            parse_date_option(20240101)


class TestContactGenerators:
    """Test email and phone generation."""

    def test_email_with_domain(self, make_context):
        """A configured domain is used with its leading '@' stripped."""
        value = generate_email({"domain": "@example.org"}, make_context())

        assert re.fullmatch(r"[a-z]{8}@example\.org", value)

    def test_email_username_length(self, make_context):
        """username_length controls the local part."""
        value = generate_email({"username_length": 12, "domain": "test.com"}, make_context())

        assert len(value.split("@")[0]) == 12

    def test_email_username_charset(self, make_context):
        """The username draws from the configured character pools."""
        context = make_context()
        usernames = [
            generate_email({"charset": "numbers", "length": 8}, context).split("@")[0]
            for _ in range(20)
        ]

        assert all(len(name) == 8 and name.isdigit() for name in usernames)

    def test_email_username_lowercased(self, make_context):
        """Upper-case pools are lower-cased in the username."""
        value = generate_email({"charset": ["uppercase"], "domain": "test.com"}, make_context())

        assert re.fullmatch(r"[a-z]{8}@test\.com", value)

    def test_china_phone(self, make_context):
        """Default phones are 11-digit mainland mobile numbers."""
        value = generate_phone({}, make_context())

        assert re.fullmatch(r"\d{11}", value)
        assert value[:3] in MOBILE_PREFIXES_CN

    def test_us_phone_with_country_code(self, make_context):
        """US phones follow (NXX) NXX-XXXX with an optional +1."""
        value = generate_phone({"format": "us", "include_country_code": True}, make_context())

        assert re.fullmatch(r"\+1 \(\d{3}\) \d{3}-\d{4}", value)

    def test_custom_pattern(self, make_context):
        """'#' in a custom pattern becomes a digit, other characters stay."""
        value = generate_phone({"format": "custom", "pattern": "(##) ###"}, make_context())

        assert re.fullmatch(r"\(\d{2}\) \d{3}", value)


class TestPeopleGenerators:
    """Test name generation."""

    def test_english_name(self, make_context):
        """English names come from the English name pool."""
        assert generate_name({"type": "english"}, make_context()) in ENGLISH_FULL_NAMES

    def test_chinese_name(self, make_context):
        """Chinese names start with a known surname."""
        value = generate_name({"type": "chinese"}, make_context())

        assert value[0] in CHINESE_SURNAMES


class TestInternetGenerators:
    """Test url, uuid, ip and color generation."""

    def test_url(self, make_context):
        """URLs use a known protocol and the configured domains."""
        value = generate_url({"protocol": "https", "domains": ["acme.test"]}, make_context())

        assert value.startswith("https://acme.test")

    def test_uuid_version_4(self, make_context):
        """UUIDs are RFC 4122 version 4."""
        value = uuid.UUID(generate_uuid({}, make_context()))

        assert value.version == 4
        assert value.variant == uuid.RFC_4122

    def test_uuid_reproducible(self, make_context):
        """The same seed gives the same UUID."""
        assert generate_uuid({}, make_context(seed=1)) == generate_uuid({}, make_context(seed=1))

    def test_ipv4(self, make_context):
        """IPv4 addresses have four octets in range."""
        octets = generate_ip({}, make_context()).split(".")

        assert len(octets) == 4
        assert all(0 <= int(octet) <= 255 for octet in octets)

    def test_ipv6(self, make_context):
        """IPv6 addresses have eight hex groups."""
        value = generate_ip({"version": "v6"}, make_context())

        assert re.fullmatch(r"([0-9a-f]{1,4}:){7}[0-9a-f]{1,4}", value)

    @pytest.mark.parametrize(
        "color_format,pattern",
        [
            ("hex", r"#[0-9a-f]{6}"),
            ("rgb", r"rgb\(\d{1,3}, \d{1,3}, \d{1,3}\)"),
            ("hsl", r"hsl\(\d{1,3}, \d{1,3}%, \d{1,3}%\)"),
        ],
    )
    def test_color_formats(self, make_context, color_format, pattern):
        """Colors render in each supported notation."""
        assert re.fullmatch(pattern, generate_color({"format": color_format}, make_context()))

    def test_color_name(self, make_context):
        """Named colors come from the color pool."""
        assert generate_color({"format": "name"}, make_context()) in COLOR_NAMES


class TestIdentifierGenerator:
    """Test sequential identifiers."""

    def test_padded_sequence(self, make_context):
        """start=100, step=5, padding=4 gives 0100, 0105, 0110."""
        config = {"start": 100, "step": 5, "padding": 4}
        context = make_context(sequence=SequenceState(current=100, step=5))

        values = [generate_id(config, context) for _ in range(3)]

        assert values == ["0100", "0105", "0110"]

    def test_prefix_and_suffix(self, make_context):
        """Prefix and suffix wrap the counter."""
        context = make_context(sequence=SequenceState(current=7, step=1))

        assert generate_id({"prefix": "U-", "suffix": "x", "padding": 3}, context) == "U-007x"

    def test_plain_id_is_integer(self, make_context):
        """Without padding, prefix or suffix the id stays an integer."""
        context = make_context(sequence=SequenceState(current=1, step=1))

        assert generate_id({}, context) == 1

    def test_standalone_uses_row_index(self, make_context):
        """Without a sequence the value derives from the row index."""
        assert generate_id({"start": 10, "step": 2}, make_context(row_index=3)) == 16


class TestStructuredGenerators:
    """Test enum and JSON generation."""

    def test_enum_choice(self, make_context):
        """Enum values come from the configured list."""
        context = make_context()
        values = {generate_enum({"values": ["a", "b"]}, context) for _ in range(50)}

        assert values == {"a", "b"}

    def test_empty_enum_rejected(self, make_context):
        """An empty values list is an error."""
        with pytest.raises(ValueError, match="non-empty"):
            generate_enum({"values": []}, make_context())

    def test_json_template_placeholders(self, make_context):
        """Placeholders are replaced and the text is compact JSON."""
        template = {"n": "$random_number", "s": "$random_string", "fixed": [1, "x"]}

        value = generate_json({"template": template}, make_context())
        document = json.loads(value)

        assert " " not in value
        assert 0 <= document["n"] <= 99
        assert re.fullmatch(r"[A-Za-z]{8}", document["s"])
        assert document["fixed"] == [1, "x"]
