"""Unit tests for standalone token generation."""

import re
from datetime import datetime

import pytest

from synth_datagen.generators.controller import GenerationController
from synth_datagen.generators.tokens import (
    analyze_charset,
    estimate_token_time_ms,
    generate_tokens,
    pool_info,
    preview_tokens,
    token_filename,
)
from synth_datagen.shared.exceptions import GenerationValidationError
from synth_datagen.shared.models import EmailTokenConfig, TokenRequest


class TestGenerateTokens:
    """Test token runs through the generation controller."""

    @pytest.mark.asyncio
    async def test_numeric_tokens(self):
        """Tokens have the requested count, length and pool."""
        result = await generate_tokens(TokenRequest(count=20, length=6, pool_types=["numbers"], seed=1))

        assert result.count == 20
        assert len(result.tokens) == 20
        assert all(re.fullmatch(r"\d{6}", token) for token in result.tokens)
        assert result.is_email is False
        assert result.pool_info == ("numbers: 10 chars",)

    @pytest.mark.asyncio
    async def test_tokens_are_not_quoted(self):
        """Tokens containing quotes or commas are written raw."""
        result = await generate_tokens(TokenRequest(count=50, length=20, pool_types=["special"], seed=2))

        assert all(len(token) == 20 for token in result.tokens)

    @pytest.mark.asyncio
    async def test_email_tokens(self):
        """Email mode appends the domain to a username."""
        request = TokenRequest(
            count=5,
            email=EmailTokenConfig(domain="example.com", username_types=["lowercase"], username_length=6),
        )

        result = await generate_tokens(request)

        assert all(re.fullmatch(r"[a-z]{6}@example\.com", token) for token in result.tokens)
        assert result.is_email is True
        assert result.length == 6

    @pytest.mark.asyncio
    async def test_email_username_pools(self):
        """Email usernames draw from the selected pools."""
        request = TokenRequest(
            count=10,
            email=EmailTokenConfig(domain="mail.test", username_types=["numbers"], username_length=5),
        )

        result = await generate_tokens(request)

        assert all(re.fullmatch(r"\d{5}@mail\.test", token) for token in result.tokens)

    @pytest.mark.asyncio
    async def test_invalid_request(self):
        """Invalid requests raise before any run starts."""
        with pytest.raises(GenerationValidationError):
            await generate_tokens(TokenRequest(count=0))

    @pytest.mark.asyncio
    async def test_batched_progress(self, batched_engine_config):
        """Large token runs report progress like record runs."""
        calls = []
        controller = GenerationController(batched_engine_config)

        result = await generate_tokens(
            TokenRequest(count=80, length=4), lambda *a: calls.append(a), controller
        )

        assert result.count == 80
        assert calls[-1] == (100, 80, 80)


class TestTokenPreview:
    """Test previews and estimates."""

    def test_preview(self):
        """Previews number the first five tokens."""
        preview = preview_tokens(TokenRequest(count=100, length=4, pool_types=["numbers"], seed=5))

        assert len(preview["preview"]) == 5
        assert re.fullmatch(r"1\. \d{4}", preview["preview"][0])
        assert preview["pool_info"] == "numbers: 10 chars"
        assert preview["total_chars"] == 10
        assert preview["has_emoji"] is False

    def test_preview_capped_by_count(self):
        """Never more previews than tokens requested."""
        assert len(preview_tokens(TokenRequest(count=2))["preview"]) == 2

    def test_emoji_flag(self):
        """Emoji pools are flagged."""
        assert preview_tokens(TokenRequest(count=1, pool_types=["emoji"]))["has_emoji"] is True

    def test_email_pool_info(self):
        """Email mode reports the domain instead of pools."""
        request = TokenRequest(email=EmailTokenConfig(domain="mail.test"))

        assert pool_info(request) == ["email: @mail.test"]

    def test_time_estimate(self):
        """1000 tokens of length 10 are estimated at 30ms."""
        assert estimate_token_time_ms(1000, 10) == 30


class TestTokenHelpers:
    """Test character analysis and file naming."""

    def test_analyze_charset(self):
        """Characters are counted per class."""
        counts = analyze_charset("ab12!あ😀é")

        assert counts["english"] == 2
        assert counts["numbers"] == 2
        assert counts["special"] == 1
        assert counts["japanese"] == 1
        assert counts["emoji"] == 1
        assert counts["other"] == 1

    def test_filename(self):
        """Token files are named by count, length and timestamp."""
        name = token_filename(100, 8, "json", now=datetime(2024, 5, 6, 7, 8, 9))

        assert name == "textgen_data_100_len8_20240506_070809.json"
