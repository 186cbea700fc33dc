"""
Unit tests for configuration models and loading.
"""

import json

import pytest
from pydantic import ValidationError

from synth_datagen.config import settings
from synth_datagen.config.models import (
    LOG_LEVEL_ENV,
    ApiConfig,
    DatagenConfig,
    EngineConfig,
    OutputConfig,
)
from synth_datagen.config.settings import (
    CONFIG_FILE_ENV,
    create_default_config,
    load_config,
)


class TestConfigModels:
    """Test defaults and field validation."""

    def test_engine_defaults(self):
        """Engine defaults match the documented thresholds."""
        engine = EngineConfig()

        assert engine.sync_threshold == 5000
        assert (engine.min_batch_size, engine.max_batch_size) == (100, 1000)
        assert engine.max_records == 1_000_000
        assert engine.preview_rows == 10
        assert engine.allow_unknown_types is False

    def test_batch_size_for(self):
        """Batch sizes are clamped to the configured bounds."""
        engine = EngineConfig(min_batch_size=10, max_batch_size=50, target_batches=10)

        assert engine.batch_size_for(50) == 10
        assert engine.batch_size_for(300) == 30
        assert engine.batch_size_for(10_000) == 50

    def test_batch_bounds_order(self):
        """min_batch_size above max_batch_size is rejected."""
        with pytest.raises(ValidationError, match="must not exceed"):
            EngineConfig(min_batch_size=200, max_batch_size=100)

    @pytest.mark.parametrize("delimiter", ['"', "\n"])
    def test_output_delimiter(self, delimiter):
        """Quotes and newlines are not valid default delimiters."""
        with pytest.raises(ValidationError):
            OutputConfig(delimiter=delimiter)

    def test_output_dir_stripped(self):
        """Output directories are stripped; blank ones are rejected."""
        assert OutputConfig(output_dir="  data ").output_dir == "data"
        with pytest.raises(ValidationError):
            OutputConfig(output_dir="   ")

    def test_api_limits_positive(self):
        """API limits must be positive."""
        with pytest.raises(ValidationError):
            ApiConfig(generate_rate_limit=0)

    def test_log_level_normalized(self):
        """Log levels are case-insensitive."""
        assert DatagenConfig(log_level="debug").log_level == "DEBUG"
        with pytest.raises(ValidationError):
            DatagenConfig(log_level="chatty")

    def test_log_level_from_environment(self, monkeypatch):
        """The default log level comes from the environment."""
        monkeypatch.setenv(LOG_LEVEL_ENV, "warning")

        assert DatagenConfig().log_level == "WARNING"

    def test_invalid_log_level_in_environment(self, monkeypatch):
        """An unknown level from the environment is rejected."""
        monkeypatch.setenv(LOG_LEVEL_ENV, "verbose")

        with pytest.raises(ValidationError, match="log_level must be one of"):
            DatagenConfig()

    def test_partial_sections(self):
        """Missing sections and keys take their defaults."""
        config = DatagenConfig.model_validate({"engine": {"sync_threshold": 10}})

        assert config.engine.sync_threshold == 10
        assert config.engine.max_batch_size == 1000
        assert config.output.delimiter == ","


class TestConfigFiles:
    """Test reading and writing config.json."""

    def test_round_trip(self, tmp_path):
        """Saved configurations load back unchanged."""
        config = DatagenConfig(engine=EngineConfig(sync_threshold=42))
        path = tmp_path / "nested" / "config.json"

        config.to_file(path)

        assert DatagenConfig.from_file(path) == config

    def test_missing_file(self, tmp_path):
        """Missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            DatagenConfig.from_file(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        """Malformed JSON raises ValueError."""
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid JSON"):
            DatagenConfig.from_file(path)

    def test_load_from_directory(self, tmp_path):
        """A directory path loads config.json inside it."""
        (tmp_path / "config.json").write_text(
            json.dumps({"api": {"generate_rate_limit": 3}}), encoding="utf-8"
        )

        assert load_config(tmp_path).api.generate_rate_limit == 3

    def test_load_from_environment(self, tmp_path, monkeypatch):
        """The config file environment variable is honored."""
        path = tmp_path / "custom.json"
        DatagenConfig(engine=EngineConfig(preview_rows=3)).to_file(path)
        monkeypatch.setenv(CONFIG_FILE_ENV, str(path))

        assert load_config().engine.preview_rows == 3

    def test_defaults_when_nothing_found(self, tmp_path, monkeypatch):
        """Without any config file the defaults are used."""
        monkeypatch.delenv(CONFIG_FILE_ENV, raising=False)
        monkeypatch.setattr(
            settings, "config_search_paths", lambda name="config.json": [tmp_path / name]
        )

        assert load_config() == DatagenConfig()

    def test_explicit_missing_path(self, tmp_path):
        """An explicit path that does not exist is an error."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.json")

    def test_create_default_config(self, tmp_path):
        """The default config file contains every section."""
        path = tmp_path / "config.json"

        create_default_config(path)

        assert set(json.loads(path.read_text(encoding="utf-8"))) == {
            "engine",
            "output",
            "api",
            "log_level",
        }
