"""
Pytest configuration and fixtures for synthetic data generator tests.

Provides common field specifications, small engine settings for batched runs,
and isolation of the module-level task and rate-limit stores.
"""

import random
import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for local test runs without installation
_SRC = Path(__file__).resolve().parents[1] / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))

from synth_datagen.config.models import DatagenConfig, EngineConfig  # noqa: E402
from synth_datagen.generators.field_generators import GenerationContext  # noqa: E402
from synth_datagen.shared import dependencies  # noqa: E402
from synth_datagen.shared.models import FieldSpec, GenerationRequest  # noqa: E402


@pytest.fixture(autouse=True)
def reset_shared_state():
    """Start every test with empty task, result and rate-limit stores."""
    dependencies._task_status.clear()
    dependencies._background_tasks.clear()
    dependencies._task_controllers.clear()
    dependencies._rate_limit_storage.clear()
    dependencies._result_cache = None
    dependencies._config = DatagenConfig()
    yield
    dependencies._task_status.clear()
    dependencies._background_tasks.clear()
    dependencies._task_controllers.clear()
    dependencies._rate_limit_storage.clear()
    dependencies._result_cache = None
    dependencies._config = None


@pytest.fixture
def make_context():
    """Factory for a seeded generator context."""

    def _make(row_index: int = 0, seed: int = 42, sequence=None) -> GenerationContext:
        return GenerationContext(row_index, random.Random(seed), sequence)

    return _make


@pytest.fixture
def id_and_name_fields() -> list[FieldSpec]:
    """An identifier column followed by a two-value enumeration."""
    return [
        FieldSpec(name="ID", type="id", config={"start": 1, "step": 1}),
        FieldSpec(name="Name", type="enum", config={"values": ["A", "B"]}),
    ]


@pytest.fixture
def small_request(id_and_name_fields) -> GenerationRequest:
    """Three records with a header, seeded for reproducibility."""
    return GenerationRequest(record_count=3, fields=id_and_name_fields, seed=7)


@pytest.fixture
def batched_engine_config() -> EngineConfig:
    """Engine settings that switch to batches above 50 records."""
    return EngineConfig(
        sync_threshold=50,
        min_batch_size=10,
        max_batch_size=25,
        target_batches=4,
    )


@pytest.fixture
def batched_config_file(tmp_path, batched_engine_config) -> Path:
    """A configuration file using the small batched engine settings."""
    config = DatagenConfig(engine=batched_engine_config)
    path = tmp_path / "config.json"
    config.to_file(path)
    return path
