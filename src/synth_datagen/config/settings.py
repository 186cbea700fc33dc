"""
Configuration loading and management for the synthetic data generator.

This module provides utilities for loading, validating, and managing
configuration settings.
"""

import logging
import os
from pathlib import Path

from .models import DatagenConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_ENV = "SYNTH_DATAGEN_CONFIG_FILE"


def config_search_paths(config_name: str = "config.json") -> list[Path]:
    """Locations searched, in order, when no explicit path is given."""
    project_root = Path(__file__).parent.parent.parent.parent
    return [
        Path.cwd() / config_name,
        Path.cwd() / "config" / config_name,
        project_root / config_name,
        project_root / "config" / config_name,
    ]


def load_config(
    config_path: str | Path | None = None, config_name: str = "config.json"
) -> DatagenConfig:
    """
    Load configuration from file with intelligent path resolution.

    Without an explicit path the usual locations are searched and, when none
    holds a config file, the defaults are returned.

    Args:
        config_path: Explicit path to config file or directory containing config
        config_name: Name of config file (default: "config.json")

    Returns:
        DatagenConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If an explicit path does not exist
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_FILE_ENV)

    if config_path is None:
        for path in config_search_paths(config_name):
            if path.exists():
                config_path = path
                break
        else:
            logger.debug("No configuration file found, using defaults")
            return DatagenConfig()

    config_path = Path(config_path)

    # If path is a directory, look for config file inside it
    if config_path.is_dir():
        config_path = config_path / config_name

    return DatagenConfig.from_file(config_path)


def create_default_config(output_path: str | Path) -> DatagenConfig:
    """
    Create a default configuration file with standard values.

    Args:
        output_path: Where to save the default config file

    Returns:
        DatagenConfig: The default configuration
    """
    default_config = DatagenConfig()
    default_config.to_file(output_path)
    return default_config
