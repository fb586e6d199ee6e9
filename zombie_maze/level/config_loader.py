"""Configuration loader for the maze generator."""

import json
import logging
import os
import random
from dataclasses import asdict, fields
from typing import Optional

from zombie_maze.config import CONFIG_PATH
from zombie_maze.level.level_data import MazeConfig

logger = logging.getLogger(__name__)

SEED_MODES = ("fixed", "random")


def load_maze_config(config_path: str = CONFIG_PATH) -> MazeConfig:
    """
    Load maze configuration from JSON file.

    Unknown keys are ignored. A missing or unreadable file falls back to the
    defaults baked into MazeConfig.

    Args:
        config_path: Path to the configuration file

    Returns:
        MazeConfig: Loaded configuration
    """
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return MazeConfig()

    try:
        with open(config_path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Error loading config: %s, using defaults", e)
        return MazeConfig()

    config_data = data.get('maze_config', {}) if isinstance(data, dict) else {}
    if not isinstance(config_data, dict):
        logger.warning("'maze_config' in %s is not an object, using defaults", config_path)
        return MazeConfig()

    # Filter only fields that MazeConfig accepts
    allowed_keys = {f.name for f in fields(MazeConfig)}
    ignored = sorted(k for k in config_data if k not in allowed_keys)
    if ignored:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(ignored))
    defaults = MazeConfig()
    field_types = {f.name: f.type for f in fields(MazeConfig)}
    filtered = {
        k: _coerce(k, v, field_types[k], getattr(defaults, k))
        for k, v in config_data.items()
        if k in allowed_keys
    }

    config = MazeConfig(**filtered)
    # normalize seed_mode
    if config.seed_mode not in SEED_MODES:
        logger.warning("Unknown seed_mode %r, using 'fixed'", config.seed_mode)
        config.seed_mode = "fixed"
    return config


def _coerce(name: str, value, field_type, default):
    """Convert a JSON value to the field's declared type, or fall back to the default."""
    if field_type == Optional[int]:
        if value is None:
            return None
        field_type = int
    if field_type is bool:
        if isinstance(value, bool):
            return value
    elif not isinstance(value, bool):
        try:
            return field_type(value)
        except (TypeError, ValueError):
            pass
    logger.warning("Invalid value %r for %s, using default %r", value, name, default)
    return default


def save_maze_config(config: MazeConfig, config_path: str = CONFIG_PATH) -> None:
    """
    Save maze configuration to JSON file.

    Args:
        config: Configuration to save
        config_path: Path to save the configuration file
    """
    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(config_path, 'w') as f:
        json.dump({"maze_config": asdict(config)}, f, indent=2)


def resolve_seed(config: MazeConfig, rng: Optional[random.Random] = None) -> Optional[int]:
    """Pick the session seed: the configured one, or a fresh one in random mode."""
    if config.seed_mode == "random":
        source = rng if rng is not None else random.SystemRandom()
        return source.randrange(0, 2**31 - 1)
    return config.seed
