"""JSON configuration files for race-recap."""

import json
import logging
from dataclasses import replace
from pathlib import Path

from race_recap.models import SamplerParams

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "race-recap"
CONFIG_PATH = CONFIG_DIR / "race-recap.json"
LOCAL_CONFIG_PATH = Path("race-recap.json")

# Config keys that map straight onto SamplerParams fields
SAMPLER_KEYS = ("base_heart_rate", "max_heart_rate_increase", "base_pace")


def load_config(paths: list[Path] | None = None) -> dict:
    """Load configuration from config files.

    Merges config from global and local files:
    1. ~/.config/race-recap/race-recap.json (global, loaded first)
    2. ./race-recap.json (local, overrides global)

    Returns:
        Dict with merged config values, empty dict if no files exist.
    """
    if paths is None:
        paths = [CONFIG_PATH, LOCAL_CONFIG_PATH]
    config = {}
    for config_path in paths:
        if config_path.exists():
            try:
                with config_path.open() as f:
                    data = json.load(f)
            except (json.JSONDecodeError, OSError) as e:
                logger.debug("Skipping unreadable config %s: %s", config_path, e)
                continue
            if isinstance(data, dict):
                config.update(data)
    return config


def sampler_params_from_config(config: dict) -> SamplerParams:
    """Build SamplerParams, overriding defaults with any numeric values in config."""
    overrides = {}
    for key in SAMPLER_KEYS:
        value = config.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            overrides[key] = float(value)
    return replace(SamplerParams(), **overrides)
