"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. Field defaults in config/settings.py
#   2. config/config.yaml  -- Static policy checked into the repo
#   3. .env file           -- Local developer overrides (not committed)
#   4. Environment vars    -- Set at deploy time
#
# The YAML file is sectioned; keys are flattened to match Settings field
# names:
#   musicbrainz:
#     group_score_margin: 20      ->  musicbrainz_group_score_margin
#   app:
#     log_level: DEBUG            ->  log_level   (the "app" section is flat)
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path
from typing import Any

import yaml

from artist_enrichment.config.settings import Settings
from artist_enrichment.utils.errors import ConfigurationError

# Sections whose keys map to Settings fields without a prefix.
_FLAT_SECTIONS = {"app", "enrichment", "http", "images"}


def load_settings(path: str = "config/config.yaml") -> Settings:
    """Load YAML config and merge with environment-based Settings.

    Values the environment (or .env) explicitly provides win over YAML.

    Args:
        path: Path to the YAML configuration file.  A missing file is not
              an error; only defaults and the environment apply then.

    Returns:
        Fully resolved :class:`Settings`.

    Raises:
        ConfigurationError: If the YAML file is malformed or sets a key
                            that Settings does not know.
    """
    config_path = Path(path)
    yaml_config: dict[str, Any] = {}
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

    yaml_values = _flatten(yaml_config)
    unknown = sorted(set(yaml_values) - set(Settings.model_fields))
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys in {config_path}: {', '.join(unknown)}"
        )

    env_settings = Settings()
    env_values = {name: getattr(env_settings, name) for name in env_settings.model_fields_set}

    return Settings(**{**yaml_values, **env_values})


def _flatten(config: dict[str, Any]) -> dict[str, Any]:
    """Flatten ``{section: {key: value}}`` into Settings field names."""
    flat: dict[str, Any] = {}
    for section, values in config.items():
        if not isinstance(values, dict):
            flat[section] = values
            continue
        for key, value in values.items():
            name = key if section in _FLAT_SECTIONS else f"{section}_{key}"
            flat[name] = value
    return flat
