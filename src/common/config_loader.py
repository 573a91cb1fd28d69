"""Configuration file loading.

Settings come from a YAML file (``.yml``/``.yaml``) or a JSON file
(``.json``). Recognised values are applied onto ``Constants``; the CLI
applies its own overrides afterwards so flags keep the highest precedence.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml

from constants import Constants
from errors import ConfigError

logger = logging.getLogger(__name__)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


# (section, key) -> (Constants attribute, converter)
_SETTINGS = {
    ("pod", "max_workers"): ("MAX_WORKERS", int),
    ("pod", "command_timeout"): ("COMMAND_TIMEOUT_SEC", float),
    ("pod", "git_token_env"): ("ENV_GIT_HTTP_TOKEN", str),
    ("pod", "no_emoji"): ("NO_EMOJI", _to_bool),
    ("pod", "allow_prerelease"): ("ALLOW_PRERELEASE", _to_bool),
    ("network", "aliases_file"): ("NETWORK_ALIASES_FILE", str),
}


def resolve_config_path(explicit: Optional[str]) -> Optional[str]:
    """Pick the config file: CLI flag, then DEVKIT_CONFIG, then the default if present."""
    if explicit:
        return explicit
    env_path = os.environ.get(Constants.ENV_CONFIG)
    if env_path:
        return env_path
    default = os.path.expanduser(Constants.DEFAULT_CONFIG_FILE)
    if os.path.isfile(default):
        return default
    return None


def load_config(path: str) -> Dict[str, Any]:
    """Read a YAML or JSON configuration file into a dict.

    Raises:
        ConfigError: If the file is missing, unreadable, or not a mapping.
    """
    expanded = os.path.expanduser(path)
    if not os.path.isfile(expanded):
        raise ConfigError(f"Config file not found: {expanded}")
    try:
        with open(expanded, "r", encoding="utf-8") as f:
            if expanded.lower().endswith(".json"):
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read config file {expanded}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {expanded} must contain a mapping at the top level")
    return data


def apply_config(data: Dict[str, Any]) -> None:
    """Copy recognised settings from ``data`` onto Constants."""
    for section_name, section in data.items():
        if not isinstance(section, dict):
            logger.debug("Ignoring config entry %s (not a section)", section_name)
            continue
        for key, value in section.items():
            target = _SETTINGS.get((section_name, key))
            if target is None:
                logger.debug("Ignoring unknown config key %s.%s", section_name, key)
                continue
            attr, convert = target
            try:
                setattr(Constants, attr, convert(value))
            except (TypeError, ValueError):
                logger.warning("Invalid value for %s.%s: %r", section_name, key, value)
