"""YAML configuration for resolver and revision set defaults.

Configuration is read from an explicit path, else from the file named by the
``REVLIB_CONFIG`` environment variable, else defaults apply. The document is
validated against ``CONFIG_SCHEMA`` before use::

    resolver:
      strategy: highest      # highest | lowest | baseline | equal
    revisions:
      dedup: identity        # identity | value
    logging:
      level: INFO
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft7Validator

from common.logging_utils import configure_logging
from constants import Constants, DedupModes
from library.phase import Strategy

logger = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when a configuration file cannot be loaded or is invalid."""


CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "resolver": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "strategy": {"enum": [s.name.lower() for s in Strategy]},
            },
        },
        "revisions": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "dedup": {"enum": [m.value for m in DedupModes]},
            },
        },
        "logging": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "level": {"enum": Constants.LOG_LEVELS},
            },
        },
    },
}


@dataclass
class Settings:
    """Effective configuration."""
    strategy: Strategy = Strategy.HIGHEST
    dedup_by_value: bool = False
    log_level: str = Constants.DEFAULT_LOG_LEVEL


def validate_config(data: Dict[str, Any]) -> None:
    """Validate a config document and raise on the first error.

    Raises:
        ConfigError: naming the path of the first failing element.
    """
    validator = Draft7Validator(CONFIG_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise ConfigError(f"Invalid config at '{path}': {first.message}")


def settings_from_dict(data: Optional[Dict[str, Any]]) -> Settings:
    """Build ``Settings`` from an already-parsed config document."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError("Config document must be a mapping")
    # Allow the settings to live under a top-level "revlib" section
    data = data.get(Constants.CONFIG_SECTION, data) or {}
    validate_config(data)

    resolver = data.get("resolver") or {}
    revisions = data.get("revisions") or {}
    log = data.get("logging") or {}
    return Settings(
        strategy=Strategy.from_name(resolver.get("strategy", Constants.DEFAULT_STRATEGY)),
        dedup_by_value=revisions.get("dedup", Constants.DEFAULT_DEDUP) == DedupModes.VALUE.value,
        log_level=log.get("level", Constants.DEFAULT_LOG_LEVEL),
    )


def load_config(path: Optional[str] = None) -> Settings:
    """Load settings from ``path`` or ``$REVLIB_CONFIG``.

    Returns:
        Defaults when no file is configured.

    Raises:
        ConfigError: when the file is missing, unparseable or invalid.
    """
    path = path or os.environ.get(Constants.ENV_CONFIG)
    if not path:
        return Settings()

    if not os.path.isfile(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config {path}: {e}") from e

    settings = settings_from_dict(data)
    logger.info("Loaded config from: %s", path)
    return settings


def configure(path: Optional[str] = None) -> Settings:
    """Load settings and apply their log level to the root logger.

    ``REVLIB_LOG_LEVEL`` still takes precedence over ``logging.level``.
    """
    settings = load_config(path)
    configure_logging(os.environ.get(Constants.ENV_LOG_LEVEL) or settings.log_level)
    return settings
