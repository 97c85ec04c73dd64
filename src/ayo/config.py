"""Loading of the global ayo configuration file."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ayo.errors import ConfigError
from ayo.models.cli_config import CliConfig

logger = logging.getLogger(__name__)


def load_cli_config(path: Path) -> CliConfig:
    """
    Reads config.yaml (JSON is accepted too, being a YAML subset).
    A missing or empty file yields the defaults.
    """
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return CliConfig()
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"read config {path}: {exc}") from exc
    if raw is None:
        return CliConfig()
    if not isinstance(raw, dict):
        raise ConfigError(f"config {path} must be a mapping, got {type(raw).__name__}")
    try:
        return CliConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"parse config {path}: {exc}") from exc
