# codechunk/config/loader.py
"""
Configuration loader for codechunk.

Responsibilities:
- Load default config
- Load user config (optional) and deep-merge it over the defaults
- Expand ${ENV_VAR} placeholders
- Validate via schema
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from codechunk.config.schema import CodeChunkConfig
from codechunk.exceptions import ConfigurationError
from codechunk.logging.logger import get_logger
from codechunk.logging.tags import CONFIG

logger = get_logger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "default.yaml"
USER_CONFIG_FILENAME = "codechunk.yaml"

_ENV_PATTERN = re.compile(r"\$\{(\w+)\}")


def _expand_env(value: Any) -> Any:
    """Replace ${VAR} with its value; unset variables expand to an empty string."""
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config_dict(path: Path) -> dict:
    if not path.exists():
        raise ConfigurationError(f"Config file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping at the top level")

    return data


def find_user_config(cwd: Path | None = None) -> Path | None:
    candidate = (cwd or Path.cwd()) / USER_CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def load_config(
    user_config_path: Path | None = None,
    overrides: dict | None = None,
) -> CodeChunkConfig:
    """
    Load and validate codechunk configuration.

    Precedence (later wins):
    - packaged defaults
    - user config file
    - explicit overrides (e.g. CLI arguments)
    """
    logger.debug(f"{CONFIG} Loading default config from {DEFAULT_CONFIG_PATH}")
    cfg = load_config_dict(DEFAULT_CONFIG_PATH)

    if user_config_path is not None:
        logger.debug(f"{CONFIG} Loading user config from {user_config_path}")
        cfg = _deep_merge(cfg, load_config_dict(Path(user_config_path)))

    if overrides:
        cfg = _deep_merge(cfg, overrides)

    try:
        return CodeChunkConfig.model_validate(_expand_env(cfg))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration:\n{e}") from e


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "USER_CONFIG_FILENAME",
    "find_user_config",
    "load_config",
    "load_config_dict",
]
