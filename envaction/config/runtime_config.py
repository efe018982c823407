"""Runtime configuration registry for envaction.

Provides centralized defaults for the batch exporter, the file-command
environment variable names and the diagnostic logging level.
Environment variables take precedence over YAML config.

Usage:
    from envaction.config.runtime_config import get_default_options, get_log_level

    defaults = get_default_options()  # {"prefix": "", "upcase": False, ...}
    level = get_log_level()  # logging.WARNING unless overridden
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

logger = logging.getLogger(__name__)

_CONFIG_PATH = Path(__file__).parent / "runtime.yaml"
_cached_config: Optional[Dict[str, Any]] = None

# Env var that overrides the configured logging level
LOG_LEVEL_ENV_VAR = "ENVACTION_LOG_LEVEL"

# Set to "1" by the runner when step debug logging is enabled
RUNNER_DEBUG_ENV_VAR = "RUNNER_DEBUG"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
DEFAULT_LOG_LEVEL = "WARNING"


def _load_config() -> Dict[str, Any]:
    """Load runtime.yaml configuration, with caching."""
    global _cached_config
    if _cached_config is not None:
        return _cached_config

    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH, encoding="utf-8") as f:
            _cached_config = yaml.safe_load(f) or {}
    else:
        _cached_config = _default_config()

    return _cached_config


def _default_config() -> Dict[str, Any]:
    """Return default configuration if runtime.yaml doesn't exist."""
    return {
        "version": "1.0",
        "defaults": {
            "prefix": "",
            "upcase": False,
            "on_conflict": "overwrite",
        },
        "file_commands": {
            "OUTPUT": "GITHUB_OUTPUT",
            "ENV": "GITHUB_ENV",
            "STATE": "GITHUB_STATE",
        },
        "delimiter_prefix": "ghadelimiter_",
        "logging": {"level": DEFAULT_LOG_LEVEL},
    }


def reset_config() -> None:
    """Reset cached config (for testing)."""
    global _cached_config
    _cached_config = None


def get_default_options() -> Dict[str, Any]:
    """Get exporter defaults used when an action input is left empty.

    Returns:
        Dict with ``prefix`` (str), ``upcase`` (bool) and ``on_conflict`` (str).
    """
    fallback = _default_config()["defaults"]
    configured = _load_config().get("defaults") or {}
    return {
        "prefix": str(configured.get("prefix") or fallback["prefix"]),
        "upcase": bool(configured.get("upcase", fallback["upcase"])),
        "on_conflict": str(configured.get("on_conflict") or fallback["on_conflict"]),
    }


def get_file_command_env_var(command_kind: str) -> str:
    """Get the env var naming the command file for *command_kind*.

    Kinds missing from the config fall back to ``GITHUB_<KIND>``.

    Examples:
        >>> get_file_command_env_var("OUTPUT")
        'GITHUB_OUTPUT'
    """
    mapping = _load_config().get("file_commands") or {}
    return mapping.get(command_kind, f"GITHUB_{command_kind}")


def get_delimiter_prefix() -> str:
    """Get the fixed text placed in front of each delimiter UUID."""
    return str(_load_config().get("delimiter_prefix") or "ghadelimiter_")


def get_log_level(environ: Optional[Mapping[str, str]] = None) -> int:
    """Get the diagnostic logging level, respecting environment overrides.

    Environment variable precedence (highest to lowest):
    1. ENVACTION_LOG_LEVEL (e.g., "DEBUG")
    2. RUNNER_DEBUG == "1" -> DEBUG
    3. Config file value
    4. Default: WARNING

    Args:
        environ: Mapping to read overrides from. Defaults to ``os.environ``.

    Returns:
        A ``logging`` level constant.
    """
    env = os.environ if environ is None else environ

    explicit = env.get(LOG_LEVEL_ENV_VAR)
    if explicit:
        return _parse_level(explicit, LOG_LEVEL_ENV_VAR)

    if env.get(RUNNER_DEBUG_ENV_VAR) == "1":
        return logging.DEBUG

    configured = (_load_config().get("logging") or {}).get("level")
    if configured:
        return _parse_level(str(configured), "logging.level")

    return getattr(logging, DEFAULT_LOG_LEVEL)


def _parse_level(value: str, source: str) -> int:
    level_name = value.strip().upper()
    if level_name not in VALID_LOG_LEVELS:
        logger.warning(
            "Invalid %s value '%s' (valid: %s). Falling back to '%s'.",
            source,
            value,
            ", ".join(VALID_LOG_LEVELS),
            DEFAULT_LOG_LEVEL,
        )
        level_name = DEFAULT_LOG_LEVEL
    return getattr(logging, level_name)
