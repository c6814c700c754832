"""
Configuration System

Single-file YAML configuration with environment resolution. Features:
- ``.env`` loading from the working directory (existing variables win)
- ``${VAR}``, ``${VAR:-default}`` and ``$VAR`` expansion in string values
- Dot-notation access with built-in defaults, so the tool also runs without
  a config.yml

Configuration format (config.yml):
    synthesis:
      provider: openai
      model_id: gpt-3.5-turbo
      timeout: 30
    providers:
      openai:
        api_key: ${OPENAI_API_KEY}
    session:
      mirror_presets: true
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from patternsmith.errors import ConfigurationError

# Use standard logging (not get_logger) to avoid circular imports with logger.py
logger = logging.getLogger("CONFIG")

DEFAULT_CONFIG: dict[str, Any] = {
    "synthesis": {
        "provider": "openai",
        "model_id": "gpt-3.5-turbo",
        "max_tokens": 256,
        "temperature": 0.0,
        "timeout": 30.0,
    },
    "providers": {
        "openai": {"api_key": "${OPENAI_API_KEY}", "base_url": None},
        "anthropic": {"api_key": "${ANTHROPIC_API_KEY}", "base_url": None},
        "ollama": {"api_key": None, "base_url": "${OLLAMA_HOST:-http://localhost:11434}"},
    },
    "session": {
        "mirror_presets": True,
        "test_mode": "enumerate",
    },
    "clipboard": {
        "feedback_seconds": 2.0,
    },
    "logging": {
        "level": "INFO",
        "rich_tracebacks": True,
        "show_traceback_locals": False,
        "show_full_paths": False,
        "logging_colors": {
            "synthesizer": "cyan",
            "session": "magenta",
            "clipboard": "blue",
            "cli": "white",
        },
    },
}

_ENV_PATTERN = re.compile(r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigBuilder:
    """
    Configuration loader with defaults and environment resolution.

    Values from config.yml are merged over :data:`DEFAULT_CONFIG`, then
    environment placeholders are expanded.
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to a config.yml. If None, ``CONFIG_FILE`` or
                ./config.yml is used when present, built-in defaults otherwise.

        Raises:
            ConfigurationError: If the file exists but cannot be parsed.
            FileNotFoundError: If an explicit config_path does not exist.
        """
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)
            logger.debug(f"Loaded .env file from {dotenv_path}")

        if config_path is None:
            env_path = os.environ.get("CONFIG_FILE")
            cwd_config = Path.cwd() / "config.yml"
            if env_path:
                config_path = env_path
            elif cwd_config.exists():
                config_path = cwd_config
        elif not Path(config_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        self.config_path = Path(config_path) if config_path else None
        user_config = self._load_yaml_file(self.config_path) if self.config_path else {}
        if self.config_path is None:
            logger.debug("No config.yml found, using built-in defaults")

        self._unexpanded_config = _deep_merge(DEFAULT_CONFIG, user_config)
        self.raw_config = self._resolve_env_vars(self._unexpanded_config)

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing YAML configuration: {e}") from e

        if config is None:
            logger.warning(f"Configuration file is empty: {file_path}")
            return {}

        if not isinstance(config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a dictionary/mapping: {file_path}"
            )

        logger.debug(f"Loaded configuration from {file_path}")
        return config

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        A placeholder whose variable is unset and has no default resolves to
        None when it is the whole value, so unset API keys read as missing.
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):
            whole = _ENV_PATTERN.fullmatch(data)
            if whole and self._lookup(whole) is None:
                return None

            def replace_env_var(match):
                value = self._lookup(match)
                return match.group(0) if value is None else value

            return _ENV_PATTERN.sub(replace_env_var, data)
        else:
            return data

    @staticmethod
    def _lookup(match: re.Match) -> str | None:
        if match.group(1):  # ${VAR_NAME:-default} or ${VAR_NAME}
            env_value = os.environ.get(match.group(1))
            if env_value is None:
                return match.group(2)
            return env_value
        return os.environ.get(match.group(3))

    def get_unexpanded_config(self) -> dict[str, Any]:
        """Configuration with ${VAR} placeholders preserved."""
        return copy.deepcopy(self._unexpanded_config)

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None


def get_config_builder(
    config_path: str | Path | None = None, set_as_default: bool = False
) -> ConfigBuilder:
    """Get the configuration builder.

    Without ``config_path`` the process-wide default is returned (created on
    first use). With ``config_path`` a new builder is loaded, and optionally
    installed as the default.
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            _default_config = ConfigBuilder()
        return _default_config

    builder = ConfigBuilder(config_path)
    if set_as_default:
        _default_config = builder
        logger.debug(f"Set explicit config as default: {config_path}")
    return builder


def reset_config() -> None:
    """Drop the cached default configuration (reloaded on next access)."""
    global _default_config
    _default_config = None


def get_config_value(path: str, default: Any = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "synthesis.timeout")
        default: Default value to return if path is not found

    Raises:
        ValueError: If path is empty or None

    Examples:
        >>> timeout = get_config_value("synthesis.timeout", 30.0)
        >>> mirror = get_config_value("session.mirror_presets", True)
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")
    return get_config_builder().get(path, default)


def get_synthesis_config() -> dict[str, Any]:
    """Model settings for pattern synthesis (provider, model_id, limits)."""
    return dict(get_config_value("synthesis", {}) or {})


def get_provider_config(provider_name: str) -> dict[str, Any]:
    """Get API provider configuration (api_key, base_url)."""
    providers = get_config_value("providers", {}) or {}
    return dict(providers.get(provider_name) or {})


_TRUE_STRINGS = {"true", "yes", "on", "1"}
_FALSE_STRINGS = {"false", "no", "off", "0", ""}


def to_bool(value: Any) -> bool:
    """Interpret a configuration value as a boolean.

    Values expanded from ``${VAR}`` are always strings, so ``"false"`` reads
    as False.

    Raises:
        ConfigurationError: If a string is not a recognized boolean
    """
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        raise ConfigurationError(f"Expected a boolean, got {value!r}")
    return bool(value)


def to_optional_float(value: Any) -> float | None:
    """Interpret a configuration value as seconds; None stays None.

    Raises:
        ConfigurationError: If the value is not numeric
    """
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Expected a number, got {value!r}") from None
