"""Configuration loader for scan settings.

Settings come from an optional JSON file (explicit path, or the
``DEPGATHER_CONFIG`` environment variable) layered over built-in defaults.
A handful of individual values can also be overridden through environment
variables, which take precedence over the file.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from .errors import ConfigError

CONFIG_PATH_ENV_VAR = "DEPGATHER_CONFIG"

DEFAULT_PYPI_URL = "https://pypi.org/pypi"
DEFAULT_LOOKUP_DELAY = 0.1

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# env var -> (field name, converter)
_ENV_OVERRIDES = {
    "DEPGATHER_PYPI_URL": ("pypi_url", str),
    "DEPGATHER_LOOKUP_DELAY": ("lookup_delay", float),
    "DEPGATHER_LOG_LEVEL": ("log_level", str),
}


@dataclass(slots=True, frozen=True)
class Settings:
    """Tunables for registry access and logging."""

    pypi_url: str = DEFAULT_PYPI_URL
    lookup_delay: float = DEFAULT_LOOKUP_DELAY
    request_timeout: float = 10.0
    retry_attempts: int = 3
    retry_wait: float = 2.0
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.pypi_url.startswith(("http://", "https://")):
            raise ConfigError(f"Invalid 'pypi_url': {self.pypi_url!r} (must be an http(s) URL)")
        if self.lookup_delay < 0:
            raise ConfigError("'lookup_delay' must be non-negative")
        if self.request_timeout <= 0:
            raise ConfigError("'request_timeout' must be positive")
        if self.retry_attempts < 1:
            raise ConfigError("'retry_attempts' must be at least 1")
        if self.retry_wait < 0:
            raise ConfigError("'retry_wait' must be non-negative")
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"Invalid 'log_level': {self.log_level!r}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create Settings from a dictionary, validating field types."""
        unknown = set(data) - {
            "pypi_url",
            "lookup_delay",
            "request_timeout",
            "retry_attempts",
            "retry_wait",
            "log_level",
        }
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        kwargs: dict[str, Any] = {}
        for key in ("pypi_url", "log_level"):
            if key in data:
                if not isinstance(data[key], str) or not data[key]:
                    raise ConfigError(f"Setting '{key}' must be a non-empty string")
                kwargs[key] = data[key]
        for key in ("lookup_delay", "request_timeout", "retry_wait"):
            if key in data:
                value = data[key]
                if isinstance(value, bool) or not isinstance(value, (int, float)):
                    raise ConfigError(f"Setting '{key}' must be a number")
                kwargs[key] = float(value)
        if "retry_attempts" in data:
            value = data["retry_attempts"]
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError("Setting 'retry_attempts' must be an integer")
            kwargs["retry_attempts"] = value

        return cls(**kwargs)


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the configuration file path.

    Priority:
    1. Explicit path argument
    2. DEPGATHER_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def _apply_env_overrides(settings: Settings) -> Settings:
    overrides: dict[str, Any] = {}
    for env_var, (field_name, convert) in _ENV_OVERRIDES.items():
        raw = os.environ.get(env_var, "").strip()
        if not raw:
            continue
        try:
            overrides[field_name] = convert(raw)
        except ValueError as exc:
            raise ConfigError(f"Invalid value for {env_var}: {raw!r}") from exc
    return replace(settings, **overrides) if overrides else settings


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to a JSON config file. If not provided, uses the
            DEPGATHER_CONFIG env var, or the defaults when that is unset too.

    Returns:
        A validated Settings object with environment overrides applied.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)
    if config_path is None:
        return _apply_env_overrides(Settings())

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        content = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read configuration file: {exc}") from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    return _apply_env_overrides(Settings.from_dict(data))
