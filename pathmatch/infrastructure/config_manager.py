#!/usr/bin/env python3
"""Layered configuration for PathMatch.

This module provides configuration management with:
- A fixed precedence hierarchy (defaults < system < user < environment < runtime)
- YAML files parsed with PyYAML
- ``PATHMATCH_*`` environment variable overrides
- Dot-path access into nested sections

Example:
    >>> config = ConfigManager()
    >>> config.load_file("pathmatch.yaml")
    >>> config.get("pathmatch.case_sensitive", default=False)
"""

import copy
import os
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pathmatch.core.constants import DEFAULT_CONFIG, ConfigKey, ErrorCode
from pathmatch.core.exceptions import PathMatchError

ENV_PREFIX = "PATHMATCH_"


class ConfigSource(Enum):
    """Configuration source precedence levels."""

    COMPILED_DEFAULTS = 1  # Lowest precedence
    SYSTEM_CONFIG = 2
    USER_CONFIG = 3
    ENVIRONMENT = 4
    RUNTIME = 5  # Highest precedence


@dataclass
class ConfigValue:
    """Configuration value with the source it was resolved from."""

    value: Any
    source: ConfigSource
    timestamp: float = field(default_factory=time.time)


class ConfigError(PathMatchError):
    """Configuration error."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        super().__init__(message, error_code)


class ConfigManager:
    """Thread-safe layered configuration manager.

    Values are looked up from the highest-precedence source that defines
    them. Pattern lists are replaced, not merged, when a higher source
    defines them.
    """

    def __init__(self, config_file: Optional[str] = None, load_env: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML file to load as user config
            load_env: Whether to read ``PATHMATCH_*`` environment variables
        """
        self._config: Dict[ConfigSource, Dict[str, Any]] = {}
        self._lock = threading.RLock()

        self._config[ConfigSource.COMPILED_DEFAULTS] = {
            ConfigKey.SECTION: copy.deepcopy(DEFAULT_CONFIG)
        }

        if config_file:
            self.load_file(config_file)

        if load_env:
            self._load_environment()

    def load_file(self, file_path: str, source: ConfigSource = ConfigSource.USER_CONFIG) -> None:
        """Load configuration from a YAML file.

        Args:
            file_path: Path to YAML config file
            source: Configuration source level

        Raises:
            ConfigError: If file cannot be loaded or parsed
        """
        path = Path(file_path).expanduser()

        if not path.is_file():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            with open(path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigError(
                f"Error reading config {file_path}: {e}", ErrorCode.PERMISSION_DENIED
            ) from e

        if config_data is None:
            config_data = {}
        if not isinstance(config_data, dict):
            raise ConfigError(f"Invalid config format in {file_path}")

        with self._lock:
            self._config[source] = config_data

    def load_dict(self, config_data: Dict[str, Any], source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Load configuration from a dictionary."""
        with self._lock:
            self._config[source] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Load configuration from environment variables.

        Only the known top-level keys of the ``pathmatch`` section are read,
        since key names themselves contain underscores.
        Example: PATHMATCH_CASE_SENSITIVE=true, PATHMATCH_ONLY="*.py,*.txt"
        """
        section: Dict[str, Any] = {}

        for key in (
            ConfigKey.CASE_SENSITIVE,
            ConfigKey.FULL_PATH,
            ConfigKey.EXACT_SLASHES,
            ConfigKey.CHECK_FILESYSTEM,
        ):
            raw = os.environ.get(ENV_PREFIX + key.upper())
            if raw is not None:
                section[key] = self._parse_env_value(raw)

        for key in (ConfigKey.ONLY, ConfigKey.EXCEPT):
            raw = os.environ.get(ENV_PREFIX + key.upper())
            if raw is not None:
                section[key] = [p.strip() for p in raw.split(",") if p.strip()]

        level = os.environ.get(ENV_PREFIX + "LOG_LEVEL")
        if level:
            section[ConfigKey.LOGGING] = {"level": level.upper()}

        if section:
            with self._lock:
                self._config[ConfigSource.ENVIRONMENT] = {ConfigKey.SECTION: section}

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Parse an environment variable value (bool, int, or str)."""
        if value.lower() in ("true", "yes", "on", "1"):
            return True
        if value.lower() in ("false", "no", "off", "0"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value by key.

        Args:
            key: Dot-separated key path (e.g., "pathmatch.case_sensitive")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return value

            return default

    def get_value(self, key: str) -> Optional[ConfigValue]:
        """Get a value together with the source that provided it."""
        with self._lock:
            for source in sorted(self._config.keys(), key=lambda s: s.value, reverse=True):
                value = self._get_nested(self._config[source], key)
                if value is not None:
                    return ConfigValue(value=value, source=source)
            return None

    @staticmethod
    def _get_nested(config: Dict[str, Any], key: str) -> Optional[Any]:
        current: Any = config
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return None
            current = current[part]
        return current

    def set(self, key: str, value: Any, source: ConfigSource = ConfigSource.RUNTIME) -> None:
        """Set configuration value.

        Args:
            key: Dot-separated key path
            value: Value to set
            source: Configuration source level
        """
        with self._lock:
            current = self._config.setdefault(source, {})
            parts = key.split(".")
            for part in parts[:-1]:
                current = current.setdefault(part, {})
            current[parts[-1]] = value

    def get_all(self) -> Dict[str, Any]:
        """Get merged configuration from all sources."""
        with self._lock:
            merged: Dict[str, Any] = {}
            for source in sorted(self._config.keys(), key=lambda s: s.value):
                merged = self._deep_merge(merged, self._config[source])
            return merged

    def get_section(self, name: str = ConfigKey.SECTION) -> Dict[str, Any]:
        """Get one merged top-level section."""
        section = self.get_all().get(name, {})
        if not isinstance(section, dict):
            raise ConfigError(f"Config section '{name}' must be a mapping")
        return section

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        result = copy.deepcopy(base)

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = copy.deepcopy(value)

        return result

    def clear(self, source: Optional[ConfigSource] = None) -> None:
        """Clear configuration.

        Args:
            source: Specific source to clear, or None for all except defaults
        """
        with self._lock:
            if source:
                if source != ConfigSource.COMPILED_DEFAULTS:
                    self._config.pop(source, None)
            else:
                for s in [s for s in self._config if s != ConfigSource.COMPILED_DEFAULTS]:
                    del self._config[s]


# Global config manager instance
_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create the global configuration manager."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set (or reset, with None) the global configuration manager."""
    global _global_config
    _global_config = config
