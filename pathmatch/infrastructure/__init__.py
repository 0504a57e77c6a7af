"""PathMatch Infrastructure Layer.

Services used by the matching engine:
- ConfigManager: layered YAML/environment configuration
- Logger: structured logging
"""

from .config_manager import ConfigError
from .config_manager import ConfigManager as Config
from .config_manager import ConfigManager, ConfigSource, ConfigValue, get_config_manager, set_global_config
from .logger import Logger, LogLevel, LogRecord, get_logger, set_global_logger

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "LogRecord",
    "get_logger",
    "set_global_logger",
    # ConfigManager exports
    "ConfigSource",
    "ConfigValue",
    "ConfigError",
    "Config",
    "ConfigManager",
    "get_config_manager",
    "set_global_config",
]
