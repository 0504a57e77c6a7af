#!/usr/bin/env python3
"""Build path matchers from configuration.

The ``pathmatch`` section of a YAML config file (or any mapping with the
same keys) describes one :class:`PathMatcher`:

.. code-block:: yaml

    pathmatch:
      case_sensitive: false
      check_filesystem: true
      only: ["*.css", "*.js", "vendor/"]
      except: ["theme.css"]
"""

import os
from typing import Any, Dict, List, Optional

from pathmatch.core.constants import DEFAULT_CONFIG, ConfigKey
from pathmatch.core.validators import ValidationError, validate_matcher_config
from pathmatch.infrastructure.config_manager import ConfigManager, get_config_manager
from pathmatch.infrastructure.logger import get_logger
from pathmatch.rules.matcher import PathMatcher
from pathmatch.rules.probe import FilesystemProbe

logger = get_logger()


def _pattern_list(value: Any) -> Optional[List[str]]:
    if value is None:
        return None
    if isinstance(value, str):
        return [value]
    return list(value)


def matcher_from_config(
    config: Dict[str, Any], probe: Optional[FilesystemProbe] = None
) -> PathMatcher:
    """Create a PathMatcher from a ``pathmatch`` configuration mapping.

    Missing keys take their defaults. An empty ``only`` list means "no
    restriction", the same as leaving it out.

    Args:
        config: The ``pathmatch`` section
        probe: Optional filesystem probe

    Returns:
        Configured matcher

    Raises:
        ValidationError: If the section is malformed
        PathMatchError: If a pattern cannot be compiled
    """
    try:
        validate_matcher_config(config)
    except ValidationError as e:
        logger.error("Invalid matcher configuration", error=str(e))
        raise

    def option(key: str) -> Any:
        return config.get(key, DEFAULT_CONFIG[key])

    only = _pattern_list(config.get(ConfigKey.ONLY)) or None
    except_ = _pattern_list(config.get(ConfigKey.EXCEPT)) or None

    matcher = PathMatcher(
        only=only,
        except_=except_,
        case_sensitive=option(ConfigKey.CASE_SENSITIVE),
        full_path=option(ConfigKey.FULL_PATH),
        exact_slashes=option(ConfigKey.EXACT_SLASHES),
        check_filesystem=option(ConfigKey.CHECK_FILESYSTEM),
        probe=probe,
    )
    logger.debug(
        "Built matcher from configuration",
        only=len(only or ()),
        except_=len(except_ or ()),
    )
    return matcher


def matcher_from_manager(
    manager: Optional[ConfigManager] = None, probe: Optional[FilesystemProbe] = None
) -> PathMatcher:
    """Create a PathMatcher from the merged ``pathmatch`` section of *manager*.

    Uses the global configuration manager when none is given.
    """
    if manager is None:
        manager = get_config_manager()
    section = manager.get_section(ConfigKey.SECTION)
    configure_logging(section)
    return matcher_from_config(section, probe=probe)


def configure_logging(config: Dict[str, Any]) -> None:
    """Apply the ``logging`` subsection (level, optional file) to the package logger."""
    settings = config.get(ConfigKey.LOGGING) or {}
    if not isinstance(settings, dict):
        raise ValidationError("'logging' must be a mapping")

    log = get_logger()
    level = settings.get("level")
    if level:
        try:
            log.set_level(level)
        except KeyError:
            raise ValidationError(f"Unknown log level: {level!r}") from None

    filename = settings.get("file")
    if filename:
        target = os.path.abspath(filename)
        if not any(getattr(h, "baseFilename", None) == target for h in log.logger.handlers):
            log.add_handler(log.create_file_handler(filename))
