"""
PathMatch Core: Input Validators.

This module provides validation functions for pattern strings, matcher
arguments, and the ``pathmatch`` configuration section.
"""
from typing import Any, Dict

from pathmatch.core.constants import ConfigKey, ErrorCode, Limits
from pathmatch.core.exceptions import MatcherConfigError, PathMatchError


class ValidationError(PathMatchError):
    """Base exception for validation errors."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize ValidationError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message, error_code)


def validate_pattern(pattern: str) -> bool:
    """Validate a wildcard pattern string before compiling it.

    Glob syntax itself is checked by the compiler; this only rejects input
    that can never be a path pattern.

    Args:
        pattern: Pattern to validate

    Returns:
        True if valid

    Raises:
        ValidationError: If pattern is invalid
    """
    if not isinstance(pattern, str):
        raise ValidationError(f"Pattern must be string, got {type(pattern).__name__}")

    if len(pattern) > Limits.MAX_PATTERN_LENGTH:
        raise ValidationError(f"Pattern exceeds maximum length ({Limits.MAX_PATTERN_LENGTH})")

    if "\0" in pattern:
        raise ValidationError("Invalid pattern: contains null bytes")

    if any(ord(c) < 32 and c != "\t" for c in pattern):
        raise ValidationError("Invalid pattern: contains control characters")

    return True


def is_matcher(value: Any) -> bool:
    """Return True if *value* exposes a callable ``match`` attribute."""
    if isinstance(value, (str, bytes)):
        return False
    return callable(getattr(value, "match", None))


def validate_matcher(value: Any) -> Any:
    """Check that *value* implements the matching capability.

    Returns:
        The value unchanged

    Raises:
        MatcherConfigError: If value has no callable ``match``
    """
    if not is_matcher(value):
        raise MatcherConfigError(
            f"Expected an object with a match(path) method, got {type(value).__name__}"
        )
    return value


def validate_matcher_argument(value: Any) -> Any:
    """Check an ``only``/``except`` argument: a pattern string or a matcher.

    Raises:
        MatcherConfigError: If value is neither
    """
    if isinstance(value, str):
        try:
            validate_pattern(value)
        except ValidationError as e:
            raise MatcherConfigError(str(e)) from e
        return value
    if is_matcher(value):
        return value
    raise MatcherConfigError(
        f"Pattern must be a string or an object with a match(path) method, "
        f"got {type(value).__name__}"
    )


def validate_matcher_config(config: Dict[str, Any]) -> bool:
    """Validate the ``pathmatch`` configuration section.

    Args:
        config: Mapping with the keys listed in :class:`ConfigKey`

    Returns:
        True if valid

    Raises:
        ValidationError: If the configuration is invalid
    """
    if not isinstance(config, dict):
        raise ValidationError("Matcher configuration must be a dictionary")

    for key in (
        ConfigKey.CASE_SENSITIVE,
        ConfigKey.FULL_PATH,
        ConfigKey.EXACT_SLASHES,
        ConfigKey.CHECK_FILESYSTEM,
    ):
        if key in config and not isinstance(config[key], bool):
            raise ValidationError(f"'{key}' must be boolean: {config[key]!r}")

    for key in (ConfigKey.ONLY, ConfigKey.EXCEPT):
        if key not in config or config[key] is None:
            continue
        patterns = config[key]
        if isinstance(patterns, str):
            patterns = [patterns]
        if not isinstance(patterns, list):
            raise ValidationError(f"'{key}' must be a list of patterns")
        if len(patterns) > Limits.MAX_PATTERNS:
            raise ValidationError(f"'{key}' exceeds maximum pattern count ({Limits.MAX_PATTERNS})")

        for i, pattern in enumerate(patterns):
            try:
                validate_pattern(pattern)
            except ValidationError as e:
                raise ValidationError(f"Invalid pattern in '{key}' at index {i}: {e}")

    return True
