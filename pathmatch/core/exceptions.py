"""Exceptions raised while building matchers.

Every error here is a configuration error: it is raised when a pattern or
matcher is constructed, never from ``match()``.
"""
from typing import Optional

from pathmatch.core.constants import ErrorCode


class PathMatchError(Exception):
    """Base exception for PathMatch."""

    def __init__(self, message: str, error_code: ErrorCode = ErrorCode.INVALID_INPUT):
        """Initialize PathMatchError.

        Args:
            message: Error message
            error_code: Associated error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class PatternError(PathMatchError):
    """A wildcard pattern could not be compiled."""

    def __init__(self, message: str, pattern: str, position: Optional[int] = None):
        if position is not None:
            message = f"{message} at position {position} in pattern {pattern!r}"
        else:
            message = f"{message} in pattern {pattern!r}"
        super().__init__(message, ErrorCode.INVALID_INPUT)
        self.pattern = pattern
        self.position = position


class MatcherConfigError(PathMatchError):
    """A matcher was given an argument it cannot use."""
