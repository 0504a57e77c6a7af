"""
PathMatch Core: Constants and Type Definitions

This module provides package-wide constants, error codes, and the small
value types shared by the matching engine.
"""
from enum import Enum, IntEnum
from typing import Protocol, Union, runtime_checkable

# Version information
PATHMATCH_VERSION = "1.0.0"


# Error codes
class ErrorCode(IntEnum):
    """Standardized error codes for PathMatch operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad pattern, invalid configuration
    NOT_FOUND = 2  # File or resource doesn't exist
    PERMISSION_DENIED = 3  # Insufficient permissions
    INTERNAL_ERROR = 6  # Bug in PathMatch


class MatchResult(Enum):
    """Three-valued outcome of a single matcher.

    ``INDETERMINATE`` means the matcher has no opinion about the path
    (for example a files-only pattern asked about a directory). It is not
    ``NO_MATCH`` and refuses to be used as a boolean.
    """

    MATCH = "match"
    NO_MATCH = "no_match"
    INDETERMINATE = "indeterminate"

    @classmethod
    def from_bool(cls, value: bool) -> "MatchResult":
        """Convert a plain predicate result."""
        return cls.MATCH if value else cls.NO_MATCH

    @property
    def is_match(self) -> bool:
        return self is MatchResult.MATCH

    @property
    def is_no_match(self) -> bool:
        return self is MatchResult.NO_MATCH

    @property
    def is_indeterminate(self) -> bool:
        return self is MatchResult.INDETERMINATE

    def __bool__(self) -> bool:
        if self is MatchResult.INDETERMINATE:
            raise TypeError("MatchResult.INDETERMINATE has no boolean value")
        return self is MatchResult.MATCH


class PathType(Enum):
    """Filesystem type reported by a probe."""

    FILE = "file"
    DIRECTORY = "directory"
    UNKNOWN = "unknown"  # Missing, unreadable, or neither


class Scope(Enum):
    """Which kind of filesystem entry a path pattern applies to."""

    ANY = "any"
    FILES = "files"
    DIRECTORIES = "directories"

    def accepts(self, path_type: PathType) -> bool:
        """Whether a path of *path_type* is in scope.

        An unknown type is always in scope; the glob decides.
        """
        if self is Scope.FILES:
            return path_type is not PathType.DIRECTORY
        if self is Scope.DIRECTORIES:
            return path_type is not PathType.FILE
        return True


# Resource limits and defaults
class Limits:
    """Limits applied when validating patterns and configuration."""

    MAX_PATTERN_LENGTH = 4096
    MAX_PATTERNS = 10000


# Glob syntax
ESCAPE_CHAR = "\\"
SEPARATOR = "/"
DIRECTORY_SUFFIX = "/"


# Configuration keys
class ConfigKey:
    """Configuration key constants."""

    SECTION = "pathmatch"

    CASE_SENSITIVE = "case_sensitive"
    FULL_PATH = "full_path"
    EXACT_SLASHES = "exact_slashes"
    CHECK_FILESYSTEM = "check_filesystem"
    ONLY = "only"
    EXCEPT = "except"
    LOGGING = "logging"


# Default configuration values
DEFAULT_CONFIG = {
    ConfigKey.CASE_SENSITIVE: False,
    ConfigKey.FULL_PATH: False,
    ConfigKey.EXACT_SLASHES: True,
    ConfigKey.CHECK_FILESYSTEM: True,
    ConfigKey.ONLY: [],
    ConfigKey.EXCEPT: [],
    ConfigKey.LOGGING: {
        "level": "INFO",
        "file": None,
    },
}


@runtime_checkable
class Matcher(Protocol):
    """Anything that can answer ``match(path)``.

    Pattern-level matchers return :class:`MatchResult`; a ``PathMatcher``
    returns a plain ``bool``. Consumers normalise with :func:`as_match_result`.
    """

    def match(self, path: str) -> Union[MatchResult, bool, None]:
        ...


def as_match_result(value: Union[MatchResult, bool, None]) -> MatchResult:
    """Normalise a matcher's return value to a MatchResult.

    ``None`` is accepted as "no opinion" for matchers written against the
    nullable-boolean convention.
    """
    if isinstance(value, MatchResult):
        return value
    if value is None:
        return MatchResult.INDETERMINATE
    return MatchResult.from_bool(bool(value))
