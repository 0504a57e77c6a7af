"""PathMatch - path matching for directory walks.

Decides, for each path a tree walker discovers, whether it takes part in an
operation (copy, find, delete): gitignore-style wildcards, file/directory
scoping, include/exclude lists, and boolean composition of matchers.

Example:
    >>> from pathmatch import PathMatcher
    >>> matcher = (
    ...     PathMatcher()
    ...     .disable_filesystem_check()
    ...     .only("*.py", "docs/")
    ...     .except_("conftest.py")
    ... )
    >>> matcher.match("src/app.py")
    True
"""

from pathmatch.core.constants import (
    PATHMATCH_VERSION,
    ErrorCode,
    Matcher,
    MatchResult,
    PathType,
    Scope,
    as_match_result,
)
from pathmatch.core.exceptions import MatcherConfigError, PathMatchError, PatternError
from pathmatch.core.validators import ValidationError
from pathmatch.rules import (
    Combinator,
    CompositeMatcher,
    FilesystemProbe,
    MatchMode,
    OSFilesystemProbe,
    PathMatcher,
    PathPattern,
    StaticFilesystemProbe,
    WildcardPattern,
    matcher_from_config,
    matcher_from_manager,
)

__version__ = PATHMATCH_VERSION

__all__ = [
    "__version__",
    # Values
    "MatchResult",
    "PathType",
    "Scope",
    "Matcher",
    "as_match_result",
    # Errors
    "ErrorCode",
    "PathMatchError",
    "PatternError",
    "MatcherConfigError",
    "ValidationError",
    # Matching
    "WildcardPattern",
    "MatchMode",
    "PathPattern",
    "PathMatcher",
    "CompositeMatcher",
    "Combinator",
    # Filesystem
    "FilesystemProbe",
    "OSFilesystemProbe",
    "StaticFilesystemProbe",
    # Configuration
    "matcher_from_config",
    "matcher_from_manager",
]
