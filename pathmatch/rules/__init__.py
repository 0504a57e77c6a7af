"""PathMatch Rules System.

This package provides the matching engine:
- WildcardPattern: compiled glob predicate over a string
- PathPattern: wildcard scoped to files or directories, tri-state result
- PathMatcher: only/except/callback decision for one path
- CompositeMatcher: ANY/ALL combination of matchers

Matchers are immutable once built and safe to share between threads.
"""

from .composite import Combinator, CompositeMatcher
from .loader import configure_logging, matcher_from_config, matcher_from_manager
from .matcher import PathMatcher
from .patterns import PathPattern
from .probe import FilesystemProbe, OSFilesystemProbe, StaticFilesystemProbe, probe_path_type
from .wildcard import MatchMode, PatternOptions, WildcardPattern

__all__ = [
    # Pattern matching
    "MatchMode",
    "PatternOptions",
    "WildcardPattern",
    "PathPattern",
    # Matchers
    "PathMatcher",
    "Combinator",
    "CompositeMatcher",
    # Filesystem probes
    "FilesystemProbe",
    "OSFilesystemProbe",
    "StaticFilesystemProbe",
    "probe_path_type",
    # Configuration
    "configure_logging",
    "matcher_from_config",
    "matcher_from_manager",
]
