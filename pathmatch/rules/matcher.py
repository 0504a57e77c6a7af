#!/usr/bin/env python3
"""Include/exclude path matching for directory walks.

A :class:`PathMatcher` decides, for each path a tree walker discovers,
whether the path takes part in an operation:

1. ``only`` patterns: at least one must match (see below for scoped ones)
2. ``except`` patterns: none may match
3. callbacks: every predicate must accept the path

String patterns ending in ``/`` become directory-only patterns and all
other strings file-only patterns, unless filesystem checking is disabled.
When no ``only`` pattern matches outright, the probed path type decides:

- a file passes if no ``only`` pattern rejected it (all were out of scope)
- a directory passes if some ``only`` pattern was out of scope, so that
  files below it can still be reached
- anything else fails

An ``except`` match always wins, including over directory pass-through.

Example:
    >>> matcher = (
    ...     PathMatcher()
    ...     .disable_filesystem_check()
    ...     .only("*.css", "*.js")
    ...     .except_("theme.css")
    ... )
    >>> matcher.match("/var/www/assets/css/main.css")
    True
    >>> matcher.match("/var/www/assets/css/main.css.map")
    False
    >>> matcher.match("/var/www/assets/css/theme.css")
    False
"""

from typing import Any, Callable, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from pathmatch.core.constants import (
    DIRECTORY_SUFFIX,
    Matcher,
    MatchResult,
    PathType,
    Scope,
    as_match_result,
)
from pathmatch.core.exceptions import MatcherConfigError
from pathmatch.core.validators import validate_matcher_argument
from pathmatch.infrastructure.logger import get_logger
from pathmatch.rules.patterns import PathPattern
from pathmatch.rules.probe import FilesystemProbe, OSFilesystemProbe, probe_path_type

logger = get_logger()

Predicate = Callable[[str], Any]
PatternArg = Union[str, Matcher]


def _callback_passes(result: Any) -> bool:
    if isinstance(result, MatchResult):
        return result is MatchResult.MATCH
    return bool(result)


class PathMatcher:
    """Immutable matcher combining ``only``, ``except`` and callbacks.

    Option methods return a new matcher, so one base matcher can be
    specialised by several callers. String patterns are compiled with the
    options of the matcher that holds them, whatever order the option
    methods are called in.
    """

    __slots__ = (
        "_only_args",
        "_except_args",
        "_callbacks",
        "_case_sensitive",
        "_full_path",
        "_exact_slashes",
        "_check_filesystem",
        "_probe",
        "_only",
        "_except",
    )

    def __init__(
        self,
        only: Optional[Sequence[PatternArg]] = None,
        except_: Optional[Sequence[PatternArg]] = None,
        callbacks: Sequence[Predicate] = (),
        case_sensitive: bool = False,
        full_path: bool = False,
        exact_slashes: bool = True,
        check_filesystem: bool = True,
        probe: Optional[FilesystemProbe] = None,
    ):
        """Initialize path matcher.

        Args:
            only: Patterns or matchers a path must match
            except_: Patterns or matchers a path must not match
            callbacks: Predicates every path must satisfy
            case_sensitive: Compile string patterns case-sensitively
            full_path: Match string patterns against the whole path
            exact_slashes: Keep ``*`` in string patterns from crossing ``/``
            check_filesystem: Scope string patterns by file/directory type
            probe: Filesystem probe (``os.stat`` based by default)

        Raises:
            MatcherConfigError: If a pattern argument is neither a string nor
                a matcher, or a callback is not callable
            PatternError: If a string pattern is malformed
        """
        self._only_args: Optional[Tuple[PatternArg, ...]] = (
            tuple(only) if only is not None else None
        )
        self._except_args: Optional[Tuple[PatternArg, ...]] = (
            tuple(except_) if except_ is not None else None
        )
        self._callbacks: Tuple[Predicate, ...] = tuple(callbacks)
        self._case_sensitive = case_sensitive
        self._full_path = full_path
        self._exact_slashes = exact_slashes
        self._check_filesystem = check_filesystem
        self._probe = probe if probe is not None else OSFilesystemProbe()

        for callback in self._callbacks:
            if not callable(callback):
                raise MatcherConfigError(
                    f"Callback must be callable, got {type(callback).__name__}"
                )

        self._only = self._prepare_matchers(self._only_args)
        self._except = self._prepare_matchers(self._except_args)

    def _evolve(self, **changes) -> "PathMatcher":
        config = {
            "only": self._only_args,
            "except_": self._except_args,
            "callbacks": self._callbacks,
            "case_sensitive": self._case_sensitive,
            "full_path": self._full_path,
            "exact_slashes": self._exact_slashes,
            "check_filesystem": self._check_filesystem,
            "probe": self._probe,
        }
        config.update(changes)
        return PathMatcher(**config)

    # ------------------------------------------------------------------
    # Options

    @property
    def is_case_sensitive(self) -> bool:
        return self._case_sensitive

    @property
    def checks_filesystem(self) -> bool:
        return self._check_filesystem

    @property
    def probe(self) -> FilesystemProbe:
        return self._probe

    @property
    def only_matchers(self) -> Tuple[Matcher, ...]:
        return tuple(self._only or ())

    @property
    def except_matchers(self) -> Tuple[Matcher, ...]:
        return tuple(self._except or ())

    def case_sensitive(self) -> "PathMatcher":
        """Make string patterns case sensitive."""
        return self._evolve(case_sensitive=True)

    def with_full_path(self) -> "PathMatcher":
        """Match string patterns against the full path, not its ending."""
        return self._evolve(full_path=True)

    def with_not_exact_slashes(self) -> "PathMatcher":
        """Let ``*`` and ``?`` in string patterns match ``/``."""
        return self._evolve(exact_slashes=False)

    def disable_filesystem_check(self) -> "PathMatcher":
        """Match string patterns as plain text, without file/directory scoping.

        Applies only to string patterns given to ``only()``/``except_()``;
        the matcher itself stops probing. ``PathPattern`` objects keep their
        own scope and probe.
        """
        return self._evolve(check_filesystem=False)

    def with_probe(self, probe: FilesystemProbe) -> "PathMatcher":
        """Use *probe* for file/directory checks."""
        return self._evolve(probe=probe)

    def only(self, *patterns: PatternArg) -> "PathMatcher":
        """Set the patterns that files or directories should match.

        Args:
            *patterns: Wildcard strings or objects with a ``match`` method

        Returns:
            A new matcher; previously set ``only`` patterns are replaced
        """
        return self._evolve(only=patterns)

    def except_(self, *patterns: PatternArg) -> "PathMatcher":
        """Set the patterns that files or directories should not match.

        Args:
            *patterns: Wildcard strings or objects with a ``match`` method

        Returns:
            A new matcher; previously set ``except`` patterns are replaced
        """
        return self._evolve(except_=patterns)

    def callback(self, *callbacks: Predicate) -> "PathMatcher":
        """Set predicates called with each path.

        Each callback receives the full path and returns True to accept it.
        Previously set callbacks are replaced.
        """
        return self._evolve(callbacks=callbacks)

    # ------------------------------------------------------------------
    # Matching

    def match(self, path: str) -> bool:
        """Check if the path satisfies ``only``, ``except`` and callbacks.

        Args:
            path: The tested path

        Returns:
            Whether the path takes part in the operation
        """
        if not self._match_only(path):
            self._trace("Path rejected by only patterns", path)
            return False

        if self._match_except(path):
            self._trace("Path rejected by except patterns", path)
            return False

        for callback in self._callbacks:
            if not _callback_passes(callback(path)):
                self._trace("Path rejected by callback", path)
                return False

        return True

    __call__ = match

    def filter(self, paths: Iterable[str]) -> Iterator[str]:
        """Yield the paths that match, in input order."""
        return (path for path in paths if self.match(path))

    def _match_only(self, path: str) -> bool:
        if not self._only:
            return True

        # Every pattern is evaluated: the fallback below needs to know
        # whether any of them answered NO_MATCH or INDETERMINATE.
        results = [as_match_result(pattern.match(path)) for pattern in self._only]

        if MatchResult.MATCH in results:
            return True

        if self._check_filesystem:
            path_type = probe_path_type(self._probe, path)
            if path_type is PathType.FILE:
                return MatchResult.NO_MATCH not in results
            if path_type is PathType.DIRECTORY:
                return MatchResult.INDETERMINATE in results

        return False

    def _match_except(self, path: str) -> bool:
        if not self._except:
            return False

        for pattern in self._except:
            if as_match_result(pattern.match(path)) is MatchResult.MATCH:
                return True

        return False

    def _prepare_matchers(
        self, patterns: Optional[Tuple[PatternArg, ...]]
    ) -> Optional[List[Matcher]]:
        if patterns is None:
            return None

        prepared: List[Matcher] = []
        for pattern in patterns:
            validate_matcher_argument(pattern)
            if not isinstance(pattern, str):
                prepared.append(pattern)
                continue

            scope = Scope.ANY
            if self._check_filesystem:
                if pattern.endswith(DIRECTORY_SUFFIX):
                    pattern = pattern[: -len(DIRECTORY_SUFFIX)]
                    scope = Scope.DIRECTORIES
                else:
                    scope = Scope.FILES

            prepared.append(
                PathPattern(
                    pattern,
                    case_sensitive=self._case_sensitive,
                    full_path=self._full_path,
                    exact_slashes=self._exact_slashes,
                    scope=scope,
                    probe=self._probe,
                )
            )
        return prepared

    def _trace(self, msg: str, path: str) -> None:
        if logger.is_enabled_for("DEBUG"):
            logger.debug(msg, path=path)

    def __repr__(self) -> str:
        return (
            f"PathMatcher(only={list(self._only_args) if self._only_args is not None else None}, "
            f"except_={list(self._except_args) if self._except_args is not None else None}, "
            f"callbacks={len(self._callbacks)}, case_sensitive={self._case_sensitive}, "
            f"full_path={self._full_path}, exact_slashes={self._exact_slashes}, "
            f"check_filesystem={self._check_filesystem})"
        )
