#!/usr/bin/env python3
"""Path patterns: a wildcard pattern scoped to files, directories, or both.

A :class:`PathPattern` answers with a :class:`MatchResult`. When it is
scoped and the probed path is of the other kind, it answers
``INDETERMINATE`` without looking at the glob, so the owning matcher can
tell "not my business" apart from "does not match".

Example:
    >>> pattern = PathPattern("*.log").only_files()
    >>> pattern.match("var/log/app.log")      # an existing file
    <MatchResult.MATCH: 'match'>
    >>> pattern.match("var/log")              # an existing directory
    <MatchResult.INDETERMINATE: 'indeterminate'>
"""

from typing import Optional

from pathmatch.core.constants import MatchResult, PathType, Scope
from pathmatch.rules.probe import FilesystemProbe, OSFilesystemProbe, probe_path_type
from pathmatch.rules.wildcard import WildcardPattern


class PathPattern:
    """A shell path pattern with optional filesystem-type scoping.

    Patterns are case-insensitive and match the ending of a path unless
    configured otherwise. Every builder method returns a new instance.
    """

    __slots__ = ("_wildcard", "_scope", "_probe")

    def __init__(
        self,
        pattern: str,
        case_sensitive: bool = False,
        full_path: bool = False,
        exact_slashes: bool = True,
        scope: Scope = Scope.ANY,
        probe: Optional[FilesystemProbe] = None,
    ):
        """Initialize path pattern.

        Args:
            pattern: Wildcard pattern to match paths against
            case_sensitive: Compare case-sensitively
            full_path: Match the complete path, not just its ending
            exact_slashes: Keep ``*`` and ``?`` from crossing ``/``
            scope: Restrict the pattern to files or directories
            probe: Filesystem probe for scoped patterns (``os.stat`` by default)

        Raises:
            PatternError: If the pattern is malformed
        """
        self._wildcard = WildcardPattern(
            pattern,
            case_sensitive=case_sensitive,
            full_path=full_path,
            exact_slashes=exact_slashes,
        )
        self._scope = scope
        self._probe = probe if probe is not None else OSFilesystemProbe()

    @classmethod
    def _from_parts(
        cls, wildcard: WildcardPattern, scope: Scope, probe: FilesystemProbe
    ) -> "PathPattern":
        new = cls.__new__(cls)
        new._wildcard = wildcard
        new._scope = scope
        new._probe = probe
        return new

    @property
    def pattern(self) -> str:
        return self._wildcard.pattern

    @property
    def wildcard(self) -> WildcardPattern:
        return self._wildcard

    @property
    def scope(self) -> Scope:
        return self._scope

    @property
    def probe(self) -> FilesystemProbe:
        return self._probe

    def case_sensitive(self, flag: bool = True) -> "PathPattern":
        """Make pattern case sensitive."""
        return self._from_parts(self._wildcard.case_sensitive(flag), self._scope, self._probe)

    def with_full_path(self, flag: bool = True) -> "PathPattern":
        """Match the whole path instead of its ending."""
        return self._from_parts(self._wildcard.with_full_path(flag), self._scope, self._probe)

    def with_not_exact_slashes(self) -> "PathPattern":
        """Let ``*`` and ``?`` match ``/``."""
        return self._from_parts(
            self._wildcard.with_exact_slashes(False), self._scope, self._probe
        )

    def only_files(self) -> "PathPattern":
        """Skip matching (INDETERMINATE) when the path is a directory."""
        return self._from_parts(self._wildcard, Scope.FILES, self._probe)

    def only_directories(self) -> "PathPattern":
        """Skip matching (INDETERMINATE) when the path is a file."""
        return self._from_parts(self._wildcard, Scope.DIRECTORIES, self._probe)

    def with_scope(self, scope: Scope) -> "PathPattern":
        return self._from_parts(self._wildcard, scope, self._probe)

    def with_probe(self, probe: FilesystemProbe) -> "PathPattern":
        """Use *probe* to decide whether a path is a file or a directory."""
        return self._from_parts(self._wildcard, self._scope, probe)

    def match(self, path: str) -> MatchResult:
        """Check if the path matches this pattern.

        Args:
            path: The tested path

        Returns:
            MATCH or NO_MATCH from the glob, or INDETERMINATE when the path
            exists and is outside the pattern's scope
        """
        if self._scope is not Scope.ANY:
            path_type = probe_path_type(self._probe, path)
            if path_type is not PathType.UNKNOWN and not self._scope.accepts(path_type):
                return MatchResult.INDETERMINATE

        return MatchResult.from_bool(self._wildcard.match(path.replace("\\", "/")))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathPattern):
            return NotImplemented
        return self._wildcard == other._wildcard and self._scope == other._scope

    def __hash__(self) -> int:
        return hash((self._wildcard, self._scope))

    def __repr__(self) -> str:
        return f"PathPattern({self.pattern!r}, scope={self._scope.value})"
