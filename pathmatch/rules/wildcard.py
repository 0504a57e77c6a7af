#!/usr/bin/env python3
r"""Wildcard pattern compilation for path strings.

Grammar:
- ``*``   any run of characters, not crossing ``/`` when slashes are exact
- ``**``  any run of characters, always crossing ``/``
- ``?``   one character (not ``/`` when slashes are exact)
- ``[...]`` character class; ``[!...]`` or ``[^...]`` negates, ``a-z`` ranges
- ``\``   escapes the next character

A pattern is compiled once into one of three matching modes:

- literal: no wildcard at all, compared by string equality
- suffix:  a single leading ``*``/``**`` followed by literal text, compared
  with ``str.endswith``
- glob:    everything else, translated to a regular expression

Unless the pattern is anchored to the full path, it matches when the
candidate *ends with* it at a ``/`` boundary, so ``theme.css`` matches
``assets/theme.css`` but never ``mytheme.css``.

Example:
    >>> WildcardPattern("*.py").match("src/app.py")
    True
    >>> WildcardPattern("src/*.py").match("src/pkg/app.py")
    False
    >>> WildcardPattern("src/*.py").with_exact_slashes(False).match("src/pkg/app.py")
    True
"""

import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple, Union

from pathmatch.core.constants import ESCAPE_CHAR, SEPARATOR
from pathmatch.core.exceptions import PatternError
from pathmatch.infrastructure.logger import get_logger

logger = get_logger()


class MatchMode(Enum):
    """How a compiled pattern compares candidates."""

    LITERAL = "literal"
    SUFFIX = "suffix"
    GLOB = "glob"


@dataclass(frozen=True)
class PatternOptions:
    """Comparison flags for a wildcard pattern."""

    case_sensitive: bool = True
    full_path: bool = False
    exact_slashes: bool = True


class _CharClass(NamedTuple):
    negated: bool
    items: Tuple[str, ...]  # regex-escaped characters and ranges


class _Token(NamedTuple):
    kind: str  # literal, star, globstar, any, class
    value: Union[str, _CharClass, None] = None


_LITERAL = "literal"
_STAR = "star"
_GLOBSTAR = "globstar"
_ANY = "any"
_CLASS = "class"


def _parse_class(pattern: str, start: int) -> Tuple[_CharClass, int]:
    """Parse a ``[...]`` expression beginning at *start*.

    Returns:
        The parsed class and the index just past the closing ``]``

    Raises:
        PatternError: If the class is unterminated or has a reversed range
    """
    n = len(pattern)
    i = start + 1
    negated = False
    if i < n and pattern[i] in "!^":
        negated = True
        i += 1

    items: List[str] = []
    first = True
    while True:
        if i >= n:
            raise PatternError("Unterminated character class", pattern, start)
        c = pattern[i]
        # A ']' right after the opening bracket is a member, not the end
        if c == "]" and not first:
            return _CharClass(negated, tuple(items)), i + 1
        first = False

        if c == ESCAPE_CHAR:
            if i + 1 >= n:
                raise PatternError("Unterminated character class", pattern, start)
            c = pattern[i + 1]
            i += 2
        else:
            i += 1

        if i + 1 < n and pattern[i] == "-" and pattern[i + 1] != "]":
            hi = pattern[i + 1]
            step = 2
            if hi == ESCAPE_CHAR:
                if i + 2 >= n:
                    raise PatternError("Unterminated character class", pattern, start)
                hi = pattern[i + 2]
                step = 3
            if hi < c:
                raise PatternError(f"Invalid character range {c}-{hi}", pattern, i - 1)
            items.append(f"{re.escape(c)}-{re.escape(hi)}")
            i += step
        else:
            items.append(re.escape(c))


def tokenize(pattern: str) -> List[_Token]:
    """Split a wildcard pattern into tokens.

    Consecutive literal characters (including escaped ones) are merged into
    a single literal token.

    Raises:
        PatternError: On a trailing backslash or a malformed character class
    """
    tokens: List[_Token] = []
    literal: List[str] = []
    n = len(pattern)
    i = 0

    def flush() -> None:
        if literal:
            tokens.append(_Token(_LITERAL, "".join(literal)))
            literal.clear()

    while i < n:
        c = pattern[i]
        if c == ESCAPE_CHAR:
            if i + 1 >= n:
                raise PatternError("Trailing unescaped backslash", pattern, i)
            literal.append(pattern[i + 1])
            i += 2
        elif c == "*":
            j = i
            while j < n and pattern[j] == "*":
                j += 1
            flush()
            tokens.append(_Token(_GLOBSTAR if j - i > 1 else _STAR))
            i = j
        elif c == "?":
            flush()
            tokens.append(_Token(_ANY))
            i += 1
        elif c == "[":
            char_class, i = _parse_class(pattern, i)
            flush()
            tokens.append(_Token(_CLASS, char_class))
        else:
            literal.append(c)
            i += 1

    flush()
    return tokens


def _class_regex(char_class: _CharClass, exact_slashes: bool) -> str:
    body = "".join(char_class.items)
    if char_class.negated:
        return f"[^/{body}]" if exact_slashes else f"[^{body}]"
    if exact_slashes:
        return f"(?!/)[{body}]"
    return f"[{body}]"


def translate(tokens: List[_Token], options: PatternOptions) -> str:
    """Translate tokens into a regular expression for ``re.fullmatch``."""
    exact = options.exact_slashes
    parts: List[str] = []
    for token in tokens:
        if token.kind == _LITERAL:
            parts.append(re.escape(token.value))
        elif token.kind == _STAR:
            parts.append("[^/]*" if exact else ".*")
        elif token.kind == _GLOBSTAR:
            parts.append(".*")
        elif token.kind == _ANY:
            parts.append("[^/]" if exact else ".")
        else:
            parts.append(_class_regex(token.value, exact))

    body = "".join(parts)
    if options.full_path:
        return body

    first = tokens[0] if tokens else None
    if first is not None and (
        first.kind == _GLOBSTAR
        or (first.kind == _LITERAL and first.value.startswith(SEPARATOR))
    ):
        # The pattern supplies its own boundary
        return ".*" + body
    return "(?:.*/)?" + body


class WildcardPattern:
    """A compiled, immutable wildcard pattern.

    Configuration errors (malformed classes, trailing backslash) are raised
    from the constructor; :meth:`match` never raises for a string input.
    """

    __slots__ = ("_pattern", "_options", "_mode", "_text", "_crosses_slashes", "_regex")

    def __init__(
        self,
        pattern: str,
        case_sensitive: bool = True,
        full_path: bool = False,
        exact_slashes: bool = True,
    ):
        """Compile a pattern.

        Args:
            pattern: Wildcard pattern string
            case_sensitive: Compare case-sensitively
            full_path: Require a match against the whole candidate instead
                of its trailing segments
            exact_slashes: ``*``, ``?`` and classes never match ``/``

        Raises:
            PatternError: If the pattern is malformed
        """
        self._pattern = pattern
        self._options = PatternOptions(case_sensitive, full_path, exact_slashes)
        self._text: str = ""
        self._crosses_slashes = False
        self._regex: Optional[re.Pattern] = None

        tokens = tokenize(pattern)
        kinds = [t.kind for t in tokens]

        if all(kind == _LITERAL for kind in kinds):
            self._mode = MatchMode.LITERAL
            self._text = self._fold(tokens[0].value if tokens else "")
        elif kinds[0] in (_STAR, _GLOBSTAR) and all(kind == _LITERAL for kind in kinds[1:]):
            self._mode = MatchMode.SUFFIX
            self._text = self._fold(tokens[1].value if len(tokens) > 1 else "")
            self._crosses_slashes = kinds[0] == _GLOBSTAR or not exact_slashes
        else:
            self._mode = MatchMode.GLOB
            flags = re.DOTALL if case_sensitive else re.DOTALL | re.IGNORECASE
            self._regex = re.compile(translate(tokens, self._options), flags)

        if logger.is_enabled_for("DEBUG"):
            logger.debug(
                "Compiled wildcard pattern",
                pattern=pattern,
                mode=self._mode.value,
                case_sensitive=case_sensitive,
                full_path=full_path,
                exact_slashes=exact_slashes,
            )

    @classmethod
    def compile(cls, pattern: str, **options) -> Callable[[str], bool]:
        """Compile *pattern* and return its match predicate."""
        return cls(pattern, **options).match

    def _fold(self, text: str) -> str:
        return text if self._options.case_sensitive else text.lower()

    @property
    def pattern(self) -> str:
        return self._pattern

    @property
    def options(self) -> PatternOptions:
        return self._options

    @property
    def mode(self) -> MatchMode:
        return self._mode

    def _evolve(self, **changes) -> "WildcardPattern":
        options = replace(self._options, **changes)
        if options == self._options:
            return self
        return WildcardPattern(
            self._pattern,
            case_sensitive=options.case_sensitive,
            full_path=options.full_path,
            exact_slashes=options.exact_slashes,
        )

    def case_sensitive(self, flag: bool = True) -> "WildcardPattern":
        """Return a copy comparing with (or without) case sensitivity."""
        return self._evolve(case_sensitive=flag)

    def ignore_case(self) -> "WildcardPattern":
        return self._evolve(case_sensitive=False)

    def with_full_path(self, flag: bool = True) -> "WildcardPattern":
        """Return a copy matched against the whole candidate."""
        return self._evolve(full_path=flag)

    def with_exact_slashes(self, flag: bool = True) -> "WildcardPattern":
        """Return a copy whose ``*`` does (or does not) stop at ``/``."""
        return self._evolve(exact_slashes=flag)

    def match(self, candidate: str) -> bool:
        """Check whether *candidate* matches this pattern.

        Args:
            candidate: String to test, usually a ``/``-separated path

        Returns:
            True if the candidate matches
        """
        if self._mode is MatchMode.GLOB:
            return self._regex.fullmatch(candidate) is not None

        candidate = self._fold(candidate)
        text = self._text

        if self._mode is MatchMode.LITERAL:
            if candidate == text:
                return True
            if self._options.full_path or not text:
                return False
            if text.startswith(SEPARATOR):
                return candidate.endswith(text)
            return candidate.endswith(SEPARATOR + text)

        if not candidate.endswith(text):
            return False
        if self._crosses_slashes or not self._options.full_path:
            return True
        return SEPARATOR not in candidate[: len(candidate) - len(text)]

    __call__ = match

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WildcardPattern):
            return NotImplemented
        return self._pattern == other._pattern and self._options == other._options

    def __hash__(self) -> int:
        return hash((self._pattern, self._options))

    def __repr__(self) -> str:
        return f"WildcardPattern({self._pattern!r}, {self._options})"
