#!/usr/bin/env python3
"""Boolean combination of independently built matchers.

Children may be any objects with a ``match(path)`` method: path patterns,
path matchers, other composites. A child answering ``INDETERMINATE`` (or
``None``) has no vote; the composite is itself ``INDETERMINATE`` only when
every child abstains.
"""

from enum import Enum
from typing import Any, Tuple

from pathmatch.core.constants import Matcher, MatchResult, as_match_result
from pathmatch.core.validators import validate_matcher


class Combinator(Enum):
    """How child results are combined."""

    ANY = "any"  # Match if any child matches
    ALL = "all"  # Match only if no child rejects


class CompositeMatcher:
    """Combines several matchers under an ANY or ALL policy.

    Example:
        >>> images = PathPattern("*.png")
        >>> assets = PathPattern("assets/**").with_full_path()
        >>> CompositeMatcher.all(images, assets).match("assets/icons/logo.png")
        <MatchResult.MATCH: 'match'>
    """

    __slots__ = ("_combinator", "_matchers")

    def __init__(self, combinator: Combinator, *matchers: Any):
        """Initialize composite matcher.

        Args:
            combinator: Policy used to combine child results
            *matchers: Child matchers

        Raises:
            MatcherConfigError: If a child has no ``match`` method
        """
        self._combinator = combinator
        self._matchers: Tuple[Matcher, ...] = tuple(validate_matcher(m) for m in matchers)

    @classmethod
    def any(cls, *matchers: Any) -> "CompositeMatcher":
        """Composite that matches if any child matches."""
        return cls(Combinator.ANY, *matchers)

    @classmethod
    def all(cls, *matchers: Any) -> "CompositeMatcher":
        """Composite that matches only if all deciding children match."""
        return cls(Combinator.ALL, *matchers)

    @property
    def combinator(self) -> Combinator:
        return self._combinator

    @property
    def matchers(self) -> Tuple[Matcher, ...]:
        return self._matchers

    def match(self, path: str) -> MatchResult:
        """Combine the children's answers for *path*.

        ANY stops at the first MATCH, ALL at the first NO_MATCH. Otherwise
        the result is the other definite value if any child gave one, or
        INDETERMINATE if none did.
        """
        decisive = MatchResult.MATCH if self._combinator is Combinator.ANY else MatchResult.NO_MATCH
        all_indeterminate = True

        for matcher in self._matchers:
            result = as_match_result(matcher.match(path))
            if result is MatchResult.INDETERMINATE:
                continue
            all_indeterminate = False
            if result is decisive:
                return decisive

        if all_indeterminate:
            return MatchResult.INDETERMINATE
        return MatchResult.NO_MATCH if decisive is MatchResult.MATCH else MatchResult.MATCH

    def __repr__(self) -> str:
        children = ", ".join(repr(m) for m in self._matchers)
        return f"CompositeMatcher.{self._combinator.value}({children})"
