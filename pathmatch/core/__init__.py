"""PathMatch Core - constants, value types, errors and validators.

Import specific names from submodules:
    from pathmatch.core.constants import MatchResult, PathType, Scope
    from pathmatch.core.exceptions import PatternError
    from pathmatch.core import validators
"""

from pathmatch.core import constants, exceptions, validators

__all__ = [
    "constants",
    "exceptions",
    "validators",
]
