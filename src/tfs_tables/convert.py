"""Text to value conversion for TFS tokens.

Numeric conversion follows the C library's ``strtol``/``strtod`` rules:
leading whitespace and a sign are accepted, the longest numeric prefix is
used, trailing characters are ignored and a token with no numeric prefix
converts to zero. Passing ``strict=True`` turns every partial or failed
conversion into a :class:`MalformedLineError`.
"""

from __future__ import annotations

import re

from tfs_tables.errors import MalformedLineError

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

_TRUE_TOKENS = frozenset({"true", "1"})
_FALSE_TOKENS = frozenset({"false", "0"})


def parse_int(token: str, strict: bool = False) -> int:
    """Convert the base-10 integer prefix of ``token``."""
    match = _INT_PREFIX.match(token)
    if match is None:
        if strict:
            raise MalformedLineError(f"Invalid integer '{token}'")
        return 0
    if strict and match.end() != len(token.rstrip()):
        raise MalformedLineError(f"Trailing characters in integer '{token}'")
    return int(match.group(1))


def parse_float(token: str, strict: bool = False) -> float:
    """Convert the floating-point prefix of ``token``."""
    match = _FLOAT_PREFIX.match(token)
    if match is None:
        if strict:
            raise MalformedLineError(f"Invalid float '{token}'")
        return 0.0
    if strict and match.end() != len(token.rstrip()):
        raise MalformedLineError(f"Trailing characters in float '{token}'")
    return float(match.group(1))


def parse_bool(token: str, strict: bool = False) -> bool:
    """Convert ``true``/``false``/``1``/``0`` (any case); other text is False."""
    lowered = token.strip().lower()
    if lowered in _TRUE_TOKENS:
        return True
    if strict and lowered not in _FALSE_TOKENS:
        raise MalformedLineError(f"Invalid boolean '{token}'")
    return False
