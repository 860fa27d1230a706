"""Input cleaning for user-typed lemmas and distances."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

# Latin-1 letters without the multiplication and division signs, plus Latin
# Extended-A so that ligatures such as "œ" survive.
_DISALLOWED_PATTERN = re.compile(r"[^a-zA-ZÀ-ÖØ-öø-ſ0-9\s\-']")
_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?)(\d+)")


@dataclass(frozen=True)
class DistanceLimits:
    """Bounds and per-mode defaults for token-window distances."""

    minimum: int = 0
    maximum: int = 100
    default_proximity: int = 10
    default_semantic: int = 20


@dataclass(frozen=True)
class QueryLimits:
    """Ceilings for the strategies whose output grows polynomially.

    ``max_word_length`` guards the pairwise ``complex`` strategy (and ``all``,
    which includes it); ``max_context_terms`` guards the semantic modes.
    """

    max_word_length: int = 40
    max_context_terms: int = 12


DEFAULT_LIMITS = DistanceLimits()
DEFAULT_QUERY_LIMITS = QueryLimits()


def sanitize_input(raw: Any) -> str:
    """Return ``raw`` stripped of characters that cannot appear in a lemma.

    Letters (accented ones included), digits, whitespace, hyphens and
    apostrophes are kept; the result is trimmed.  Anything that is not a
    string sanitizes to ``""``, which callers treat as a missing field.
    """

    if not raw or not isinstance(raw, str):
        return ""
    return _DISALLOWED_PATTERN.sub("", raw).strip()


def _parse_int(value: Any) -> int | float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    match = _LEADING_INT_PATTERN.match(str(value))
    if match is None:
        return None
    sign = -1 if match.group(1) == "-" else 1
    try:
        return sign * int(match.group(2).lstrip("0") or "0")
    except ValueError:
        # Past the interpreter's digit limit only the sign survives clamping.
        return sign * float("inf")


def validate_distance(
    value: Any,
    default: int | None = None,
    limits: DistanceLimits = DEFAULT_LIMITS,
) -> int:
    """Clamp ``value`` into the allowed token window.

    Strings are read up to the first non-digit (``"12 tokens"`` gives 12).
    Unparseable input returns ``default``, which itself falls back to the
    proximity default of ``limits``.
    """

    fallback = limits.default_proximity if default is None else default
    parsed = _parse_int(value)
    if parsed is None:
        parsed = fallback
    return max(limits.minimum, min(limits.maximum, parsed))


__all__ = [
    "DistanceLimits",
    "DEFAULT_LIMITS",
    "QueryLimits",
    "DEFAULT_QUERY_LIMITS",
    "sanitize_input",
    "validate_distance",
]
