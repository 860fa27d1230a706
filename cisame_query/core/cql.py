"""Small builders for the CQL fragments emitted by the query compiler."""

from __future__ import annotations

from typing import Iterable, List

OPTIONAL_LETTER = "[A-z]?"
ANY_LETTERS = "[A-z]*"
DISJUNCTION = " | "


def alternation(patterns: Iterable[str]) -> str:
    return "|".join(patterns)


def token_test(attribute: str, value: str) -> str:
    """``[attribute="value"]``; ``value`` may itself be an alternation."""

    return f'[{attribute}="{value}"]'


def token_gap(distance: int) -> str:
    """Free run of zero to ``distance`` tokens."""

    return f"[]{{0,{distance}}}"


def excluding_gap(attribute: str, excluded: Iterable[str], distance: int) -> str:
    """Run of zero to ``distance`` tokens, none equal to any ``excluded`` value."""

    clause = " & ".join(f'{attribute}!="{value}"' for value in excluded)
    return f"[{clause}]{{0,{distance}}}"


def sequence(*parts: str) -> str:
    return " ".join(parts)


def disjunction(subqueries: Iterable[str]) -> str:
    return DISJUNCTION.join(subqueries)


def unique(items: Iterable[str]) -> List[str]:
    """Drop repeated items, keeping first-seen order."""

    return list(dict.fromkeys(items))


__all__ = [
    "OPTIONAL_LETTER",
    "ANY_LETTERS",
    "DISJUNCTION",
    "alternation",
    "token_test",
    "token_gap",
    "excluding_gap",
    "sequence",
    "disjunction",
    "unique",
]
