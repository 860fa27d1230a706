"""Orthographic alternation tables used by the historical variation strategy."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

AlternationTable = Mapping[str, Tuple[str, ...]]


def _freeze(table: Mapping[str, Iterable[str]]) -> AlternationTable:
    return MappingProxyType({str(key): tuple(values) for key, values in table.items()})


@dataclass(frozen=True)
class OrthographyTables:
    """Immutable pair of alternation tables for one historical orthography.

    ``substitutions`` maps a substring (letter or digraph) to its attested
    spellings; ``vowels`` maps single vowels to their doubled or alternate
    forms.  Each table keeps its insertion order, which fixes the order of
    generated variants.
    """

    name: str
    substitutions: AlternationTable = field(default_factory=lambda: _freeze({}))
    vowels: AlternationTable = field(default_factory=lambda: _freeze({}))

    def __post_init__(self) -> None:
        object.__setattr__(self, "substitutions", _freeze(self.substitutions))
        object.__setattr__(self, "vowels", _freeze(self.vowels))

    @classmethod
    def from_mappings(
        cls,
        name: str,
        substitutions: Mapping[str, Iterable[str]],
        vowels: Mapping[str, Iterable[str]],
    ) -> "OrthographyTables":
        return cls(name=name, substitutions=substitutions, vowels=vowels)  # type: ignore[arg-type]


MEDIEVAL_LATIN_TABLES = OrthographyTables.from_mappings(
    "medieval_latin",
    substitutions={
        "ae": ("e", "ae", "æ"),
        "oe": ("e", "oe", "œ"),
        "ti": ("ci", "ti"),
        "ci": ("ti", "ci"),
        "ph": ("f", "ph"),
        "th": ("t", "th"),
        "ch": ("c", "ch", "k"),
        "y": ("i", "y"),
        "v": ("u", "v"),
        "j": ("i", "j"),
        "qu": ("c", "qu", "k"),
        "x": ("cs", "x", "ks"),
        "z": ("s", "z"),
        "gn": ("n", "gn", "gm"),
        "mn": ("n", "mn", "mm"),
    },
    vowels={
        "a": ("a", "aa"),
        "e": ("e", "ee"),
        "i": ("i", "ii", "y"),
        "o": ("o", "oo"),
        "u": ("u", "uu", "v"),
    },
)


__all__ = ["AlternationTable", "OrthographyTables", "MEDIEVAL_LATIN_TABLES"]
