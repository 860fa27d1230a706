"""Spelling-variant pattern generation for medieval Latin lemmas.

Every strategy starts from the literal word and adds wildcard or substitution
variants; the resulting :class:`PatternSet` keeps first-seen order and never
repeats a pattern.  Growth per strategy for a word of ``n`` characters:

* ``simple`` / ``medium``: at most ``n + 1`` patterns
* ``complex``: at most ``n * (n - 1) / 2 + 1`` patterns
* ``historical``: bounded by the number of rule occurrences in the word
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from . import cql
from .orthography import AlternationTable, MEDIEVAL_LATIN_TABLES, OrthographyTables
from .results import BundleResult, ErrorKind, QueryError, SearchAttribute, VariationBundle
from .sanitizer import DEFAULT_QUERY_LIMITS, QueryLimits, sanitize_input


class VariationStrategy(str, Enum):
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"
    HISTORICAL = "historical"
    ALL = "all"

    @classmethod
    def parse(cls, value: Any) -> Optional["VariationStrategy"]:
        """Resolve an enum member, name or value; ``"medieval"`` means historical."""

        if isinstance(value, cls):
            return value
        normalized = str(value or "").strip().lower()
        if normalized == "medieval":
            return cls.HISTORICAL
        try:
            return cls(normalized)
        except ValueError:
            return None

    @property
    def is_pairwise(self) -> bool:
        return self in (VariationStrategy.COMPLEX, VariationStrategy.ALL)


NAMED_STRATEGIES: Tuple[VariationStrategy, ...] = (
    VariationStrategy.SIMPLE,
    VariationStrategy.MEDIUM,
    VariationStrategy.COMPLEX,
    VariationStrategy.HISTORICAL,
)


@dataclass(frozen=True)
class PatternSet:
    """Ordered, duplicate-free patterns derived from one word."""

    word: str
    strategy: VariationStrategy
    patterns: Tuple[str, ...]
    with_suffix: bool = False

    def __iter__(self) -> Iterator[str]:
        return iter(self.patterns)

    def __len__(self) -> int:
        return len(self.patterns)

    def __contains__(self, item: object) -> bool:
        return item in self.patterns

    @property
    def literal(self) -> str:
        return self.word + cql.ANY_LETTERS if self.with_suffix else self.word

    def alternation(self) -> str:
        return cql.alternation(self.patterns)


def _single_positions(word: str, wildcard: str) -> Iterator[str]:
    yield word
    for index in range(len(word)):
        yield word[:index] + wildcard + word[index + 1 :]


def _position_pairs(word: str, wildcard: str) -> Iterator[str]:
    yield word
    for first, second in combinations(range(len(word)), 2):
        yield (
            word[:first]
            + wildcard
            + word[first + 1 : second]
            + wildcard
            + word[second + 1 :]
        )


def _occurrences(word: str, key: str) -> Iterator[int]:
    start = word.find(key)
    while start != -1:
        yield start
        start = word.find(key, start + 1)


def _apply_table(word: str, table: AlternationTable) -> Iterator[str]:
    # One variant per rule occurrence; substitutions are never combined.
    for key, replacements in table.items():
        for start in _occurrences(word, key):
            for replacement in replacements:
                if replacement != key:
                    yield word[:start] + replacement + word[start + len(key) :]


def _simple(word: str, tables: OrthographyTables) -> Iterator[str]:
    return _single_positions(word, cql.OPTIONAL_LETTER)


def _medium(word: str, tables: OrthographyTables) -> Iterator[str]:
    return _single_positions(word, cql.ANY_LETTERS)


def _complex(word: str, tables: OrthographyTables) -> Iterator[str]:
    return _position_pairs(word, cql.ANY_LETTERS)


def _historical(word: str, tables: OrthographyTables) -> Iterator[str]:
    yield word
    yield from _apply_table(word, tables.substitutions)
    yield from _apply_table(word, tables.vowels)


def _all(word: str, tables: OrthographyTables) -> Iterator[str]:
    for strategy in NAMED_STRATEGIES:
        yield from _BUILDERS[strategy](word, tables)


_BUILDERS: Dict[VariationStrategy, Callable[[str, OrthographyTables], Iterator[str]]] = {
    VariationStrategy.SIMPLE: _simple,
    VariationStrategy.MEDIUM: _medium,
    VariationStrategy.COMPLEX: _complex,
    VariationStrategy.HISTORICAL: _historical,
    VariationStrategy.ALL: _all,
}

_missing = set(VariationStrategy) - set(_BUILDERS)
if _missing:
    raise RuntimeError(f"No pattern builder registered for {sorted(s.value for s in _missing)}")


class VariationGenerator:
    """Builds pattern sets using a swappable set of orthography tables."""

    def __init__(self, tables: OrthographyTables = MEDIEVAL_LATIN_TABLES) -> None:
        self.tables = tables

    def generate(
        self,
        word: str,
        strategy: VariationStrategy | str = VariationStrategy.SIMPLE,
        *,
        with_suffix: bool = False,
    ) -> PatternSet:
        """Return the patterns for an already sanitized ``word``.

        An empty word yields an empty set.  The suffix is appended after
        generation, so it never takes part in substitutions.
        """

        resolved = VariationStrategy.parse(strategy)
        if resolved is None:
            raise ValueError(f"Unknown variation strategy: {strategy!r}")
        if not word:
            return PatternSet(word, resolved, (), with_suffix)

        patterns = _BUILDERS[resolved](word, self.tables)
        if with_suffix:
            patterns = (pattern + cql.ANY_LETTERS for pattern in patterns)
        return PatternSet(word, resolved, tuple(cql.unique(patterns)), with_suffix)


DEFAULT_GENERATOR = VariationGenerator()


def _variations(word: str, suffix: str, strategy: VariationStrategy) -> List[str]:
    patterns = _BUILDERS[strategy](word, MEDIEVAL_LATIN_TABLES)
    return cql.unique(pattern + suffix for pattern in patterns)


def generate_simple_variations(word: str, suffix: str = "") -> List[str]:
    return _variations(word, suffix, VariationStrategy.SIMPLE)


def generate_medium_variations(word: str, suffix: str = "") -> List[str]:
    return _variations(word, suffix, VariationStrategy.MEDIUM)


def generate_complex_variations(word: str, suffix: str = "") -> List[str]:
    return _variations(word, suffix, VariationStrategy.COMPLEX)


def generate_historical_variations(word: str, suffix: str = "") -> List[str]:
    return _variations(word, suffix, VariationStrategy.HISTORICAL)


def generate_variation_patterns(
    raw: Any,
    strategy: VariationStrategy | str = VariationStrategy.SIMPLE,
    with_suffix: bool = False,
) -> List[str]:
    """Sanitize ``raw`` and return its patterns, or ``[]`` when nothing is left.

    An unrecognised strategy yields only the literal word.
    """

    word = sanitize_input(raw)
    if not word:
        return []
    if VariationStrategy.parse(strategy) is None:
        return [word + cql.ANY_LETTERS if with_suffix else word]
    return list(DEFAULT_GENERATOR.generate(word, strategy, with_suffix=with_suffix))


def bundle_variations(
    word: Any,
    with_suffix: bool = True,
    attribute: SearchAttribute | str = SearchAttribute.WORD,
    *,
    generator: Optional[VariationGenerator] = None,
    limits: QueryLimits = DEFAULT_QUERY_LIMITS,
) -> BundleResult:
    """Build one single-term query per named strategy for side-by-side display."""

    cleaned = sanitize_input(word)
    if not cleaned:
        return QueryError(ErrorKind.MISSING_INPUT, "The word must be provided.")
    resolved_attribute = SearchAttribute.parse(attribute)
    if resolved_attribute is None:
        return QueryError(ErrorKind.INVALID_OPTION, f"Unknown search attribute: {attribute!r}.")
    if len(cleaned) > limits.max_word_length:
        return QueryError(
            ErrorKind.INPUT_TOO_LONG,
            f"Words longer than {limits.max_word_length} characters are not supported.",
        )

    generator = generator or DEFAULT_GENERATOR
    queries: Dict[str, str] = {}
    patterns: Dict[str, Tuple[str, ...]] = {}
    for strategy in NAMED_STRATEGIES:
        pattern_set = generator.generate(cleaned, strategy, with_suffix=with_suffix)
        patterns[strategy.value] = pattern_set.patterns
        queries[strategy.value] = cql.token_test(resolved_attribute.value, pattern_set.alternation())

    return VariationBundle(
        word=cleaned,
        with_suffix=with_suffix,
        attribute=resolved_attribute.value,
        queries=queries,
        patterns=patterns,
    )


__all__ = [
    "VariationStrategy",
    "NAMED_STRATEGIES",
    "PatternSet",
    "VariationGenerator",
    "DEFAULT_GENERATOR",
    "generate_simple_variations",
    "generate_medium_variations",
    "generate_complex_variations",
    "generate_historical_variations",
    "generate_variation_patterns",
    "bundle_variations",
]
