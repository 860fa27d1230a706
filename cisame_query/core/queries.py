"""CQL query assembly for proximity and semantic-context searches.

The builders never raise on user input: every failure comes back as a
:class:`~cisame_query.core.results.QueryError` sharing the ``error``
attribute with successful :class:`~cisame_query.core.results.Query` values.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import combinations, permutations
from typing import Any, List, Optional, Sequence, Tuple

from . import cql
from .results import ErrorKind, Query, QueryError, QueryMode, QueryResult, SearchAttribute
from .sanitizer import (
    DEFAULT_LIMITS,
    DEFAULT_QUERY_LIMITS,
    DistanceLimits,
    QueryLimits,
    sanitize_input,
    validate_distance,
)
from .variations import DEFAULT_GENERATOR, VariationGenerator, VariationStrategy

SEMANTIC_MODES: Tuple[QueryMode, ...] = (
    QueryMode.SEMANTIC_ANY,
    QueryMode.SEMANTIC_PHRASE,
    QueryMode.SEMANTIC_ALL,
)

_MISSING_TERMS = "Both lemmas must be provided."


def _invalid_attribute(attribute: Any) -> QueryError:
    return QueryError(ErrorKind.INVALID_OPTION, f"Unknown search attribute: {attribute!r}.")


def parse_context_terms(contexts: Any) -> List[str]:
    """Split comma-separated context terms, sanitize them and drop empties.

    Repeated terms are kept once, in first-seen order.
    """

    if not contexts:
        return []
    if isinstance(contexts, str):
        pieces: Iterable[str] = contexts.split(",")
    elif isinstance(contexts, Iterable):
        pieces = [piece for item in contexts if isinstance(item, str) for piece in item.split(",")]
    else:
        return []
    return cql.unique(term for term in (sanitize_input(piece) for piece in pieces) if term)


def resolve_semantic_mode(value: Any) -> Optional[QueryMode]:
    """Accept ``"any"``/``"phrase"``/``"all"`` as well as the full mode values."""

    if isinstance(value, QueryMode):
        return value if value in SEMANTIC_MODES else None
    normalized = str(value or "").strip().lower()
    if not normalized.startswith("semantic_"):
        normalized = f"semantic_{normalized}"
    try:
        mode = QueryMode(normalized)
    except ValueError:
        return None
    return mode if mode in SEMANTIC_MODES else None


def _pair_subqueries(first: str, second: str, gap: str, bidirectional: bool) -> List[str]:
    subqueries = [cql.sequence(first, gap, second)]
    if bidirectional:
        subqueries.append(cql.sequence(second, gap, first))
    return cql.unique(subqueries)


def build_proximity_query(
    term1: Any,
    term2: Any,
    distance: Any = DEFAULT_LIMITS.default_proximity,
    attribute: SearchAttribute | str = SearchAttribute.LEMMA,
    bidirectional: bool = True,
    *,
    exclude_repeats: bool = False,
    limits: DistanceLimits = DEFAULT_LIMITS,
) -> QueryResult:
    """Two lemmas within ``distance`` tokens of each other.

    With ``exclude_repeats`` the intervening tokens may not equal either
    lemma, so in repetitive passages ("ignorantia iuris ... ignorantia iuris")
    a match spans the closest pair rather than anchoring on an earlier one.
    """

    first, second = sanitize_input(term1), sanitize_input(term2)
    if not first or not second:
        return QueryError(ErrorKind.MISSING_INPUT, _MISSING_TERMS)
    resolved = SearchAttribute.parse(attribute)
    if resolved is None:
        return _invalid_attribute(attribute)

    attr = resolved.value
    window = validate_distance(distance, limits.default_proximity, limits)
    if exclude_repeats:
        gap = cql.excluding_gap(attr, cql.unique((first, second)), window)
    else:
        gap = cql.token_gap(window)

    subqueries = _pair_subqueries(
        cql.token_test(attr, first), cql.token_test(attr, second), gap, bidirectional
    )
    return Query(
        query=cql.disjunction(subqueries),
        mode=QueryMode.PROXIMITY,
        terms=(first, second),
        distance=window,
        attribute=attr,
        subqueries=tuple(subqueries),
        bidirectional=bool(bidirectional),
    )


def build_proximity_variation_query(
    term1: Any,
    term2: Any,
    distance: Any = DEFAULT_LIMITS.default_proximity,
    strategy: VariationStrategy | str = VariationStrategy.SIMPLE,
    attribute: SearchAttribute | str = SearchAttribute.WORD,
    bidirectional: bool = True,
    *,
    generator: Optional[VariationGenerator] = None,
    limits: DistanceLimits = DEFAULT_LIMITS,
    query_limits: QueryLimits = DEFAULT_QUERY_LIMITS,
) -> QueryResult:
    """Two lemmas, each expanded to its spelling variants, within ``distance``.

    The gap always excludes both variant alternations.
    """

    first, second = sanitize_input(term1), sanitize_input(term2)
    if not first or not second:
        return QueryError(ErrorKind.MISSING_INPUT, _MISSING_TERMS)
    resolved = SearchAttribute.parse(attribute)
    if resolved is None:
        return _invalid_attribute(attribute)
    resolved_strategy = VariationStrategy.parse(strategy)
    if resolved_strategy is None:
        return QueryError(ErrorKind.INVALID_OPTION, f"Unknown variation type: {strategy!r}.")
    if resolved_strategy.is_pairwise and max(len(first), len(second)) > query_limits.max_word_length:
        return QueryError(
            ErrorKind.INPUT_TOO_LONG,
            f"The {resolved_strategy.value} variation type supports words of at most "
            f"{query_limits.max_word_length} characters.",
        )

    generator = generator or DEFAULT_GENERATOR
    patterns1 = generator.generate(first, resolved_strategy)
    patterns2 = generator.generate(second, resolved_strategy)
    if not len(patterns1) or not len(patterns2):
        return QueryError(ErrorKind.EMPTY_PATTERN_SET, "Could not generate variation patterns.")

    attr = resolved.value
    window = validate_distance(distance, limits.default_proximity, limits)
    alternatives1, alternatives2 = patterns1.alternation(), patterns2.alternation()
    gap = cql.excluding_gap(attr, cql.unique((alternatives1, alternatives2)), window)

    subqueries = _pair_subqueries(
        cql.token_test(attr, alternatives1),
        cql.token_test(attr, alternatives2),
        gap,
        bidirectional,
    )
    return Query(
        query=cql.disjunction(subqueries),
        mode=QueryMode.PROXIMITY_WITH_VARIATION,
        terms=(first, second),
        distance=window,
        attribute=attr,
        subqueries=tuple(subqueries),
        bidirectional=bool(bidirectional),
        strategy=resolved_strategy.value,
        patterns=(patterns1.patterns, patterns2.patterns),
    )


def _any_context(central: str, contexts: Sequence[str], gap: str) -> List[str]:
    group = "(" + "|".join(contexts) + ")"
    return [cql.sequence(central, gap, group), cql.sequence(group, gap, central)]


def _phrase_context(central: str, contexts: Sequence[str], gap: str) -> List[str]:
    subqueries: List[str] = []
    for context in contexts:
        subqueries.extend(_pair_subqueries(central, context, gap, bidirectional=True))
    return cql.unique(subqueries)


def _all_contexts(central: str, contexts: Sequence[str], gap: str) -> List[str]:
    # k context terms give up to 6 * k * (k - 1) / 2 sub-expressions.
    if len(contexts) < 2:
        return _phrase_context(central, contexts, gap)
    subqueries: List[str] = []
    for first, second in combinations(contexts, 2):
        for ordering in permutations((central, first, second)):
            subqueries.append(cql.sequence(ordering[0], gap, ordering[1], gap, ordering[2]))
    return cql.unique(subqueries)


_SEMANTIC_BUILDERS = {
    QueryMode.SEMANTIC_ANY: _any_context,
    QueryMode.SEMANTIC_PHRASE: _phrase_context,
    QueryMode.SEMANTIC_ALL: _all_contexts,
}


def build_semantic_query(
    central: Any,
    contexts: Any,
    distance: Any = DEFAULT_LIMITS.default_semantic,
    mode: QueryMode | str = QueryMode.SEMANTIC_ANY,
    attribute: SearchAttribute | str = SearchAttribute.LEMMA,
    *,
    limits: DistanceLimits = DEFAULT_LIMITS,
    query_limits: QueryLimits = DEFAULT_QUERY_LIMITS,
) -> QueryResult:
    """A central lemma near one, each, or every pair of context lemmas.

    ``contexts`` is a comma-separated string or an iterable of strings.
    """

    cleaned_central = sanitize_input(central)
    has_contexts = contexts.strip() if isinstance(contexts, str) else contexts
    if not cleaned_central or not has_contexts:
        return QueryError(
            ErrorKind.MISSING_INPUT,
            "The central lemma and at least one context lemma must be provided.",
        )
    resolved_mode = resolve_semantic_mode(mode)
    if resolved_mode is None:
        return QueryError(ErrorKind.INVALID_OPTION, f"Unknown context mode: {mode!r}.")
    resolved = SearchAttribute.parse(attribute)
    if resolved is None:
        return _invalid_attribute(attribute)

    context_terms = parse_context_terms(contexts)
    if not context_terms:
        return QueryError(ErrorKind.NO_VALID_CONTEXT, "No valid context lemma found.")
    if len(context_terms) > query_limits.max_context_terms:
        return QueryError(
            ErrorKind.TOO_MANY_CONTEXTS,
            f"At most {query_limits.max_context_terms} context lemmas are supported.",
        )

    attr = resolved.value
    window = validate_distance(distance, limits.default_semantic, limits)
    subqueries = _SEMANTIC_BUILDERS[resolved_mode](
        cql.token_test(attr, cleaned_central),
        [cql.token_test(attr, term) for term in context_terms],
        cql.token_gap(window),
    )
    return Query(
        query=cql.disjunction(subqueries),
        mode=resolved_mode,
        terms=(cleaned_central,),
        distance=window,
        attribute=attr,
        subqueries=tuple(subqueries),
        bidirectional=True,
        context_terms=tuple(context_terms),
    )


__all__ = [
    "SEMANTIC_MODES",
    "parse_context_terms",
    "resolve_semantic_mode",
    "build_proximity_query",
    "build_proximity_variation_query",
    "build_semantic_query",
]
