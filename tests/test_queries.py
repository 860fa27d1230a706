"""Proximity and semantic-context query assembly."""

from __future__ import annotations

import pytest

from cisame_query.core import (
    ErrorKind,
    Query,
    QueryError,
    QueryLimits,
    QueryMode,
    build_proximity_query,
    build_proximity_variation_query,
    build_semantic_query,
    parse_context_terms,
    resolve_semantic_mode,
)


# Proximity ---------------------------------------------------------------
def test_proximity_query_matches_documented_form():
    result = build_proximity_query("intentio", "Augustinus", 10, "lemma", False)

    assert isinstance(result, Query)
    assert result.error is None
    assert result.query == '[lemma="intentio"] []{0,10} [lemma="Augustinus"]'
    assert result.mode is QueryMode.PROXIMITY
    assert result.terms == ("intentio", "Augustinus")


def test_proximity_query_is_bidirectional_by_default():
    result = build_proximity_query("intentio", "Augustinus")

    assert result.query == (
        '[lemma="intentio"] []{0,10} [lemma="Augustinus"]'
        ' | [lemma="Augustinus"] []{0,10} [lemma="intentio"]'
    )
    assert len(result.subqueries) == 2
    assert result.bidirectional is True


def test_proximity_query_can_exclude_repeated_terms():
    result = build_proximity_query("a", "b", 5, "lemma", False, exclude_repeats=True)

    assert result.query == '[lemma="a"] [lemma!="a" & lemma!="b"]{0,5} [lemma="b"]'


def test_proximity_query_excludes_identical_terms_once():
    result = build_proximity_query("ius", "ius", 3, bidirectional=False, exclude_repeats=True)

    assert result.query == '[lemma="ius"] [lemma!="ius"]{0,3} [lemma="ius"]'


def test_proximity_query_with_same_term_twice_has_one_subquery():
    result = build_proximity_query("ius", "ius", 3)

    assert result.subqueries == ('[lemma="ius"] []{0,3} [lemma="ius"]',)
    assert " | " not in result.query


def test_proximity_query_sanitizes_terms_and_clamps_distance():
    result = build_proximity_query(" intentio@ ", "ratio!", 500, "word", False)

    assert result.query == '[word="intentio"] []{0,100} [word="ratio"]'
    assert result.distance == 100
    assert result.attribute == "word"


@pytest.mark.parametrize("term1, term2", [("", "ratio"), ("intentio", "   "), ("@@", "#"), (None, "x")])
def test_proximity_query_requires_both_terms(term1, term2):
    result = build_proximity_query(term1, term2)

    assert isinstance(result, QueryError)
    assert result.kind is ErrorKind.MISSING_INPUT
    assert result.error == "Both lemmas must be provided."
    assert result.ok is False


def test_proximity_query_rejects_unknown_attribute():
    result = build_proximity_query("intentio", "ratio", attribute="pos")

    assert result.kind is ErrorKind.INVALID_OPTION


# Proximity with variations -----------------------------------------------
def test_variation_query_expands_both_terms_and_excludes_them_from_gap():
    result = build_proximity_variation_query("ab", "cd", 10, "simple", "word", False)

    alternatives1 = "ab|[A-z]?b|a[A-z]?"
    alternatives2 = "cd|[A-z]?d|c[A-z]?"
    assert result.query == (
        f'[word="{alternatives1}"] '
        f'[word!="{alternatives1}" & word!="{alternatives2}"]{{0,10}} '
        f'[word="{alternatives2}"]'
    )
    assert result.mode is QueryMode.PROXIMITY_WITH_VARIATION
    assert result.strategy == "simple"
    assert result.patterns == (("ab", "[A-z]?b", "a[A-z]?"), ("cd", "[A-z]?d", "c[A-z]?"))


def test_variation_query_bidirectional_swaps_alternations():
    result = build_proximity_variation_query("ab", "cd", 4)

    first, second = result.subqueries
    assert first.startswith('[word="ab|')
    assert second.startswith('[word="cd|')
    assert second.endswith('[word="ab|[A-z]?b|a[A-z]?"]')


def test_variation_query_accepts_historical_alias():
    result = build_proximity_variation_query("ratio", "quaestio", 10, "medieval")

    assert result.strategy == "historical"
    assert "racio" in result.patterns[0]
    assert "questio" in result.patterns[1]


def test_variation_query_errors():
    missing = build_proximity_variation_query("", "ratio")
    strategy = build_proximity_variation_query("intentio", "ratio", strategy="phonetic")
    too_long = build_proximity_variation_query(
        "intentio",
        "ratio",
        strategy="complex",
        query_limits=QueryLimits(max_word_length=6),
    )
    short_enough = build_proximity_variation_query(
        "intentio",
        "ratio",
        strategy="simple",
        query_limits=QueryLimits(max_word_length=6),
    )

    assert missing.kind is ErrorKind.MISSING_INPUT
    assert strategy.kind is ErrorKind.INVALID_OPTION
    assert too_long.kind is ErrorKind.INPUT_TOO_LONG
    assert short_enough.ok


def test_variation_query_complex_uses_pairwise_patterns():
    result = build_proximity_variation_query("abc", "de", 2, "complex", "lemma", False)

    assert result.query.startswith('[lemma="abc|[A-z]*[A-z]*c|[A-z]*b[A-z]*|a[A-z]*[A-z]*"]')


# Semantic context --------------------------------------------------------
def test_parse_context_terms_splits_and_sanitizes():
    assert parse_context_terms("voluntas, ratio ,, @@, intellectus") == [
        "voluntas",
        "ratio",
        "intellectus",
    ]
    assert parse_context_terms(["voluntas", "ratio, anima", 3]) == ["voluntas", "ratio", "anima"]
    assert parse_context_terms("") == []
    assert parse_context_terms(None) == []
    assert parse_context_terms(5) == []
    assert parse_context_terms("ratio, ratio , voluntas, ratio") == ["ratio", "voluntas"]


@pytest.mark.parametrize(
    "value, expected",
    [
        ("any", QueryMode.SEMANTIC_ANY),
        ("PHRASE", QueryMode.SEMANTIC_PHRASE),
        ("semantic_all", QueryMode.SEMANTIC_ALL),
        (QueryMode.SEMANTIC_ALL, QueryMode.SEMANTIC_ALL),
        (QueryMode.PROXIMITY, None),
        ("proximity", None),
        ("sometimes", None),
    ],
)
def test_resolve_semantic_mode(value, expected):
    assert resolve_semantic_mode(value) is expected


def test_semantic_any_groups_context_terms():
    result = build_semantic_query("intentio", "voluntas, ratio", 20, "any")

    assert result.query == (
        '[lemma="intentio"] []{0,20} ([lemma="voluntas"]|[lemma="ratio"])'
        ' | ([lemma="voluntas"]|[lemma="ratio"]) []{0,20} [lemma="intentio"]'
    )
    assert result.mode is QueryMode.SEMANTIC_ANY
    assert result.context_terms == ("voluntas", "ratio")


def test_semantic_phrase_pairs_each_context_term_both_ways():
    result = build_semantic_query("intentio", "voluntas, ratio", 5, QueryMode.SEMANTIC_PHRASE)

    assert result.subqueries == (
        '[lemma="intentio"] []{0,5} [lemma="voluntas"]',
        '[lemma="voluntas"] []{0,5} [lemma="intentio"]',
        '[lemma="intentio"] []{0,5} [lemma="ratio"]',
        '[lemma="ratio"] []{0,5} [lemma="intentio"]',
    )


def test_semantic_all_covers_every_ordering_of_each_pair():
    result = build_semantic_query("c", "a, b", 3, "all", "word")

    gap = "[]{0,3}"
    c, a, b = '[word="c"]', '[word="a"]', '[word="b"]'
    assert set(result.subqueries) == {
        f"{c} {gap} {a} {gap} {b}",
        f"{c} {gap} {b} {gap} {a}",
        f"{a} {gap} {c} {gap} {b}",
        f"{a} {gap} {b} {gap} {c}",
        f"{b} {gap} {c} {gap} {a}",
        f"{b} {gap} {a} {gap} {c}",
    }


@pytest.mark.parametrize(
    "contexts, expected",
    [
        ("voluntas, ratio", {"any": 2, "phrase": 4, "all": 6}),
        ("voluntas, ratio, intellectus", {"any": 2, "phrase": 6, "all": 18}),
    ],
)
def test_semantic_modes_grow_from_any_to_all(contexts, expected):
    counts = {
        mode: len(build_semantic_query("intentio", contexts, mode=mode).subqueries)
        for mode in expected
    }

    assert counts == expected
    assert counts["any"] < counts["phrase"] < counts["all"]


def test_semantic_all_with_single_context_falls_back_to_pairs():
    all_result = build_semantic_query("intentio", "voluntas", mode="all")
    phrase_result = build_semantic_query("intentio", "voluntas", mode="phrase")

    assert all_result.subqueries == phrase_result.subqueries
    assert all_result.mode is QueryMode.SEMANTIC_ALL


def test_semantic_query_uses_semantic_default_distance():
    result = build_semantic_query("intentio", "ratio", "far")

    assert result.distance == 20


def test_semantic_query_errors():
    missing = build_semantic_query("", "ratio")
    no_contexts = build_semantic_query("intentio", "   ")
    invalid = build_semantic_query("intentio", "@@, ##")
    mode = build_semantic_query("intentio", "ratio", mode="sometimes")
    attribute = build_semantic_query("intentio", "ratio", attribute="tag")
    too_many = build_semantic_query(
        "intentio", "a, b, c", query_limits=QueryLimits(max_context_terms=2)
    )

    assert missing.kind is ErrorKind.MISSING_INPUT
    assert no_contexts.kind is ErrorKind.MISSING_INPUT
    assert invalid.kind is ErrorKind.NO_VALID_CONTEXT
    assert invalid.error == "No valid context lemma found."
    assert mode.kind is ErrorKind.INVALID_OPTION
    assert attribute.kind is ErrorKind.INVALID_OPTION
    assert too_many.kind is ErrorKind.TOO_MANY_CONTEXTS


def test_semantic_query_rejects_non_iterable_contexts():
    result = build_semantic_query("intentio", 5)

    assert isinstance(result, QueryError)
    assert result.kind is ErrorKind.NO_VALID_CONTEXT


def test_semantic_query_collapses_repeated_context_terms():
    result = build_semantic_query("intentio", "ratio, ratio", 20, "any")

    assert result.context_terms == ("ratio",)
    assert result.query.count('[lemma="ratio"]') == 2


def test_proximity_query_far_beyond_digit_limit_is_clamped():
    result = build_proximity_query("intentio", "ratio", "9" * 5000, bidirectional=False)

    assert result.ok
    assert result.distance == 100


def test_query_to_dict_exposes_public_fields():
    payload = build_semantic_query("intentio", "ratio", 7, "phrase").to_dict()

    assert payload["mode"] == "semantic_phrase"
    assert payload["distance"] == 7
    assert payload["context_terms"] == ["ratio"]
    assert "variation_type" not in payload
