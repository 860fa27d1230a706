"""Search links into the concordance view."""

from __future__ import annotations

from urllib.parse import unquote

from cisame_query.core import NOSKETCH_BASE_URL, build_proximity_query, build_search_url, encode_query


def test_encode_query_escapes_cql_punctuation():
    assert encode_query('[lemma="intentio"] []{0,10}') == (
        "%5Blemma%3D%22intentio%22%5D%20%5B%5D%7B0%2C10%7D"
    )
    assert encode_query("a|b") == "a%7Cb"
    assert encode_query("(a)*") == "(a)*"
    assert encode_query("") == ""


def test_build_search_url_appends_encoded_query():
    query = build_proximity_query("intentio", "Augustinus").query

    url = build_search_url(query)

    assert url.startswith(NOSKETCH_BASE_URL)
    assert NOSKETCH_BASE_URL.endswith("cql=")
    assert unquote(url[len(NOSKETCH_BASE_URL):]) == query
    assert " " not in url


def test_build_search_url_accepts_custom_base():
    assert build_search_url("[word=\"æ\"]", "https://example.org/?cql=") == (
        "https://example.org/?cql=%5Bword%3D%22%C3%A6%22%5D"
    )
