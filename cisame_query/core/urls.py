"""Links into the NoSketch Engine concordance view."""

from __future__ import annotations

from urllib.parse import quote

NOSKETCH_BASE_URL = (
    "https://fip-185-155-93-80.iaas.unistra.fr/#concordance?corpname=CiSaMe"
    "&tab=advanced&queryselector=cql&attrs=word&viewmode=kwic&attr_allpos=all"
    "&refs_up=0&shorten_refs=1&glue=1&gdexcnt=300&show_gdex_scores=0"
    "&itemsPerPage=20&structs=s%2Cg&refs=%3Ddoc.id&default_attr=lemma&cql="
)

# Unreserved marks kept as-is in a URI component; the concordance view decodes
# the fragment before parsing the query.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_query(query: str) -> str:
    return quote(query or "", safe=_URI_COMPONENT_SAFE)


def build_search_url(query: str, base_url: str = NOSKETCH_BASE_URL) -> str:
    """Append the percent-encoded ``query`` to ``base_url`` (which ends in ``cql=``)."""

    return base_url + encode_query(query)


__all__ = ["NOSKETCH_BASE_URL", "encode_query", "build_search_url"]
