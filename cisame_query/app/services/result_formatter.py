"""Markdown rendering of compiled queries for the UI."""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence, Tuple, Union

from cisame_query.core import (
    NOSKETCH_BASE_URL,
    Query,
    QueryError,
    QueryMode,
    VariationBundle,
    build_search_url,
)

Renderable = Union[Query, QueryError, VariationBundle]

_MODE_TITLES: Dict[QueryMode, str] = {
    QueryMode.PROXIMITY: "Proximity",
    QueryMode.PROXIMITY_WITH_VARIATION: "Proximity with variations",
    QueryMode.SEMANTIC_ANY: "Semantic context (at least one)",
    QueryMode.SEMANTIC_PHRASE: "Semantic context (one pairing per lemma)",
    QueryMode.SEMANTIC_ALL: "Semantic context (every pair of lemmas)",
}

_STRATEGY_TITLES: List[Tuple[str, str]] = [
    ("simple", "Low granularity: one letter → `[A-z]?`"),
    ("medium", "Medium granularity: one letter → `[A-z]*`"),
    ("complex", "High granularity: two letters → `[A-z]*`"),
    ("historical", "Medieval spellings"),
]

# Long pattern lists are cut in the summary; the query itself keeps them all.
_PATTERN_PREVIEW = 12


class QueryResultFormatter:
    """Render query results as Markdown blocks with engine links."""

    def __init__(self, url_builder: Callable[[str], str] | None = None) -> None:
        self._url_builder = url_builder or (lambda query: build_search_url(query, NOSKETCH_BASE_URL))

    def format(self, result: Renderable) -> str:
        if isinstance(result, QueryError):
            return self.format_error(result)
        if isinstance(result, VariationBundle):
            return self.format_bundle(result)
        return self.format_query(result)

    def format_error(self, error: QueryError) -> str:
        return f"❌ {error.message}"

    def _query_block(self, query: str) -> List[str]:
        return [
            "```",
            query,
            "```",
            f"[Open in NoSketch Engine]({self._url_builder(query)})",
        ]

    @staticmethod
    def _preview(patterns: Sequence[str]) -> str:
        shown = ", ".join(f"`{pattern}`" for pattern in patterns[:_PATTERN_PREVIEW])
        hidden = len(patterns) - _PATTERN_PREVIEW
        if hidden > 0:
            shown += f" … (+{hidden} more)"
        return shown

    def format_query(self, result: Query) -> str:
        lines: List[str] = [f"### {_MODE_TITLES.get(result.mode, result.mode.value)}", ""]
        lines.extend(self._query_block(result.query))
        lines.append("")

        if result.context_terms:
            lines.append(f"- **Central lemma:** {result.terms[0]}")
            lines.append(f"- **Context lemmas:** {', '.join(result.context_terms)}")
        else:
            lines.append(f"- **Lemmas:** {' · '.join(result.terms)}")
        lines.append(f"- **Distance:** 0–{result.distance} tokens")
        lines.append(f"- **Attribute:** `{result.attribute}`")
        if result.mode in (QueryMode.PROXIMITY, QueryMode.PROXIMITY_WITH_VARIATION):
            lines.append(f"- **Bidirectional:** {'yes' if result.bidirectional else 'no'}")
        lines.append(f"- **Sub-queries:** {len(result.subqueries)}")

        if result.strategy is not None:
            lines.append(f"- **Variation type:** {result.strategy}")
            for term, patterns in zip(result.terms, result.patterns):
                lines.append(f"- **{term}** ({len(patterns)} patterns): {self._preview(patterns)}")

        return "\n".join(lines)

    def format_bundle(self, bundle: VariationBundle) -> str:
        ending = "with endings `[A-z]*`" if bundle.with_suffix else "exact form"
        lines: List[str] = [
            f"### Variations for “{bundle.word}”",
            "",
            f"Attribute `{bundle.attribute}`, {ending}.",
        ]
        for key, title in _STRATEGY_TITLES:
            query = bundle.queries.get(key)
            if query is None:
                continue
            patterns = bundle.patterns.get(key, ())
            lines.extend(["", f"#### {title} ({len(patterns)} patterns)", ""])
            lines.extend(self._query_block(query))
        return "\n".join(lines)


__all__ = ["QueryResultFormatter", "Renderable"]
