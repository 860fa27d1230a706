"""Result values returned by the query builders."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class ErrorKind(str, Enum):
    MISSING_INPUT = "missing_input"
    NO_VALID_CONTEXT = "no_valid_context"
    EMPTY_PATTERN_SET = "empty_pattern_set"
    INVALID_OPTION = "invalid_option"
    INPUT_TOO_LONG = "input_too_long"
    TOO_MANY_CONTEXTS = "too_many_contexts"


class SearchAttribute(str, Enum):
    """Token attribute compared by the search engine."""

    LEMMA = "lemma"
    WORD = "word"

    @classmethod
    def parse(cls, value: Any) -> Optional["SearchAttribute"]:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


class QueryMode(str, Enum):
    PROXIMITY = "proximity"
    PROXIMITY_WITH_VARIATION = "proximity_with_variation"
    SEMANTIC_ANY = "semantic_any"
    SEMANTIC_PHRASE = "semantic_phrase"
    SEMANTIC_ALL = "semantic_all"


@dataclass(frozen=True)
class QueryError:
    """A request that could not be turned into a query."""

    kind: ErrorKind
    message: str

    @property
    def error(self) -> str:
        return self.message

    @property
    def ok(self) -> bool:
        return False

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "kind": self.kind.value}


@dataclass(frozen=True)
class Query:
    """A compiled CQL expression and the parameters that produced it."""

    query: str
    mode: QueryMode
    terms: Tuple[str, ...]
    distance: int
    attribute: str
    subqueries: Tuple[str, ...]
    bidirectional: bool = False
    strategy: Optional[str] = None
    patterns: Tuple[Tuple[str, ...], ...] = ()
    context_terms: Tuple[str, ...] = ()

    error = None

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "query": self.query,
            "mode": self.mode.value,
            "terms": list(self.terms),
            "distance": self.distance,
            "attribute": self.attribute,
            "bidirectional": self.bidirectional,
        }
        if self.strategy is not None:
            payload["variation_type"] = self.strategy
            payload["patterns"] = [list(group) for group in self.patterns]
        if self.context_terms:
            payload["context_terms"] = list(self.context_terms)
        return payload


@dataclass(frozen=True)
class VariationBundle:
    """Side-by-side single-term queries for each named variation strategy."""

    word: str
    with_suffix: bool
    attribute: str
    queries: Mapping[str, str] = field(default_factory=dict)
    patterns: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)

    error = None

    @property
    def ok(self) -> bool:
        return True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "with_suffix": self.with_suffix,
            "attribute": self.attribute,
            "queries": dict(self.queries),
            "patterns": {name: list(values) for name, values in self.patterns.items()},
        }


QueryResult = Union[Query, QueryError]
BundleResult = Union[VariationBundle, QueryError]


__all__ = [
    "ErrorKind",
    "SearchAttribute",
    "QueryMode",
    "QueryError",
    "Query",
    "VariationBundle",
    "QueryResult",
    "BundleResult",
]
