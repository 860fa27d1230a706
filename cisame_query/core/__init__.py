"""Core query compilation for the CiSaMe corpus: sanitizing, variants, CQL."""

from .orthography import MEDIEVAL_LATIN_TABLES, OrthographyTables
from .queries import (
    SEMANTIC_MODES,
    build_proximity_query,
    build_proximity_variation_query,
    build_semantic_query,
    parse_context_terms,
    resolve_semantic_mode,
)
from .results import (
    BundleResult,
    ErrorKind,
    Query,
    QueryError,
    QueryMode,
    QueryResult,
    SearchAttribute,
    VariationBundle,
)
from .sanitizer import (
    DEFAULT_LIMITS,
    DEFAULT_QUERY_LIMITS,
    DistanceLimits,
    QueryLimits,
    sanitize_input,
    validate_distance,
)
from .urls import NOSKETCH_BASE_URL, build_search_url, encode_query
from .variations import (
    DEFAULT_GENERATOR,
    NAMED_STRATEGIES,
    PatternSet,
    VariationGenerator,
    VariationStrategy,
    bundle_variations,
    generate_complex_variations,
    generate_historical_variations,
    generate_medium_variations,
    generate_simple_variations,
    generate_variation_patterns,
)

__all__ = [
    "MEDIEVAL_LATIN_TABLES",
    "OrthographyTables",
    "SEMANTIC_MODES",
    "build_proximity_query",
    "build_proximity_variation_query",
    "build_semantic_query",
    "parse_context_terms",
    "resolve_semantic_mode",
    "BundleResult",
    "ErrorKind",
    "Query",
    "QueryError",
    "QueryMode",
    "QueryResult",
    "SearchAttribute",
    "VariationBundle",
    "DEFAULT_LIMITS",
    "DEFAULT_QUERY_LIMITS",
    "DistanceLimits",
    "QueryLimits",
    "sanitize_input",
    "validate_distance",
    "NOSKETCH_BASE_URL",
    "build_search_url",
    "encode_query",
    "DEFAULT_GENERATOR",
    "NAMED_STRATEGIES",
    "PatternSet",
    "VariationGenerator",
    "VariationStrategy",
    "bundle_variations",
    "generate_complex_variations",
    "generate_historical_variations",
    "generate_medium_variations",
    "generate_simple_variations",
    "generate_variation_patterns",
]
