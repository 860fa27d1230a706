"""Query service wiring the pure compiler to logging, metrics and telemetry."""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Union

from cisame_query.core import (
    DEFAULT_LIMITS,
    NOSKETCH_BASE_URL,
    DistanceLimits,
    QueryError,
    QueryLimits,
    QueryMode,
    SearchAttribute,
    VariationGenerator,
    VariationStrategy,
    build_proximity_query,
    build_proximity_variation_query,
    build_search_url,
    build_semantic_query,
    bundle_variations,
)
from cisame_query.core.results import BundleResult, QueryResult

from ...utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry
from .result_formatter import QueryResultFormatter

ServiceResult = Union[QueryResult, BundleResult]


def _label(value: Any) -> str:
    return str(getattr(value, "value", value))


class QueryGeneratorService:
    """Entry point used by the UI for every query-building form."""

    def __init__(
        self,
        *,
        generator: Optional[VariationGenerator] = None,
        limits: DistanceLimits = DEFAULT_LIMITS,
        query_limits: Optional[QueryLimits] = None,
        base_url: str = NOSKETCH_BASE_URL,
        telemetry: Optional[StructuredTelemetry] = None,
        formatter: Optional[QueryResultFormatter] = None,
    ) -> None:
        self.generator = generator or VariationGenerator()
        self.limits = limits
        self.query_limits = query_limits or QueryLimits()
        self.base_url = base_url
        self.telemetry = telemetry or StructuredTelemetry()
        self.formatter = formatter or QueryResultFormatter(self.search_url)
        self._latest_trace: Dict[str, Any] = {}

        self._logger = get_logger(__name__).bind(
            component="query_generator_service",
            orthography=self.generator.tables.name,
        )
        self._metric_requests = create_counter(
            "cisame_query_requests_total",
            "Queries compiled successfully, by operation.",
            label_names=("operation",),
        )
        self._metric_failures = create_counter(
            "cisame_query_failures_total",
            "Query requests rejected with a validation error, by kind.",
            label_names=("kind",),
        )
        self._metric_duration = create_histogram(
            "cisame_query_build_seconds",
            "Time spent compiling a query, by operation.",
            label_names=("operation",),
        )

        self._logger.info(
            "Query generator service initialised",
            context={
                "max_word_length": self.query_limits.max_word_length,
                "max_context_terms": self.query_limits.max_context_terms,
            },
        )

    # Instrumentation ------------------------------------------------------
    def _execute(
        self,
        operation: str,
        build: Callable[[], ServiceResult],
        request: Dict[str, Any],
    ) -> ServiceResult:
        self.telemetry.start_trace(operation)
        for key, value in request.items():
            self.telemetry.annotate(f"request.{key}", value)

        with start_span(f"cisame_query.{operation}", attributes=request) as span:
            try:
                with self._metric_duration.labels(operation=operation).time():
                    with self.telemetry.timer("build") as timing:
                        result = build()
                        timing["ok"] = result.ok
            except Exception as exc:
                record_exception(span, exc)
                self.telemetry.increment("query.exceptions")
                self._logger.error(
                    "Query compilation raised",
                    context={"operation": operation, "error": str(exc)},
                )
                raise

            if isinstance(result, QueryError):
                self._metric_failures.labels(kind=result.kind.value).inc()
                self.telemetry.increment("query.rejected")
                self.telemetry.annotate("error.kind", result.kind.value)
                add_span_attributes(span, {"query.error": result.kind.value})
                self._logger.warning(
                    "Query request rejected",
                    context={"operation": operation, "kind": result.kind.value},
                )
            else:
                self._metric_requests.labels(operation=operation).inc()
                self.telemetry.increment("query.compiled")
                summary = self._summarise(result)
                for key, value in summary.items():
                    self.telemetry.annotate(f"result.{key}", value)
                add_span_attributes(span, summary)
                self._logger.info(
                    "Query compiled",
                    context={"operation": operation, **summary},
                )

        self._latest_trace = self.telemetry.snapshot()
        return result

    @staticmethod
    def _summarise(result: ServiceResult) -> Dict[str, Any]:
        queries = getattr(result, "queries", None)
        if queries is not None:
            return {"strategies": len(queries), "length": sum(len(q) for q in queries.values())}
        return {
            "length": len(result.query),
            "subqueries": len(result.subqueries),
            "distance": result.distance,
        }

    def get_latest_telemetry(self) -> Dict[str, Any]:
        if self._latest_trace:
            return dict(self._latest_trace)
        return self.telemetry.latest_snapshot()

    # Public API -----------------------------------------------------------
    def proximity(
        self,
        term1: Any,
        term2: Any,
        distance: Any = DEFAULT_LIMITS.default_proximity,
        attribute: SearchAttribute | str = SearchAttribute.LEMMA,
        bidirectional: bool = True,
        *,
        exclude_repeats: bool = False,
    ) -> QueryResult:
        return self._execute(
            QueryMode.PROXIMITY.value,
            lambda: build_proximity_query(
                term1,
                term2,
                distance,
                attribute,
                bidirectional,
                exclude_repeats=exclude_repeats,
                limits=self.limits,
            ),
            {"attribute": _label(attribute), "bidirectional": bool(bidirectional)},
        )

    def proximity_with_variations(
        self,
        term1: Any,
        term2: Any,
        distance: Any = DEFAULT_LIMITS.default_proximity,
        strategy: VariationStrategy | str = VariationStrategy.SIMPLE,
        attribute: SearchAttribute | str = SearchAttribute.WORD,
        bidirectional: bool = True,
    ) -> QueryResult:
        return self._execute(
            QueryMode.PROXIMITY_WITH_VARIATION.value,
            lambda: build_proximity_variation_query(
                term1,
                term2,
                distance,
                strategy,
                attribute,
                bidirectional,
                generator=self.generator,
                limits=self.limits,
                query_limits=self.query_limits,
            ),
            {"strategy": _label(strategy), "attribute": _label(attribute)},
        )

    def semantic(
        self,
        central: Any,
        contexts: Any,
        distance: Any = DEFAULT_LIMITS.default_semantic,
        mode: QueryMode | str = QueryMode.SEMANTIC_ANY,
        attribute: SearchAttribute | str = SearchAttribute.LEMMA,
    ) -> QueryResult:
        return self._execute(
            "semantic",
            lambda: build_semantic_query(
                central,
                contexts,
                distance,
                mode,
                attribute,
                limits=self.limits,
                query_limits=self.query_limits,
            ),
            {"mode": _label(mode), "attribute": _label(attribute)},
        )

    def variations(
        self,
        word: Any,
        with_suffix: bool = True,
        attribute: SearchAttribute | str = SearchAttribute.WORD,
    ) -> BundleResult:
        return self._execute(
            "variations",
            lambda: bundle_variations(
                word,
                with_suffix,
                attribute,
                generator=self.generator,
                limits=self.query_limits,
            ),
            {"with_suffix": bool(with_suffix), "attribute": _label(attribute)},
        )

    def search_url(self, query: str) -> str:
        return build_search_url(query, self.base_url)

    def format_result(self, result: ServiceResult) -> str:
        return self.formatter.format(result)


__all__ = ["QueryGeneratorService", "ServiceResult"]
