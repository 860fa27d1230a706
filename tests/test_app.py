import logging

import pytest

from cisame_query.app.app import QueryForgeApp
from cisame_query.app.config import QueryForgeSettings
from cisame_query.app.services.query_service import QueryGeneratorService
from cisame_query.core import OrthographyTables, QueryLimits, VariationStrategy


def test_app_wires_service_from_settings(caplog):
    caplog.set_level(logging.INFO, logger="cisame_query")
    settings = QueryForgeSettings(
        base_url="https://engine.example/?cql=",
        query_limits=QueryLimits(max_word_length=12, max_context_terms=3),
    )

    app = QueryForgeApp(settings)

    assert app.query_service.base_url == "https://engine.example/?cql="
    assert app.query_service.query_limits.max_context_terms == 3
    assert any("Application dependencies wired" in record.message for record in caplog.records)


def test_app_delegates_to_query_service():
    app = QueryForgeApp(QueryForgeSettings())

    proximity = app.proximity("intentio", "Augustinus", 10, "lemma", False)
    semantic = app.semantic("intentio", "voluntas, ratio", 20, "phrase")
    bundle = app.variations("ratio")

    assert proximity.query == '[lemma="intentio"] []{0,10} [lemma="Augustinus"]'
    assert len(semantic.subqueries) == 4
    assert set(bundle.queries) == {"simple", "medium", "complex", "historical"}


def test_app_uses_supplied_orthography_tables():
    tables = OrthographyTables.from_mappings("classical", {"c": ("k",)}, {})
    app = QueryForgeApp(QueryForgeSettings(), tables=tables)

    result = app.proximity_with_variations("cor", "ac", 3, VariationStrategy.HISTORICAL)

    assert result.patterns == (("cor", "kor"), ("ac", "ak"))


def test_app_accepts_prebuilt_service():
    service = QueryGeneratorService()

    app = QueryForgeApp(QueryForgeSettings(), query_service=service)

    assert app.query_service is service


def test_gradio_interface_builds():
    gr = pytest.importorskip("gradio")
    app = QueryForgeApp(QueryForgeSettings())

    interface = app.create_gradio_interface()

    assert isinstance(interface, gr.Blocks)
