"""Application wiring for the CiSaMe query forge."""

from __future__ import annotations

import logging
from typing import Any, Optional

if __package__ in {None, ""}:
    import sys
    from pathlib import Path

    repo_root = Path(__file__).resolve().parents[2]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

from cisame_query.core import MEDIEVAL_LATIN_TABLES, OrthographyTables, VariationGenerator
from cisame_query.utils.logging_config import configure_logging
from cisame_query.utils.observability import get_logger
from cisame_query.utils.telemetry import StructuredTelemetry, TelemetryLogger

from cisame_query.app.config import QueryForgeSettings
from cisame_query.app.services.query_service import QueryGeneratorService


class QueryForgeApp:
    """High-level facade bundling settings, the query service and the UI."""

    def __init__(
        self,
        settings: Optional[QueryForgeSettings] = None,
        *,
        tables: OrthographyTables = MEDIEVAL_LATIN_TABLES,
        telemetry: Optional[StructuredTelemetry] = None,
        query_service: Optional[QueryGeneratorService] = None,
    ) -> None:
        self.settings = settings or QueryForgeSettings.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")

        if query_service is None:
            telemetry = telemetry or StructuredTelemetry(
                listeners=[TelemetryLogger(level=logging.DEBUG)]
            )
            query_service = QueryGeneratorService(
                generator=VariationGenerator(tables),
                query_limits=self.settings.query_limits,
                base_url=self.settings.base_url,
                telemetry=telemetry,
            )
        self.query_service = query_service

        self._logger.info(
            "Application dependencies wired",
            context={
                "orthography": self.query_service.generator.tables.name,
                "base_url": self.settings.base_url,
            },
        )

    # Public API ------------------------------------------------------------
    def proximity(self, *args: Any, **kwargs: Any):
        return self.query_service.proximity(*args, **kwargs)

    def proximity_with_variations(self, *args: Any, **kwargs: Any):
        return self.query_service.proximity_with_variations(*args, **kwargs)

    def semantic(self, *args: Any, **kwargs: Any):
        return self.query_service.semantic(*args, **kwargs)

    def variations(self, *args: Any, **kwargs: Any):
        return self.query_service.variations(*args, **kwargs)

    def create_gradio_interface(self):
        from cisame_query.app.ui.gradio import create_interface

        return create_interface(self.query_service)


def main() -> None:
    settings = QueryForgeSettings.from_env()
    configure_logging(settings.log_level)

    app = QueryForgeApp(settings)
    interface = app.create_gradio_interface()
    interface.launch(
        server_name=settings.server_name,
        server_port=settings.server_port,
        share=settings.share,
    )


if __name__ == "__main__":
    main()


__all__ = ["QueryForgeApp", "main"]
