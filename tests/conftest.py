import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cisame_query.app.services.query_service import QueryGeneratorService
from cisame_query.core import VariationGenerator
from cisame_query.utils.telemetry import StructuredTelemetry


class RecordingListener:
    """Telemetry listener that keeps every event it receives."""

    def __init__(self) -> None:
        self.events = []

    def __call__(self, event_type, payload):
        self.events.append((event_type, payload))

    def names(self, event_type):
        return [payload.get("name") or payload.get("key") for kind, payload in self.events if kind == event_type]


@pytest.fixture
def generator():
    return VariationGenerator()


@pytest.fixture
def telemetry_listener():
    return RecordingListener()


@pytest.fixture
def query_service(telemetry_listener):
    """Service with its own telemetry collector and a recording listener."""

    telemetry = StructuredTelemetry(listeners=[telemetry_listener])
    return QueryGeneratorService(telemetry=telemetry)
