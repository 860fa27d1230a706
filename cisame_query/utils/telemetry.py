"""Structured telemetry for query compilation requests."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from copy import deepcopy
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from .observability import get_logger

TelemetryListener = Callable[[str, Dict[str, Any]], None]


class StructuredTelemetry:
    """Collects stage timings, counters and metadata for the current request.

    Each call to :meth:`start_trace` discards the previous request's data; the
    last state stays readable through :meth:`latest_snapshot` so the UI can
    show what happened while building the most recent query.
    """

    def __init__(
        self,
        time_fn: Optional[Callable[[], float]] = None,
        *,
        max_events: int = 128,
        listeners: Optional[Iterable[TelemetryListener]] = None,
    ) -> None:
        self._time_fn = time_fn or time.perf_counter
        self._max_events = max(1, int(max_events))
        self._lock = threading.RLock()
        self._trace_id = 0
        self._trace_name: Optional[str] = None
        self._stages: Dict[str, Dict[str, float]] = {}
        self._counters: Dict[str, float] = {}
        self._events: List[Dict[str, Any]] = []
        self._metadata: Dict[str, Any] = {}
        self._latest: Dict[str, Any] = {}
        self._listeners: List[TelemetryListener] = list(listeners or [])

    def _snapshot_locked(self) -> Dict[str, Any]:
        return {
            "trace_id": self._trace_id,
            "name": self._trace_name,
            "timings": {key: dict(value) for key, value in self._stages.items()},
            "counters": dict(self._counters),
            "events": [dict(event) for event in self._events],
            "metadata": dict(self._metadata),
        }

    def _publish(self, event_type: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            self._latest = deepcopy(self._snapshot_locked())
            listeners: Tuple[TelemetryListener, ...] = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, dict(payload))
            except Exception:
                # A faulty listener must not break query compilation.
                continue

    def now(self) -> float:
        return float(self._time_fn())

    def start_trace(self, name: str) -> int:
        """Reset collected data and open a trace named ``name``."""

        with self._lock:
            self._trace_id += 1
            self._trace_name = name
            self._stages = {}
            self._counters = {}
            self._events = []
            self._metadata = {"trace_name": name, "start_time": self.now()}
            trace_id = self._trace_id

        self._publish("trace_started", {"trace_id": trace_id, "name": name})
        return trace_id

    def record_timing(
        self,
        name: str,
        duration: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        duration = max(0.0, float(duration))
        details = dict(metadata or {})
        with self._lock:
            stage = self._stages.setdefault(
                name, {"count": 0, "total": 0.0, "min": duration, "max": duration}
            )
            stage["count"] += 1
            stage["total"] += duration
            stage["min"] = min(stage["min"], duration)
            stage["max"] = max(stage["max"], duration)
            stage["avg"] = stage["total"] / stage["count"]

            event: Dict[str, Any] = {"name": name, "duration": duration}
            if details:
                event["metadata"] = details
            self._events.append(event)
            del self._events[: -self._max_events]

        self._publish("timing", {"name": name, "duration": duration, "metadata": details})

    @contextmanager
    def timer(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Iterator[Dict[str, Any]]:
        """Time the enclosed block; the yielded dict may be filled with metadata."""

        payload: Dict[str, Any] = dict(metadata or {})
        start = self.now()
        self._publish("timer_started", {"name": name, "metadata": dict(payload)})
        try:
            yield payload
        finally:
            self.record_timing(name, self.now() - start, payload)

    def increment(self, name: str, amount: float = 1.0) -> None:
        value = float(amount)
        with self._lock:
            self._counters[name] = self._counters.get(name, 0.0) + value
            current = self._counters[name]
        self._publish("counter", {"name": name, "delta": value, "value": current})

    def annotate(self, key: str, value: Any) -> None:
        with self._lock:
            self._metadata[key] = value
        self._publish("metadata", {"key": key, "value": value})

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return self._snapshot_locked()

    def latest_snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return deepcopy(self._latest)

    def add_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TelemetryListener) -> None:
        with self._lock:
            self._listeners = [entry for entry in self._listeners if entry is not listener]


class TelemetryLogger:
    """Listener that forwards telemetry events to the project logger."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.INFO,
        level_map: Optional[Dict[str, int]] = None,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="telemetry")
        self._default_level = level
        self._level_map = dict(level_map or {})

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        level = self._level_map.get(event_type, self._default_level)
        if not self._logger.isEnabledFor(level):
            return

        context = {"telemetry.event": event_type}
        context.update({str(key): value for key, value in payload.items()})
        name = payload.get("name") or payload.get("key") or payload.get("trace_id") or "event"
        self._logger.log(level, f"Telemetry {event_type}: {name}", context=context)


__all__ = ["StructuredTelemetry", "TelemetryLogger", "TelemetryListener"]
