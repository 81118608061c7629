"""Event sinks.

Emission is fire-and-forget from the engine's point of view; these sinks are
what tests and local tooling plug in.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import List

from ..state.events import EventKind, PoolEvent, event_to_dict

logger = logging.getLogger(__name__)


class ListEventSink:
    """Keeps every recorded event in memory, in order."""

    def __init__(self) -> None:
        self._events: List[PoolEvent] = []
        self._lock = threading.Lock()

    def record(self, event: PoolEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> List[PoolEvent]:
        with self._lock:
            return list(self._events)

    def of_kind(self, kind: EventKind) -> List[PoolEvent]:
        return [e for e in self.events if e.kind is kind]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


class LoggingEventSink:
    """Writes each event as one JSON line to a logger."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._log = log or logger
        self._level = level

    def record(self, event: PoolEvent) -> None:
        self._log.log(self._level, json.dumps(event_to_dict(event), sort_keys=True, separators=(",", ":")))
