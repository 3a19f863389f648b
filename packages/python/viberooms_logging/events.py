from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

log = logging.getLogger(__name__)


class EventEmitter(Protocol):
    def emit(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NoopEmitter:
    def emit(self, name: str, payload: Mapping[str, Any]) -> None:
        return None


class LoggingEmitter:
    """Forwards engine events to stdlib logging, payload in `extra`."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger or log
        self.level = level

    def emit(self, name: str, payload: Mapping[str, Any]) -> None:
        self.logger.log(
            self.level,
            "engine event %s %s",
            name,
            dict(payload),
            extra={"event_name": name, "event_payload": dict(payload)},
        )


class RecordingEmitter:
    """Keeps every event in memory, in emit order."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def names(self) -> list[str]:
        return [n for n, _ in self.events]

    def of(self, name: str) -> list[dict[str, Any]]:
        return [p for n, p in self.events if n == name]
