"""
Event pipeline: severity threshold plus one sink per severity level.

An EventLogger is built once (threshold + sinks) and never changes after
that. Deciding whether an event goes out is a pure comparison
(should_emit); writing the rendered line to the sink is the only side
effect, so filtering can be tested without touching any I/O.

By default each level writes to its own stdlib logger channel:

    agentic.events.debug
    agentic.events.info
    agentic.events.warning
    agentic.events.error
    agentic.events.critical

so operators can silence or redirect a single level with ordinary logging
configuration (see agentic.core.logging.setup_logging).

Usage:
    from agentic.events.pipeline import EventLogger, get_event_logger

    pipeline = EventLogger(threshold=Severity.WARNING)
    pipeline.emit(event)          # dropped silently if below WARNING

    get_event_logger().emit(event)  # process-wide pipeline, from config
"""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import TYPE_CHECKING, Callable, Mapping

import agentic.core.config as config_module
from agentic.events.model import Event, Severity

if TYPE_CHECKING:
    from agentic.core.config import LoggingConfig

# A sink receives the rendered line and the event it came from.
Sink = Callable[[str, Event], None]


class LoggerSink:
    """Sink that forwards rendered events to a stdlib logger."""

    def __init__(self, logger: logging.Logger, level: int) -> None:
        self.logger = logger
        self.level = level

    @classmethod
    def for_severity(cls, severity: Severity) -> LoggerSink:
        return cls(logging.getLogger(severity.channel), severity.logging_level)

    def __call__(self, line: str, event: Event) -> None:
        self.logger.log(
            self.level,
            line,
            extra={
                "event_id": event.id,
                "event_type": event.type.value,
                "parent_id": event.parent_id,
            },
        )

    def __repr__(self) -> str:
        return f"LoggerSink({self.logger.name!r})"


class EventLogger:
    """Threshold filter and per-severity sink registry.

    Both are fixed at construction. Build a new EventLogger to change them.
    """

    def __init__(
        self,
        threshold: Severity = Severity.INFO,
        sinks: Mapping[Severity, Sink] | None = None,
    ) -> None:
        self._threshold = Severity.parse(threshold)
        registry: dict[Severity, Sink] = {}
        for severity in Severity:
            registry[severity] = LoggerSink.for_severity(severity)
        for severity, sink in (sinks or {}).items():
            registry[Severity.parse(severity)] = sink
        self._sinks = MappingProxyType(registry)

    @classmethod
    def from_config(cls, cfg: LoggingConfig) -> EventLogger:
        return cls(threshold=cfg.threshold)

    @property
    def threshold(self) -> Severity:
        return self._threshold

    @property
    def sinks(self) -> Mapping[Severity, Sink]:
        return self._sinks

    def should_emit(self, severity: Severity) -> bool:
        """True if an event of this severity clears the threshold."""
        return severity >= self._threshold

    def sink_for(self, severity: Severity) -> Sink:
        return self._sinks[Severity.parse(severity)]

    def emit(self, event: Event) -> bool:
        """Write the event to the sink for its own severity, if it clears the threshold."""
        if not self.should_emit(event.severity):
            return False
        self._sinks[event.severity](event.render(), event)
        return True

    def __repr__(self) -> str:
        return f"EventLogger(threshold={self._threshold.name})"


_default: EventLogger | None = None
_default_lock = threading.Lock()


def get_event_logger() -> EventLogger:
    """Return the process-wide pipeline, building it from config on first use."""
    global _default
    if _default is None:
        with _default_lock:
            if _default is None:
                _default = EventLogger.from_config(config_module.config.logging)
    return _default


def set_event_logger(pipeline: EventLogger | None) -> None:
    """Install the process-wide pipeline.

    Call during start-up, before events are emitted concurrently. Passing
    None makes the next get_event_logger() rebuild from config.
    """
    global _default
    with _default_lock:
        _default = pipeline
