"""
Agentic Events: immutable, serializable records of what the library did.

Event carries the data, EventLogger decides what gets written where.
"""

from agentic.events.model import (
    Event,
    EventType,
    Severity,
    llm_call_event,
    llm_completion_event,
)
from agentic.events.pipeline import EventLogger, LoggerSink, get_event_logger, set_event_logger
from agentic.events.store import dump_events, iter_events, read_events, write_events
from agentic.events.trace import CausalTrace

__all__ = [
    "Event",
    "EventType",
    "Severity",
    "llm_call_event",
    "llm_completion_event",
    "EventLogger",
    "LoggerSink",
    "get_event_logger",
    "set_event_logger",
    "dump_events",
    "iter_events",
    "read_events",
    "write_events",
    "CausalTrace",
]
