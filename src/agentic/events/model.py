"""
Agentic Event: one notable occurrence inside the library.

Every model call produces at least two events: LLM_CALL right before the
provider is hit, and LLM_COMPLETION right after it answers (or fails).
The completion points back at the call through parent_id, so a log of
events can be folded back into a forest of calls.

Events are immutable. They serialize to a flat JSON object and come back
field-for-field equal, timestamp included.

Usage:
    from agentic.events import Event, EventType, Severity

    call = Event(EventType.LLM_CALL, payload={"model": "gpt-4o"})
    call.log()

    done = Event(EventType.LLM_COMPLETION, parent_id=call.id)
    text = done.to_json()
    assert Event.from_json(text) == done
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Mapping

from agentic.core.errors import ParseError

if TYPE_CHECKING:
    from agentic.events.pipeline import EventLogger

# Bump when the payload shape of a built-in event changes.
CURRENT_VERSION = 1

CHANNEL_PREFIX = "agentic.events"


class EventType(str, Enum):
    """Events that can occur within the library."""

    LLM_CALL = "LLM_CALL"
    LLM_COMPLETION = "LLM_COMPLETION"


class Severity(IntEnum):
    """Severity of an event. Ordered, so thresholds are a plain comparison."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    CRITICAL = 4

    @classmethod
    def parse(cls, value: Severity | int | str) -> Severity:
        """Resolve a severity from a member, an ordinal or a level name.

        Names are case-insensitive. Raises ValueError for anything else.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid severity: {value!r}")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
        raise ValueError(f"Invalid severity: {value!r}")

    @property
    def logging_level(self) -> int:
        """Matching stdlib logging level (DEBUG=10 ... CRITICAL=50)."""
        return (self.value + 1) * 10

    @property
    def channel(self) -> str:
        """Name of the sink channel for this level."""
        return f"{CHANNEL_PREFIX}.{self.name.lower()}"


def utcnow() -> datetime:
    """Return timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 UTC with fixed microsecond width, e.g. 2024-01-01T00:00:00.000000Z."""
    utc = ts.astimezone(timezone.utc).replace(tzinfo=None)
    return utc.isoformat(timespec="microseconds") + "Z"


def parse_timestamp(text: str) -> datetime:
    ts = datetime.fromisoformat(text.replace("Z", "+00:00"))
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


@dataclass(frozen=True)
class Event:
    """An immutable record of one occurrence.

    Anything left as None (id, timestamp, payload, severity, version) falls
    back to its default, so construction and deserialization share one path.

    The payload is copied shallowly: reassigning a top-level key in the
    caller's dict after construction does not leak in, but mutating a nested
    list or dict does. Treat payload values as read-only.

    Events hash by id, so they can live in sets and dict keys.
    """

    type: EventType
    parent_id: str | None = None
    id: str | None = None
    timestamp: datetime | None = None
    payload: dict[str, Any] | None = None
    severity: Severity | None = Severity.INFO
    version: int | None = CURRENT_VERSION

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__.
        set_ = object.__setattr__
        set_(self, "type", EventType(self.type))
        if self.parent_id is not None and not isinstance(self.parent_id, str):
            raise TypeError(f"parent_id must be a str, got {self.parent_id!r}")
        if self.id is not None and not isinstance(self.id, str):
            raise TypeError(f"id must be a str, got {self.id!r}")
        if self.version is not None and (
            isinstance(self.version, bool) or not isinstance(self.version, int)
        ):
            raise TypeError(f"version must be an int, got {self.version!r}")
        set_(self, "id", self.id if self.id is not None else str(uuid.uuid4()))

        ts = self.timestamp or utcnow()
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        set_(self, "timestamp", ts.astimezone(timezone.utc))

        set_(self, "payload", dict(self.payload) if self.payload else {})
        set_(
            self,
            "severity",
            Severity.INFO if self.severity is None else Severity.parse(self.severity),
        )
        set_(self, "version", CURRENT_VERSION if self.version is None else self.version)

    def __hash__(self) -> int:
        # payload is a dict, so hash by identity; equal events share an id.
        return hash(self.id)

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "parent_id": self.parent_id,
            "id": self.id,
            "timestamp": format_timestamp(self.timestamp),
            "payload": self.payload,
            "severity": int(self.severity),
            "version": self.version,
        }

    def to_json(self) -> str:
        """Canonical JSON encoding. Payload values must be JSON-serializable."""
        return json.dumps(self.to_dict(), separators=(",", ":"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Event:
        """Rebuild an event from its dict form.

        Unknown keys are ignored so records written by newer versions still
        load. Raises ParseError if a known field is malformed.
        """
        if not isinstance(data, Mapping):
            raise ParseError(f"Event record must be an object, got {type(data).__name__}")

        if "type" not in data:
            raise ParseError("Event record is missing 'type'")
        try:
            event_type = EventType(data["type"])
        except ValueError:
            raise ParseError(f"Unknown event type: {data['type']!r}") from None

        parent_id = data.get("parent_id", data.get("parentId"))
        if parent_id is not None and not isinstance(parent_id, str):
            raise ParseError(f"Invalid parent_id: {parent_id!r}")

        event_id = data.get("id")
        if event_id is not None and not isinstance(event_id, str):
            raise ParseError(f"Invalid id: {event_id!r}")

        timestamp = None
        if data.get("timestamp") is not None:
            try:
                timestamp = parse_timestamp(data["timestamp"])
            except (TypeError, ValueError, AttributeError):
                raise ParseError(f"Invalid timestamp: {data['timestamp']!r}") from None

        payload = data.get("payload")
        if payload is not None and not isinstance(payload, dict):
            raise ParseError(f"Invalid payload: expected object, got {type(payload).__name__}")

        severity = None
        if data.get("severity") is not None:
            try:
                severity = Severity.parse(data["severity"])
            except ValueError:
                raise ParseError(f"Invalid severity: {data['severity']!r}") from None

        version = data.get("version")
        if version is not None and (isinstance(version, bool) or not isinstance(version, int)):
            raise ParseError(f"Invalid version: {version!r}")

        return cls(
            event_type,
            parent_id=parent_id,
            id=event_id,
            timestamp=timestamp,
            payload=payload,
            severity=severity,
            version=version,
        )

    @classmethod
    def from_json(cls, text: str | bytes) -> Event:
        """Parse the output of to_json(). Raises ParseError on bad input."""
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise ParseError(f"Event text is not valid JSON: {e}") from None
        return cls.from_dict(data)

    # --- Rendering ---

    def render(self) -> str:
        """One-line human summary for log output. Not meant to be parsed."""
        payload = json.dumps(self.payload, default=str, sort_keys=True)
        return (
            f"Event {{ type: {self.type.value}, parent_id: {self.parent_id}, "
            f"id: {self.id}, timestamp: {format_timestamp(self.timestamp)}, "
            f"payload: {payload}, severity: {self.severity.name} }}"
        )

    def __str__(self) -> str:
        return self.render()

    def log(self, pipeline: EventLogger | None = None) -> bool:
        """Send this event through the logging pipeline.

        Uses the process-wide pipeline unless one is given. Returns True if
        the event cleared the threshold and was written to a sink.
        """
        if pipeline is None:
            from agentic.events.pipeline import get_event_logger

            pipeline = get_event_logger()
        return pipeline.emit(self)


# --- Convenience constructors ---


def llm_call_event(
    provider: str,
    model: str,
    messages: list[dict] | None = None,
    parent_id: str | None = None,
    severity: Severity = Severity.INFO,
    **extra: Any,
) -> Event:
    return Event(
        EventType.LLM_CALL,
        parent_id=parent_id,
        payload={"provider": provider, "model": model, "messages": messages or [], **extra},
        severity=severity,
    )


def llm_completion_event(
    call: Event,
    content: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> Event:
    """Completion event linked to its call. Errors are logged at ERROR."""
    payload = {
        "provider": call.payload.get("provider"),
        "model": call.payload.get("model"),
        "content": content,
        **extra,
    }
    if error is not None:
        payload["error"] = error
    return Event(
        EventType.LLM_COMPLETION,
        parent_id=call.id,
        payload=payload,
        severity=Severity.ERROR if error is not None else call.severity,
    )
