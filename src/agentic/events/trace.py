"""
Causal trace: fold a flat list of events back into call trees.

Events only point at their parent through parent_id; nothing resolves that
link at runtime. CausalTrace does the lookup after the fact, over whatever
events the caller collected (for example from agentic.events.store).

A parent_id that is not in the collection is simply dangling: that event
is treated as a root of its own tree.

Usage:
    from agentic.events.trace import CausalTrace

    trace = CausalTrace(read_events("calls.jsonl"))
    for depth, event in trace.walk():
        print("  " * depth, event.type.value, event.id)
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Iterator

from agentic.events.model import Event, format_timestamp


class CausalTrace:
    """Read-only index of events by id and by parent."""

    def __init__(self, events: Iterable[Event]) -> None:
        self._by_id: dict[str, Event] = {}
        for event in events:
            self._by_id[event.id] = event

        self._children: dict[str, list[Event]] = defaultdict(list)
        for event in self._by_id.values():
            if event.parent_id is not None:
                self._children[event.parent_id].append(event)
        for siblings in self._children.values():
            siblings.sort(key=lambda e: e.timestamp)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._by_id

    def get(self, event_id: str) -> Event | None:
        return self._by_id.get(event_id)

    def parent(self, event: Event) -> Event | None:
        """The parent event, or None for roots and dangling references."""
        if event.parent_id is None:
            return None
        return self._by_id.get(event.parent_id)

    def children(self, event_id: str) -> list[Event]:
        """Direct children, oldest first."""
        return list(self._children.get(event_id, []))

    def roots(self) -> list[Event]:
        """Events with no parent in this trace, oldest first.

        Events caught in a parent_id cycle have no true root; the oldest
        event of each such cycle is appended as a root of its own.
        """
        by_time = sorted(self._by_id.values(), key=lambda e: e.timestamp)
        roots = [e for e in by_time if self.parent(e) is None]
        reached = self._reachable(roots)
        for event in by_time:
            if event.id not in reached:
                roots.append(event)
                reached |= self._reachable([event])
        return roots

    def _reachable(self, starts: list[Event]) -> set[str]:
        reached: set[str] = set()
        stack = list(starts)
        while stack:
            event = stack.pop()
            if event.id in reached:
                continue
            reached.add(event.id)
            stack.extend(self._children.get(event.id, []))
        return reached

    def walk(self) -> Iterator[tuple[int, Event]]:
        """Depth-first (depth, event) pairs over every tree."""
        seen: set[str] = set()
        stack = [(0, root) for root in reversed(self.roots())]
        while stack:
            depth, event = stack.pop()
            # parent_id cycles are possible in hand-edited logs
            if event.id in seen:
                continue
            seen.add(event.id)
            yield depth, event
            for child in reversed(self._children.get(event.id, [])):
                stack.append((depth + 1, child))

    def duration_ms(self, event: Event) -> float | None:
        """Milliseconds from the event to its latest direct child. None if it has none."""
        children = self._children.get(event.id)
        if not children:
            return None
        return (children[-1].timestamp - event.timestamp).total_seconds() * 1000

    def _node(self, event: Event, seen: set[str]) -> dict:
        seen.add(event.id)
        duration = self.duration_ms(event)
        return {
            "id": event.id,
            "type": event.type.value,
            "timestamp": format_timestamp(event.timestamp),
            "severity": event.severity.name,
            "duration_ms": round(duration, 2) if duration is not None else None,
            "children": [
                self._node(child, seen)
                for child in self._children.get(event.id, [])
                if child.id not in seen
            ],
        }

    def to_dict(self) -> dict:
        """Serialise the forest for logging or display."""
        seen: set[str] = set()
        return {
            "events": len(self._by_id),
            "roots": [self._node(root, seen) for root in self.roots()],
        }
