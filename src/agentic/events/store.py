"""
Event log files: one serialized event per line (JSON lines).

The library keeps no history of its own; callers that want one append
events to a file and read them back later, possibly from another process.
Old logs may hold records that no longer parse. By default those lines
are skipped with a warning; pass strict=True to fail on the first one.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Iterable, Iterator

from agentic.core.errors import ParseError
from agentic.events.model import Event

logger = logging.getLogger(__name__)


def dump_events(events: Iterable[Event], fp: IO[str]) -> int:
    """Write events to an open text stream. Returns the number written."""
    count = 0
    for event in events:
        fp.write(event.to_json())
        fp.write("\n")
        count += 1
    return count


def write_events(path: str | Path, events: Iterable[Event], append: bool = True) -> int:
    mode = "a" if append else "w"
    with open(path, mode, encoding="utf-8") as fp:
        return dump_events(events, fp)


def iter_events(lines: Iterable[str], strict: bool = False) -> Iterator[Event]:
    """Parse events from lines of text, skipping blanks.

    Lenient mode logs and skips malformed lines; strict mode raises
    ParseError naming the line number.
    """
    for lineno, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            yield Event.from_json(line)
        except ParseError as e:
            if strict:
                raise ParseError(f"line {lineno}: {e}") from e
            logger.warning("Skipping unreadable event on line %d: %s", lineno, e)


def read_events(path: str | Path, strict: bool = False) -> list[Event]:
    with open(path, encoding="utf-8") as fp:
        return list(iter_events(fp, strict=strict))
