"""
Agentic errors: the small taxonomy shared by every module.

- ConfigurationError: bad environment at start-up. Fatal, raised once.
- ParseError: a serialized event could not be read back. Recoverable;
  callers reading historical logs usually skip the record.

Dropping an event below the severity threshold is normal filtering,
not an error, and never raises.
"""

from __future__ import annotations


class AgenticError(Exception):
    """Base class for all library errors."""


class ConfigurationError(AgenticError):
    """Invalid process configuration (e.g. an unknown DEBUG_LOG_LEVEL)."""


class ParseError(AgenticError, ValueError):
    """Serialized event text is not a valid event record."""
