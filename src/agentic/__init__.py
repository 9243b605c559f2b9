"""
Agentic: orchestration of LLM provider calls, traced with structured events.
"""

from agentic.core.errors import AgenticError, ConfigurationError, ParseError
from agentic.events import (
    CausalTrace,
    Event,
    EventLogger,
    EventType,
    Severity,
    get_event_logger,
    set_event_logger,
)
from agentic.llms import BaseChatCompletion, ChatCompletionResponse, ChatMessage

__version__ = "0.1.0"

__all__ = [
    "AgenticError",
    "ConfigurationError",
    "ParseError",
    "CausalTrace",
    "Event",
    "EventLogger",
    "EventType",
    "Severity",
    "get_event_logger",
    "set_event_logger",
    "BaseChatCompletion",
    "ChatCompletionResponse",
    "ChatMessage",
]
