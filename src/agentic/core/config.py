"""
Agentic Configuration: single source of truth for all settings.

Reads from environment variables with sensible defaults, once, at import.
Settings are frozen afterwards; changing the event threshold means
restarting the process (or calling reload_config() in tests).

An unknown DEBUG_LOG_LEVEL is fatal: ConfigurationError is raised while
the configuration loads instead of quietly falling back to INFO.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from agentic.core.errors import ConfigurationError
from agentic.events.model import Severity

load_dotenv()

LOG_LEVEL_ENV = "DEBUG_LOG_LEVEL"


def _parse_threshold(raw: str | None) -> Severity:
    if raw is None or not raw.strip():
        return Severity.INFO
    name = raw.strip().upper()
    if name not in Severity.__members__:
        raise ConfigurationError(
            f"Invalid value for {LOG_LEVEL_ENV}: {raw!r} "
            f"(expected one of {', '.join(Severity.__members__)})"
        )
    return Severity[name]


def _split_patterns(raw: str) -> tuple[str, ...]:
    patterns = tuple(p.strip() for p in raw.split(",") if p.strip())
    return patterns or ("*",)


@dataclass(frozen=True)
class LoggingConfig:
    """Event threshold and log output settings."""

    threshold: Severity = Severity.INFO
    format: str = "text"  # text | json
    color: str = "auto"  # true | false | auto
    # fnmatch patterns over channel names, e.g. "agentic.events.error,agentic.events.critical"
    channels: tuple[str, ...] = ("*",)

    @classmethod
    def from_env(cls) -> LoggingConfig:
        return cls(
            threshold=_parse_threshold(os.getenv(LOG_LEVEL_ENV)),
            format=os.getenv("AGENTIC_LOG_FORMAT", "text").lower(),
            color=os.getenv("AGENTIC_LOG_COLOR", "auto").lower(),
            channels=_split_patterns(os.getenv("AGENTIC_LOG_CHANNELS", "*")),
        )


@dataclass(frozen=True)
class LLMConfig:
    """Defaults picked up by chat-completion models that don't name their own."""

    provider: str = "openai"
    model: str = "gpt-4o"

    @classmethod
    def from_env(cls) -> LLMConfig:
        return cls(
            provider=os.getenv("AGENTIC_LLM_PROVIDER", "openai"),
            model=os.getenv("AGENTIC_LLM_MODEL", "gpt-4o"),
        )


@dataclass(frozen=True)
class AgenticConfig:
    """Root configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)

    @classmethod
    def from_env(cls) -> AgenticConfig:
        return cls(
            logging=LoggingConfig.from_env(),
            llm=LLMConfig.from_env(),
        )


# Singleton: import this wherever you need config
config = AgenticConfig.from_env()


def reload_config() -> AgenticConfig:
    """Re-read the environment. Meant for tests and process start-up only."""
    global config
    config = AgenticConfig.from_env()
    return config
