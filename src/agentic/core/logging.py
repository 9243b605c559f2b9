"""
Agentic Logging: colorized or JSON output for the event channels.

Features:
- Color formatter for dev mode (auto-detects TTY)
- JSON structured formatter for production (AGENTIC_LOG_FORMAT=json)
- Per-severity event channels (agentic.events.<level>) that can be
  switched on and off with AGENTIC_LOG_CHANNELS
- Suppresses noisy third-party loggers (httpx, httpcore, openai, anthropic)

Structured log extra fields (set by the event sinks):
    event_id, event_type, parent_id
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from fnmatch import fnmatchcase

import agentic.core.config as config_module
from agentic.core.config import LoggingConfig
from agentic.events.model import Severity

# --- Color codes ---
COLORS = {
    "DEBUG": "\033[36m",  # Cyan
    "INFO": "\033[32m",  # Green
    "WARNING": "\033[33m",  # Yellow
    "ERROR": "\033[31m",  # Red
    "CRITICAL": "\033[1;31m",  # Bold red
    "RESET": "\033[0m",
    "DIM": "\033[2m",
}


class ColorFormatter(logging.Formatter):
    """Colorized log formatter for terminal output."""

    def __init__(self, use_color: bool = True):
        super().__init__(
            fmt="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
            datefmt="%H:%M:%S",
        )
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)

        level_color = COLORS.get(record.levelname, "")
        reset = COLORS["RESET"]
        dim = COLORS["DIM"]

        orig_levelname = record.levelname
        orig_name = record.name

        record.levelname = f"{level_color}{record.levelname}{reset}"
        record.name = f"{dim}{record.name}{reset}"

        result = super().format(record)

        record.levelname = orig_levelname
        record.name = orig_name

        return result


# Structured log fields forwarded from logger.log(..., extra={...})
_STRUCTURED_FIELDS = (
    "event_id",
    "event_type",
    "parent_id",
)


class StructuredFormatter(logging.Formatter):
    """JSON log formatter for production / log aggregation.

    Each log line is a single JSON object. Event sinks attach event_id,
    event_type and parent_id, which land at the top level for querying.

    Enable with: AGENTIC_LOG_FORMAT=json
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        for key in _STRUCTURED_FIELDS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)

        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def _should_use_color(setting: str) -> bool:
    if setting == "true":
        return True
    if setting == "false":
        return False
    # Auto: use color if stdout is a TTY
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def channel_enabled(channel: str, patterns: tuple[str, ...]) -> bool:
    """True if the channel name matches any of the fnmatch patterns."""
    return any(fnmatchcase(channel, p) for p in patterns)


def setup_logging(cfg: LoggingConfig | None = None, stream=None) -> None:
    """Configure logging for the entire application.

    Call this once at startup. The root level follows the event threshold,
    so a dropped event and a silent logger agree with each other.

    Env vars (via LoggingConfig):
        DEBUG_LOG_LEVEL     : DEBUG / INFO / WARNING / ERROR / CRITICAL (default: INFO)
        AGENTIC_LOG_COLOR   : true / false / auto (default: auto, TTY detection)
        AGENTIC_LOG_FORMAT  : text / json (default: text)
        AGENTIC_LOG_CHANNELS: comma-separated channel patterns (default: *)
    """
    cfg = cfg or config_module.config.logging
    level = cfg.threshold.logging_level

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if cfg.format == "json":
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = ColorFormatter(use_color=_should_use_color(cfg.color))

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    root.addHandler(handler)

    for severity in Severity:
        channel = logging.getLogger(severity.channel)
        channel.disabled = not channel_enabled(severity.channel, cfg.channels)

    for noisy_logger in [
        "httpx",
        "httpcore",
        "openai",
        "anthropic",
    ]:
        logging.getLogger(noisy_logger).setLevel(logging.WARNING)

    logger = logging.getLogger("agentic")
    logger.debug(
        "Logging configured (threshold=%s, format=%s)", cfg.threshold.name, cfg.format
    )
