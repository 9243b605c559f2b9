"""Tests for the config system."""

import pytest

import agentic.core.config as config_module
from agentic.core.config import AgenticConfig, LLMConfig, LoggingConfig, reload_config
from agentic.core.errors import ConfigurationError
from agentic.events.model import Severity
from agentic.events.pipeline import EventLogger


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "DEBUG_LOG_LEVEL",
        "AGENTIC_LOG_FORMAT",
        "AGENTIC_LOG_COLOR",
        "AGENTIC_LOG_CHANNELS",
        "AGENTIC_LLM_PROVIDER",
        "AGENTIC_LLM_MODEL",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_logging_defaults():
    cfg = LoggingConfig()
    assert cfg.threshold == Severity.INFO
    assert cfg.format == "text"
    assert cfg.color == "auto"
    assert cfg.channels == ("*",)


def test_threshold_defaults_to_info_when_unset(clean_env):
    assert LoggingConfig.from_env().threshold == Severity.INFO


def test_empty_override_is_treated_as_unset(clean_env):
    clean_env.setenv("DEBUG_LOG_LEVEL", "  ")
    assert LoggingConfig.from_env().threshold == Severity.INFO


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("DEBUG", Severity.DEBUG),
        ("warning", Severity.WARNING),
        ("Error", Severity.ERROR),
        ("critical", Severity.CRITICAL),
    ],
)
def test_threshold_override_is_case_insensitive(clean_env, raw, expected):
    clean_env.setenv("DEBUG_LOG_LEVEL", raw)
    assert LoggingConfig.from_env().threshold == expected


def test_unrecognized_override_fails(clean_env):
    clean_env.setenv("DEBUG_LOG_LEVEL", "VERBOSE")
    with pytest.raises(ConfigurationError) as exc_info:
        LoggingConfig.from_env()
    assert "VERBOSE" in str(exc_info.value)


def test_numeric_override_is_not_a_level_name(clean_env):
    clean_env.setenv("DEBUG_LOG_LEVEL", "2")
    with pytest.raises(ConfigurationError):
        LoggingConfig.from_env()


def test_unrecognized_override_fails_whole_config(clean_env):
    clean_env.setenv("DEBUG_LOG_LEVEL", "loud")
    with pytest.raises(ConfigurationError):
        AgenticConfig.from_env()


def test_log_output_settings_from_env(clean_env):
    clean_env.setenv("AGENTIC_LOG_FORMAT", "JSON")
    clean_env.setenv("AGENTIC_LOG_COLOR", "false")
    clean_env.setenv("AGENTIC_LOG_CHANNELS", "agentic.events.error, agentic.events.critical,")
    cfg = LoggingConfig.from_env()
    assert cfg.format == "json"
    assert cfg.color == "false"
    assert cfg.channels == ("agentic.events.error", "agentic.events.critical")


def test_blank_channel_list_enables_everything(clean_env):
    clean_env.setenv("AGENTIC_LOG_CHANNELS", " , ")
    assert LoggingConfig.from_env().channels == ("*",)


def test_llm_defaults_and_env(clean_env):
    assert LLMConfig() == LLMConfig(provider="openai", model="gpt-4o")
    clean_env.setenv("AGENTIC_LLM_PROVIDER", "anthropic")
    clean_env.setenv("AGENTIC_LLM_MODEL", "claude-instant-1")
    cfg = LLMConfig.from_env()
    assert cfg.provider == "anthropic"
    assert cfg.model == "claude-instant-1"


def test_config_frozen():
    cfg = LoggingConfig()
    with pytest.raises(Exception):
        cfg.threshold = Severity.DEBUG  # type: ignore


def test_agentic_config_composition():
    cfg = AgenticConfig()
    assert cfg.logging.threshold == Severity.INFO
    assert cfg.llm.provider == "openai"


def test_reload_config(clean_env):
    previous = config_module.config
    clean_env.setenv("DEBUG_LOG_LEVEL", "error")
    try:
        reloaded = reload_config()
        assert config_module.config is reloaded
        assert reloaded.logging.threshold == Severity.ERROR
    finally:
        config_module.config = previous


def test_pipeline_from_config():
    pipeline = EventLogger.from_config(LoggingConfig(threshold=Severity.CRITICAL))
    assert pipeline.threshold == Severity.CRITICAL
    assert not pipeline.should_emit(Severity.ERROR)
