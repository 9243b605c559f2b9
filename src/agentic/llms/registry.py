"""
Chat model registry: look up a chat completion class by provider name.

Adapters register themselves at import time. The provider defaults to
AGENTIC_LLM_PROVIDER from config.
"""

from __future__ import annotations

from typing import Any

import agentic.core.config as config_module
from agentic.llms.base import BaseChatCompletion

_REGISTRY: dict[str, type[BaseChatCompletion]] = {}


def register_chat_completion(provider: str, cls: type[BaseChatCompletion]) -> None:
    _REGISTRY[provider.lower()] = cls


def get_chat_completion(provider: str | None = None, **kwargs: Any) -> BaseChatCompletion:
    provider = (provider or config_module.config.llm.provider).lower()
    cls = _REGISTRY.get(provider)
    if cls is None:
        raise ValueError(f"Unknown LLM provider: {provider}")
    return cls(provider=provider, **kwargs)
