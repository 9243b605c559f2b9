"""
Chat completion base class: the one boundary every provider adapter honors.

Adapters implement _create_chat_completion() and nothing else. call()
wraps it with the two events that trace a model invocation:

    LLM_CALL        logged right before the provider is hit
    LLM_COMPLETION  logged right after, parent_id = the LLM_CALL id

A failed call still logs its completion, at ERROR, and then re-raises.
Retries, timeouts and input/output validation are the adapter's business.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Iterable

import agentic.core.config as config_module
from agentic.events.model import Event, llm_call_event, llm_completion_event
from agentic.events.pipeline import EventLogger
from agentic.llms.contracts import ChatCompletionResponse, ChatMessage


class BaseChatCompletion(ABC):
    """Language model provider interface.

    Subclasses that add constructor arguments should override clone().
    """

    def __init__(
        self,
        provider: str | None = None,
        model: str | None = None,
        model_params: dict[str, Any] | None = None,
        messages: Iterable[ChatMessage] | None = None,
        event_logger: EventLogger | None = None,
    ) -> None:
        llm = config_module.config.llm
        self._provider = provider or llm.provider
        self._model = model or llm.model
        self._model_params = dict(model_params or {})
        self._messages = list(messages or [])
        # None means "the process-wide pipeline at call time"
        self._event_logger = event_logger

    @property
    def provider(self) -> str:
        return self._provider

    @property
    def model(self) -> str:
        return self._model

    @property
    def model_params(self) -> dict[str, Any]:
        return dict(self._model_params)

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    @property
    def name_for_model(self) -> str:
        """Name the model can use to refer to this task (e.g. as a tool)."""
        name = self.__class__.__name__
        return name[0].lower() + name[1:]

    @abstractmethod
    async def _create_chat_completion(
        self, messages: list[ChatMessage]
    ) -> ChatCompletionResponse:
        """Send the messages to the provider and return its reply."""
        ...

    async def call(
        self,
        messages: Iterable[ChatMessage] | None = None,
        parent_id: str | None = None,
    ) -> ChatCompletionResponse:
        """Run one completion, logging the call and its completion events.

        parent_id links the LLM_CALL event under an enclosing event (for
        example the call of an outer task).
        """
        all_messages = self._messages + list(messages or [])
        call_event = llm_call_event(
            self._provider,
            self._model,
            [m.to_dict() for m in all_messages],
            parent_id=parent_id,
            params=self._model_params,
        )
        self._log(call_event)

        start = time.monotonic()
        try:
            result = await self._create_chat_completion(all_messages)
        except Exception as e:
            self._log(
                llm_completion_event(
                    call_event,
                    error=str(e) or e.__class__.__name__,
                    duration_ms=round((time.monotonic() - start) * 1000, 2),
                )
            )
            raise

        self._log(
            llm_completion_event(
                call_event,
                content=result.message.content,
                duration_ms=round((time.monotonic() - start) * 1000, 2),
            )
        )
        return result

    def _log(self, event: Event) -> None:
        event.log(self._event_logger)

    def clone(self) -> BaseChatCompletion:
        return self.__class__(
            provider=self._provider,
            model=self._model,
            model_params=dict(self._model_params),
            messages=list(self._messages),
            event_logger=self._event_logger,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(provider={self._provider!r}, model={self._model!r})"
