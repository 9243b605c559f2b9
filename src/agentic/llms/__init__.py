"""
Agentic LLMs: the chat-completion contract provider adapters implement.
"""

from agentic.llms.base import BaseChatCompletion
from agentic.llms.contracts import ChatCompletionResponse, ChatMessage
from agentic.llms.registry import get_chat_completion, register_chat_completion

__all__ = [
    "BaseChatCompletion",
    "ChatCompletionResponse",
    "ChatMessage",
    "get_chat_completion",
    "register_chat_completion",
]
