"""LLM client abstractions and helpers."""

from .client import GroqChatClient, LLMClient, build_chat_payload, first_choice_content
from .config import GroqConfig
from .errors import LLMCancelledError, LLMConfigurationError, LLMError, LLMProviderError

__all__ = [
    "GroqChatClient",
    "GroqConfig",
    "LLMCancelledError",
    "LLMClient",
    "LLMConfigurationError",
    "LLMError",
    "LLMProviderError",
    "build_chat_payload",
    "first_choice_content",
]
