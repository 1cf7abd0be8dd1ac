from __future__ import annotations


class LLMError(RuntimeError):
    pass


class LLMConfigurationError(LLMError, ValueError):
    """Raised when a required provider setting (e.g. the API key) is missing."""


class LLMProviderError(LLMError):
    """Raised when the provider answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Groq error: {status_code} {body}")
        self.status_code = status_code
        self.body = body


class LLMCancelledError(LLMError):
    """Raised when the caller's cancellation signal fires before completion."""
