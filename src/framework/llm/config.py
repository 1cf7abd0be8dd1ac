from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from framework.llm.errors import LLMConfigurationError
from framework.utils.env import get_optional_env


DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.3-70b-versatile"
DEFAULT_TEMPERATURE = 0.8
DEFAULT_MAX_OUTPUT_TOKENS = 8000


@dataclass(frozen=True)
class GroqConfig:
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    model_name: str = DEFAULT_MODEL
    temperature: float = DEFAULT_TEMPERATURE
    max_output_tokens: int = DEFAULT_MAX_OUTPUT_TOKENS
    timeout_s: Optional[float] = None

    @property
    def chat_completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    @classmethod
    def from_env(cls) -> "GroqConfig":
        api_key = get_optional_env("GROQ_API_KEY")
        if not api_key:
            raise LLMConfigurationError("Missing GROQ_API_KEY")

        base_url = get_optional_env("GROQ_BASE_URL") or DEFAULT_BASE_URL
        model_name = get_optional_env("GROQ_MODEL_NAME") or DEFAULT_MODEL
        temperature = float(get_optional_env("GROQ_TEMPERATURE") or DEFAULT_TEMPERATURE)
        max_output_tokens = int(
            get_optional_env("GROQ_MAX_OUTPUT_TOKENS") or DEFAULT_MAX_OUTPUT_TOKENS
        )
        timeout_raw = get_optional_env("GROQ_TIMEOUT_S")
        timeout_s = float(timeout_raw) if timeout_raw else None

        return cls(
            api_key=api_key,
            base_url=base_url,
            model_name=model_name,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            timeout_s=timeout_s,
        )
