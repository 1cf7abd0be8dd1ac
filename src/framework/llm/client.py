from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Any, Dict, List, Optional, Protocol

import httpx

from framework.llm.config import GroqConfig
from framework.llm.errors import LLMCancelledError, LLMConfigurationError, LLMProviderError


logger = logging.getLogger(__name__)

EMPTY_COMPLETION = "{}"


class LLMClient(Protocol):
    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        cancellation: Optional[asyncio.Event] = None,
    ) -> str:  # pragma: no cover - interface only
        ...


def build_chat_payload(
    config: GroqConfig,
    messages: List[Dict[str, str]],
    model: Optional[str] = None,
) -> Dict[str, Any]:
    return {
        "model": model or config.model_name,
        "messages": messages,
        "temperature": config.temperature,
        "max_tokens": config.max_output_tokens,
        "response_format": {"type": "json_object"},
    }


def first_choice_content(data: Any) -> str:
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return EMPTY_COMPLETION
    if not isinstance(content, str) or not content.strip():
        return EMPTY_COMPLETION
    return content.strip()


class GroqChatClient:
    def __init__(
        self,
        config: GroqConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not config.api_key:
            raise LLMConfigurationError("Missing GROQ_API_KEY")
        self._config = config
        self._transport = transport

    @property
    def config(self) -> GroqConfig:
        return self._config

    async def complete(
        self,
        messages: List[Dict[str, str]],
        model: Optional[str] = None,
        cancellation: Optional[asyncio.Event] = None,
    ) -> str:
        if cancellation is not None and cancellation.is_set():
            raise LLMCancelledError("Request cancelled before it was sent.")

        payload = build_chat_payload(self._config, messages, model=model)
        headers = {
            "Authorization": f"Bearer {self._config.api_key}",
            "Content-Type": "application/json",
        }
        logger.debug("Requesting chat completion from model %s", payload["model"])

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self._config.timeout_s,
        ) as http:
            response = await _post_until_cancelled(
                http.post(self._config.chat_completions_url, headers=headers, json=payload),
                cancellation,
            )

        if response.is_error:
            logger.warning("Chat completion failed with status %s", response.status_code)
            raise LLMProviderError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError as exc:
            raise LLMProviderError(response.status_code, response.text) from exc
        return first_choice_content(data)


async def _post_until_cancelled(
    request: Any,
    cancellation: Optional[asyncio.Event],
) -> httpx.Response:
    if cancellation is None:
        return await request

    request_task = asyncio.ensure_future(request)
    cancel_task = asyncio.ensure_future(cancellation.wait())
    try:
        done, _ = await asyncio.wait(
            {request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        cancel_task.cancel()
        if not request_task.done():
            request_task.cancel()

    if request_task in done:
        return request_task.result()

    with contextlib.suppress(asyncio.CancelledError):
        await request_task
    raise LLMCancelledError("Request cancelled before completion.")
