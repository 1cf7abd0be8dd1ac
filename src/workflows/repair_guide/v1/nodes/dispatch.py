from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from framework.llm.client import GroqChatClient, LLMClient
from framework.llm.config import GroqConfig
from workflows.repair_guide.v1.prompt_templates.system_prompt import SYSTEM_PROMPT


logger = logging.getLogger(__name__)


def build_messages(prompt: str) -> List[Dict[str, str]]:
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


async def dispatch(
    prompt: str,
    model: Optional[str] = None,
    cancellation: Optional[asyncio.Event] = None,
    client: Optional[LLMClient] = None,
) -> str:
    """Send a repair request to the provider and return the raw reply text.

    ``model`` falls back to the configured default model. Without an explicit
    ``client`` the Groq client is built from the environment, so a missing
    ``GROQ_API_KEY`` fails here before any request is made.
    Empty prompts are forwarded unchanged.
    """
    if client is None:
        client = GroqChatClient(GroqConfig.from_env())
    return await client.complete(build_messages(prompt), model=model, cancellation=cancellation)
