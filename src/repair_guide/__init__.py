"""Repair-guide generation: dispatch a prompt, recover JSON, normalize the guide."""

from framework.llm.config import GroqConfig
from framework.llm.errors import (
    LLMCancelledError,
    LLMConfigurationError,
    LLMError,
    LLMProviderError,
)
from workflows.repair_guide.v1.config import RepairGuideConfig
from workflows.repair_guide.v1.nodes.dispatch import dispatch
from workflows.repair_guide.v1.nodes.llm_parsing import extract, normalize
from workflows.repair_guide.v1.runner import generate_repair_guide
from workflows.repair_guide.v1.schemas.domain import RepairGuide

__all__ = [
    "GroqConfig",
    "LLMCancelledError",
    "LLMConfigurationError",
    "LLMError",
    "LLMProviderError",
    "RepairGuide",
    "RepairGuideConfig",
    "dispatch",
    "extract",
    "generate_repair_guide",
    "normalize",
]
