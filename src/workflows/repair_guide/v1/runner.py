from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from framework.llm.client import LLMClient
from workflows.repair_guide.v1.config import RepairGuideConfig
from workflows.repair_guide.v1.nodes.dispatch import dispatch
from workflows.repair_guide.v1.nodes.llm_parsing import normalize, parse_llm_json
from workflows.repair_guide.v1.schemas.domain import RepairGuide


logger = logging.getLogger(__name__)


async def generate_repair_guide(
    prompt: str,
    model: Optional[str] = None,
    cancellation: Optional[asyncio.Event] = None,
    client: Optional[LLMClient] = None,
    config: Optional[RepairGuideConfig] = None,
) -> RepairGuide:
    config = config or RepairGuideConfig.from_env()
    raw = await dispatch(prompt, model=model, cancellation=cancellation, client=client)
    payload, salvaged = parse_llm_json(raw)
    if salvaged:
        _log_issue(config, "Model reply was not clean JSON (%d chars), salvaged.", len(raw))
        _write_debug_output(config, raw, suffix="salvaged_json")
    return normalize(payload)


def _log_issue(config: RepairGuideConfig, message: str, *args: object) -> None:
    if config.log_verbose:
        logger.warning(message, *args)
    else:
        logger.debug(message, *args)


def _write_debug_output(config: RepairGuideConfig, raw: str, suffix: str) -> None:
    if config.debug_dir is None:
        return
    debug_dir = _ensure_debug_dir(config.debug_dir)
    _write_text(debug_dir / _debug_filename(suffix), raw)


def _ensure_debug_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def _debug_filename(suffix: str) -> str:
    stamp = datetime.now(tz=timezone.utc).strftime("%Y%m%dT%H%M%S%f")
    return f"{stamp}_{suffix}.txt"


def _write_text(path: Path, content: str) -> None:
    path.write_text(content, encoding="utf-8")
