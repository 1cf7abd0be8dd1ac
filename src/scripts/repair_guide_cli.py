from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

import httpx

from framework.io.prompts import load_prompt_text
from framework.llm.errors import LLMCancelledError, LLMError
from framework.logging_utils import configure_logging
from workflows.repair_guide.v1.runner import generate_repair_guide
from workflows.repair_guide.v1.schemas.domain import RepairGuide


logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate a beginner-friendly car repair guide.")
    parser.add_argument("prompt", nargs="?", default=None, help="Description of the vehicle problem.")
    parser.add_argument("--prompt-file", default=None, help="Read the problem description from a file.")
    parser.add_argument("--model", default=None, help="Provider model name.")
    parser.add_argument("--timeout", type=float, default=None, help="Cancel the request after N seconds.")
    parser.add_argument("--output", default=None, help="Write the guide JSON to this path.")
    parser.add_argument("--log-level", default="INFO", help="Logging level.")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    if args.prompt_file:
        prompt = load_prompt_text(Path(args.prompt_file))
    elif args.prompt is not None:
        prompt = args.prompt
    else:
        parser.error("a prompt or --prompt-file is required")

    try:
        guide = asyncio.run(_generate(prompt, args.model, args.timeout))
    except LLMCancelledError:
        logger.error("Repair guide request timed out after %ss.", args.timeout)
        return 1
    except (LLMError, httpx.TransportError) as exc:
        logger.error("Repair guide generation failed: %s", exc)
        return 1

    _write_guide(guide, Path(args.output) if args.output else None)
    return 0


async def _generate(prompt: str, model: Optional[str], timeout: Optional[float]) -> RepairGuide:
    cancellation = asyncio.Event()
    if timeout is not None:
        asyncio.get_running_loop().call_later(timeout, cancellation.set)
    return await generate_repair_guide(prompt, model=model, cancellation=cancellation)


def _write_guide(guide: RepairGuide, path: Optional[Path]) -> None:
    payload = json.dumps(guide.model_dump(mode="json"), indent=2, ensure_ascii=False)
    if path is None:
        sys.stdout.write(payload + "\n")
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")
    logger.info("Wrote repair guide to %s", path)


if __name__ == "__main__":
    raise SystemExit(main())
