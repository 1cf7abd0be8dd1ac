from pathlib import Path
import logging


logger = logging.getLogger(__name__)


def load_prompt_text(prompt_path: Path) -> str:
    if not prompt_path.exists():
        raise FileNotFoundError(f"Prompt file not found: {prompt_path}")

    try:
        return prompt_path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        logger.warning("Falling back to latin-1 for %s", prompt_path)
        return prompt_path.read_text(encoding="latin-1")
