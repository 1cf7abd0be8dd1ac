from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
import os

from framework.utils.env import get_optional_env, parse_bool_env


@dataclass(frozen=True)
class RepairGuideConfig:
    debug_dir: Optional[Path]
    log_verbose: bool

    @classmethod
    def from_env(cls) -> "RepairGuideConfig":
        debug_dir_raw = get_optional_env("LLM_DEBUG_DIR")
        debug_dir = Path(debug_dir_raw) if debug_dir_raw else None
        log_verbose = parse_bool_env(os.getenv("LLM_LOG_VERBOSE", "false"))
        return cls(debug_dir=debug_dir, log_verbose=log_verbose)
