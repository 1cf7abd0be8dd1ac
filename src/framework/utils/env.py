from __future__ import annotations

import os
from typing import Optional


def parse_bool_env(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def get_optional_env(name: str) -> Optional[str]:
    """Return the stripped value of ``name``, treating blank values as unset."""
    value = os.getenv(name)
    if value is None:
        return None
    value = value.strip()
    return value or None
