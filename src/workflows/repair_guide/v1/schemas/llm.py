from __future__ import annotations

from typing import Tuple


OVERVIEW_FALLBACK_KEYS: Tuple[str, ...] = ("overview", "summary", "message")
STEP_LIST_FIELDS: Tuple[str, ...] = ("diagnostic_steps", "repair_steps", "tools_needed")
ESTIMATE_FIELDS: Tuple[str, ...] = ("time_estimate", "cost_estimate")
LINK_FIELDS: Tuple[str, ...] = ("parts", "videos")
