from __future__ import annotations

import json
import re
from typing import Any, Optional


_BRACKETED_SPAN = re.compile(r"([\[{][\s\S]*[\]}])")


def _reject_constant(token: str) -> Any:
    raise ValueError(f"Invalid JSON constant: {token}")


def parse_json_strict(text: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return False, None


def find_bracketed_span(text: str) -> Optional[str]:
    """Return the widest span opening with ``{``/``[`` and closing with ``}``/``]``.

    The match is greedy: it runs from the first opening bracket to the last
    closing bracket in the text, so several fragments are captured as one.
    """
    match = _BRACKETED_SPAN.search(text)
    if match:
        return match.group(1)
    return None
