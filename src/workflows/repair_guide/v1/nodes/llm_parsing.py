from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, List, Tuple

from pydantic import BaseModel

from framework.llm.json_utils import find_bracketed_span, parse_json_strict
from workflows.repair_guide.v1.schemas.domain import NO_OVERVIEW, NOT_AVAILABLE, RepairGuide
from workflows.repair_guide.v1.schemas.llm import (
    ESTIMATE_FIELDS,
    LINK_FIELDS,
    OVERVIEW_FALLBACK_KEYS,
    STEP_LIST_FIELDS,
)


def parse_llm_json(text: str) -> Tuple[Any, bool]:
    """Recover a JSON value from a model reply.

    Returns the decoded value and whether salvage was needed. Text that
    cannot be decoded at all comes back as ``{"message": <trimmed text>}``.
    """
    raw = text.strip()
    ok, payload = parse_json_strict(raw)
    if ok:
        return payload, False

    candidate = find_bracketed_span(raw)
    if candidate is not None:
        ok, payload = parse_json_strict(candidate)
        if ok:
            return payload, True

    return {"message": raw}, True


def extract(text: str) -> Any:
    payload, _salvaged = parse_llm_json(text)
    return payload


def normalize(value: Any) -> RepairGuide:
    if isinstance(value, BaseModel):
        value = value.model_dump()
    payload = value if isinstance(value, dict) else {}
    return RepairGuide(
        overview=_first_text(payload, OVERVIEW_FALLBACK_KEYS) or NO_OVERVIEW,
        **{field: _text_list(payload.get(field)) for field in STEP_LIST_FIELDS},
        **{field: _text_or_default(payload.get(field)) for field in ESTIMATE_FIELDS},
        **{field: [] for field in LINK_FIELDS},
    )


def _first_text(payload: dict, keys: Tuple[str, ...]) -> str | None:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value
    return None


def _text_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [_stringify(item) for item in value]


def _text_or_default(value: Any) -> str:
    if isinstance(value, str):
        return value
    return NOT_AVAILABLE


def _stringify(value: Any) -> str:
    # Render scalars the way they appear in JSON so "true"/"null"/"2" survive.
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    return json.dumps(value, ensure_ascii=False, default=str)


def _format_float(value: float) -> str:
    # JavaScript number formatting: plain digits in [1e-6, 1e21), otherwise
    # shortest exponent form without zero padding ("1e+21", "1e-7").
    if value != value:
        return "NaN"
    if value in (float("inf"), float("-inf")):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    magnitude = abs(value)
    if 1e-6 <= magnitude < 1e21:
        if value.is_integer():
            return str(int(value))
        return format(Decimal(repr(value)), "f")
    mantissa, _, exponent = repr(value).partition("e")
    sign = "-" if exponent.startswith("-") else "+"
    return f"{mantissa}e{sign}{int(exponent.lstrip('+-'))}"
