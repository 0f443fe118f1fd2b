"""
Hand-built JSON fragments for the classic envelope.
escape_json is total: every value gets exactly one encoding, unknown objects fall back to
their quoted str(). Non-ASCII text is emitted as-is.
"""
from __future__ import annotations

import json
import math
import re
from collections.abc import Mapping
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

_CALLBACK_DISALLOWED = re.compile(r"[^0-9a-zA-Z_$.]")


def escape_string(value: str) -> str:
    """Quote and escape a string (quote, backslash, control chars); keep non-ASCII."""
    return json.dumps(value, ensure_ascii=False)


def format_date(value: date) -> str:
    """yyyy-MM-ddTHH:mm:ss.SSS plus offset ('Z' for UTC). Naive values are taken as UTC."""
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}.{value.microsecond // 1000:03d}"
    )
    minutes = int(value.utcoffset().total_seconds() // 60)
    if minutes == 0:
        return text + "Z"
    sign = "+" if minutes > 0 else "-"
    hours, minutes = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def _escape_number(value: Any) -> str:
    # Base-class reprs: subclasses (IntEnum, float Enum mixins) may override __str__/__repr__
    if isinstance(value, int):
        return int.__repr__(value)
    # NaN/Infinity have no JSON literal
    if isinstance(value, float):
        return float.__repr__(value) if math.isfinite(value) else "null"
    return Decimal.__str__(value) if value.is_finite() else "null"


def escape_json(value: Any) -> str:
    """Encode one value as a JSON fragment. Never raises."""
    if value is None:
        return "null"
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, Decimal)):
        return _escape_number(value)
    if isinstance(value, str):
        return escape_string(value)
    if isinstance(value, (datetime, date)):
        return escape_string(format_date(value))
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(escape_json(v) for v in value) + "]"
    if isinstance(value, Mapping):
        return "{" + ",".join(f"{escape_string(_as_text(k))}:{escape_json(v)}" for k, v in value.items()) + "}"
    return escape_string(_as_text(value))


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception:
        return object.__repr__(value)


def escape_callback_name(callback_name: str) -> str:
    """Drop every char outside [0-9A-Za-z_$.] and prefix /**/ so the callback cannot inject script."""
    return "/**/" + _CALLBACK_DISALLOWED.sub("", callback_name or "")
