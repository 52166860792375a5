"""Typed field extraction from loosely shaped provider payloads.

Providers name the same concept differently (``personalSkills`` vs
``keySkills``) and return the same field as a list, a single string or a
mapping depending on the prompt and the model. Every accessor here walks an
ordered list of candidate keys and never raises: unusable data degrades to
the caller's default.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict, List, Mapping, Optional, Sequence


def extract_list(payload: Any, keys: Sequence[str]) -> List[str]:
    """Return the first list-like value found under ``keys``.

    A list value is returned as soon as it is found, even when empty. A
    mapping value contributes its non-empty values. Anything else is skipped
    and the next candidate key is tried.
    """
    if not isinstance(payload, Mapping):
        return []
    for key in keys:
        if key not in payload:
            continue
        value = payload[key]
        if isinstance(value, (list, tuple)):
            return _coerce_items(value)
        if isinstance(value, Mapping):
            return _coerce_items(value.values())
    return []


def extract_list_or_scalar(payload: Any, keys: Sequence[str]) -> List[str]:
    """Like :func:`extract_list`, but a bare string becomes a one-item list."""
    if not isinstance(payload, Mapping):
        return []
    for key in keys:
        if key not in payload:
            continue
        value = payload[key]
        if isinstance(value, (list, tuple)):
            return _coerce_items(value)
        if isinstance(value, Mapping):
            return _coerce_items(value.values())
        if isinstance(value, str) and value.strip():
            return [value]
    return []


def extract_string(payload: Any, keys: Sequence[str], default: str = "") -> str:
    """Return the first non-empty value under ``keys`` as a string.

    Non-string values are serialized instead of discarded so that a summary
    delivered as an object still reaches the caller.
    """
    if not isinstance(payload, Mapping):
        return default
    for key in keys:
        if key not in payload:
            continue
        text = _to_text(payload[key])
        if text:
            return text
    return default


def extract_mapping(payload: Any, keys: Sequence[str]) -> Dict[str, Any]:
    """Return the first mapping found under ``keys``, or an empty dict."""
    if not isinstance(payload, Mapping):
        return {}
    for key in keys:
        value = payload.get(key)
        if isinstance(value, Mapping):
            return dict(value)
    return {}


def extract_int(payload: Any, keys: Sequence[str], default: int) -> int:
    """Return the first numeric value under ``keys`` truncated to an int.

    Numeric strings such as ``"82"`` or ``"82.5"`` are accepted. Booleans,
    NaN/inf and unparseable values fall through to the next key.
    """
    if not isinstance(payload, Mapping):
        return default
    for key in keys:
        if key not in payload:
            continue
        number = _to_number(payload[key])
        if number is not None:
            return number
    return default


def _to_number(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return int(parsed) if math.isfinite(parsed) else None
    return None


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (Mapping, list, tuple)):
        try:
            return json.dumps(value, ensure_ascii=False, default=str)
        except (TypeError, ValueError):
            return str(value)
        except RecursionError:
            return ""
    return str(value)


def _coerce_items(values) -> List[str]:
    items: List[str] = []
    for value in values:
        if value is None:
            continue
        text = _to_text(value)
        if text.strip():
            items.append(text)
    return items
