"""Helpers for safe debug logging.

Message payloads can be arbitrarily large.  This module provides a small
utility to truncate and optionally redact them before emitting DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel


def summarize_for_log(
    value: Any,
    *,
    max_string: int = 512,
    redact_keys: frozenset[str] = frozenset(),
    _depth: int = 0,
) -> Any:
    """Return a truncated copy of *value* suitable for debug logs.

    Keys listed in ``redact_keys`` (compared case-insensitively) are
    replaced by ``"<redacted>"``.
    """
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, BaseModel):
        return summarize_for_log(
            value.model_dump(mode="json", by_alias=True),
            max_string=max_string,
            redact_keys=redact_keys,
            _depth=_depth + 1,
        )

    if isinstance(value, Mapping):
        lowered = {key.lower() for key in redact_keys}
        summary: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            if key.lower() in lowered:
                summary[key] = "<redacted>"
            else:
                summary[key] = summarize_for_log(v, max_string=max_string, redact_keys=redact_keys, _depth=_depth + 1)
        return summary

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [summarize_for_log(v, max_string=max_string, redact_keys=redact_keys, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
