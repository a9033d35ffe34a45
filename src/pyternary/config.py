"""Runtime configuration for pyternary."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyternary.exceptions import TernaryConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as exc:
        raise TernaryConfigError(f"{name} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class TernaryConfig:
    """Producer/consumer configuration.

    Parameters
    ----------
    trace_messages : bool
        DEBUG-log every message as it is encoded or decoded.
    max_log_string : int
        Strings longer than this are truncated in debug logs.
    queue_maxlen : int or None
        Capacity of a :class:`pyternary.transport.MessageQueue` built from
        this configuration.  ``None`` means unbounded.
    redact_keys : frozenset of str
        Wire keys (matched case-insensitively) whose values are replaced by
        ``"<redacted>"`` in traced messages.
    """

    trace_messages: bool = False
    max_log_string: int = 512
    queue_maxlen: int | None = None
    redact_keys: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if self.max_log_string < 1:
            raise TernaryConfigError("max_log_string must be positive")
        if self.queue_maxlen is not None and self.queue_maxlen < 1:
            raise TernaryConfigError("queue_maxlen must be positive or None")

    @classmethod
    def from_env(cls, **overrides: Any) -> TernaryConfig:
        """Create configuration from environment variables.

        Reads ``TERNARY_TRACE_MESSAGES``, ``TERNARY_MAX_LOG_STRING``,
        ``TERNARY_QUEUE_MAXLEN`` and ``TERNARY_REDACT_KEYS`` (comma-separated).  Explicit keyword arguments override
        environment values.

        Raises
        ------
        TernaryConfigError
            If a numeric variable cannot be parsed.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        if "trace_messages" not in overrides:
            config_kwargs["trace_messages"] = _env_bool(env.get("TERNARY_TRACE_MESSAGES"), False)

        max_log_env = env.get("TERNARY_MAX_LOG_STRING")
        if max_log_env is not None and "max_log_string" not in overrides:
            config_kwargs["max_log_string"] = _env_int("TERNARY_MAX_LOG_STRING", max_log_env)

        maxlen_env = env.get("TERNARY_QUEUE_MAXLEN")
        if maxlen_env is not None and "queue_maxlen" not in overrides:
            config_kwargs["queue_maxlen"] = _env_int("TERNARY_QUEUE_MAXLEN", maxlen_env) or None

        redact_env = env.get("TERNARY_REDACT_KEYS")
        if redact_env is not None and "redact_keys" not in overrides:
            config_kwargs["redact_keys"] = frozenset(key.strip() for key in redact_env.split(",") if key.strip())

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
