"""Custom exception hierarchy for pyternary."""

from __future__ import annotations

from typing import Any


class TernaryError(Exception):
    """Base exception for all pyternary errors."""


class TernaryConfigError(TernaryError):
    """Invalid or missing configuration."""


class TriStateError(TernaryError):
    """A tri-state value was used in a way its variant does not allow.

    Raised e.g. by :meth:`pyternary.models.tristate.TriState.unwrap` on a
    ``Null`` or ``Absent`` value.
    """


class RoutingError(TernaryError):
    """A patch cannot be routed to a record, e.g. it carries no entity id."""


class CodecError(TernaryError):
    """JSON encode/decode failure."""


class DecodeError(CodecError):
    """Message text could not be decoded.

    Covers malformed JSON as well as present fields whose value cannot be
    coerced to the declared type.  ``errors`` carries the structured error
    list reported by pydantic, when available.
    """

    def __init__(
        self,
        message: str,
        *,
        message_type: str = "",
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message_type = message_type
        self.errors = errors or []
        super().__init__(message)


class EncodeError(CodecError):
    """A message (or one of its values) could not be encoded to JSON."""

    def __init__(self, message: str, *, message_type: str = "") -> None:
        self.message_type = message_type
        super().__init__(message)


class TransportError(TernaryError):
    """Queue/transport failure."""


class QueueFullError(TransportError):
    """A bounded message queue rejected a push."""

    def __init__(self, message: str, *, maxlen: int) -> None:
        self.maxlen = maxlen
        super().__init__(message)
