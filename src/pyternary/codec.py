"""JSON text codec for patch messages.

Thin wrapper over pydantic's JSON validation/serialization that applies the
absent-field policy and maps failures onto :mod:`pyternary.exceptions`.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, TypeVar

from pydantic import ConfigDict, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from pyternary.exceptions import DecodeError, EncodeError
from pyternary.models._base import ABSENT_POLICY_CONTEXT_KEY, AbsentPolicy, PatchModel
from pyternary.models.tristate import TriState

_logger = logging.getLogger(__name__)

M = TypeVar("M", bound=PatchModel)


def encode(message: PatchModel, *, policy: AbsentPolicy = AbsentPolicy.OMIT) -> str:
    """Encode ``message`` as a JSON object with camelCase keys.

    Under :attr:`AbsentPolicy.OMIT` every ``ABSENT`` field, at any nesting
    depth, is left out of the output.

    Raises
    ------
    EncodeError
        If a contained value cannot be serialized.
    """
    try:
        return message.model_dump_json(by_alias=True, context={ABSENT_POLICY_CONTEXT_KEY: policy})
    except PydanticSerializationError as exc:
        raise EncodeError(
            f"Failed to encode {type(message).__name__}: {exc}",
            message_type=type(message).__name__,
        ) from exc


def decode(text: str | bytes, message_type: type[M]) -> M:
    """Decode JSON ``text`` into ``message_type``.

    Missing tri-state keys decode as ``ABSENT``, ``null`` as ``NULL``.

    Raises
    ------
    DecodeError
        On malformed JSON or a present value that does not fit its field type.
    """
    try:
        return message_type.model_validate_json(text)
    except ValidationError as exc:
        _logger.debug("Failed to decode %s", message_type.__name__, exc_info=True)
        raise DecodeError(
            f"Failed to decode {message_type.__name__}: {exc.error_count()} error(s)",
            message_type=message_type.__name__,
            errors=[dict(error) for error in exc.errors(include_url=False, include_context=False)],
        ) from exc


@functools.lru_cache(maxsize=64)
def _tristate_adapter(item_type: Any) -> TypeAdapter[TriState[Any]]:
    return TypeAdapter(TriState[item_type], config=ConfigDict(strict=True))  # type: ignore[valid-type]


def dump_tristate(value: TriState[Any], item_type: Any) -> str:
    """Point-encode a single tri-state value.

    ``NULL`` and ``ABSENT`` both encode as ``null``; only an enclosing
    :class:`~pyternary.models._base.PatchModel` can omit an absent key.
    """
    try:
        return _tristate_adapter(item_type).dump_json(value).decode()
    except PydanticSerializationError as exc:
        raise EncodeError(f"Failed to encode {value!r}: {exc}") from exc


def load_tristate(text: str | bytes, item_type: Any) -> TriState[Any]:
    """Point-decode a single tri-state value; ``null`` gives ``NULL``, never ``ABSENT``."""
    try:
        return _tristate_adapter(item_type).validate_json(text)
    except ValidationError as exc:
        raise DecodeError(
            f"Failed to decode TriState value: {exc.error_count()} error(s)",
            errors=[dict(error) for error in exc.errors(include_url=False, include_context=False)],
        ) from exc
