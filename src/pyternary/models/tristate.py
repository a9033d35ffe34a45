"""Tri-state optional values for partial-update messages.

A field of type ``TriState[T]`` takes exactly one of three states:

* ``TriState.of(v)`` (*Value*): set the stored field to ``v``.
* ``NULL``: clear the stored field (JSON ``null``).
* ``ABSENT``: leave the stored field unchanged (JSON key omitted).
  This is also the default.

Wire contract
-------------
The point encoding of a tri-state value does **not** distinguish ``NULL``
from ``ABSENT``: both serialize as ``null``.  Omitting absent keys is the
job of the enclosing model's field encoding policy
(see :class:`pyternary.models._base.PatchModel`).  Decoding is the inverse:
``null`` yields ``NULL``, a value yields ``TriState.of(value)`` and a
missing key falls back to the field default, ``ABSENT``.

The contained type brings its own validator and serializer through
pydantic's schema generation; ``TriState`` only wraps them.
"""

from __future__ import annotations

import enum
import functools
from collections.abc import Callable
from typing import Any, Generic, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from pyternary.exceptions import TriStateError

T = TypeVar("T")
U = TypeVar("U")


class _Kind(enum.IntEnum):
    # Declaration order doubles as sort order: Value < Null < Absent.
    VALUE = 0
    NULL = 1
    ABSENT = 2


@functools.total_ordering
class TriState(Generic[T]):
    """Immutable value / null / absent wrapper."""

    __slots__ = ("_kind", "_payload")

    _kind: _Kind
    _payload: Any

    def __init__(self, kind: _Kind, payload: Any = None) -> None:
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_payload", payload)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def of(cls, value: T) -> TriState[T]:
        """Return the *Value* variant holding ``value``."""
        if value is None:
            raise TriStateError("TriState.of() requires a value; use TriState.null() to clear a field")
        return cls(_Kind.VALUE, value)

    @staticmethod
    def null() -> TriState[Any]:
        return NULL

    @staticmethod
    def absent() -> TriState[Any]:
        return ABSENT

    @staticmethod
    def default() -> TriState[Any]:
        """The zero value of the type: ``ABSENT``."""
        return ABSENT

    @classmethod
    def from_optional(cls, value: T | None) -> TriState[T]:
        """Map a two-state optional: ``None`` -> ``NULL``, otherwise *Value*.

        Never produces ``ABSENT``.
        """
        if value is None:
            return NULL
        return cls(_Kind.VALUE, value)

    # ------------------------------------------------------------------
    # Predicates and accessors
    # ------------------------------------------------------------------

    def is_value(self) -> bool:
        return self._kind is _Kind.VALUE

    def is_null(self) -> bool:
        return self._kind is _Kind.NULL

    def is_absent(self) -> bool:
        return self._kind is _Kind.ABSENT

    def unwrap(self) -> T:
        """Return the contained value, raising :class:`TriStateError` for ``NULL``/``ABSENT``."""
        if self._kind is not _Kind.VALUE:
            raise TriStateError(f"cannot unwrap {self!r}")
        return self._payload

    def to_optional(self) -> T | None:
        """Collapse to a two-state optional; ``NULL`` and ``ABSENT`` both give ``None``."""
        return self._payload if self._kind is _Kind.VALUE else None

    def resolve(self, current: U, empty: U) -> T | U:
        """Reduce this patch against a stored field.

        ``Value(v) -> v``, ``NULL -> empty``, ``ABSENT -> current``.
        """
        if self._kind is _Kind.VALUE:
            return self._payload
        if self._kind is _Kind.NULL:
            return empty
        return current

    def map(self, func: Callable[[T], U]) -> TriState[U]:
        """Apply ``func`` to a contained value; ``NULL``/``ABSENT`` pass through."""
        if self._kind is _Kind.VALUE:
            return TriState.of(func(self._payload))
        return self  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Dunder protocol
    # ------------------------------------------------------------------

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __copy__(self) -> TriState[T]:
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> TriState[T]:
        return self

    def __reduce__(self) -> tuple[Any, ...]:
        return (TriState, (self._kind, self._payload))

    def __repr__(self) -> str:
        if self._kind is _Kind.VALUE:
            return f"TriState.of({self._payload!r})"
        return self._kind.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TriState):
            return NotImplemented
        return self._kind is other._kind and self._payload == other._payload

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TriState):
            return NotImplemented
        if self._kind is not other._kind:
            return self._kind < other._kind
        if self._kind is _Kind.VALUE:
            return bool(self._payload < other._payload)
        return False

    def __hash__(self) -> int:
        return hash((self._kind, self._payload))

    # ------------------------------------------------------------------
    # Pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        args = get_args(source_type)
        item_schema = handler.generate_schema(args[0]) if args else core_schema.any_schema()
        optional_schema = core_schema.nullable_schema(item_schema)
        return core_schema.no_info_wrap_validator_function(
            cls._validate,
            optional_schema,
            serialization=core_schema.wrap_serializer_function_ser_schema(
                cls._serialize,
                schema=optional_schema,
                info_arg=False,
            ),
        )

    @classmethod
    def _validate(cls, value: Any, handler: core_schema.ValidatorFunctionWrapHandler) -> TriState[Any]:
        if isinstance(value, TriState):
            if value.is_value():
                return cls(_Kind.VALUE, handler(value._payload))
            return value
        return cls.from_optional(handler(value))

    @staticmethod
    def _serialize(value: Any, handler: core_schema.SerializerFunctionWrapHandler) -> Any:
        if isinstance(value, TriState):
            return handler(value.to_optional())
        return handler(value)


NULL: TriState[Any] = TriState(_Kind.NULL)
ABSENT: TriState[Any] = TriState(_Kind.ABSENT)


def is_absent(value: Any) -> bool:
    """Return ``True`` when ``value`` is the ``ABSENT`` tri-state."""
    return isinstance(value, TriState) and value.is_absent()
