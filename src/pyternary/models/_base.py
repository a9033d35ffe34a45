"""Base models for partial-update messages and stored records.

Every patch model inherits from :class:`PatchModel` which provides:

* ``alias_generator=to_camel`` so snake_case fields are written and read
  as camelCase JSON keys.
* Strict validation: a present value must already have its declared type
  (no ``"2"``, ``true`` or ``2.0`` for an integer field).
* The field encoding policy for :class:`~pyternary.models.tristate.TriState`
  fields: under :attr:`AbsentPolicy.OMIT` (the default) a field whose value
  is ``ABSENT`` is left out of the serialized object entirely, while
  ``NULL`` and values are emitted as ``null`` and the encoded value.

Every stored aggregate inherits from :class:`RecordModel`, whose fields are
plain (non tri-state) and must all declare a default: that default is the
field's *empty* value, used when a patch clears it.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, ClassVar, get_origin

from pydantic import (
    BaseModel,
    ConfigDict,
    SerializationInfo,
    SerializerFunctionWrapHandler,
    model_serializer,
)
from pydantic.alias_generators import to_camel

from pyternary.exceptions import RoutingError
from pyternary.models.tristate import TriState, is_absent

ABSENT_POLICY_CONTEXT_KEY = "absent_policy"


class AbsentPolicy(StrEnum):
    """How ``ABSENT`` tri-state fields are written."""

    OMIT = "omit"
    """Skip the key. Required for ``ABSENT`` to survive a round trip."""

    FORCE_NULL = "force_null"
    """Emit ``null`` (full-snapshot mode). ``ABSENT`` decodes back as ``NULL``."""


def policy_from_context(context: Any) -> AbsentPolicy:
    """Read the absent policy from a pydantic serialization context."""
    if isinstance(context, dict):
        value = context.get(ABSENT_POLICY_CONTEXT_KEY)
        if value is not None:
            return AbsentPolicy(value)
    return AbsentPolicy.OMIT


class PatchModel(BaseModel):
    """Base for partial-update messages carrying tri-state fields."""

    _ID_FIELD: ClassVar[str | None] = None
    """Name of the field holding the entity id, if the patch carries one."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        strict=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    @property
    def entity_id(self) -> int:
        field_name = type(self)._ID_FIELD
        if field_name is None:
            raise RoutingError(f"{type(self).__name__} does not carry an entity id")
        value: int = getattr(self, field_name)
        return value

    @classmethod
    def tristate_fields(cls) -> tuple[str, ...]:
        """Names of the fields annotated as ``TriState[...]``."""
        names: list[str] = []
        for name, field in cls.model_fields.items():
            annotation = field.annotation
            origin = get_origin(annotation) or annotation
            if isinstance(origin, type) and issubclass(origin, TriState):
                names.append(name)
        return tuple(names)

    def absent_fields(self) -> tuple[str, ...]:
        """Names of the fields currently holding ``ABSENT``."""
        return tuple(name for name in type(self).model_fields if is_absent(getattr(self, name)))

    @classmethod
    def plain_fields(cls) -> tuple[str, ...]:
        """Names of the non tri-state fields, excluding the entity id."""
        tristate = set(cls.tristate_fields())
        return tuple(name for name in cls.model_fields if name not in tristate and name != cls._ID_FIELD)

    def is_empty(self) -> bool:
        """Return ``True`` when merging the patch leaves any record unchanged.

        That requires every tri-state field to be ``ABSENT`` and no plain
        field (plain fields always overwrite).
        """
        if self.plain_fields():
            return False
        absent = set(self.absent_fields())
        return all(name in absent for name in self.tristate_fields())

    @model_serializer(mode="wrap")
    def _apply_absent_policy(self, handler: SerializerFunctionWrapHandler, info: SerializationInfo) -> dict[str, Any]:
        data: dict[str, Any] = handler(self)
        if policy_from_context(info.context) is AbsentPolicy.FORCE_NULL:
            return data
        fields = type(self).model_fields
        for name in self.absent_fields():
            field = fields[name]
            # The handler emitted either the field name or its alias.
            for key in {name, field.serialization_alias or field.alias or name}:
                data.pop(key, None)
        return data


class RecordModel(BaseModel):
    """Base for stored aggregate records."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        missing = [name for name, field in cls.model_fields.items() if field.is_required()]
        if missing:
            raise TypeError(f"{cls.__name__} fields need a default empty value: {', '.join(missing)}")

    @classmethod
    def empty_value(cls, field_name: str) -> Any:
        """Return the declared empty value (the default) of ``field_name``."""
        return cls.model_fields[field_name].get_default(call_default_factory=True)

    @classmethod
    def empty(cls) -> RecordModel:
        """Return a record with every field at its empty value."""
        return cls()
