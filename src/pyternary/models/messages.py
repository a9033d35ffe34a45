"""Routing envelope for upsert/delete messages."""

from __future__ import annotations

from typing import Any, ClassVar, Generic, TypeVar

from pydantic import NonNegativeInt

from pyternary.models._base import PatchModel
from pyternary.models.tristate import NULL, TriState

EntityId = NonNegativeInt
"""Identifier of a stored record."""

P = TypeVar("P", bound=PatchModel)


class UpsertMessage(PatchModel, Generic[P]):
    """Envelope routing a patch to the record with a given id.

    Subclasses declare two fields and name them in the class variables:

    * ``_ID_FIELD``: an :data:`EntityId` field.
    * ``_PAYLOAD_FIELD``: a ``TriState[P]`` field defaulting to ``ABSENT``.

    A *Value* payload is an upsert. ``NULL`` (and ``ABSENT``) payloads
    delete the record.
    """

    _ID_FIELD: ClassVar[str | None] = "id"
    _PAYLOAD_FIELD: ClassVar[str] = "data"

    @property
    def payload(self) -> TriState[P]:
        value: TriState[P] = getattr(self, type(self)._PAYLOAD_FIELD)
        return value

    def is_upsert(self) -> bool:
        return self.payload.is_value()

    def is_delete(self) -> bool:
        return not self.payload.is_value()

    def is_empty(self) -> bool:
        """Always ``False``: an envelope creates, merges or deletes a record."""
        return False

    @classmethod
    def upsert(cls, patch: P) -> UpsertMessage[P]:
        """Wrap ``patch`` in an upsert envelope addressed to ``patch.entity_id``."""
        fields: dict[str, Any] = {
            cls._ID_FIELD or "id": patch.entity_id,
            cls._PAYLOAD_FIELD: TriState.of(patch),
        }
        return cls(**fields)

    @classmethod
    def delete(cls, entity_id: int) -> UpsertMessage[P]:
        """Build a delete envelope for ``entity_id``."""
        fields: dict[str, Any] = {
            cls._ID_FIELD or "id": entity_id,
            cls._PAYLOAD_FIELD: NULL,
        }
        return cls(**fields)
