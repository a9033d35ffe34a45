"""Person events, messages and records.

Two flavours are modelled:

* An id-keyed store of persons (:class:`PersonEvent` inside a
  :class:`PersonMessage`, merged into :class:`PersonRecord`).
* A single record patched in place (:class:`NamedPersonEvent` merged into
  :class:`NamedPersonRecord`); ``name`` is a plain field and is always
  overwritten.
"""

from __future__ import annotations

from typing import ClassVar

from pyternary.models._base import PatchModel, RecordModel
from pyternary.models.messages import EntityId, UpsertMessage
from pyternary.models.tristate import ABSENT, TriState


class PersonEvent(PatchModel):
    """Partial update of a person, written as ``{"personId": 1, "firstName": ...}``."""

    _ID_FIELD: ClassVar[str | None] = "person_id"

    person_id: EntityId
    first_name: TriState[str] = ABSENT
    family_name: TriState[str] = ABSENT
    spouse_id: TriState[EntityId] = ABSENT


class PersonMessage(UpsertMessage[PersonEvent]):
    """Envelope for :class:`PersonEvent`; a ``null`` ``personData`` deletes the person."""

    _ID_FIELD: ClassVar[str | None] = "person_id"
    _PAYLOAD_FIELD: ClassVar[str] = "person_data"

    person_id: EntityId
    person_data: TriState[PersonEvent] = ABSENT


class PersonRecord(RecordModel):
    first_name: str = ""
    family_name: str = ""
    spouse_id: EntityId | None = None


class NamedPersonEvent(PatchModel):
    name: str
    family_name: TriState[str] = ABSENT
    spouse_name: TriState[str] = ABSENT


class NamedPersonRecord(RecordModel):
    name: str = ""
    family_name: str = ""
    spouse_name: str = ""
