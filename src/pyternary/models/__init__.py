"""Data models: the tri-state wrapper, patch/record bases and the person domain."""

from pyternary.models._base import AbsentPolicy, PatchModel, RecordModel
from pyternary.models.messages import EntityId, UpsertMessage
from pyternary.models.person import (
    NamedPersonEvent,
    NamedPersonRecord,
    PersonEvent,
    PersonMessage,
    PersonRecord,
)
from pyternary.models.tristate import ABSENT, NULL, TriState, is_absent

__all__ = [
    "ABSENT",
    "AbsentPolicy",
    "EntityId",
    "NULL",
    "NamedPersonEvent",
    "NamedPersonRecord",
    "PatchModel",
    "PersonEvent",
    "PersonMessage",
    "PersonRecord",
    "RecordModel",
    "TriState",
    "UpsertMessage",
    "is_absent",
]
