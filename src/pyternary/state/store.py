"""Deterministic in-memory record store.

This is the only component allowed to apply upsert/delete messages to
stored records.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pyternary.models._base import RecordModel
from pyternary.models.messages import UpsertMessage
from pyternary.state.merge import create_record, merge_record

_logger = logging.getLogger(__name__)

R = TypeVar("R", bound=RecordModel)


class ApplyResult(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    NOOP = "noop"


class RecordStore(Generic[R]):
    """In-memory store of records keyed by entity id.

    This store is deterministic: given the same ordered sequence of
    messages, it will produce the same records.  Messages must be applied
    in arrival order since ``ABSENT`` fields inherit whatever earlier
    messages left behind.  The store is not thread-safe; a single consumer
    owns it.
    """

    def __init__(self, record_type: type[R]) -> None:
        self._record_type = record_type
        self._records: dict[int, R] = {}

    @property
    def record_type(self) -> type[R]:
        return self._record_type

    def apply(self, message: UpsertMessage[Any]) -> ApplyResult:
        """Apply an upsert or delete message."""
        entity_id = message.entity_id
        payload = message.payload

        if not payload.is_value():
            if self._records.pop(entity_id, None) is None:
                _logger.debug("Delete of unknown id=%s ignored", entity_id)
                return ApplyResult.NOOP
            _logger.debug("Deleted id=%s", entity_id)
            return ApplyResult.DELETED

        patch = payload.unwrap()
        existing = self._records.get(entity_id)
        if existing is None:
            self._records[entity_id] = create_record(self._record_type, patch)
            _logger.debug("Created id=%s", entity_id)
            return ApplyResult.CREATED

        self._records[entity_id] = merge_record(existing, patch)
        _logger.debug("Merged id=%s absent=%s", entity_id, ",".join(patch.absent_fields()) or "-")
        return ApplyResult.UPDATED

    def get(self, entity_id: int) -> R | None:
        """Return the record for ``entity_id`` or ``None`` when not found."""
        return self._records.get(entity_id)

    def items(self) -> Iterator[tuple[int, R]]:
        """Iterate ``(id, record)`` pairs in id order."""
        for entity_id in sorted(self._records):
            yield entity_id, self._records[entity_id]

    def snapshot(self) -> dict[int, R]:
        """Shallow copy of the store; records are immutable."""
        return dict(self._records)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records

    def __len__(self) -> int:
        return len(self._records)
