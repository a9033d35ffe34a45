"""Per-field reduction of patches onto records.

Patch fields are matched to record fields by name:

* ``TriState`` fields follow :func:`reduce_field`.
* Plain patch fields that also exist on the record always overwrite.
* Patch fields without a record counterpart (e.g. the entity id) are ignored.

Records are never mutated; a fully built replacement is returned so that a
patch is applied all-or-nothing.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pyternary.models._base import PatchModel, RecordModel
from pyternary.models.tristate import TriState

R = TypeVar("R", bound=RecordModel)


def reduce_field(current: Any, patch: TriState[Any], empty: Any) -> Any:
    """Reduce one field.

    ``Value(v) -> v``, ``NULL -> empty``, ``ABSENT -> current``.
    """
    return patch.resolve(current, empty)


def _updates(record_type: type[RecordModel], current: dict[str, Any], patch: PatchModel) -> dict[str, Any]:
    record_fields = record_type.model_fields
    updates: dict[str, Any] = {}
    for name in type(patch).model_fields:
        if name not in record_fields:
            continue
        value = getattr(patch, name)
        if isinstance(value, TriState):
            updates[name] = reduce_field(current[name], value, record_type.empty_value(name))
        else:
            updates[name] = value
    return updates


def create_record(record_type: type[R], patch: PatchModel) -> R:
    """Build a new record from ``patch``.

    With no prior record to inherit from, ``NULL`` and ``ABSENT`` both yield
    the field's empty value.
    """
    empty = {name: record_type.empty_value(name) for name in record_type.model_fields}
    empty.update(_updates(record_type, empty, patch))
    return record_type(**empty)


def merge_record(record: R, patch: PatchModel) -> R:
    """Return ``record`` with ``patch`` applied; ``ABSENT`` fields keep their prior value."""
    record_type = type(record)
    current = dict(record)
    current.update(_updates(record_type, current, patch))
    return record_type(**current)

