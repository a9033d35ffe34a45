"""State/store layer.

This package is the single source of truth for how decoded partial-update
messages are merged into the id-keyed record store.
"""

from pyternary.state.merge import create_record, merge_record, reduce_field
from pyternary.state.store import ApplyResult, RecordStore

__all__ = [
    "ApplyResult",
    "RecordStore",
    "create_record",
    "merge_record",
    "reduce_field",
]
