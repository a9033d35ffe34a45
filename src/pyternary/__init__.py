"""pyternary - tri-state (value / null / absent) JSON patches and an id-keyed merge store."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyternary")
except PackageNotFoundError:
    __version__ = "0+local"
from pyternary.codec import decode, dump_tristate, encode, load_tristate
from pyternary.config import TernaryConfig
from pyternary.exceptions import (
    CodecError,
    DecodeError,
    EncodeError,
    QueueFullError,
    RoutingError,
    TernaryConfigError,
    TernaryError,
    TransportError,
    TriStateError,
)
from pyternary.models import (
    ABSENT,
    NULL,
    AbsentPolicy,
    EntityId,
    NamedPersonEvent,
    NamedPersonRecord,
    PatchModel,
    PersonEvent,
    PersonMessage,
    PersonRecord,
    RecordModel,
    TriState,
    UpsertMessage,
)
from pyternary.pipeline import build_delete_message, build_update_message, consume, produce
from pyternary.state import ApplyResult, RecordStore, create_record, merge_record, reduce_field
from pyternary.transport import MessageQueue

__all__ = [
    "__version__",
    "ABSENT",
    "AbsentPolicy",
    "ApplyResult",
    "CodecError",
    "DecodeError",
    "EncodeError",
    "EntityId",
    "MessageQueue",
    "NULL",
    "NamedPersonEvent",
    "NamedPersonRecord",
    "PatchModel",
    "PersonEvent",
    "PersonMessage",
    "PersonRecord",
    "QueueFullError",
    "RecordModel",
    "RecordStore",
    "RoutingError",
    "TernaryConfig",
    "TernaryConfigError",
    "TernaryError",
    "TransportError",
    "TriState",
    "TriStateError",
    "UpsertMessage",
    "build_delete_message",
    "build_update_message",
    "consume",
    "create_record",
    "decode",
    "dump_tristate",
    "encode",
    "load_tristate",
    "merge_record",
    "produce",
    "reduce_field",
]
