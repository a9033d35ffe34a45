"""Producer helpers and the single consumer loop.

Producers encode messages and push them onto a :class:`MessageQueue`; the
consumer drains it strictly in order, decoding each message and applying it
to a :class:`RecordStore`.  A message that fails to decode is fatal for the
loop: the error propagates, earlier applications are kept, and later
messages stay queued.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, TypeVar

from pyternary._redact import summarize_for_log
from pyternary.codec import decode, encode
from pyternary.config import TernaryConfig
from pyternary.exceptions import DecodeError
from pyternary.models._base import AbsentPolicy, PatchModel
from pyternary.models.messages import UpsertMessage
from pyternary.state.store import RecordStore
from pyternary.transport import MessageQueue

_logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PatchModel)


def _trace_summary(message: PatchModel, config: TernaryConfig) -> Any:
    return summarize_for_log(message, max_string=config.max_log_string, redact_keys=config.redact_keys)


def build_update_message(event: P, message_type: type[UpsertMessage[P]]) -> str:
    """Encode ``event`` as an upsert addressed to ``event.entity_id``."""
    return encode(message_type.upsert(event))


def build_delete_message(entity_id: int, message_type: type[UpsertMessage[Any]]) -> str:
    """Encode a delete for ``entity_id``."""
    return encode(message_type.delete(entity_id))


def produce(
    queue: MessageQueue,
    messages: Iterable[PatchModel],
    *,
    config: TernaryConfig | None = None,
    policy: AbsentPolicy = AbsentPolicy.OMIT,
) -> int:
    """Encode and push each message in order; return the number pushed."""
    config = config or TernaryConfig()
    count = 0
    for message in messages:
        text = encode(message, policy=policy)
        if config.trace_messages:
            _logger.debug("Produced %s", _trace_summary(message, config))
        queue.push(text)
        count += 1
    return count


def consume(
    queue: MessageQueue,
    store: RecordStore[Any],
    message_type: type[UpsertMessage[Any]],
    *,
    config: TernaryConfig | None = None,
) -> int:
    """Drain ``queue`` into ``store``; return the number of messages applied.

    Raises
    ------
    DecodeError
        If a message cannot be decoded.  That message is not applied.
    """
    config = config or TernaryConfig()
    applied = 0
    while (text := queue.pop()) is not None:
        try:
            message = decode(text, message_type)
        except DecodeError:
            _logger.debug(
                "Stopping after %d message(s); undecodable message %r",
                applied,
                summarize_for_log(text, max_string=config.max_log_string),
            )
            raise
        if config.trace_messages:
            _logger.debug("Consumed %s", _trace_summary(message, config))
        result = store.apply(message)
        _logger.debug("Applied message for id=%s: %s", message.entity_id, result)
        applied += 1
    return applied
