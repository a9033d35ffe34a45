"""In-process FIFO transport for encoded messages."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator

from pyternary.config import TernaryConfig
from pyternary.exceptions import QueueFullError


class MessageQueue:
    """FIFO of message strings.

    Parameters
    ----------
    maxlen
        Optional capacity.  Pushing onto a full queue raises
        :class:`~pyternary.exceptions.QueueFullError` instead of dropping the
        oldest entry, since a dropped message breaks per-id ordering.
    """

    def __init__(self, messages: Iterable[str] = (), *, maxlen: int | None = None) -> None:
        self._maxlen = maxlen
        self._items: deque[str] = deque()
        for text in messages:
            self.push(text)

    @classmethod
    def from_config(cls, config: TernaryConfig) -> MessageQueue:
        return cls(maxlen=config.queue_maxlen)

    @property
    def maxlen(self) -> int | None:
        return self._maxlen

    def push(self, text: str) -> None:
        if self._maxlen is not None and len(self._items) >= self._maxlen:
            raise QueueFullError(f"queue is full ({self._maxlen} messages)", maxlen=self._maxlen)
        self._items.append(text)

    def pop(self) -> str | None:
        """Remove and return the oldest message, or ``None`` when empty."""
        if not self._items:
            return None
        return self._items.popleft()

    def peek(self) -> str | None:
        return self._items[0] if self._items else None

    def drain(self) -> Iterator[str]:
        """Pop messages until the queue is empty.

        Messages are removed one at a time, so anything not yet yielded
        stays queued if the consumer stops early.
        """
        while self._items:
            yield self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
