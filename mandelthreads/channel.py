"""Multi-producer, single-consumer result channel."""

from __future__ import annotations

import queue
import threading
from typing import Iterator

_DISCONNECTED = object()


class ChannelClosed(RuntimeError):
    """Raised when sending through a sender that has already disconnected."""


class Sender:
    """One producer's handle on a :class:`ResultChannel`.

    Closing the handle (explicitly or by leaving a ``with`` block) tells the
    receiver that this producer is finished.
    """

    def __init__(self, channel: ResultChannel) -> None:
        self._channel = channel
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def send(self, index: int, colour: int) -> None:
        if self._closed:
            raise ChannelClosed("send on a disconnected sender")
        self._channel._queue.put((index, colour))

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._channel._queue.put(_DISCONNECTED)

    def __enter__(self) -> Sender:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ResultChannel:
    """Unbounded queue of ``(index, colour)`` pairs.

    Iterating the channel blocks for the next pair and stops once every sender
    handed out by :meth:`sender` has closed. All senders must be opened before
    the receiver starts iterating.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue = queue.SimpleQueue()
        self._lock = threading.Lock()
        self._open = 0

    def sender(self) -> Sender:
        with self._lock:
            self._open += 1
        return Sender(self)

    @property
    def open_senders(self) -> int:
        with self._lock:
            return self._open

    def __iter__(self) -> Iterator[tuple[int, int]]:
        while self.open_senders > 0:
            item = self._queue.get()
            if item is _DISCONNECTED:
                with self._lock:
                    self._open -= 1
                continue
            yield item
