"""Replay-latest broadcast channel for product snapshots."""

from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, List

from ..core.types import Snapshot

logger = logging.getLogger(__name__)

Listener = Callable[[Snapshot], None]


class ProductChannel:
    """Holds the latest snapshot and pushes every new one to listeners.

    New listeners get the current value right away, then each later publish
    in the order ``publish`` is called.
    """

    def __init__(self, initial: Snapshot = ()):
        self._value: Snapshot = tuple(initial)
        self._listeners: List[Listener] = []

    @property
    def value(self) -> Snapshot:
        return self._value

    def publish(self, snapshot: Snapshot) -> None:
        self._value = tuple(snapshot)
        for listener in list(self._listeners):
            try:
                listener(self._value)
            except Exception:
                logger.exception("Product listener %r failed", listener)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        # replay first so a listener that fails here is never registered
        listener(self._value)
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def stream(self) -> AsyncIterator[Snapshot]:
        """Yield the current snapshot, then every published one.

        Publishes must happen on the event loop thread running the consumer.
        """
        queue: "asyncio.Queue[Snapshot]" = asyncio.Queue()
        unsubscribe = self.subscribe(queue.put_nowait)
        try:
            while True:
                yield await queue.get()
        finally:
            unsubscribe()
