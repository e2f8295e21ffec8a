# link_scout/crawler/frontier.py
"""
Frontier queue and outstanding-work counter.

:class:`FrontierQueue` is a bounded asyncio queue of :class:`WorkItem` with a
non-blocking :meth:`~FrontierQueue.offer` for producers and a closable
:meth:`~FrontierQueue.get` for workers. :class:`OutstandingCounter` plays the
role of a wait-group: the crawl is finished exactly when it drops to zero.
"""
from __future__ import annotations

import asyncio
from typing import Optional

from link_scout.crawler.models import WorkItem

__all__ = ("FrontierQueue", "OutstandingCounter")


class FrontierQueue:
    """Bounded queue of URLs waiting to be fetched."""

    def __init__(self, maxsize: int) -> None:
        if maxsize <= 0:
            raise ValueError("frontier capacity must be > 0")
        self._queue: asyncio.Queue[WorkItem] = asyncio.Queue(maxsize)
        self._closed = asyncio.Event()

    def __len__(self) -> int:
        return self._queue.qsize()

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def offer(self, item: WorkItem) -> bool:
        """Enqueue *item* without waiting. Returns False if the queue is full or closed."""
        if self.closed:
            return False
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            return False
        return True

    def get_nowait(self) -> WorkItem:
        return self._queue.get_nowait()

    async def get(self) -> Optional[WorkItem]:
        """
        Wait for the next item.

        Items still queued are handed out after :meth:`close`; ``None`` is
        returned once the queue is closed and drained.
        """
        while True:
            if not self._queue.empty():
                return self._queue.get_nowait()
            if self.closed:
                return None
            getter = asyncio.ensure_future(self._queue.get())
            closer = asyncio.ensure_future(self._closed.wait())
            try:
                await asyncio.wait((getter, closer), return_when=asyncio.FIRST_COMPLETED)
            finally:
                closer.cancel()
                if not getter.done():
                    getter.cancel()
            if getter.done() and not getter.cancelled():
                return getter.result()

    def close(self) -> None:
        """Stop accepting items and wake every waiting worker."""
        self._closed.set()


class OutstandingCounter:
    """Count of work items enqueued but not yet resolved."""

    def __init__(self) -> None:
        self._value = 0
        self._zero = asyncio.Event()
        self._zero.set()

    @property
    def value(self) -> int:
        return self._value

    @property
    def is_zero(self) -> bool:
        return self._value == 0

    def add(self, n: int = 1) -> None:
        if n < 0:
            raise ValueError("use done() to resolve work items")
        self._value += n
        if self._value:
            self._zero.clear()

    def done(self) -> None:
        if self._value <= 0:
            raise ValueError("negative outstanding counter")
        self._value -= 1
        if self._value == 0:
            self._zero.set()

    async def wait(self) -> None:
        await self._zero.wait()
