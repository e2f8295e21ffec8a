# File: tests/test_frontier.py
import asyncio

import pytest

from link_scout.crawler.frontier import FrontierQueue, OutstandingCounter
from link_scout.crawler.models import WorkItem


def test_offer_respects_capacity():
    frontier = FrontierQueue(2)
    assert frontier.offer(WorkItem("https://a.com", 1))
    assert frontier.offer(WorkItem("https://b.com", 1))
    assert not frontier.offer(WorkItem("https://c.com", 1))
    assert len(frontier) == 2
    assert frontier.maxsize == 2


def test_offer_after_close_is_rejected():
    frontier = FrontierQueue(2)
    frontier.close()
    assert not frontier.offer(WorkItem("https://a.com", 1))


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        FrontierQueue(0)


@pytest.mark.asyncio()
async def test_get_waits_for_item():
    frontier = FrontierQueue(2)
    getter = asyncio.create_task(frontier.get())
    await asyncio.sleep(0.01)
    assert not getter.done()

    frontier.offer(WorkItem("https://a.com", 2))
    assert await asyncio.wait_for(getter, timeout=1.0) == WorkItem("https://a.com", 2)


@pytest.mark.asyncio()
async def test_close_wakes_all_waiting_workers():
    frontier = FrontierQueue(2)
    getters = [asyncio.create_task(frontier.get()) for _ in range(5)]
    await asyncio.sleep(0.01)

    frontier.close()
    assert await asyncio.wait_for(asyncio.gather(*getters), timeout=1.0) == [None] * 5


@pytest.mark.asyncio()
async def test_closed_frontier_is_drained_first():
    frontier = FrontierQueue(2)
    frontier.offer(WorkItem("https://a.com", 1))
    frontier.close()
    assert await frontier.get() == WorkItem("https://a.com", 1)
    assert await frontier.get() is None


@pytest.mark.asyncio()
async def test_item_not_lost_when_getter_cancelled():
    frontier = FrontierQueue(2)
    getter = asyncio.create_task(frontier.get())
    await asyncio.sleep(0.01)
    getter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await getter

    frontier.offer(WorkItem("https://a.com", 1))
    assert len(frontier) == 1
    assert await frontier.get() == WorkItem("https://a.com", 1)


def test_counter_add_and_done():
    counter = OutstandingCounter()
    assert counter.is_zero
    counter.add(2)
    counter.done()
    assert counter.value == 1
    counter.done()
    assert counter.is_zero
    with pytest.raises(ValueError):
        counter.done()


@pytest.mark.asyncio()
async def test_counter_wait_releases_at_zero():
    counter = OutstandingCounter()
    counter.add()
    waiter = asyncio.create_task(counter.wait())
    await asyncio.sleep(0.01)
    assert not waiter.done()

    counter.add()
    counter.done()
    await asyncio.sleep(0.01)
    assert not waiter.done()

    counter.done()
    await asyncio.wait_for(waiter, timeout=1.0)
