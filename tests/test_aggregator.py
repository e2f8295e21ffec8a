# File: tests/test_aggregator.py
"""Tests for the single-consumer result aggregator: dedup, depth gating, backpressure."""
import asyncio

import pytest

from link_scout.crawler.aggregator import ResultAggregator, format_page
from link_scout.crawler.frontier import FrontierQueue, OutstandingCounter
from link_scout.crawler.models import CrawlFailure, CrawlResult, WorkItem
from link_scout.errors import FetchError

MAX_DEPTH = 3
CAPACITY = 5


def make_aggregator(max_depth: int = MAX_DEPTH, capacity: int = CAPACITY) -> ResultAggregator:
    frontier = FrontierQueue(capacity)
    counter = OutstandingCounter()
    # the item that produced the first result
    counter.add()
    return ResultAggregator(frontier, counter, max_depth)


def drain(frontier: FrontierQueue) -> list[WorkItem]:
    return [frontier.get_nowait() for _ in range(len(frontier))]


@pytest.mark.parametrize(
    "results,expected",
    [
        pytest.param(
            [
                CrawlResult("https://foo.com", ["https://a.com", "https://b.com"], 1),
                CrawlResult("https://a.com", ["https://c.com", "https://d.com"], 2),
            ],
            [
                WorkItem("https://a.com", 2),
                WorkItem("https://b.com", 2),
                WorkItem("https://c.com", 3),
                WorkItem("https://d.com", 3),
            ],
            id="basic",
        ),
        pytest.param(
            [
                CrawlResult("https://foo.com", ["https://a.com", "https://foo.com"], 1),
                CrawlResult("https://a.com", ["https://a.com", "https://b.com"], 2),
            ],
            [WorkItem("https://a.com", 2), WorkItem("https://b.com", 3)],
            id="ignores-already-crawled",
        ),
        pytest.param(
            [
                CrawlResult("https://foo.com", ["https://a.com"], 1),
                CrawlResult("https://bar.com", ["https://a.com", "https://b.com"], 1),
            ],
            [WorkItem("https://a.com", 2), WorkItem("https://b.com", 2)],
            id="child-claimed-by-earlier-result",
        ),
        pytest.param(
            [CrawlResult("https://foo.com", ["https://a.com", "https://b.com"], MAX_DEPTH)],
            [],
            id="max-depth-is-ignored",
        ),
    ],
)
def test_process_enqueues(results, expected):
    agg = make_aggregator(capacity=10)
    agg.counter.add(len(results) - 1)
    for result in results:
        agg.process(result)
    assert drain(agg.frontier) == expected


def test_overflow_is_dropped_and_logged(crawl_log):
    agg = make_aggregator()
    children = [f"https://{c}.com" for c in "abcdefg"]
    agg.process(CrawlResult("https://foo.com", children, 1))

    assert drain(agg.frontier) == [WorkItem(u, 2) for u in children[:CAPACITY]]
    assert agg.stats.dropped == 2
    assert agg.counter.value == CAPACITY
    dropped = [r.getMessage() for r in crawl_log.records if "discarding" in r.getMessage()]
    assert dropped == [
        "URL buffer is full, discarding URL https://f.com",
        "URL buffer is full, discarding URL https://g.com",
    ]


def test_dropped_child_can_be_enqueued_later():
    agg = make_aggregator(capacity=1)
    agg.counter.add()
    agg.process(CrawlResult("https://foo.com", ["https://a.com", "https://b.com"], 1))
    assert drain(agg.frontier) == [WorkItem("https://a.com", 2)]

    agg.process(CrawlResult("https://x.com", ["https://b.com"], 1))
    assert drain(agg.frontier) == [WorkItem("https://b.com", 2)]


def test_unlimited_depth():
    agg = make_aggregator(max_depth=0)
    agg.process(CrawlResult("https://foo.com", ["https://a.com"], 50))
    assert drain(agg.frontier) == [WorkItem("https://a.com", 51)]


def test_failure_is_a_leaf_and_closes_frontier():
    agg = make_aggregator()
    item = WorkItem("https://foo.com", 1)
    agg.process(CrawlFailure(item, FetchError(item.url, OSError("boom"))))

    assert agg.stats.failures == 1
    assert agg.counter.is_zero
    assert agg.frontier.closed
    assert len(agg.frontier) == 0


def test_depth_gated_result_closes_frontier():
    agg = make_aggregator()
    agg.process(CrawlResult("https://foo.com", ["https://a.com"], MAX_DEPTH))
    assert agg.counter.is_zero
    assert agg.frontier.closed


def test_counter_tracks_outstanding_items():
    agg = make_aggregator()
    agg.process(CrawlResult("https://foo.com", ["https://a.com", "https://b.com"], 1))
    assert agg.counter.value == 2
    assert not agg.frontier.closed

    agg.process(CrawlResult("https://a.com", [], 2))
    agg.process(CrawlResult("https://b.com", ["https://foo.com", "https://a.com"], 2))
    assert agg.counter.is_zero
    assert agg.frontier.closed
    assert agg.visited == {"https://foo.com", "https://a.com", "https://b.com"}


def test_seed_marks_visited_and_counts():
    frontier = FrontierQueue(CAPACITY)
    counter = OutstandingCounter()
    agg = ResultAggregator(frontier, counter, MAX_DEPTH)

    item = agg.seed("https://foo.com")
    assert item == WorkItem("https://foo.com", 1)
    assert counter.value == 1
    assert "https://foo.com" in agg.visited
    assert drain(frontier) == [item]


def test_page_record_format(crawl_log):
    agg = make_aggregator()
    result = CrawlResult("https://foo.com", ["https://a.com", "https://b.com"], 1)
    agg.process(result)

    assert format_page(result) == "https://foo.com (depth 1)\n    https://a.com\n    https://b.com"
    assert format_page(result) in [r.getMessage() for r in crawl_log.records]


@pytest.mark.asyncio()
async def test_run_consumes_until_done():
    agg = make_aggregator()
    results: asyncio.Queue = asyncio.Queue()
    await results.put(CrawlResult("https://foo.com", ["https://a.com"], 1))
    await results.put(CrawlResult("https://a.com", [], 2))

    await asyncio.wait_for(agg.run(results), timeout=1.0)

    assert agg.frontier.closed
    assert agg.stats.pages == 2
    assert results.empty()
