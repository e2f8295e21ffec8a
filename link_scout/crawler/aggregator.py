# File: link_scout/crawler/aggregator.py
"""link_scout.crawler.aggregator: единственный потребитель результатов обхода.

Only this object touches the visited set and the outstanding counter, and it
handles one outcome at a time, so deduplication needs no locking.
"""

from __future__ import annotations

import asyncio
from typing import Set

from link_scout.crawler.frontier import FrontierQueue, OutstandingCounter
from link_scout.crawler.models import (
    SEED_DEPTH,
    CrawlFailure,
    CrawlResult,
    CrawlStats,
    Outcome,
    WorkItem,
)
from link_scout.logger import logger

__all__ = ["ResultAggregator", "format_page"]


def format_page(result: CrawlResult) -> str:
    """Одна запись лога на страницу: URL с глубиной и ссылки с отступом."""
    lines = [f"{result.url} (depth {result.depth})"]
    lines.extend(f"    {child}" for child in result.children)
    return "\n".join(lines)


class ResultAggregator:
    """Dedup, depth gating and re-enqueueing of discovered links."""

    def __init__(self, frontier: FrontierQueue, counter: OutstandingCounter, max_depth: int) -> None:
        self.frontier = frontier
        self.counter = counter
        self.max_depth = max_depth
        self.visited: Set[str] = set()
        self.stats = CrawlStats()

    def seed(self, url: str, depth: int = SEED_DEPTH) -> WorkItem:
        """Поставить стартовый URL в очередь."""
        item = WorkItem(url, depth)
        if not self.frontier.offer(item):
            raise RuntimeError(f"frontier rejected the seed URL {url}")
        self.visited.add(url)
        self.counter.add()
        self.stats.enqueued += 1
        return item

    def process(self, outcome: Outcome) -> None:
        """Apply one worker outcome; closes the frontier when no work is left."""
        if isinstance(outcome, CrawlFailure):
            self.stats.failures += 1
        else:
            self._expand(outcome)
        self.counter.done()
        if self.counter.is_zero:
            logger.info("No more URLs to crawl")
            self.frontier.close()

    async def run(self, results: asyncio.Queue[Outcome]) -> None:
        while not self.frontier.closed:
            self.process(await results.get())

    def _descends(self, depth: int) -> bool:
        return self.max_depth == 0 or depth < self.max_depth

    def _expand(self, result: CrawlResult) -> None:
        self.visited.add(result.url)
        self.stats.pages += 1
        logger.info("%s", format_page(result))

        if not self._descends(result.depth):
            return
        for child in result.children:
            if child in self.visited:
                continue
            if self.frontier.offer(WorkItem(child, result.depth + 1)):
                self.counter.add()
                self.visited.add(child)
                self.stats.enqueued += 1
            else:
                self.stats.dropped += 1
                logger.warning("URL buffer is full, discarding URL %s", child)
