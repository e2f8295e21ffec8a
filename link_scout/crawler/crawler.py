# === FILE: link_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import List, Optional, Protocol

from aiohttp import ClientSession

from link_scout.config import CrawlerConfig
from link_scout.crawler.aggregator import ResultAggregator
from link_scout.crawler.fetcher import Fetcher, open_session
from link_scout.crawler.frontier import FrontierQueue, OutstandingCounter
from link_scout.crawler.link_extractor import extract_links, normalize_url, parse_document, parse_url
from link_scout.crawler.models import CrawlFailure, CrawlResult, CrawlStats, Outcome
from link_scout.errors import DocumentParseError, FetchError, PageError, SeedURLError, URLSyntaxError
from link_scout.logger import logger

__all__ = ("AsyncCrawler", "PageFetcher")


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> bytes: ...


class AsyncCrawler:
    """Асинхронный краулер: фиксированный пул воркеров и один агрегатор результатов."""

    def __init__(self, config: CrawlerConfig, fetcher: Optional[PageFetcher] = None) -> None:
        self.config = config
        self.pool_size: int = config.pool_size
        self.fetcher = fetcher
        self.session: Optional[ClientSession] = None
        self._stop = asyncio.Event()

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = open_session(self.config)
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    def stop(self) -> None:
        """Request the crawl to end; outstanding fetches are cancelled."""
        self._stop.set()

    def _seed_url(self) -> str:
        try:
            return normalize_url(parse_url(self.config.url.strip()))
        except URLSyntaxError as exc:
            raise SeedURLError(self.config.url, exc.cause) from exc

    async def crawl(self) -> CrawlStats:
        fetcher = self.fetcher
        if fetcher is None:
            raise RuntimeError("Session not initialized")
        seed = self._seed_url()

        logger.info("Max depth set to %d", self.config.max_depth)
        if self.config.max_depth == 0:
            logger.warning("No max depth specified -- crawl may not terminate")
        logger.info("Number of workers set to %d", self.pool_size)
        logger.info("Старт обхода: %s", seed)
        start = time.monotonic()

        frontier = FrontierQueue(self.config.frontier_capacity)
        counter = OutstandingCounter()
        results: asyncio.Queue[Outcome] = asyncio.Queue(maxsize=self.pool_size)
        aggregator = ResultAggregator(frontier, counter, self.config.max_depth)
        aggregator.seed(seed)

        workers: List[asyncio.Task[None]] = [
            asyncio.create_task(self._worker(fetcher, frontier, results), name=f"crawl-worker-{i}")
            for i in range(self.pool_size)
        ]
        consumer = asyncio.create_task(aggregator.run(results), name="crawl-aggregator")
        finished = asyncio.create_task(counter.wait())
        stopped = asyncio.create_task(self._stop.wait())
        try:
            await asyncio.wait(
                (finished, stopped),
                timeout=self.config.crawl_timeout,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            frontier.close()
            interrupted = not counter.is_zero
            if interrupted:
                logger.warning("Crawl interrupted with %d URLs outstanding", counter.value)
                for task in (*workers, consumer):
                    task.cancel()
            finished.cancel()
            stopped.cancel()
            await asyncio.gather(*workers, consumer, finished, stopped, return_exceptions=True)

        stats = aggregator.stats
        stats.visited = len(aggregator.visited)
        stats.elapsed = time.monotonic() - start
        stats.interrupted = interrupted
        logger.info("Завершено: %s", stats.summary())
        return stats

    async def _worker(
        self, fetcher: PageFetcher, frontier: FrontierQueue, results: asyncio.Queue[Outcome]
    ) -> None:
        # one outcome per dequeued item, whatever happens to it
        while True:
            item = await frontier.get()
            if item is None:
                return
            outcome: Outcome
            try:
                body = await fetcher.fetch(item.url)
                document = await asyncio.to_thread(parse_document, body, item.url)
                children = extract_links(document)
            except (FetchError, DocumentParseError) as exc:
                logger.warning("%s", exc)
                outcome = CrawlFailure(item, exc)
            except Exception as exc:
                error = PageError(item.url, exc)
                logger.exception("%s", error)
                outcome = CrawlFailure(item, error)
            else:
                outcome = CrawlResult(item.url, children, item.depth)
            await results.put(outcome)
