# File: link_scout/engine.py
"""link_scout.engine: запуск обхода для CLI и тестов."""

from __future__ import annotations

import asyncio
import contextlib
import signal

from link_scout.config import CrawlerConfig
from link_scout.crawler.crawler import AsyncCrawler
from link_scout.crawler.models import CrawlStats
from link_scout.logger import logger

__all__ = ["start_crawl"]

_STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


async def start_crawl(cfg: CrawlerConfig, *, handle_signals: bool = False) -> CrawlStats:
    """
    Запускает AsyncCrawler в контексте и возвращает статистику обхода.

    Parameters
    ----------
    cfg : CrawlerConfig
        Конфигурация обхода.
    handle_signals : bool
        Если True, SIGINT/SIGTERM завершают обход штатно, а не обрывают процесс.
    """
    async with AsyncCrawler(cfg) as crawler:
        if not handle_signals:
            return await crawler.crawl()

        loop = asyncio.get_running_loop()
        installed = []
        for sig in _STOP_SIGNALS:
            # add_signal_handler is unavailable on Windows event loops
            with contextlib.suppress(NotImplementedError, RuntimeError):
                loop.add_signal_handler(sig, _on_signal, crawler, sig)
                installed.append(sig)
        try:
            return await crawler.crawl()
        finally:
            for sig in installed:
                loop.remove_signal_handler(sig)


def _on_signal(crawler: AsyncCrawler, sig: signal.Signals) -> None:
    logger.info("Received %s, stopping crawl…", sig.name)
    crawler.stop()
