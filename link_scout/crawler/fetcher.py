# link_scout/crawler/fetcher.py
"""
Fetcher module: GETs a page body over a shared aiohttp session.

Timeouts come from the session's :class:`~aiohttp.ClientTimeout`. Failures are
not retried; they surface as :class:`~link_scout.errors.FetchError`.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout, TCPConnector

from link_scout.config import CrawlerConfig
from link_scout.errors import FetchError
from link_scout.logger import logger

__all__ = ("Fetcher", "open_session")


def open_session(config: CrawlerConfig) -> ClientSession:
    """Session shared by all workers of one crawl."""
    connector = TCPConnector(force_close=not config.keep_alive, limit=config.pool_size)
    return ClientSession(
        connector=connector,
        timeout=ClientTimeout(total=config.fetch_timeout),
        headers={"User-Agent": config.user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Handles HTTP fetching for the worker pool."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> bytes:
        """
        Return the response body of *url*.

        Any HTTP status is accepted; the body of an error page is crawled
        like any other. Transport errors, timeouts and URLs the client cannot
        encode (an empty or over-long host label) raise FetchError.
        """
        try:
            async with self.session.get(url) as resp:
                body = await resp.read()
                status = resp.status
        except (ClientError, asyncio.TimeoutError, ValueError) as exc:
            raise FetchError(url, exc) from exc
        if status >= 400:
            logger.debug("HTTP %s for %s", status, url)
        return body
