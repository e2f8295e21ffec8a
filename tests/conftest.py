# File: tests/conftest.py
import asyncio
import logging
from typing import Dict, Iterator, Optional

import pytest

from link_scout.config import CrawlerConfig
from link_scout.errors import FetchError
from link_scout.logger import logger


class FakeFetcher:
    """
    In-memory stand-in for the HTTP fetcher.
    Unknown URLs raise FetchError, like a connection failure would;
    URLs listed in *errors* raise the given exception as is.
    """

    def __init__(
        self,
        pages: Dict[str, str],
        delay: float = 0.0,
        errors: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self.pages = pages
        self.delay = delay
        self.errors = errors or {}
        self.calls: list[str] = []

    async def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        if url in self.errors:
            raise self.errors[url]
        if url not in self.pages:
            raise FetchError(url, ConnectionError("connection refused"))
        return self.pages[url].encode("utf-8")


def links(*urls: str) -> str:
    return "<html><body>" + "".join(f'<a href="{u}">{u}</a>' for u in urls) + "</body></html>"


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests.
    """
    return CrawlerConfig(url="https://foo.com", max_depth=3, workers=4, queue_factor=10)


@pytest.fixture()
def site() -> Dict[str, str]:
    """
    A small cyclic link graph:
    foo -> a, b ; a -> foo, c ; b -> a, d ; c -> foo ; d -> (nothing)
    """
    return {
        "https://foo.com": links("https://a.com/", "https://b.com?x=1", "http://ignored.com"),
        "https://a.com": links("https://foo.com", "https://c.com"),
        "https://b.com": links("https://a.com", "https://d.com/#top"),
        "https://c.com": links("https://foo.com/"),
        "https://d.com": "<html><body><p>leaf</p></body></html>",
    }


@pytest.fixture()
def crawl_log(caplog) -> Iterator[pytest.LogCaptureFixture]:
    """Capture records of the project logger, which does not propagate to root."""
    caplog.set_level(logging.DEBUG, logger=logger.name)
    logger.addHandler(caplog.handler)
    try:
        yield caplog
    finally:
        logger.removeHandler(caplog.handler)
