# File: link_scout/errors.py
"""link_scout.errors: Исключения краулера LinkScout."""

from __future__ import annotations

from typing import Optional

__all__ = (
    "CrawlError",
    "FetchError",
    "DocumentParseError",
    "PageError",
    "URLSyntaxError",
    "SeedURLError",
)


class CrawlError(Exception):
    """Base class for every error raised by the crawler."""


class FetchError(CrawlError):
    """Transport failure or timeout while fetching *url*."""

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Error while fetching URL {url}: {cause!r}")


class DocumentParseError(CrawlError):
    """The body fetched from *url* could not be turned into a document tree."""

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to parse body from URL {url}: {cause}")


class PageError(CrawlError):
    """Any other failure while crawling *url*; the page becomes a leaf."""

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Unexpected error while crawling URL {url}: {cause!r}")


class URLSyntaxError(CrawlError, ValueError):
    def __init__(self, raw: str, cause: Optional[BaseException] = None) -> None:
        self.raw = raw
        self.cause = cause
        super().__init__(f"Error parsing url {raw!r}: {cause}")


class SeedURLError(CrawlError):
    """Стартовый URL не разбирается: обход начать невозможно."""

    def __init__(self, url: str, cause: Optional[BaseException] = None) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Error parsing base URL {url!r}: {cause}")
