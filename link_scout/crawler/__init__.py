# File: link_scout/crawler/__init__.py
"""link_scout.crawler: Пул воркеров, очередь фронтира и агрегатор результатов."""

from .aggregator import ResultAggregator
from .crawler import AsyncCrawler
from .frontier import FrontierQueue, OutstandingCounter
from .link_extractor import extract_links, normalize_url
from .models import CrawlFailure, CrawlResult, CrawlStats, WorkItem

__all__ = [
    "AsyncCrawler",
    "ResultAggregator",
    "FrontierQueue",
    "OutstandingCounter",
    "extract_links",
    "normalize_url",
    "WorkItem",
    "CrawlResult",
    "CrawlFailure",
    "CrawlStats",
]
