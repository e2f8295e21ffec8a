# link_scout/crawler/models.py
"""
Data models for the LinkScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Union

from link_scout.errors import CrawlError

#: depth assigned to the seed URL; children of a page at depth N get N + 1
SEED_DEPTH = 1


@dataclass(slots=True, frozen=True)
class WorkItem:
    """One normalized URL waiting in the frontier to be fetched."""

    url: str
    depth: int


@dataclass(slots=True)
class CrawlResult:
    """Links found on a fetched page, page-locally deduplicated in document order."""

    url: str
    children: List[str]
    depth: int


@dataclass(slots=True)
class CrawlFailure:
    """A work item that resolved as a leaf because fetching or parsing failed."""

    item: WorkItem
    error: CrawlError


Outcome = Union[CrawlResult, CrawlFailure]


@dataclass(slots=True)
class CrawlStats:
    pages: int = 0
    failures: int = 0
    enqueued: int = 0
    dropped: int = 0
    visited: int = 0
    elapsed: float = 0.0
    interrupted: bool = False

    def summary(self) -> str:
        return (
            f"{self.pages} pages, {self.failures} failed, {self.dropped} dropped, "
            f"{self.visited} visited in {self.elapsed:.2f} s"
            + (" (interrupted)" if self.interrupted else "")
        )


__all__ = ["SEED_DEPTH", "WorkItem", "CrawlResult", "CrawlFailure", "Outcome", "CrawlStats"]
