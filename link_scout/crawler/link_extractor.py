# link_scout/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for LinkScout.

Only absolute ``https`` links are followed. Every accepted link is reduced to
a stable key: ``https://host[:port]/path`` with trailing slashes, query and
fragment removed, so ``foo.com``, ``foo.com/`` and ``foo.com/?a=b#x`` are the
same page.
"""
from __future__ import annotations

from typing import Final, List, Set, Union
from urllib.parse import SplitResult, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup
from bs4.element import Tag

from link_scout.errors import DocumentParseError, URLSyntaxError
from link_scout.logger import logger

__all__ = ("ACCEPTED_SCHEME", "parse_url", "normalize_url", "parse_document", "extract_links")

ACCEPTED_SCHEME: Final[str] = "https"
_DEFAULT_PORT: Final[int] = 443


def parse_url(raw: str) -> SplitResult:
    """Split *raw* into components, raising :class:`URLSyntaxError` if it is malformed."""
    try:
        parsed = urlsplit(raw)
        # port validation is lazy in urllib; force it here
        parsed.port
    except ValueError as exc:
        raise URLSyntaxError(raw, exc) from exc
    return parsed


def normalize_url(url: Union[str, SplitResult]) -> str:
    """
    Canonical key for *url*: forced https scheme, lowercase host,
    path without trailing slashes, no query or fragment.
    """
    parsed = parse_url(url) if isinstance(url, str) else url
    if not parsed.scheme and not parsed.netloc and not parsed.path.startswith("/"):
        # "foo.com/a" carries its host in the path
        parsed = parse_url("//" + urlunsplit(parsed))

    host = parsed.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parsed.port
    if port is not None and port != _DEFAULT_PORT:
        host = f"{host}:{port}"
    path = parsed.path.rstrip("/")
    return f"{ACCEPTED_SCHEME}://{host}{path}"


def parse_document(body: Union[bytes, str], url: str = "") -> BeautifulSoup:
    """Build a document tree from a fetched body. Of repeated attributes the first one is kept."""
    try:
        return BeautifulSoup(body, "html.parser", on_duplicate_attribute="ignore")
    except ParserRejectedMarkup as exc:
        raise DocumentParseError(url, exc) from exc


def extract_links(document: Union[BeautifulSoup, Tag]) -> List[str]:
    """
    Return normalized absolute https links of *document*'s anchors.

    Anchors are visited in document order; a link already produced for this
    document is not repeated. Relative and non-https links are ignored, a
    malformed href is logged and skipped.
    """
    seen: Set[str] = set()
    links: List[str] = []
    for tag in document.find_all("a"):
        href = tag.get("href")
        if href is None:
            continue
        if not isinstance(href, str):
            href = " ".join(href)
        try:
            parsed = parse_url(href.strip())
        except URLSyntaxError as exc:
            logger.warning("%s", exc)
            continue
        if parsed.scheme != ACCEPTED_SCHEME:
            logger.debug("Skipping non-https link %r", href)
            continue
        url = normalize_url(parsed)
        if url not in seen:
            seen.add(url)
            links.append(url)
    return links
