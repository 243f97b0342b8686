"""
Exceptions raised while building a sitemap.
"""
from __future__ import annotations


class CrawlError(Exception):
    """A fatal problem with one URL; aborts the crawl unless errors are skipped."""

    action = "error processing URL"

    def __init__(self, url: str, cause: object) -> None:
        super().__init__(f"{self.action} {url}: {cause}")
        self.url = url
        self.cause = cause


class FetchError(CrawlError):
    action = "error fetching URL"


class ParseError(CrawlError):
    action = "error parsing HTML for URL"


class CrawlCancelled(CrawlError):
    action = "crawl cancelled before URL"


class SerializationError(Exception):
    """The sitemap could not be encoded as XML."""
