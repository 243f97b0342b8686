"""
Sitemap builder that crawls same-domain links from a root URL.
Outputs an XML sitemap of every page reachable within a link depth.
"""
from sitemap_builder.core import crawl, CrawlStats, Frontier
from sitemap_builder.errors import (
    CrawlCancelled,
    CrawlError,
    FetchError,
    ParseError,
    SerializationError,
)
from sitemap_builder.sitemap import Sitemap, SitemapEntry, render_xml

__version__ = "1.0.0"
__all__ = [
    "crawl",
    "CrawlStats",
    "Frontier",
    "Sitemap",
    "SitemapEntry",
    "render_xml",
    "CrawlError",
    "FetchError",
    "ParseError",
    "CrawlCancelled",
    "SerializationError",
]
