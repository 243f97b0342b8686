"""
Link extraction, scope and depth rules.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urljoin

from bs4 import BeautifulSoup, ParserRejectedMarkup, SoupStrainer

from sitemap_builder.errors import ParseError

# Only anchors matter, with or without an href
ANCHOR_STRAINER = SoupStrainer("a")


def parse_html(content: bytes, url: str) -> BeautifulSoup:
    """Parse page content into a tree holding its anchor elements."""
    try:
        return BeautifulSoup(content, "lxml", parse_only=ANCHOR_STRAINER)
    except ParserRejectedMarkup as e:
        raise ParseError(url, e) from e


def extract_links(soup: BeautifulSoup) -> List[str]:
    """
    Return the href of every <a> element in document order.

    Anchors without an href yield an empty string. Values are not decoded
    or resolved.
    """
    return [a.get("href", "") for a in soup.find_all("a")]


def resolve_link(href: str, base: str) -> str:
    """Resolve a relative href against the page it was found on."""
    if not href:
        return href
    return urljoin(base, href)


def is_same_domain(domain: str, link: str) -> bool:
    """Check if link starts with the exact root domain string."""
    return link.startswith(domain)


def url_depth(url: str) -> int:
    """
    Textual depth of a URL: its "/" count minus the two after the scheme.

    https://example.com is 0, https://example.com/a is 1. Trailing slashes,
    query strings and doubled slashes all count.
    """
    return url.count("/") - 2
