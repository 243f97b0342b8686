"""
Core crawling logic and data structures.
"""
from __future__ import annotations

import sys
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, Optional, Set, Tuple

import requests
from urllib3.exceptions import LocationValueError

from sitemap_builder.errors import CrawlCancelled, CrawlError, FetchError
from sitemap_builder.links import (
    extract_links,
    is_same_domain,
    parse_html,
    resolve_link,
    url_depth,
)
from sitemap_builder.sitemap import Sitemap

DEFAULT_MAX_DEPTH = 3
DEFAULT_TIMEOUT_S = 15.0
DEFAULT_USER_AGENT = "SitemapBuilder/1.0"

ORDERS = ("dfs", "bfs")
ERROR_POLICIES = ("fail", "skip")


@dataclass(slots=True)
class CrawlStats:
    """Statistics collected during crawl for summary output."""
    pages_crawled: int = 0
    links_in_scope: int = 0
    links_out_of_scope: int = 0
    skipped_visited: int = 0
    skipped_depth: int = 0
    errors: Dict[str, str] = field(default_factory=dict)

    def record_error(self, error: CrawlError) -> None:
        """Record a URL that was skipped because it failed."""
        self.errors[error.url] = str(error.cause)


class Frontier:
    """
    Pending URLs and the set of URLs already processed.

    With ``order="dfs"`` the pending URLs form a stack, so the links of the
    most recent page are explored first. ``order="bfs"`` turns it into a
    FIFO queue. Pushes are never deduplicated; callers check
    :meth:`is_visited` after popping.
    """

    def __init__(self, root: str, order: str = "dfs") -> None:
        if order not in ORDERS:
            raise ValueError(f"Unknown traversal order: {order!r}")
        self._pending: Deque[str] = deque([root])
        self._visited: Set[str] = set()
        self._lifo = order == "dfs"

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, url: str) -> None:
        self._pending.append(url)

    def pop(self) -> str:
        return self._pending.pop() if self._lifo else self._pending.popleft()

    def is_visited(self, url: str) -> bool:
        return url in self._visited

    def mark_visited(self, url: str) -> None:
        self._visited.add(url)


def fetch_page(session: requests.Session, url: str, timeout_s: float) -> bytes:
    """Download a URL and return its body; the response is always released."""
    # urllib3 rejects unparseable hosts with a ValueError, not a RequestException
    try:
        with session.get(url, timeout=timeout_s, allow_redirects=True) as resp:
            return resp.content
    except (requests.RequestException, LocationValueError) as e:
        raise FetchError(url, e) from e


def print_progress(visited: int, pending: int, current_url: str) -> None:
    """Print real-time progress to stderr."""
    # Clear line and print progress
    progress = f"\r\033[K[{visited}] Pending: {pending} | {current_url}"
    sys.stderr.write(progress)
    sys.stderr.flush()


def print_scan_line(url: str, new_links: int) -> None:
    """Print single scan result line."""
    sys.stderr.write(f"\n  → {url} (+{new_links} links)")
    sys.stderr.flush()


def crawl(
    domain: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    session: Optional[requests.Session] = None,
    timeout_s: float = DEFAULT_TIMEOUT_S,
    user_agent: str = DEFAULT_USER_AGENT,
    order: str = "dfs",
    on_error: str = "fail",
    resolve_relative: bool = False,
    cancel_event: Optional[threading.Event] = None,
    verbose: bool = False,
) -> Tuple[Sitemap, CrawlStats]:
    """
    Crawl every same-domain URL reachable from ``domain`` within ``max_depth``.

    Args:
        domain: Root URL. Links are in scope only if they start with it.
        max_depth: URLs whose textual depth exceeds this are never fetched.
        session: HTTP session to use. One is created and closed if omitted.
        timeout_s: HTTP request timeout in seconds.
        user_agent: User-Agent header for a session created here.
        order: "dfs" pops the newest URL first, "bfs" the oldest.
        on_error: "fail" aborts on the first fetch or parse error,
                  "skip" records it in the stats and moves on.
        resolve_relative: Resolve hrefs against their page before the
                          scope check.
        cancel_event: When set, the crawl stops before its next fetch.
        verbose: Whether to print progress information.

    Returns:
        Tuple of (sitemap, crawl statistics).

    Raises:
        FetchError, ParseError: in "fail" mode, for the first failing URL.
        CrawlCancelled: if ``cancel_event`` was set.
    """
    if not domain:
        raise ValueError("Root domain must not be empty")
    if max_depth < 0:
        raise ValueError(f"Maximum depth must be non-negative, got {max_depth}")
    if on_error not in ERROR_POLICIES:
        raise ValueError(f"Unknown error policy: {on_error!r}")

    # Crawl state
    frontier = Frontier(domain, order=order)
    sitemap = Sitemap()
    stats = CrawlStats()

    owns_session = session is None
    if session is None:
        session = requests.Session()
        session.headers["User-Agent"] = user_agent

    if verbose:
        sys.stderr.write(f"Starting crawl from: {domain}\n")
        sys.stderr.write(f"Max depth: {max_depth}\n")
        sys.stderr.write(f"Order: {order} | On error: {on_error}\n\n")

    try:
        while frontier:
            url = frontier.pop()

            if frontier.is_visited(url):
                stats.skipped_visited += 1
                continue
            if url_depth(url) > max_depth:
                stats.skipped_depth += 1
                continue

            if cancel_event is not None and cancel_event.is_set():
                raise CrawlCancelled(url, "cancellation requested")

            if verbose:
                print_progress(stats.pages_crawled, len(frontier), url)

            try:
                content = fetch_page(session, url, timeout_s)
                links = extract_links(parse_html(content, url))
            except CrawlError as e:
                if on_error == "fail":
                    raise
                if verbose:
                    sys.stderr.write(f"\n  ✗ SKIP {e}")
                stats.record_error(e)
                frontier.mark_visited(url)
                continue

            sitemap.add(url)
            frontier.mark_visited(url)
            stats.pages_crawled += 1

            # Queue in-scope links, already visited or not
            new_links_count = 0
            for href in links:
                target = resolve_link(href, url) if resolve_relative else href
                if is_same_domain(domain, target):
                    frontier.push(target)
                    new_links_count += 1
                else:
                    stats.links_out_of_scope += 1
            stats.links_in_scope += new_links_count

            if verbose:
                print_scan_line(url, new_links_count)
    finally:
        if owns_session:
            session.close()

    if verbose:
        sys.stderr.write("\n\n")

    return sitemap, stats
