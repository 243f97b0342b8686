"""
Command-line interface for the sitemap builder.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

from sitemap_builder.core import (
    DEFAULT_MAX_DEPTH,
    DEFAULT_TIMEOUT_S,
    DEFAULT_USER_AGENT,
    ERROR_POLICIES,
    ORDERS,
    CrawlStats,
    crawl,
)
from sitemap_builder.errors import CrawlError, SerializationError
from sitemap_builder.sitemap import render_xml


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a whole number, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def print_summary(stats: CrawlStats) -> None:
    """Print crawl summary to stderr."""
    sys.stderr.write("=" * 50 + "\n")
    sys.stderr.write("CRAWL SUMMARY\n")
    sys.stderr.write("=" * 50 + "\n\n")

    sys.stderr.write(f"Pages in sitemap:       {stats.pages_crawled}\n")
    sys.stderr.write(f"In-scope links queued:  {stats.links_in_scope}\n")
    sys.stderr.write(f"Out-of-scope links:     {stats.links_out_of_scope}\n")
    sys.stderr.write(f"Skipped (visited):      {stats.skipped_visited}\n")
    sys.stderr.write(f"Skipped (too deep):     {stats.skipped_depth}\n\n")

    if stats.errors:
        sys.stderr.write("Skipped after errors:\n")
        for url, message in sorted(stats.errors.items()):
            sys.stderr.write(f"  {url}: {message}\n")
    else:
        sys.stderr.write("No errors encountered.\n")

    sys.stderr.write("\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Crawl same-domain links from a root URL and print an XML sitemap."
    )
    parser.add_argument("-d", "--domain", default="", help="Website domain to build sitemap for (e.g. https://example.com)")
    parser.add_argument(
        "--depth",
        type=_non_negative_int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum depth to follow links (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_TIMEOUT_S,
        help=f"Request timeout in seconds (default: {DEFAULT_TIMEOUT_S:g})",
    )
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header")
    parser.add_argument(
        "--order",
        choices=ORDERS,
        default="dfs",
        help="Traversal order: depth-first stack or breadth-first queue (default: dfs)",
    )
    parser.add_argument(
        "--on-error",
        choices=ERROR_POLICIES,
        default="fail",
        help="Abort on the first failing page, or skip it and continue (default: fail)",
    )
    parser.add_argument(
        "--resolve-relative",
        action="store_true",
        help="Resolve relative links against their page before the domain check",
    )
    parser.add_argument("--out", help="Write the sitemap to this file instead of stdout")
    parser.add_argument("--verbose", action="store_true", help="Show progress and summary")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the sitemap builder CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.domain:
        print("Please provide the website domain using the --domain option")
        parser.print_usage(sys.stdout)
        return 0

    try:
        sitemap, stats = crawl(
            args.domain,
            args.depth,
            timeout_s=args.timeout,
            user_agent=args.user_agent,
            order=args.order,
            on_error=args.on_error,
            resolve_relative=args.resolve_relative,
            verbose=args.verbose,
        )
    except CrawlError as e:
        sys.stderr.write(f"Error building sitemap: {e}\n")
        return 1

    try:
        xml_text = render_xml(sitemap)
    except SerializationError as e:
        sys.stderr.write(f"Error encoding sitemap to XML: {e}\n")
        return 1

    # Print summary if verbose
    if args.verbose:
        print_summary(stats)

    if args.out:
        output_path = Path(args.out)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(xml_text, encoding="utf-8")
        if args.verbose:
            sys.stderr.write(f"Sitemap written to: {output_path}\n")
    else:
        sys.stdout.write(xml_text)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
