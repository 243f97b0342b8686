"""
Sitemap result set and its XML encoding.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Dict, Iterator, List

from lxml import etree

from sitemap_builder.errors import SerializationError

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass(slots=True)
class SitemapEntry:
    """One <url> record of the sitemap."""
    loc: str


@dataclass(slots=True)
class Sitemap:
    """Visited URLs in the order they were processed."""
    entries: List[SitemapEntry] = field(default_factory=list)

    def add(self, url: str) -> None:
        """Append a visited URL."""
        self.entries.append(SitemapEntry(loc=url))

    @property
    def urls(self) -> List[str]:
        return [entry.loc for entry in self.entries]

    def to_records(self) -> List[Dict[str, str]]:
        """Return the entries as single-field {"loc": url} records."""
        return [asdict(entry) for entry in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.urls)

    def __contains__(self, url: object) -> bool:
        return any(entry.loc == url for entry in self.entries)


def render_xml(sitemap: Sitemap) -> str:
    """
    Encode the sitemap as an XML document.

    The result is an XML declaration followed by a <urlset> root holding one
    <url><loc>...</loc></url> per entry, indented by two spaces per level.
    """
    root = etree.Element("urlset")
    try:
        for record in sitemap.to_records():
            url_el = etree.SubElement(root, "url")
            etree.SubElement(url_el, "loc").text = record["loc"]
        body = etree.tostring(root, pretty_print=True, encoding="unicode")
    except (ValueError, TypeError) as e:
        raise SerializationError(str(e)) from e

    return XML_HEADER + body
