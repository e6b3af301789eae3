"""pagewalk.parser.page_parser: turns raw page bodies (RSS/Atom feeds, JSON) into :class:`Page`."""

from __future__ import annotations

import json
from typing import Any, Optional, Union
from urllib.parse import urljoin

from lxml import etree

from pagewalk.walker.models import FeedEntry, Page

__all__ = (
    "PageParseError",
    "parse_feed",
    "parse_json",
    "parse_page",
)

ATOM_NS = "http://www.w3.org/2005/Atom"


class PageParseError(ValueError):
    """The body could not be interpreted as a page."""


def _text(el: Optional[etree._Element]) -> str:
    if el is None or el.text is None:
        return ""
    return el.text.strip()


def _next_href(parent: etree._Element, base_url: str) -> Optional[str]:
    for link in parent.findall("{*}link"):
        rels = (link.get("rel") or "").split()
        href = link.get("href")
        if "next" in rels and href:
            return urljoin(base_url, href.strip())
    return None


def _atom_entry(entry: etree._Element, base_url: str) -> FeedEntry:
    link = ""
    for candidate in entry.findall(f"{{{ATOM_NS}}}link"):
        if candidate.get("rel", "alternate") == "alternate" and candidate.get("href"):
            link = urljoin(base_url, candidate.get("href").strip())
            break
    updated = _text(entry.find(f"{{{ATOM_NS}}}updated")) or _text(
        entry.find(f"{{{ATOM_NS}}}published")
    )
    return FeedEntry(
        id=_text(entry.find(f"{{{ATOM_NS}}}id")),
        title=_text(entry.find(f"{{{ATOM_NS}}}title")),
        link=link,
        updated=updated,
    )


def _rss_item(item: etree._Element, base_url: str) -> FeedEntry:
    link = _text(item.find("link"))
    return FeedEntry(
        id=_text(item.find("guid")),
        title=_text(item.find("title")),
        link=urljoin(base_url, link) if link else "",
        updated=_text(item.find("pubDate")),
    )


def parse_feed(content: Union[str, bytes], base_url: str) -> Page:
    """Parse an Atom 1.0 or RSS 2.0 document into a :class:`Page`.

    The next page is taken from a ``<link rel="next">`` on the feed (Atom) or
    the channel (RSS, usually ``atom:link``), resolved against *base_url*.

    Example:
    ```python
    page = parse_feed(body, "https://example.com/feed.atom")
    for entry in page.items:
        print(entry.title, entry.link)
    ```
    """
    raw = content.encode("utf-8") if isinstance(content, str) else content
    parser = etree.XMLParser(ns_clean=True, recover=True, resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(raw, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise PageParseError(f"Unparseable feed at {base_url}: {exc}") from exc
    if root is None:
        raise PageParseError(f"Empty or unparseable feed at {base_url}")

    if root.tag == f"{{{ATOM_NS}}}feed":
        items = [_atom_entry(e, base_url) for e in root.findall(f"{{{ATOM_NS}}}entry")]
        return Page(items=items, next_locator=_next_href(root, base_url))

    if etree.QName(root).localname == "rss":
        channel = root.find("channel")
        if channel is None:
            raise PageParseError(f"RSS document without <channel> at {base_url}")
        items = [_rss_item(i, base_url) for i in channel.findall("item")]
        return Page(items=items, next_locator=_next_href(channel, base_url))

    raise PageParseError(f"Not an RSS or Atom feed at {base_url}: <{etree.QName(root).localname}>")


def parse_json(content: Union[str, bytes], base_url: str) -> Page:
    """A top-level list is the items; an object supplies ``items`` and optionally ``next``."""
    try:
        data: Any = json.loads(content)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise PageParseError(f"Invalid JSON at {base_url}: {exc}") from exc

    if isinstance(data, list):
        return Page(items=data)
    if isinstance(data, dict) and isinstance(data.get("items"), list):
        nxt = data.get("next")
        return Page(
            items=data["items"],
            next_locator=urljoin(base_url, nxt) if isinstance(nxt, str) and nxt else None,
        )
    raise PageParseError(f"JSON at {base_url} is neither a list nor an object with 'items'")


def parse_page(
    body: Union[str, bytes],
    content_type: str,
    url: str,
    link_next: Optional[str] = None,
) -> Page:
    """Dispatch on *content_type*; fall back to *link_next* from the HTTP Link header."""
    if "json" in content_type.lower():
        page = parse_json(body, url)
    else:
        page = parse_feed(body, url)
    if page.next_locator is None and link_next:
        return Page(items=page.items, next_locator=link_next)
    return page
