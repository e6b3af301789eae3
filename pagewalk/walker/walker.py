# === FILE: pagewalk/walker/walker.py ===
"""
Lazy walker over paginated resources.

Stitches successive pages into one ordered stream of items. A page is
fetched only when the consumer asks for an item past the end of the
previous one.
"""
from __future__ import annotations

import inspect
from typing import Any, AsyncIterator, Awaitable, Callable, Hashable, Iterator, Union

from pagewalk.logger import logger
from pagewalk.walker.models import Page

__all__ = ("PageWalker", "walk", "FetchPage")

FetchPage = Callable[[Hashable], Union[Page, Awaitable[Page]]]


class PageWalker:
    """Re-iterable lazy view over a chain of pages.

    Every ``iter()`` / ``aiter()`` starts a new forward traversal from the
    initial locator; fetched pages are not cached between traversals.
    """

    def __init__(self, initial_locator: Hashable, fetch_page: FetchPage) -> None:
        if initial_locator is None:
            raise ValueError("initial locator must not be None")
        self.initial_locator = initial_locator
        self.fetch_page = fetch_page

    def __iter__(self) -> Iterator[Any]:
        locator = self.initial_locator
        number = 0
        while locator is not None:
            number += 1
            logger.debug("Fetching page %d: %s", number, locator)
            page = self.fetch_page(locator)
            if inspect.isawaitable(page):
                if inspect.iscoroutine(page):
                    page.close()
                raise TypeError("fetch_page is asynchronous, iterate with 'async for'")
            yield from page.items
            locator = page.next_locator
        logger.debug("Walk from %s finished after %d page(s)", self.initial_locator, number)

    async def __aiter__(self) -> AsyncIterator[Any]:
        locator = self.initial_locator
        number = 0
        while locator is not None:
            number += 1
            logger.debug("Fetching page %d: %s", number, locator)
            page = self.fetch_page(locator)
            if inspect.isawaitable(page):
                page = await page
            for item in page.items:
                yield item
            locator = page.next_locator
        logger.debug("Walk from %s finished after %d page(s)", self.initial_locator, number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.initial_locator!r})"


def walk(initial_locator: Hashable, fetch_page: FetchPage) -> PageWalker:
    """Return a lazy, ordered stream of the items of every page in a chain.

    ``fetch_page`` maps a locator to a :class:`Page` (or an awaitable of one,
    in which case consume with ``async for``). Nothing is fetched until the
    first item is requested, and the next page is fetched only once the
    current page's items are used up. A page without ``next_locator`` ends
    the stream. Errors raised by ``fetch_page`` reach the consumer at the
    point where that page's items were due; items already yielded stay valid.

    There is no cycle detection: a chain whose ``next_locator`` points back
    to a visited page is walked forever. Bound such walks on the consumer
    side, e.g. with :func:`itertools.islice`.
    """
    return PageWalker(initial_locator, fetch_page)
