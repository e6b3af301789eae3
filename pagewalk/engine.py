# File: pagewalk/engine.py
"""pagewalk.engine: runs a walk over HTTP and collects its items."""

from __future__ import annotations

import time
from contextlib import aclosing
from typing import Any, List, Optional

from pagewalk.config import WalkerConfig
from pagewalk.logger import logger
from pagewalk.walker.fetcher import FeedFetcher
from pagewalk.walker.walker import walk

__all__ = ["collect_items"]


async def collect_items(cfg: WalkerConfig, limit: Optional[int] = None) -> List[Any]:
    """
    Walk the paginated resource starting at ``cfg.start_url`` and return its items.

    Parameters
    ----------
    cfg : WalkerConfig
        Walk configuration.
    limit : int, optional
        Stop after this many items; defaults to ``cfg.max_items``.
        Pages past the limit are never fetched.

    Returns
    -------
    List[Any]
        Items in page order (FeedEntry for feeds, decoded JSON values otherwise).
    """
    if limit is None:
        limit = cfg.max_items
    start_url = str(cfg.start_url)
    logger.info("Walk started: %s", start_url)
    start = time.monotonic()

    items: List[Any] = []
    async with FeedFetcher(cfg) as fetcher:
        if limit is None or limit > 0:
            async with aclosing(aiter(walk(start_url, fetcher.fetch_page))) as stream:
                async for item in stream:
                    items.append(item)
                    if limit is not None and len(items) >= limit:
                        break

    logger.info("Walk finished: %d item(s) in %.2f s", len(items), time.monotonic() - start)
    return items
