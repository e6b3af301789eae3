# pagewalk/walker/fetcher.py
"""
Fetcher module: retrieves pages over HTTP with rate limiting, retry/backoff and timeout,
and parses them into :class:`Page` objects for the walker.
"""
from __future__ import annotations

import asyncio
import random
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Sequence
from urllib.parse import urljoin

from aiohttp import ClientError, ClientSession, ClientTimeout

from pagewalk.config import WalkerConfig
from pagewalk.logger import logger
from pagewalk.parser.page_parser import PageParseError, parse_page
from pagewalk.walker.models import Page

__all__ = ("FetchError", "FeedFetcher")


class FetchError(RuntimeError):
    """A page could not be fetched or parsed."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason


class FeedFetcher:
    """Async ``fetch_page`` capability backed by an aiohttp session."""
    _RETRY_STATUS: Sequence[int] = tuple(range(500, 600)) + (429,)

    def __init__(self, config: WalkerConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None
        self._rate_lock = asyncio.Lock()
        self._last_request_ts = 0.0

    async def __aenter__(self) -> FeedFetcher:
        if self.session is None:
            headers = {"User-Agent": self.config.user_agent, **self.config.headers}
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers=headers,
                raise_for_status=False,
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def fetch_page(self, url: str) -> Page:
        """
        Fetch *url* and parse it into a Page.

        Retries 5xx/429, network errors and timeouts up to ``retry_times``;
        raises FetchError when the page cannot be obtained.
        """
        if self.session is None:
            raise RuntimeError("Session not initialized")
        attempts = 0
        while True:
            await self._wait_for_rate_limit()
            retry_after: Optional[float] = None
            try:
                async with self.session.get(url) as resp:
                    status = resp.status
                    if status in self._RETRY_STATUS:
                        retry_after = _retry_after_seconds(resp.headers.get("Retry-After"))
                        raise ClientError(f"retryable status {status}")
                    if not 200 <= status < 300:
                        raise FetchError(url, f"HTTP {status}")
                    body = await resp.read()
                    ctype = resp.headers.get("Content-Type", "")
                    final_url = str(resp.url)
                    # resp.links merges every Link header line
                    next_link = resp.links.get("next")
                    link_next = urljoin(final_url, str(next_link["url"])) if next_link else None
                break
            except (ClientError, asyncio.TimeoutError) as e:
                attempts += 1
                if attempts > self.config.retry_times:
                    logger.warning("Failed %s: %s", url, e)
                    raise FetchError(url, str(e) or type(e).__name__) from e
                backoff = min(60, self.config.backoff_factor * (2**attempts + random.random()))
                if retry_after is not None:
                    backoff = max(backoff, retry_after)
                logger.debug("Retry %d/%d for %s after %.2f s", attempts, self.config.retry_times, url, backoff)
                await asyncio.sleep(backoff)

        try:
            page = parse_page(body, ctype, final_url, link_next)
        except PageParseError as e:
            logger.warning("Malformed page %s: %s", url, e)
            raise FetchError(url, str(e)) from e
        logger.debug("Fetched %s: %d item(s), next=%s", url, len(page.items), page.next_locator)
        return page

    async def _wait_for_rate_limit(self) -> None:
        interval = 1 / self.config.rate_limit
        async with self._rate_lock:
            now = time.monotonic()
            wait = interval - (now - self._last_request_ts)
            if wait > 0:
                await asyncio.sleep(wait)
            self._last_request_ts = time.monotonic()


def _retry_after_seconds(value: Optional[str]) -> Optional[float]:
    """Seconds to wait from a ``Retry-After`` header (delta-seconds or HTTP-date)."""
    if not value:
        return None
    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())
