# File: tests/conftest.py
from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence, Tuple

import pytest
import pytest_asyncio
from aiohttp import web

from pagewalk.config import WalkerConfig
from pagewalk.logger import configure


@pytest.fixture(autouse=True)
def quiet_logger():
    """
    Re-bind the project logger to the current (captured) stderr for each test.
    """
    configure(level="WARNING")
    yield


@pytest.fixture()
def basic_config() -> WalkerConfig:
    """
    Return a basic valid WalkerConfig for fetcher tests.
    """
    return WalkerConfig(
        start_url="http://example.com/feed",
        timeout=2.0,
        user_agent="TestAgent/1.0",
        rate_limit=100.0,
        retry_times=2,
        backoff_factor=0.0,
    )


@pytest.fixture()
def atom_feed() -> Callable[..., str]:
    """
    Build an Atom document from (id, title) pairs and an optional next href.
    """

    def _build(entries: Iterable[Tuple[str, str]], next_href: Optional[str] = None) -> str:
        parts = [
            '<?xml version="1.0" encoding="utf-8"?>',
            '<feed xmlns="http://www.w3.org/2005/Atom">',
            "<title>Test feed</title>",
        ]
        if next_href:
            parts.append(f'<link rel="next" href="{next_href}"/>')
        for entry_id, title in entries:
            parts.append(
                "<entry>"
                f"<id>{entry_id}</id><title>{title}</title>"
                f'<link href="/entries/{entry_id}"/>'
                "<updated>2024-01-01T00:00:00Z</updated>"
                "</entry>"
            )
        parts.append("</feed>")
        return "".join(parts)

    return _build


@pytest.fixture()
def rss_feed() -> Callable[..., str]:
    """
    Build an RSS 2.0 document; the next page is announced with atom:link.
    """

    def _build(titles: Sequence[str], next_href: Optional[str] = None) -> str:
        parts = [
            '<?xml version="1.0"?>',
            '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom"><channel>',
            "<title>Test channel</title><link>http://example.com/</link>",
        ]
        if next_href:
            parts.append(f'<atom:link rel="next" href="{next_href}"/>')
        for n, title in enumerate(titles):
            parts.append(
                "<item>"
                f"<title>{title}</title><link>http://example.com/{n}</link>"
                f"<guid>guid-{title}</guid><pubDate>Mon, 01 Jan 2024 00:00:00 GMT</pubDate>"
                "</item>"
            )
        parts.append("</channel></rss>")
        return "".join(parts)

    return _build


@pytest_asyncio.fixture
async def serve():
    """
    Start aiohttp applications on ephemeral ports; yields a starter returning the base URL.
    """
    runners: list[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        runner = web.AppRunner(app)
        await runner.setup()
        runners.append(runner)
        site = web.TCPSite(runner, "127.0.0.1", 0)
        await site.start()
        host, port = runner.addresses[0][:2]
        return f"http://{host}:{port}"

    yield _start
    for runner in runners:
        await runner.cleanup()
