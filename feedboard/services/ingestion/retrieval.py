"""Ways of getting the raw bytes of a feed.

Every strategy exposes ``async retrieve(url) -> bytes`` and raises on failure; turning
failures into empty feeds is the fetcher's job, not the retriever's.
"""

import asyncio
from pathlib import Path
from typing import Protocol
from urllib.parse import quote, unquote, urlparse

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from feedboard.core.config import Settings, get_settings
from feedboard.utils.network import UnsafeUrlError, assert_allowed_url

FEED_ACCEPT = "application/rss+xml, application/atom+xml, application/xml;q=0.9, text/xml;q=0.9, */*;q=0.8"


class FeedRetriever(Protocol):
    name: str

    async def retrieve(self, url: str) -> bytes: ...


class DirectRetriever:
    name = "direct"

    def __init__(self, settings: Settings | None = None, transport: httpx.AsyncBaseTransport | None = None):
        self.settings = settings or get_settings()
        self.transport = transport

    def target_url(self, url: str) -> str:
        return url

    async def retrieve(self, url: str) -> bytes:
        # Host resolution blocks, so it runs in a worker thread.
        await asyncio.to_thread(assert_allowed_url, url, self.settings)
        response = await self._get(self.target_url(url))
        return response.content

    async def _get(self, url: str) -> httpx.Response:
        headers = {"User-Agent": self.settings.fetch_user_agent, "Accept": FEED_ACCEPT}
        async for attempt in AsyncRetrying(
            wait=wait_exponential(multiplier=1, min=1, max=8),
            stop=stop_after_attempt(self.settings.fetch_max_attempts),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(
                    timeout=self.settings.fetch_http_timeout_seconds,
                    follow_redirects=self.settings.fetch_follow_redirects,
                    transport=self.transport,
                ) as client:
                    response = await client.get(url, headers=headers)
                response.raise_for_status()
        return response


class ProxiedRetriever(DirectRetriever):
    name = "proxy"

    def target_url(self, url: str) -> str:
        return f"{self.settings.fetch_proxy_prefix}{quote(url, safe='')}"


class FileRetriever:
    """Reads feeds from a static mirror directory instead of the network."""

    name = "file"

    def __init__(self, root: str | Path | None = None, settings: Settings | None = None):
        settings = settings or get_settings()
        self.root = Path(root if root is not None else settings.static_feeds_dir).resolve()

    def resolve(self, url: str) -> Path:
        parsed = urlparse(url)
        if parsed.scheme in {"http", "https"}:
            relative = Path(parsed.hostname or "") / unquote(parsed.path).lstrip("/")
            if not parsed.path or parsed.path.endswith("/"):
                relative = relative / "index.xml"
            path = self.root / relative
        elif parsed.scheme == "file":
            path = Path(unquote(parsed.path))
        elif parsed.scheme == "":
            path = Path(url)
            if not path.is_absolute():
                path = self.root / path
        else:
            raise UnsafeUrlError(f"Unsupported scheme for static feeds: {url}")

        path = path.resolve()
        if not path.is_relative_to(self.root):
            raise UnsafeUrlError(f"Static feed path escapes mirror root: {url}")
        return path

    async def retrieve(self, url: str) -> bytes:
        path = self.resolve(url)
        return await asyncio.to_thread(path.read_bytes)


def build_retriever(settings: Settings | None = None) -> FeedRetriever:
    settings = settings or get_settings()
    if settings.fetch_strategy == "proxy":
        return ProxiedRetriever(settings)
    if settings.fetch_strategy == "file":
        return FileRetriever(settings=settings)
    return DirectRetriever(settings)
