import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from datetime import datetime, timedelta

from pydantic import BaseModel

from feedboard.core.time import now_utc
from feedboard.schemas import Article, FeedDescriptor
from feedboard.services.aggregator import aggregate
from feedboard.services.registry import load_feed_descriptors

logger = logging.getLogger(__name__)

DescriptorLoader = Callable[[], Awaitable[list[FeedDescriptor]]]
Aggregator = Callable[[Sequence[FeedDescriptor]], Awaitable[list[Article]]]


class FeedSnapshot(BaseModel):
    feeds: list[FeedDescriptor]
    articles: list[Article]
    fetched_at: datetime


class SnapshotCache:
    """Holds the latest aggregation and re-runs it once it is older than ``ttl_seconds``.

    Every refresh is a complete new run that replaces the previous snapshot. A failed
    refresh leaves the previous snapshot in place and re-raises.
    """

    def __init__(
        self,
        ttl_seconds: int,
        loader: DescriptorLoader = load_feed_descriptors,
        aggregator: Aggregator = aggregate,
        clock: Callable[[], datetime] = now_utc,
    ):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.loader = loader
        self.aggregator = aggregator
        self.clock = clock
        self._snapshot: FeedSnapshot | None = None
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> FeedSnapshot | None:
        return self._snapshot

    def is_stale(self) -> bool:
        if self._snapshot is None:
            return True
        return self.clock() - self._snapshot.fetched_at >= self.ttl

    async def get(self) -> FeedSnapshot:
        if not self.is_stale():
            return self._snapshot
        async with self._lock:
            # Another caller may have refreshed while we waited.
            if not self.is_stale():
                return self._snapshot
            return await self._run()

    async def refresh(self) -> FeedSnapshot:
        async with self._lock:
            return await self._run()

    async def _run(self) -> FeedSnapshot:
        feeds = await self.loader()
        articles = await self.aggregator(feeds) if feeds else []
        self._snapshot = FeedSnapshot(feeds=feeds, articles=articles, fetched_at=self.clock())
        logger.info("Snapshot refreshed: %d feeds, %d articles", len(feeds), len(articles))
        return self._snapshot
