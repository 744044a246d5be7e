import asyncio
import logging
from collections.abc import Iterable, Sequence
from time import perf_counter
from typing import Protocol

from feedboard.core.observability import AGGREGATION_LATENCY, ARTICLES_AGGREGATED
from feedboard.schemas import Article, FeedDescriptor
from feedboard.services.ingestion.common import RawItem
from feedboard.services.ingestion.rss import build_fetcher
from feedboard.services.normalizer import normalize_item
from feedboard.utils.timestamps import sort_key

logger = logging.getLogger(__name__)


class ItemFetcher(Protocol):
    async def fetch_items(self, descriptor: FeedDescriptor) -> list[RawItem]: ...


async def fetch_one(descriptor: FeedDescriptor, fetcher: ItemFetcher) -> list[Article]:
    items = await fetcher.fetch_items(descriptor)
    return [normalize_item(item, descriptor) for item in items]


def sort_articles(articles: Iterable[Article]) -> list[Article]:
    """Newest first by parsed publish instant; equal instants keep their input order."""
    return sorted(articles, key=lambda article: sort_key(article.pub_date), reverse=True)


async def aggregate(descriptors: Sequence[FeedDescriptor], fetcher: ItemFetcher | None = None) -> list[Article]:
    """Fetch every feed concurrently and merge the results into one time-ordered list.

    A feed that fails contributes nothing; the run itself never fails because of one.
    """
    if not descriptors:
        return []
    fetcher = fetcher or build_fetcher()

    start = perf_counter()
    results = await asyncio.gather(
        *(fetch_one(descriptor, fetcher) for descriptor in descriptors),
        return_exceptions=True,
    )

    articles: list[Article] = []
    for descriptor, result in zip(descriptors, results, strict=True):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            logger.warning("Dropping feed %s after unexpected error: %r", descriptor.name, result)
            continue
        articles.extend(result)

    ordered = sort_articles(articles)
    elapsed = perf_counter() - start
    AGGREGATION_LATENCY.observe(elapsed)
    ARTICLES_AGGREGATED.observe(len(ordered))
    logger.info("Aggregated %d articles from %d feeds in %.2fs", len(ordered), len(descriptors), elapsed)
    return ordered
