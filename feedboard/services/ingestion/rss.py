import io
import logging
from datetime import UTC, datetime
from time import perf_counter

import feedparser

from feedboard.core.observability import FEED_FETCH_COUNT, FEED_FETCH_LATENCY
from feedboard.core.time import isoformat_z
from feedboard.schemas import FeedDescriptor
from feedboard.services.ingestion.common import FeedParseError, RawItem
from feedboard.services.ingestion.retrieval import FeedRetriever, build_retriever
from feedboard.utils.text import html_to_text, normalize_whitespace

logger = logging.getLogger(__name__)


def _extract_content(entry: dict) -> str | None:
    content = entry.get("content")
    if isinstance(content, list) and content:
        value = content[0].get("value")
        if value:
            return value
    return entry.get("summary") or None


def _iso_date(entry: dict) -> str | None:
    parsed = entry.get("published_parsed") or entry.get("updated_parsed")
    if not parsed:
        return None
    try:
        return isoformat_z(datetime(*parsed[:6], tzinfo=UTC))
    except (TypeError, ValueError):
        return None


def _raw_item(entry: dict) -> RawItem:
    content = _extract_content(entry)
    snippet = normalize_whitespace(html_to_text(content)) if content else None
    return RawItem(
        title=entry.get("title"),
        link=entry.get("link"),
        pub_date=entry.get("published") or entry.get("updated"),
        creator=entry.get("author"),
        content=content,
        content_snippet=snippet or None,
        iso_date=_iso_date(entry),
    )


def parse_feed(content: bytes | str) -> list[RawItem]:
    """Parse an RSS/Atom document into raw items.

    feedparser is lenient: a document it flags as malformed still counts as long as
    entries came out of it. Only a broken document with nothing usable is an error.
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    if not content.strip():
        raise FeedParseError("Empty feed document")
    # A stream keeps feedparser from treating the document as a path or URL.
    feed = feedparser.parse(io.BytesIO(content))
    if feed.bozo and not feed.entries:
        raise FeedParseError(f"Unparseable feed: {feed.get('bozo_exception')}")
    return [_raw_item(entry) for entry in feed.entries]


class FeedFetcher:
    """Retrieves and parses one feed, degrading any failure to an empty item list."""

    def __init__(self, retriever: FeedRetriever | None = None):
        self.retriever = retriever or build_retriever()

    async def fetch_items(self, descriptor: FeedDescriptor) -> list[RawItem]:
        start = perf_counter()
        try:
            content = await self.retriever.retrieve(descriptor.url)
            items = parse_feed(content)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Error fetching feed %s (%s): %s", descriptor.name, descriptor.url, exc)
            FEED_FETCH_COUNT.labels(descriptor.name, "failure").inc()
            return []
        finally:
            FEED_FETCH_LATENCY.labels(self.retriever.name).observe(perf_counter() - start)

        FEED_FETCH_COUNT.labels(descriptor.name, "success").inc()
        logger.debug("Fetched %d items from %s", len(items), descriptor.name)
        return items


def build_fetcher() -> FeedFetcher:
    return FeedFetcher(build_retriever())
