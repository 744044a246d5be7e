from datetime import datetime

from feedboard.core.time import isoformat_z, now_utc
from feedboard.schemas import Article, FeedDescriptor
from feedboard.services.ingestion.common import RawItem
from feedboard.utils.text import decode_entities

NO_TITLE = "No Title"
LINK_PLACEHOLDER = "#"


def normalize_item(item: RawItem, descriptor: FeedDescriptor, now: datetime | None = None) -> Article:
    """Map one raw entry onto the Article schema.

    Missing publish dates fall back to the normalization time, so undated entries
    move around between runs. That matches how the reader has always behaved.
    """
    return Article(
        title=decode_entities(item.title) if item.title else NO_TITLE,
        link=item.link or LINK_PLACEHOLDER,
        pub_date=item.pub_date or isoformat_z(now or now_utc()),
        content_snippet=item.content_snippet,
        content=item.content,
        creator=decode_entities(item.creator) if item.creator else None,
        iso_date=item.iso_date,
        feed_name=descriptor.name,
    )
