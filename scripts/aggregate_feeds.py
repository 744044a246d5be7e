import argparse
import asyncio
import json
import sys

from feedboard.core.logging_setup import setup_logging
from feedboard.core.responses import FEEDS_UNAVAILABLE_MESSAGE, NO_FEEDS_NOTICE
from feedboard.schemas import ALL_THEMES, Article
from feedboard.services.aggregator import aggregate
from feedboard.services.registry import FeedRegistryError, load_feed_descriptors
from feedboard.services.views import filter_by_theme
from feedboard.utils.text import card_snippet


async def run(theme: str, limit: int | None) -> tuple[list, list[Article]]:
    feeds = await load_feed_descriptors()
    if not feeds:
        return feeds, []
    articles = filter_by_theme(await aggregate(feeds), feeds, theme)
    return feeds, articles[:limit] if limit else articles


def _print_text(articles: list[Article]) -> None:
    for article in articles:
        byline = f" by {article.creator}" if article.creator else ""
        print(f"[{article.feed_name}] {article.title}{byline}")
        print(f"    {article.pub_date} | {article.link}")
        snippet = card_snippet(article.content_snippet, article.content)
        if snippet:
            print(f"    {snippet[:160]}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Fetch every configured feed once and print the merged articles")
    parser.add_argument("--theme", default=ALL_THEMES, help="Only show articles from feeds with this theme")
    parser.add_argument("--limit", type=int, default=None, help="Print at most this many articles")
    parser.add_argument("--json", action="store_true", help="Emit the articles as a JSON array")
    args = parser.parse_args()

    setup_logging()
    try:
        feeds, articles = asyncio.run(run(args.theme, args.limit))
    except FeedRegistryError as exc:
        print(f"{FEEDS_UNAVAILABLE_MESSAGE}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not feeds:
        print(NO_FEEDS_NOTICE)
        return
    if args.json:
        print(json.dumps([article.model_dump(by_alias=True) for article in articles], indent=2))
    else:
        _print_text(articles)
        print(f"{len(feeds)} sources | {len(articles)} articles")


if __name__ == "__main__":
    main()
