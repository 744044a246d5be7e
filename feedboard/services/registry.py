"""Where the list of configured feeds comes from.

Two document shapes are accepted, under a top-level ``feeds`` key::

    feeds:                      # flat list
      - name: Dicebreaker
        url: https://www.dicebreaker.com/feed
        theme: Board Games

    {"feeds": {"Board Games": {"Dicebreaker": {"url": "https://..."}}}}   # nested by theme

A missing or empty ``feeds`` key means no feeds are configured, which is not an error.
Anything that stops the list from being read at all raises FeedRegistryError.
"""

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import ValidationError

from feedboard.catalog import FEED_CATALOG
from feedboard.core.config import Settings, get_settings
from feedboard.schemas import FeedDescriptor

logger = logging.getLogger(__name__)


class FeedRegistryError(RuntimeError):
    pass


def _entries(feeds: Any) -> list[dict]:
    if isinstance(feeds, list):
        return feeds
    if isinstance(feeds, dict):
        entries = []
        for theme, group in feeds.items():
            if not isinstance(group, dict):
                raise FeedRegistryError(f"Theme {theme!r} must map feed names to settings")
            for name, config in group.items():
                if not isinstance(config, dict):
                    raise FeedRegistryError(f"Feed {name!r} must be a mapping with a url")
                entries.append({"name": name, "url": config.get("url"), "theme": theme})
        return entries
    raise FeedRegistryError("'feeds' must be a list or a mapping of themes")


def parse_feed_config(document: Any) -> list[FeedDescriptor]:
    if document is None:
        return []
    if not isinstance(document, dict):
        raise FeedRegistryError("Feed configuration must be a mapping with a 'feeds' key")
    feeds = document.get("feeds")
    if not feeds:
        return []

    descriptors: list[FeedDescriptor] = []
    seen: set[str] = set()
    for entry in _entries(feeds):
        try:
            descriptor = FeedDescriptor.model_validate(entry)
        except ValidationError as exc:
            raise FeedRegistryError(f"Invalid feed entry {entry!r}: {exc}") from exc
        if descriptor.name in seen:
            raise FeedRegistryError(f"Duplicate feed name: {descriptor.name}")
        seen.add(descriptor.name)
        descriptors.append(descriptor)
    return descriptors


def _decode(text: str, as_json: bool) -> Any:
    try:
        return json.loads(text) if as_json else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise FeedRegistryError(f"Feed configuration is not valid {'JSON' if as_json else 'YAML'}: {exc}") from exc


def load_from_file(path: str | Path) -> list[FeedDescriptor]:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FeedRegistryError(f"Cannot read feed configuration {path}: {exc}") from exc
    return parse_feed_config(_decode(text, as_json=path.suffix.lower() == ".json"))


async def load_from_url(url: str, transport: httpx.AsyncBaseTransport | None = None) -> list[FeedDescriptor]:
    settings = get_settings()
    try:
        async with httpx.AsyncClient(
            timeout=settings.fetch_http_timeout_seconds,
            follow_redirects=True,
            transport=transport,
        ) as client:
            response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as exc:
        raise FeedRegistryError(f"Cannot fetch feed configuration {url}: {exc}") from exc

    content_type = response.headers.get("content-type", "")
    as_json = "json" in content_type or url.lower().split("?")[0].endswith(".json")
    return parse_feed_config(_decode(response.text, as_json=as_json))


def load_static() -> list[FeedDescriptor]:
    return parse_feed_config({"feeds": FEED_CATALOG})


async def load_feed_descriptors(settings: Settings | None = None) -> list[FeedDescriptor]:
    settings = settings or get_settings()
    if settings.feeds_source == "url":
        descriptors = await load_from_url(settings.feeds_config_url or "")
    elif settings.feeds_source == "static":
        descriptors = load_static()
    else:
        descriptors = load_from_file(settings.feeds_config_path)

    logger.info("Loaded %d feed descriptors from %s source", len(descriptors), settings.feeds_source)
    return descriptors
