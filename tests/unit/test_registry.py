import asyncio

import httpx
import pytest

from feedboard.catalog import FEED_CATALOG
from feedboard.core.config import get_settings
from feedboard.schemas import FeedDescriptor
from feedboard.services.registry import (
    FeedRegistryError,
    load_feed_descriptors,
    load_from_file,
    load_from_url,
    parse_feed_config,
)


def test_flat_yaml_file(fixtures_dir):
    feeds = load_from_file(fixtures_dir / "feeds.yaml")
    assert [feed.name for feed in feeds] == ["Board Games Example", "Dice Example", "Missing Example"]
    assert feeds[1] == FeedDescriptor(name="Dice Example", url="https://dice.example/atom.xml", theme="Dice")


def test_nested_json_file(fixtures_dir):
    feeds = load_from_file(fixtures_dir / "feeds.json")
    assert [(feed.theme, feed.name) for feed in feeds] == [
        ("Board Games", "Board Games Example"),
        ("Dice", "Dice Example"),
    ]


@pytest.mark.parametrize("document", [None, {}, {"feeds": None}, {"feeds": []}, {"feeds": {}}])
def test_no_feeds_configured_is_empty(document):
    assert parse_feed_config(document) == []


def test_duplicate_names_rejected():
    document = {
        "feeds": [
            {"name": "A", "url": "https://a.example/1", "theme": "X"},
            {"name": "A", "url": "https://a.example/2", "theme": "Y"},
        ]
    }
    with pytest.raises(FeedRegistryError):
        parse_feed_config(document)


@pytest.mark.parametrize(
    "document",
    [
        ["not", "a", "mapping"],
        {"feeds": "https://a.example"},
        {"feeds": [{"name": "A"}]},
        {"feeds": {"Theme": ["A"]}},
        {"feeds": {"Theme": {"A": "https://a.example"}}},
    ],
)
def test_malformed_documents_raise(document):
    with pytest.raises(FeedRegistryError):
        parse_feed_config(document)


def test_missing_file_is_registry_failure(tmp_path):
    with pytest.raises(FeedRegistryError):
        load_from_file(tmp_path / "nope.yaml")


def test_invalid_yaml_is_registry_failure(tmp_path):
    path = tmp_path / "feeds.yaml"
    path.write_text("feeds: [unclosed", encoding="utf-8")
    with pytest.raises(FeedRegistryError):
        load_from_file(path)


def test_load_from_url_json():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"feeds": [{"name": "A", "url": "https://a.example/rss", "theme": "X"}]})

    feeds = asyncio.run(load_from_url("https://config.example/feeds", transport=httpx.MockTransport(handler)))
    assert feeds == [FeedDescriptor(name="A", url="https://a.example/rss", theme="X")]


def test_load_from_url_failure_is_registry_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    with pytest.raises(FeedRegistryError):
        asyncio.run(load_from_url("https://config.example/feeds.yaml", transport=transport))


def test_static_source_uses_catalog(monkeypatch):
    monkeypatch.setenv("FEEDS_SOURCE", "static")
    get_settings.cache_clear()
    feeds = asyncio.run(load_feed_descriptors())
    assert [feed.name for feed in feeds] == [item["name"] for item in FEED_CATALOG]


def test_file_source_is_default(fixtures_dir):
    feeds = asyncio.run(load_feed_descriptors())
    assert len(feeds) == 3
