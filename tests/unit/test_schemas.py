import pytest
from pydantic import ValidationError

from feedboard.schemas import Article, FeedDescriptor


def test_feed_descriptor_requires_name_and_url():
    with pytest.raises(ValidationError):
        FeedDescriptor(name="", url="https://a.example/feed")
    with pytest.raises(ValidationError):
        FeedDescriptor(name="A", url="")


def test_feed_descriptor_theme_defaults_blank():
    assert FeedDescriptor(name="A", url="https://a.example/feed").theme == ""


def test_article_serializes_with_camel_case_keys():
    article = Article(
        title="T",
        link="https://a.example/t",
        pub_date="2024-01-01",
        content_snippet="s",
        feed_name="A",
    )
    dumped = article.model_dump(by_alias=True)
    assert dumped["pubDate"] == "2024-01-01"
    assert dumped["contentSnippet"] == "s"
    assert dumped["feedName"] == "A"
    assert dumped["creator"] is None


def test_article_is_immutable():
    article = Article(title="T", link="#", pubDate="2024-01-01", feedName="A")
    with pytest.raises(ValidationError):
        article.title = "other"
