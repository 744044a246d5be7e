import html

from bs4 import BeautifulSoup

CARD_SNIPPET_CHARS = 200


def decode_entities(value: str) -> str:
    """Decode named, decimal and hex HTML entities. Strings without entities come back unchanged."""
    if "&" not in value:
        return value
    return html.unescape(value)


def html_to_text(markup: str | None) -> str:
    if not markup:
        return ""
    return BeautifulSoup(markup, "html.parser").get_text(" ", strip=True)


def normalize_whitespace(text: str | None) -> str:
    if not text:
        return ""
    return " ".join(text.split())


def card_snippet(content_snippet: str | None, content: str | None) -> str:
    if content_snippet:
        return content_snippet
    if not content:
        return ""
    # Cut first, then strip, so a dangling half tag is dropped too.
    return html_to_text(content[:CARD_SNIPPET_CHARS]) + "..."
