from collections import Counter
from collections.abc import Iterable, Sequence

from feedboard.schemas import (
    ALL_THEMES,
    Article,
    AuthorCount,
    FeedDescriptor,
    FeedView,
    SiteCount,
    ViewState,
)


def list_themes(feeds: Iterable[FeedDescriptor]) -> list[str]:
    themes = [ALL_THEMES]
    for feed in feeds:
        if feed.theme and feed.theme not in themes:
            themes.append(feed.theme)
    return themes


def filter_by_theme(articles: Iterable[Article], feeds: Iterable[FeedDescriptor], theme: str) -> list[Article]:
    if theme == ALL_THEMES:
        return list(articles)
    theme_by_feed = {feed.name: feed.theme for feed in feeds}
    return [article for article in articles if theme_by_feed.get(article.feed_name) == theme]


def filter_by_selection(
    articles: Iterable[Article],
    sites: Iterable[str] = (),
    authors: Iterable[str] = (),
) -> list[Article]:
    sites, authors = set(sites), set(authors)
    kept = []
    for article in articles:
        if sites and article.feed_name not in sites:
            continue
        if authors and (not article.creator or article.creator not in authors):
            continue
        kept.append(article)
    return kept


def count_sites(articles: Iterable[Article]) -> list[SiteCount]:
    counts = Counter(article.feed_name for article in articles)
    return [SiteCount(site=site, count=count) for site, count in counts.most_common()]


def count_authors(articles: Iterable[Article]) -> list[AuthorCount]:
    counts = Counter(article.creator for article in articles if article.creator)
    return [AuthorCount(author=author, count=count) for author, count in counts.most_common()]


def build_view(articles: Sequence[Article], feeds: Sequence[FeedDescriptor], state: ViewState) -> FeedView:
    """Everything the reader screen shows for one filter state.

    Sidebar statistics come from the theme-filtered articles so that picking a site
    does not make the other sites vanish from the list.
    """
    themed = filter_by_theme(articles, feeds, state.theme)
    shown = filter_by_selection(themed, state.sites, state.authors)
    return FeedView(
        themes=list_themes(feeds),
        state=state,
        articles=shown,
        sites=count_sites(themed),
        authors=count_authors(themed),
        feeds_count=len(feeds),
        articles_count=len(shown),
    )
