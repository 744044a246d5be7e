from feedboard.schemas.feeds import (
    ALL_THEMES,
    Article,
    AuthorCount,
    FeedDescriptor,
    FeedView,
    SidebarTab,
    SiteCount,
    ViewState,
)

__all__ = [
    "ALL_THEMES",
    "Article",
    "AuthorCount",
    "FeedDescriptor",
    "FeedView",
    "SidebarTab",
    "SiteCount",
    "ViewState",
]
