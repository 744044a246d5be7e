from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

ALL_THEMES = "All"


class FeedDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    url: str = Field(min_length=1)
    theme: str = ""


class Article(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(min_length=1)
    link: str = Field(min_length=1)
    pub_date: str = Field(alias="pubDate", min_length=1)
    content_snippet: str | None = Field(default=None, alias="contentSnippet")
    content: str | None = None
    creator: str | None = None
    iso_date: str | None = Field(default=None, alias="isoDate")
    feed_name: str = Field(alias="feedName", min_length=1)


class SidebarTab(StrEnum):
    sites = "sites"
    authors = "authors"


class SiteCount(BaseModel):
    site: str
    count: int


class AuthorCount(BaseModel):
    author: str
    count: int


class ViewState(BaseModel):
    """Reader filter selections. Changing theme or tab clears the site/author picks."""

    model_config = ConfigDict(frozen=True)

    theme: str = ALL_THEMES
    tab: SidebarTab = SidebarTab.sites
    sites: frozenset[str] = frozenset()
    authors: frozenset[str] = frozenset()

    def with_theme(self, theme: str) -> "ViewState":
        return ViewState(theme=theme, tab=self.tab)

    def with_tab(self, tab: SidebarTab) -> "ViewState":
        return ViewState(theme=self.theme, tab=tab)

    def toggle_site(self, site: str) -> "ViewState":
        return self.model_copy(update={"sites": self.sites ^ {site}})

    def toggle_author(self, author: str) -> "ViewState":
        return self.model_copy(update={"authors": self.authors ^ {author}})


class FeedView(BaseModel):
    themes: list[str]
    state: ViewState
    articles: list[Article]
    sites: list[SiteCount]
    authors: list[AuthorCount]
    feeds_count: int
    articles_count: int
