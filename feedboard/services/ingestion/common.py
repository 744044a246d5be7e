from pydantic import BaseModel, ConfigDict, Field


class FeedParseError(ValueError):
    pass


class RawItem(BaseModel):
    """One parsed feed entry before normalization. Every field is optional and untrusted."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    link: str | None = None
    pub_date: str | None = Field(default=None, alias="pubDate")
    creator: str | None = None
    content: str | None = None
    content_snippet: str | None = Field(default=None, alias="contentSnippet")
    iso_date: str | None = Field(default=None, alias="isoDate")
