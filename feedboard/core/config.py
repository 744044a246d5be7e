from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Feedboard"
    env: str = "dev"
    log_level: str = "INFO"

    feeds_source: Literal["file", "url", "static"] = "file"
    feeds_config_path: str = "feeds.yaml"
    feeds_config_url: str | None = None

    fetch_strategy: Literal["direct", "proxy", "file"] = "direct"
    fetch_proxy_prefix: str = "https://corsproxy.io/?"
    static_feeds_dir: str = "static_feeds"
    fetch_http_timeout_seconds: float | None = None
    fetch_max_attempts: int = Field(default=1, ge=1, le=10)
    fetch_follow_redirects: bool = True
    fetch_user_agent: str = "feedboard/0.1"

    allowed_fetch_hosts: str = ""
    block_private_hosts: bool = True
    revalidate_seconds: int = Field(default=900, ge=0)

    api_auth_enabled: bool = False
    api_auth_token: str | None = None
    observability_enabled: bool = True

    @property
    def allowed_fetch_host_list(self) -> list[str]:
        return [item.strip().lower() for item in self.allowed_fetch_hosts.split(",") if item.strip()]

    @model_validator(mode="after")
    def validate_sources(self) -> "Settings":
        if self.api_auth_enabled and not self.api_auth_token and self.env not in {"test"}:
            raise ValueError("api_auth_token is required when api_auth_enabled=true")
        if self.feeds_source == "url" and not self.feeds_config_url:
            raise ValueError("feeds_config_url is required when feeds_source=url")
        if self.fetch_strategy == "proxy" and not self.fetch_proxy_prefix:
            raise ValueError("fetch_proxy_prefix is required when fetch_strategy=proxy")
        return self


@lru_cache
def get_settings() -> Settings:
    return Settings()
