from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

GOOGLEBOT_USER_AGENT = (
    "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    app_name: str = Field(
        default="Preview API",
        description="Application name",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level",
    )
    host: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to",
    )
    port: int = Field(
        default=8000,
        description="Port uvicorn listens on",
    )
    preview_cache_ttl_seconds: float = Field(
        default=60 * 60,
        gt=0,
        description="How long a computed preview stays fresh",
    )
    preview_fetch_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Hard timeout for the remote page fetch",
    )
    preview_user_agent: str = Field(
        default=GOOGLEBOT_USER_AGENT,
        description="User-Agent sent to origin sites",
    )
    preview_follow_redirects: bool = Field(
        default=True,
        description="Let the HTTP transport follow redirects",
    )
    preview_cache_failures: bool = Field(
        default=True,
        description="Cache the empty preview produced by a failed fetch",
    )
    preview_coalesce_requests: bool = Field(
        default=False,
        description="Share one in-flight fetch between concurrent callers",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
