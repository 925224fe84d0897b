"""Application configuration via environment variables."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Used when the matching environment variable is unset or empty
URL_DEFAULTS: dict[str, str] = {
    "blog_url": "http://localhost:8000",
    "blog_api": "http://localhost:8000/api/posts",
    "projects_url": "http://localhost:8000/projects",
}


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Server
    host: str = "0.0.0.0"
    port: int = 5050
    site_owner: str = "Swaye Chateau"

    # Blog (posts API)
    blog_url: str = URL_DEFAULTS["blog_url"]
    blog_api: str = URL_DEFAULTS["blog_api"]
    # Sent as-is, an empty token is still a valid value
    blog_api_token: str = ""

    # OAuth client credentials (only used when no static token is set)
    blog_client_id: str = ""
    blog_client_secret: str = ""

    # Projects
    projects_url: str = URL_DEFAULTS["projects_url"]

    # Content cache file, relative to the working directory
    cache_file: str = "cache.json"

    # Contact form CSRF token lifetime
    csrf_ttl_seconds: float = 3600

    model_config = {"env_file": ".env", "extra": "ignore"}

    @field_validator(*URL_DEFAULTS, mode="before")
    @classmethod
    def _fallback_empty_url(cls, value, info):
        """Treat an empty URL variable the same as an unset one."""
        if value is None or value == "":
            return URL_DEFAULTS[info.field_name]
        return value

    @property
    def has_client_credentials(self) -> bool:
        return bool(self.blog_client_id and self.blog_client_secret)


@lru_cache
def get_settings() -> Settings:
    return Settings()
