"""Service settings, loaded from environment variables and .env."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "extra": "ignore"}

    # Comma-separated to allow key rotation
    api_key: str

    log_level: str = "INFO"

    scraper_timeout: float = 30.0
    scraper_max_content_size: int = 10 * 1024 * 1024
    scraper_user_agent: str = DEFAULT_USER_AGENT
    # URLs scraped together per batch window
    scraper_batch_concurrency: int = Field(5, ge=1)
    scraper_stream_size_limit: bool = False
    scraper_slow_response_ms: int = 5000

    @property
    def api_keys(self) -> list[str]:
        return [k.strip() for k in self.api_key.split(",") if k.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
