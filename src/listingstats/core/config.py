"""Configuration management for ListingStats."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    # Logging
    log_level: str = Field("INFO", description="Logging level")

    # Storage
    cache_dir: str = Field("cache/items", description="Root directory of cached item blobs")
    page_cache_dir: str = Field("cache/pages", description="Directory of the fetched page cache")
    page_cache_ttl_hours: int = Field(12, description="Time-to-live of cached pages in hours")
    use_page_cache: bool = Field(False, description="Serve repeated page requests from the page cache")

    # HTTP
    request_delay: float = Field(0.2, description="Delay between page requests in seconds")
    request_timeout: float = Field(30.0, description="Timeout for a single request in seconds")
    user_agent: str = Field(
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
        description="User-Agent header sent with every request",
    )
    max_retries: int = Field(3, description="Maximum retry attempts")
    retry_delay: float = Field(1.0, description="Base retry delay in seconds")
    retry_backoff: float = Field(2.0, description="Retry backoff multiplier; a single wait is capped at ten times this")

    # HeadHunter vacancies API
    hh_base_url: str = Field("https://api.hh.ru/vacancies", description="HeadHunter vacancies endpoint")
    hh_search_text: str = Field("C# OR .NET", description="Vacancy search query")
    hh_page_size: int = Field(100, description="Vacancies per page")
    hh_max_pages: int = Field(20, description="Maximum number of vacancy pages")

    # Habr hubs
    habr_base_url: str = Field("https://habr.com", description="Habr site root")
    habr_hub: str = Field("net", description="Default hub slug")
    habr_max_pages: int = Field(50, description="Maximum number of hub pages")

    # DotNext schedule
    dotnext_schedule_url: str = Field(
        "https://dotnext.ru/schedule/table/", description="DotNext schedule page"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Global settings instance
settings = Settings()
