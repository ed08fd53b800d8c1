from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    active_provider: str = "mock"
    scraping_enabled: bool = True
    scraping_booking_enabled: bool | None = None
    scraping_expedia_enabled: bool | None = None
    search_fallback_to_mock: bool = False
    redis_url: str = ""
    log_level: str = "INFO"

    fetch_timeout: float = 10.0
    min_request_interval: float = 0.4
    render_timeout_ms: int = 15_000
    render_retries: int = 2
    render_headless: bool = True
    enrich_concurrency: int = 4

    search_cache_ttl: int = 60 * 60
    policy_cache_ttl: int = 24 * 60 * 60
    api_cache_ttl: int = 5 * 60

    def scraping_enabled_for(self, source: str) -> bool:
        override = getattr(self, f"scraping_{source}_enabled", None)
        if override is not None:
            return override
        return self.scraping_enabled
