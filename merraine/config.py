"""
Configuration management for Merraine AI.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Pearch vendor API
    pearch_api_key: str = ""
    pearch_api_base: str = "https://api.pearch.ai"
    pearch_timeout: float = 30.0
    pearch_retry_delays: list[float] = [1.0, 3.0]
    pearch_max_per_call: int = 50

    # Auth
    auth_username: str = ""
    auth_password: str = ""
    auth_cookie_secure: bool = True

    # Database
    database_url: str = ""

    # API
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    # Search result cache
    search_cache_ttl: float = 3600.0
    search_cache_size: int = 256

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
