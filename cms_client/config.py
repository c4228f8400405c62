from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings

_PROJECT_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _PROJECT_DIR / ".env",
    ".env",
)


class Settings(BaseSettings):
    """Client settings loaded from environment variables (prefix ``CMS_``)."""

    app_title: str = "CMS Client"
    app_version: str = "0.1.0"

    # Remote API
    api_base_url: str = "https://test-fe.mysellerpintar.com/api"
    request_timeout: float = 15.0

    # Durable local storage: "memory://" keeps everything in-process
    storage_url: str = "sqlite:///data/local_storage.db"

    # Fallback behaviour
    detail_lookup_policy: Literal["local_first", "remote_first"] = "local_first"
    default_page_size: int = 10
    related_limit: int = 3

    # Client-side timing
    search_debounce_seconds: float = 0.5
    change_poll_interval_seconds: float = 2.0

    login_path: str = "/auth/login"

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"               # Root / app-wide
    log_level_http: str = "WARNING"       # httpx / httpcore: outbound HTTP
    log_level_sql: str = "WARNING"        # sqlalchemy.engine / aiosqlite
    log_level_storage: str = "INFO"       # snapshot stores and fallback resolver

    model_config = {
        "env_prefix": "CMS_",
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
