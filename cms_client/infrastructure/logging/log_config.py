"""Centralized logging configuration.

Applies per-category log levels from Settings so that noisy loggers
(httpx/httpcore requests, SQLAlchemy statements) can be silenced without
hiding the fallback decisions made by the services.

Usage:
    from cms_client.infrastructure.logging.log_config import setup_logging
    setup_logging()   # Call once when the client is built
"""

import logging
import sys

from cms_client.config import Settings, get_settings


# ── Logger-name → Settings-field mapping ────────────────────────────

_CATEGORY_MAP: dict[str, list[str]] = {
    "log_level_sql": [
        "sqlalchemy.engine",
        "sqlalchemy.pool",
        "aiosqlite",
    ],
    "log_level_http": [
        "httpx",
        "httpcore",
        "cms_client.infrastructure.http",
    ],
    "log_level_storage": [
        "cms_client.application.services",
        "cms_client.infrastructure.storage",
    ],
}


def setup_logging(settings: Settings | None = None) -> None:
    """Configure Python logging levels from client settings."""
    settings = settings or get_settings()
    root_level = _parse_level(settings.log_level)

    root = logging.getLogger()
    root.setLevel(root_level)

    # Host applications usually install their own handler.
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(levelname)-8s %(name)s: %(message)s",
            )
        )
        root.addHandler(handler)

    for settings_field, logger_names in _CATEGORY_MAP.items():
        raw_level: str = getattr(settings, settings_field, "INFO")
        level = _parse_level(raw_level)

        for name in logger_names:
            logging.getLogger(name).setLevel(level)

    logging.getLogger(__name__).debug(
        "Logging configured: root=%s, sql=%s, http=%s, storage=%s",
        settings.log_level,
        settings.log_level_sql,
        settings.log_level_http,
        settings.log_level_storage,
    )


def _parse_level(raw: str) -> int:
    """Convert a level name string to a logging constant, defaulting to INFO."""
    numeric = getattr(logging, raw.upper(), None)
    if isinstance(numeric, int):
        return numeric
    return logging.INFO
