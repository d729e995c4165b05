"""Task tracker runtime configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tracker.config_utils import env_bool, env_optional_str, env_str


def _app_root() -> Path:
    """Directory holding app.py and the tracker package."""
    return Path(__file__).resolve().parents[1]


@dataclass(frozen=True)
class TrackerConfig:
    """Configuration for the task tracker.

    Environment variables:
    - TRACKER_DATABASE_URL: tracker-specific database URL (preferred)
    - PLATFORM_DATABASE_URL: shared database URL
    - TRACKER_LOG_LEVEL: root log level (default: INFO)
    - TRACKER_PAGE_TITLE: browser tab / header title (default: Task Tracker)
    - TRACKER_SQL_ECHO: echo SQL statements (default: false)

    With no database URL set, a local SQLite file at data/tracker.db is used.
    """

    database_url: str
    log_level: str
    page_title: str
    sql_echo: bool

    @classmethod
    def from_env(cls) -> "TrackerConfig":
        database_url = env_optional_str("TRACKER_DATABASE_URL") or env_optional_str("PLATFORM_DATABASE_URL")
        if not database_url:
            data_dir = _app_root() / "data"
            data_dir.mkdir(parents=True, exist_ok=True)
            database_url = f"sqlite:///{(data_dir / 'tracker.db').as_posix()}"

        return cls(
            database_url=database_url,
            log_level=env_str("TRACKER_LOG_LEVEL", "INFO").upper(),
            page_title=env_str("TRACKER_PAGE_TITLE", "Task Tracker"),
            sql_echo=env_bool("TRACKER_SQL_ECHO", False),
        )


_config: Optional[TrackerConfig] = None


def get_config() -> TrackerConfig:
    """Get the tracker configuration (cached)."""
    global _config
    if _config is None:
        _config = TrackerConfig.from_env()
    return _config


def reset_config() -> None:
    global _config
    _config = None
