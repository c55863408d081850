"""Shared runtime plumbing: settings, async database access, telemetry, local time."""

from devkit.config import ServiceSettings, load_settings
from devkit.db import (
    AsyncDatabaseManager,
    Base,
    create_all_tables,
    create_async_engine,
    create_session_factory,
    normalize_database_dsn,
)
from devkit.observability import configure_access_log_filter, configure_otel
from devkit.timezone import now_sast, now_sast_iso

__all__ = [
    "AsyncDatabaseManager",
    "Base",
    "ServiceSettings",
    "configure_access_log_filter",
    "configure_otel",
    "create_all_tables",
    "create_async_engine",
    "create_session_factory",
    "load_settings",
    "normalize_database_dsn",
    "now_sast",
    "now_sast_iso",
]
