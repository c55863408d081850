"""South African Standard Time for timestamps the services put on the wire."""

from __future__ import annotations

import os
import time
from datetime import datetime
from zoneinfo import ZoneInfo

SAST_ZONE_NAME = "Africa/Johannesburg"
SAST_ZONE = ZoneInfo(SAST_ZONE_NAME)


def configure_sast_timezone() -> None:
    """Point the process-local clock (log records, naive datetimes) at SAST."""
    if os.environ.get("TZ") == SAST_ZONE_NAME:
        return
    os.environ["TZ"] = SAST_ZONE_NAME
    if hasattr(time, "tzset"):
        time.tzset()


def now_sast() -> datetime:
    return datetime.now(SAST_ZONE).replace(microsecond=0)


def now_sast_iso() -> str:
    """Second-precision ISO 8601 with the +02:00 offset, e.g. ``2025-01-06T09:00:00+02:00``."""
    return now_sast().isoformat()
