from __future__ import annotations

import logging

from devkit.observability import QuietAccessLogFilter


def _access_record(path: str, status: int) -> logging.LogRecord:
    return logging.LogRecord(
        name="uvicorn.access",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg='%s - "%s %s HTTP/%s" %d',
        args=("127.0.0.1:12345", "GET", path, "1.1", status),
        exc_info=None,
    )


def test_quiet_filter_drops_successful_probe_and_scrape_lines() -> None:
    quiet = QuietAccessLogFilter(quiet_paths=("/healthz", "/readyz", "/metrics"))
    assert quiet.filter(_access_record("/healthz", 200)) is False
    assert quiet.filter(_access_record("/metrics", 200)) is False
    assert quiet.filter(_access_record("/readyz/?full=true", 200)) is False


def test_quiet_filter_keeps_failures_and_regular_traffic() -> None:
    quiet = QuietAccessLogFilter(quiet_paths=("/healthz",))
    assert quiet.filter(_access_record("/healthz", 503)) is True
    assert quiet.filter(_access_record("/v1/facilities", 200)) is True


def test_quiet_filter_passes_records_without_access_args() -> None:
    quiet = QuietAccessLogFilter(quiet_paths=("/healthz",))
    record = logging.LogRecord("uvicorn.access", logging.INFO, __file__, 1, "started", (), None)
    assert quiet.filter(record) is True
