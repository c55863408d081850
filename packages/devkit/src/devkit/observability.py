from __future__ import annotations

import logging
from typing import Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

DEFAULT_QUIET_PATHS = ("/healthz", "/readyz", "/metrics")

_configured = False
_access_filter_configured = False


class QuietAccessLogFilter(logging.Filter):
    """Drops successful uvicorn access lines for probe and scrape endpoints."""

    def __init__(self, quiet_paths: tuple[str, ...]) -> None:
        super().__init__()
        self._quiet_paths = {self._strip(path) for path in quiet_paths}

    @staticmethod
    def _strip(path: str) -> str:
        base = path.split("?", 1)[0]
        if base != "/" and base.endswith("/"):
            return base[:-1]
        return base

    @staticmethod
    def _path_and_status(record: logging.LogRecord) -> tuple[str | None, int | None]:
        # uvicorn.access args: (client, method, path, http_version, status)
        args: Any = getattr(record, "args", ())
        if not isinstance(args, tuple) or len(args) < 5:
            return None, None
        path = args[2] if isinstance(args[2], str) else None
        try:
            status = int(args[4])
        except (TypeError, ValueError):
            status = None
        return path, status

    def filter(self, record: logging.LogRecord) -> bool:
        path, status = self._path_and_status(record)
        if path is None or status is None:
            return True
        return not (status == 200 and self._strip(path) in self._quiet_paths)


def configure_otel(service_name: str, service_version: str = "0.0.0") -> None:
    global _configured
    if _configured:
        return
    resource = Resource.create({"service.name": service_name, "service.version": service_version})
    trace.set_tracer_provider(TracerProvider(resource=resource))
    _configured = True


def configure_access_log_filter(quiet_paths: tuple[str, ...] = DEFAULT_QUIET_PATHS) -> None:
    global _access_filter_configured
    if _access_filter_configured:
        return
    logging.getLogger("uvicorn.access").addFilter(QuietAccessLogFilter(quiet_paths=quiet_paths))
    _access_filter_configured = True
