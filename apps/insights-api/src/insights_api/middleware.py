from __future__ import annotations

from time import perf_counter
from uuid import uuid4

from opentelemetry import trace
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from insights_api.observability import MetricsSink, RequestMetric, set_trace_id

TRACE_HEADER = "x-trace-id"


def route_label(request: Request) -> str:
    # Route template rather than the raw path.
    route = request.scope.get("route")
    template = getattr(route, "path", None)
    return template or "unmatched"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, sink: MetricsSink) -> None:
        super().__init__(app)
        self._sink = sink
        self._tracer = trace.get_tracer("insights-api")

    def _record(self, request: Request, status_code: int, started: float, trace_id: str) -> None:
        self._sink.observe(
            RequestMetric(
                method=request.method,
                route=route_label(request),
                status_code=status_code,
                duration_ms=(perf_counter() - started) * 1000.0,
                trace_id=trace_id,
            )
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or uuid4().hex
        set_trace_id(trace_id)
        started = perf_counter()
        with self._tracer.start_as_current_span("http.request") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("http.target", request.url.path)
            span.set_attribute("trace.id", trace_id)
            try:
                response = await call_next(request)
            except Exception:
                span.set_attribute("http.status_code", 500)
                self._record(request, 500, started, trace_id)
                raise
            span.set_attribute("http.route", route_label(request))
            span.set_attribute("http.status_code", response.status_code)

        response.headers[TRACE_HEADER] = trace_id
        self._record(request, response.status_code, started, trace_id)
        return response
