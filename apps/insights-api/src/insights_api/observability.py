from __future__ import annotations

from collections import Counter as Tally
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import Protocol

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

_trace_id_ctx: ContextVar[str] = ContextVar("insights_trace_id", default="")

LATENCY_BUCKETS_MS = (5, 10, 25, 50, 100, 250, 500, 1000, 5000)


def set_trace_id(trace_id: str) -> None:
    _trace_id_ctx.set(trace_id)


def get_trace_id() -> str:
    return _trace_id_ctx.get()


@dataclass(frozen=True)
class RequestMetric:
    method: str
    route: str
    status_code: int
    duration_ms: float
    trace_id: str


class MetricsSink(Protocol):
    def observe(self, metric: RequestMetric) -> None: ...


class RecentRequestsSink:
    """Keeps the most recent request metrics around for the test suite and debugging."""

    def __init__(self, capacity: int = 1000) -> None:
        self._capacity = capacity
        self._metrics: list[RequestMetric] = []

    def observe(self, metric: RequestMetric) -> None:
        self._metrics.append(metric)
        if len(self._metrics) > self._capacity:
            del self._metrics[: len(self._metrics) - self._capacity]

    def snapshot(self) -> list[dict]:
        return [asdict(item) for item in self._metrics]

    def status_counts(self) -> dict[int, int]:
        return dict(Tally(item.status_code for item in self._metrics))


class PrometheusSink:
    def __init__(self) -> None:
        self._registry = CollectorRegistry()
        self._requests = Counter(
            "insights_http_requests_total",
            "Discovery API requests by route and status",
            labelnames=("method", "route", "status_code"),
            registry=self._registry,
        )
        self._latency = Histogram(
            "insights_http_request_duration_ms",
            "Discovery API request latency in milliseconds",
            labelnames=("method", "route"),
            buckets=LATENCY_BUCKETS_MS,
            registry=self._registry,
        )

    def observe(self, metric: RequestMetric) -> None:
        self._requests.labels(metric.method, metric.route, str(metric.status_code)).inc()
        self._latency.labels(metric.method, metric.route).observe(metric.duration_ms)

    def render(self) -> str:
        return generate_latest(self._registry).decode("utf-8")


class FanOutSink:
    def __init__(self, sinks: list[MetricsSink]) -> None:
        self._sinks = sinks

    def observe(self, metric: RequestMetric) -> None:
        for sink in self._sinks:
            sink.observe(metric)
