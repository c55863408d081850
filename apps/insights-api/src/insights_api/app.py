from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from devkit.observability import configure_access_log_filter, configure_otel
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from insights_api.dependencies import get_document_store
from insights_api.errors import ApiError
from insights_api.filters import validation_details
from insights_api.middleware import ObservabilityMiddleware
from insights_api.observability import FanOutSink, PrometheusSink, RecentRequestsSink, get_trace_id
from insights_api.records import FACILITIES
from insights_api.response import error_response, success_response
from insights_api.routers.facilities import router as facilities_router
from insights_api.routers.rentals import router as rentals_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await get_document_store().close()


def create_app() -> FastAPI:
    app = FastAPI(title="Cape Town Insights API", version="0.1.0", lifespan=lifespan)
    configure_otel(service_name="insights-api", service_version="0.1.0")
    configure_access_log_filter()
    app.state.recent_requests = RecentRequestsSink()
    app.state.prom_metrics = PrometheusSink()
    app.add_middleware(
        ObservabilityMiddleware,
        sink=FanOutSink([app.state.recent_requests, app.state.prom_metrics]),
    )
    app.include_router(facilities_router)
    app.include_router(rentals_router)

    @app.get("/healthz")
    async def healthz() -> dict:
        return success_response({"status": "ok"}, meta={})

    @app.get("/readyz")
    async def readyz() -> JSONResponse:
        store = app.dependency_overrides.get(get_document_store, get_document_store)()
        try:
            await store.count(FACILITIES)
        except ApiError as exc:
            return JSONResponse(status_code=503, content=error_response("NOT_READY", exc.message))
        return JSONResponse(content=success_response({"status": "ready"}, meta={}))

    @app.get("/metrics")
    async def metrics() -> Response:
        return Response(content=app.state.prom_metrics.render(), media_type="text/plain; version=0.0.4")

    @app.exception_handler(ApiError)
    async def handle_api_error(_: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(exc.code, exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=error_response("VALIDATION_ERROR", "Validation failed", validation_details(exc.errors())),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error(
            "unhandled_exception",
            extra={"component": "insights_api", "path": request.url.path, "trace_id": get_trace_id()},
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content=error_response("INTERNAL_ERROR", "Internal server error"))

    return app


app = create_app()
