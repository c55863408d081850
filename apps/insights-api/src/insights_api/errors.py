from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ApiError(Exception):
    code: str
    message: str
    status_code: int
    details: list[dict[str, str]] | None = None


class ValidationError(ApiError):
    def __init__(self, details: list[dict[str, str]], message: str = "Validation failed") -> None:
        super().__init__("VALIDATION_ERROR", message, 400, details)


class NotFoundError(ApiError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__("NOT_FOUND", message, 404)


class StoreError(ApiError):
    """Query execution failed; the driver message stays in the logs."""

    def __init__(self, message: str = "Failed to query the data store") -> None:
        super().__init__("STORE_ERROR", message, 500)


class UpstreamUnavailable(Exception):
    """Narrative generation could not produce text for this request."""
