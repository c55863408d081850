from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from devkit.timezone import configure_sast_timezone


class ServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(extra="ignore")

    SERVICE_NAME: str = "service"
    DATABASE_URL: str | None = None
    STORE_TIMEOUT_SECONDS: float = 5.0
    SEED_DEMO_DATA: bool = True
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: float = 15.0


def load_settings(service_name: str) -> ServiceSettings:
    configure_sast_timezone()
    return ServiceSettings(SERVICE_NAME=service_name)
