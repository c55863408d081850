from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

import httpx

from devkit.config import ServiceSettings
from devkit.timezone import now_sast_iso

from insights_api.errors import UpstreamUnavailable

logger = logging.getLogger(__name__)

PLACEHOLDER_NARRATIVE = (
    "[Placeholder narrative] AI analysis is not available right now. "
    "The structured results in this response are complete and can be used as-is."
)

SYSTEM_PROMPT = (
    "You are a Cape Town neighbourhood and housing assistant. Answer with practical, "
    "factual guidance for people choosing where to live, using the data provided."
)

HISTORY_TURNS = 5


class NarrativeGenerator(Protocol):
    configured: bool

    async def generate(self, prompt: str, history: Sequence[dict[str, str]] = ()) -> str: ...


def build_prompt(prompt: str, history: Sequence[dict[str, str]] = ()) -> str:
    parts = [SYSTEM_PROMPT, ""]
    recent = list(history)[-HISTORY_TURNS:]
    if recent:
        parts.append("Previous conversation:")
        parts.extend(f"{turn.get('role', 'user')}: {turn.get('content', '')}" for turn in recent)
        parts.append("")
    parts.append(f"User: {prompt}")
    parts.append("Assistant:")
    return "\n".join(parts)


class GeminiNarrativeClient:
    """Text generation through the Generative Language REST API."""

    configured = True

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-1.5-flash",
        base_url: str = "https://generativelanguage.googleapis.com/v1beta",
        timeout_seconds: float = 15.0,
        client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._client_factory = client_factory

    async def generate(self, prompt: str, history: Sequence[dict[str, str]] = ()) -> str:
        body = {"contents": [{"role": "user", "parts": [{"text": build_prompt(prompt, history)}]}]}
        try:
            factory = self._client_factory or (lambda: httpx.AsyncClient(timeout=self._timeout_seconds))
            async with factory() as client:
                response = await client.post(
                    f"{self._base_url}/models/{self._model}:generateContent",
                    params={"key": self._api_key},
                    json=body,
                )
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailable("narrative generation timed out") from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailable(f"narrative provider returned {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailable("narrative request failed") from exc
        return self._extract_text(response)

    @staticmethod
    def _extract_text(response: httpx.Response) -> str:
        try:
            payload = response.json()
            parts = payload["candidates"][0]["content"]["parts"]
            text = "".join(str(part.get("text", "")) for part in parts).strip()
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise UpstreamUnavailable("narrative provider returned an unexpected payload") from exc
        if not text:
            raise UpstreamUnavailable("narrative provider returned no text")
        return text


class PlaceholderNarrativeGenerator:
    """Stand-in used when no generation credential is configured."""

    configured = False

    async def generate(self, prompt: str, history: Sequence[dict[str, str]] = ()) -> str:
        return PLACEHOLDER_NARRATIVE


def build_narrative_generator(
    settings: ServiceSettings,
    client_factory: Callable[[], httpx.AsyncClient] | None = None,
) -> NarrativeGenerator:
    if settings.GEMINI_API_KEY:
        return GeminiNarrativeClient(
            api_key=settings.GEMINI_API_KEY,
            model=settings.GEMINI_MODEL,
            base_url=settings.GEMINI_BASE_URL,
            timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS,
            client_factory=client_factory,
        )
    logger.warning("narrative_generator_unconfigured", extra={"component": "insights_api"})
    return PlaceholderNarrativeGenerator()


class NarrativeMerger:
    """Attaches best-effort narrative text to an already computed payload."""

    def __init__(self, generator: NarrativeGenerator) -> None:
        self._generator = generator

    async def merge(
        self,
        payload: dict[str, Any],
        prompt: str,
        history: Sequence[dict[str, str]] = (),
    ) -> dict[str, Any]:
        source = "generated" if self._generator.configured else "placeholder"
        try:
            narrative = await self._generator.generate(prompt, history)
        except Exception as exc:
            logger.warning(
                "narrative_generation_failed",
                extra={"component": "insights_api", "error": str(exc) or type(exc).__name__},
            )
            narrative, source = PLACEHOLDER_NARRATIVE, "placeholder"
        return {**payload, "narrative": narrative, "narrativeSource": source, "generatedAt": now_sast_iso()}
