"""Gemini API client — generateContent over httpx with 503/network backoff."""

import asyncio
import logging
from typing import Awaitable, Callable

import httpx

from wanderplan.services.planner.config import GenerationParams, RetryPolicy
from wanderplan.services.planner.errors import (
    GeminiAPIError,
    GeminiOverloadedError,
    GeminiResponseError,
    GeminiTransportError,
    PlannerConfigError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-1.5-flash"


class GeminiClient:
    """Adapter for the Gemini generateContent endpoint.

    Overloaded (503) responses and network errors are retried with
    exponential backoff; any other error status is raised on the spot.
    """

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 60.0,
        retry: RetryPolicy | None = None,
        http_client: httpx.AsyncClient | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry = retry or RetryPolicy()
        self._client = http_client
        self._sleep = sleep

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    async def generate(self, prompt: str, params: GenerationParams) -> str:
        """Send a single-turn prompt and return the first candidate's text."""
        if not self.api_key:
            raise PlannerConfigError("Gemini API key not configured")

        payload = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": params.to_payload(),
        }
        resp = await self._post_with_retry(payload)

        try:
            data = resp.json()
        except ValueError as e:
            raise GeminiResponseError("Invalid response from Gemini API", details=str(e)) from e
        return self._candidate_text(data)

    async def _post_with_retry(self, payload: dict) -> httpx.Response:
        client = await self._get_client()
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}
        attempts = max(self.retry.max_attempts, 1)
        last_error: httpx.RequestError | None = None

        for attempt in range(attempts):
            try:
                resp = await client.post(self.endpoint, json=payload, headers=headers)
            except httpx.RequestError as e:
                last_error = e
                if attempt < attempts - 1:
                    wait = self.retry.delay(attempt)
                    logger.warning(f"Gemini attempt {attempt + 1} failed ({e!r}), retrying in {wait:.0f}s")
                    await self._sleep(wait)
                continue

            if resp.is_success:
                return resp

            body = resp.text
            logger.warning(f"Gemini attempt {attempt + 1} failed with status {resp.status_code}: {body[:200]}")

            if resp.status_code in self.retry.retry_statuses:
                if attempt < attempts - 1:
                    wait = self.retry.delay(attempt)
                    logger.info(f"Gemini overloaded, waiting {wait:.0f}s before retry")
                    await self._sleep(wait)
                    continue
                raise GeminiOverloadedError(resp.status_code, body)

            raise GeminiAPIError(resp.status_code, body)

        raise GeminiTransportError(f"Gemini request failed after {attempts} attempts: {last_error!r}")

    @staticmethod
    def _candidate_text(data: dict) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts)
        except (KeyError, IndexError, TypeError, AttributeError) as e:
            raise GeminiResponseError("Invalid response from Gemini API", details=str(e)) from e
        if not text:
            raise GeminiResponseError("Invalid response from Gemini API", details="empty candidate text")
        return text
