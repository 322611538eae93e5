# app/providers/weekday.py
from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from .base import Provider
from ..config import settings
from ..errors import DecodeError, TransportError
from ..schemas import JobPosting

logger = logging.getLogger(__name__)

HEADERS = {"Content-Type": "application/json"}


def _decode_page(payload) -> list[JobPosting]:
    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")
    records = payload.get("jdList")
    if not isinstance(records, list):
        raise DecodeError("response has no jdList array")
    try:
        return [JobPosting.model_validate(r) for r in records]
    except ValidationError as e:
        raise DecodeError(f"malformed job record: {e}") from e


class WeekdayProvider(Provider):
    """Paged listing source: POST {limit, offset}, read back `jdList`."""

    name = "weekday"

    def __init__(
        self,
        endpoint: str | None = None,
        *,
        timeout: float | None = None,
        attempts: int | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = endpoint or settings.FEED_ENDPOINT
        self._attempts = max(attempts or settings.FEED_FETCH_ATTEMPTS, 1)
        self._client = client or httpx.AsyncClient(
            timeout=timeout or settings.FEED_TIMEOUT,
            follow_redirects=True,
            headers=HEADERS,
        )

    async def _post(self, body: dict) -> httpx.Response:
        # only network-level failures are retried; a bad status is final
        async for attempt in AsyncRetrying(
            wait=wait_exponential(min=1, max=8),
            stop=stop_after_attempt(self._attempts),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await self._client.post(self.endpoint, json=body)

    async def fetch_page(self, *, offset: int, limit: int) -> list[JobPosting]:
        body = {"limit": limit, "offset": offset}
        try:
            r = await self._post(body)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(f"{self.name} returned HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"{self.name} request failed: {e}") from e

        try:
            payload = r.json()
        except ValueError as e:
            raise DecodeError(f"{self.name} returned invalid JSON") from e

        postings = _decode_page(payload)
        logger.debug("[provider] %s offset=%d limit=%d -> %d postings", self.name, offset, limit, len(postings))
        return postings

    async def aclose(self) -> None:
        await self._client.aclose()
