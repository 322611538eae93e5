"""Paged accumulation of job postings.

`FeedAccumulator` is a two-state machine (idle / fetching). A load-more signal
while a fetch is outstanding is dropped, so pages are merged strictly in the
order their requests were issued.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from ..errors import FeedError
from ..providers.base import Provider
from ..schemas import JobPosting

logger = logging.getLogger(__name__)


@dataclass
class FetchCursor:
    page_size: int
    step: int
    offset: int = 0
    in_flight: bool = False


@dataclass(frozen=True)
class FeedSnapshot:
    jobs: tuple[JobPosting, ...]
    loading: bool
    offset: int
    error: FeedError | None = None


Listener = Callable[[FeedSnapshot], None]


class FeedAccumulator:
    def __init__(self, provider: Provider, *, page_size: int, step: int | None = None) -> None:
        if page_size <= 0:
            raise ValueError("page_size must be positive")
        if step is not None and step <= 0:
            raise ValueError("step must be positive")
        self.provider = provider
        self.cursor = FetchCursor(page_size=page_size, step=step or page_size)
        self._jobs: list[JobPosting] = []
        self._listeners: list[Listener] = []
        self.last_error: FeedError | None = None
        self._task: asyncio.Task | None = None

    @property
    def jobs(self) -> tuple[JobPosting, ...]:
        return tuple(self._jobs)

    @property
    def loading(self) -> bool:
        return self.cursor.in_flight

    def snapshot(self) -> FeedSnapshot:
        return FeedSnapshot(
            jobs=self.jobs,
            loading=self.cursor.in_flight,
            offset=self.cursor.offset,
            error=self.last_error,
        )

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self) -> None:
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    def initialize(self) -> asyncio.Task | None:
        """Reset to an empty feed at offset 0 and request the first page.

        A no-op returning None while a fetch is outstanding.
        """
        if self.cursor.in_flight:
            logger.debug("[feed] initialize ignored, fetch at offset %d in flight", self.cursor.offset)
            return None
        self.cursor.offset = 0
        self._jobs = []
        self.last_error = None
        return self.request_next_page()

    def request_next_page(self) -> asyncio.Task | None:
        """Schedule a fetch for the current offset.

        Returns the fetch task, or None when a fetch is already outstanding.
        Must be called from within a running event loop.
        """
        if self.cursor.in_flight:
            logger.debug("[feed] load-more ignored, fetch at offset %d in flight", self.cursor.offset)
            return None
        self.cursor.in_flight = True
        self._task = asyncio.get_running_loop().create_task(
            self._fetch(self.cursor.offset, self.cursor.page_size)
        )
        self._emit()
        return self._task

    async def _fetch(self, offset: int, limit: int) -> None:
        try:
            postings = await self.provider.fetch_page(offset=offset, limit=limit)
        except FeedError as e:
            self.on_page_failed(e)
            return
        except Exception:
            self.cursor.in_flight = False
            logger.exception("[feed] fetch at offset %d crashed", offset)
            self._emit()
            raise
        self.on_page_arrived(postings)

    def on_page_arrived(self, postings: Iterable[JobPosting]) -> None:
        page = list(postings)
        self._jobs.extend(page)
        self.cursor.in_flight = False
        # fixed step, whatever the page length
        self.cursor.offset += self.cursor.step
        self.last_error = None
        logger.info("[feed] +%d postings, %d total, next offset %d", len(page), len(self._jobs), self.cursor.offset)
        self._emit()

    def on_page_failed(self, error: FeedError) -> None:
        self.cursor.in_flight = False
        self.last_error = error
        logger.warning("[feed] fetch at offset %d failed: %s", self.cursor.offset, error)
        self._emit()

    async def aclose(self) -> None:
        self._listeners.clear()
        await self.provider.aclose()
