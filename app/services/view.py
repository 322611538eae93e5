from __future__ import annotations

from ..schemas import CriteriaSet, FeedViewOut, JobOut, JobPosting
from .feed import FeedAccumulator, FeedSnapshot
from .filters import filter_jobs


class FeedView:
    """Glue between the accumulated feed and the active criteria.

    The filtered list is recomputed whenever the feed emits a snapshot or the
    criteria are replaced; nothing else triggers a recomputation.
    """

    def __init__(self, feed: FeedAccumulator, criteria: CriteriaSet | None = None) -> None:
        self.feed = feed
        self.criteria = criteria or CriteriaSet()
        self._snapshot: FeedSnapshot = feed.snapshot()
        self._visible: list[JobPosting] = []
        feed.subscribe(self._on_feed)
        self._recompute()

    def _on_feed(self, snap: FeedSnapshot) -> None:
        self._snapshot = snap
        self._recompute()

    def _recompute(self) -> None:
        self._visible = filter_jobs(self._snapshot.jobs, self.criteria)

    @property
    def visible(self) -> list[JobPosting]:
        return list(self._visible)

    def start(self):
        return self.feed.initialize()

    def load_more(self) -> bool:
        return self.feed.request_next_page() is not None

    def set_criteria(self, criteria: CriteriaSet) -> None:
        self.criteria = criteria
        self._recompute()

    def render(self) -> FeedViewOut:
        snap = self._snapshot
        # visible is an ordered subsequence of snap.jobs, so one pass recovers
        # each posting's position in the accumulated feed
        jobs: list[JobOut] = []
        pending = iter(self._visible)
        nxt = next(pending, None)
        for i, job in enumerate(snap.jobs):
            if job is nxt:
                jobs.append(JobOut(index=i, **job.model_dump()))
                nxt = next(pending, None)
        return FeedViewOut(
            jobs=jobs,
            loading=snap.loading,
            loaded=len(snap.jobs),
            matched=len(jobs),
            empty=not jobs and not snap.loading,
            error=str(snap.error) if snap.error else None,
            criteria=self.criteria,
        )

    async def aclose(self) -> None:
        self.feed.unsubscribe(self._on_feed)
        await self.feed.aclose()
