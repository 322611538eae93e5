# app/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Depends, Request

from apscheduler.schedulers.asyncio import AsyncIOScheduler
import uvicorn

from .config import settings
from .providers.weekday import WeekdayProvider
from .schemas import CriteriaSet, FeedViewOut, LoadMoreOut
from .services.feed import FeedAccumulator
from .services.view import FeedView

logger = logging.getLogger(__name__)

app = FastAPI(title="Job Feed")


def build_view() -> FeedView:
    feed = FeedAccumulator(
        WeekdayProvider(),
        page_size=settings.FEED_PAGE_SIZE,
        step=settings.FEED_OFFSET_STEP,
    )
    return FeedView(feed)


def get_view(req: Request) -> FeedView:
    return req.app.state.view


@app.on_event("startup")
async def on_start():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if getattr(app.state, "view", None) is None:
        app.state.view = build_view()
    view: FeedView = app.state.view
    view.start()
    logger.info("[feed] started, provider=%s page_size=%d", view.feed.provider.name, view.feed.cursor.page_size)

    app.state.scheduler = None
    if settings.FEED_AUTOLOAD_SECONDS > 0:
        async def autoload():
            if view.load_more():
                logger.info("[autoload] requested offset %d", view.feed.cursor.offset)

        sched = AsyncIOScheduler()
        sched.add_job(autoload, "interval", seconds=settings.FEED_AUTOLOAD_SECONDS)
        sched.start()
        app.state.scheduler = sched


@app.on_event("shutdown")
async def on_stop():
    sched = getattr(app.state, "scheduler", None)
    if sched is not None:
        sched.shutdown(wait=False)
    view = getattr(app.state, "view", None)
    if view is not None:
        await view.aclose()
        app.state.view = None


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.get("/api/jobs", response_model=FeedViewOut)
async def api_jobs(view: FeedView = Depends(get_view)):
    return view.render()


@app.post("/api/jobs/more", response_model=LoadMoreOut)
async def api_load_more(view: FeedView = Depends(get_view)):
    accepted = view.load_more()
    return LoadMoreOut(
        accepted=accepted,
        loading=view.feed.loading,
        offset=view.feed.cursor.offset,
    )


@app.get("/api/criteria", response_model=CriteriaSet)
async def api_get_criteria(view: FeedView = Depends(get_view)):
    return view.criteria


@app.put("/api/criteria", response_model=FeedViewOut)
async def api_put_criteria(criteria: CriteriaSet, view: FeedView = Depends(get_view)):
    view.set_criteria(criteria)
    return view.render()


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
