"""Shared fixtures for the job feed tests."""

import asyncio

import pytest

from app.schemas import JobPosting


class FakeProvider:
    """In-memory listing source.

    Serves queued pages in order; raises `error` if set; with `hold=True`
    every fetch waits on a future that is never resolved.
    """

    name = "fake"

    def __init__(self, pages=None, error=None, hold=False):
        self.pages = list(pages or [])
        self.error = error
        self.hold = hold
        self.calls = []
        self.closed = False

    async def fetch_page(self, *, offset, limit):
        self.calls.append({"offset": offset, "limit": limit})
        if self.hold:
            await asyncio.get_running_loop().create_future()
        if self.error is not None:
            raise self.error
        return self.pages.pop(0) if self.pages else []

    async def aclose(self):
        self.closed = True


@pytest.fixture
def make_job():
    """Factory for JobPosting records using the listing's wire names."""

    def _make(**overrides):
        data = {
            "jdUid": None,
            "companyName": "Acme",
            "minExp": 2,
            "location": "delhi",
            "techStack": "python",
            "jobRole": "backend",
            "minJdSalary": 50,
        }
        data.update(overrides)
        return JobPosting.model_validate(data)

    return _make


@pytest.fixture
def provider_factory():
    return FakeProvider
