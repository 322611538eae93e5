"""
Unit tests for FeedView, the glue between the feed and the criteria.
"""

import asyncio

import pytest

from app.errors import TransportError
from app.schemas import CriteriaSet
from app.services.feed import FeedAccumulator
from app.services.view import FeedView


@pytest.fixture
def view(provider_factory):
    return FeedView(FeedAccumulator(provider_factory(), page_size=3))


class TestFeedView:
    """Tests for recomputation and rendering."""

    def test_starts_empty(self, view):
        """Test the initial render before anything is loaded."""
        out = view.render()

        assert out.jobs == []
        assert out.loaded == 0
        assert out.empty is True
        assert out.loading is False

    def test_arrival_recomputes(self, view, make_job):
        """Test that a page arrival refreshes the visible list."""
        view.feed.on_page_arrived([make_job(companyName="Acme"), make_job(companyName="beta")])

        assert len(view.visible) == 2
        assert view.render().matched == 2

    def test_criteria_replacement_recomputes(self, view, make_job):
        """Test that new criteria refilter the accumulated feed."""
        view.feed.on_page_arrived(
            [make_job(companyName="Acme"), make_job(companyName="beta"), make_job(companyName="ACME Corp")]
        )

        view.set_criteria(CriteriaSet(companyName="acme"))
        out = view.render()

        assert [j.company_name for j in out.jobs] == ["Acme", "ACME Corp"]
        assert [j.index for j in out.jobs] == [0, 2]
        assert out.loaded == 3
        assert out.matched == 2

    def test_criteria_is_full_replacement(self, view, make_job):
        """Test that criteria are replaced wholesale, not merged."""
        view.feed.on_page_arrived([make_job(minExp=1, companyName="Acme"), make_job(minExp=8, companyName="beta")])

        view.set_criteria(CriteriaSet(minExp=5))
        view.set_criteria(CriteriaSet(companyName="acme"))

        assert [j.company_name for j in view.visible] == ["Acme"]

    def test_filter_applies_to_later_pages(self, view, make_job):
        """Test that the active criteria apply to pages that arrive later."""
        view.set_criteria(CriteriaSet(remote=["remote"]))

        view.feed.on_page_arrived([make_job(location="Remote"), make_job(location="Pune")])

        assert [j.location for j in view.visible] == ["Remote"]

    def test_empty_when_nothing_matches(self, view, make_job):
        """Test the no-match state once loading has finished."""
        view.feed.on_page_arrived([make_job(companyName="beta")])
        view.set_criteria(CriteriaSet(companyName="zzz"))

        out = view.render()

        assert out.empty is True
        assert out.loaded == 1

    def test_error_is_rendered(self, view):
        """Test that a failed fetch is reported in the output."""
        view.feed.on_page_failed(TransportError("listing returned HTTP 502"))

        out = view.render()

        assert out.error == "listing returned HTTP 502"
        assert out.loading is False

    @pytest.mark.asyncio
    async def test_load_more_relays_signal(self, provider_factory):
        """Test that load_more reports whether a fetch was issued."""
        provider = provider_factory(hold=True)
        view = FeedView(FeedAccumulator(provider, page_size=3))

        task = view.start()

        assert view.load_more() is False
        assert view.render().loading is True
        assert view.render().empty is False
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_aclose_detaches(self, view, make_job):
        """Test that teardown stops recomputation and closes the provider."""
        await view.aclose()
        view.feed.on_page_arrived([make_job()])

        assert view.visible == []
        assert view.feed.provider.closed is True
