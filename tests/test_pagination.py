"""Unit tests for page/limit normalization.

Run with: pytest tests/test_pagination.py -v
"""

import pytest

from event_rsvp.domain import Page, PageFilter


class TestPageFilter:
    """Tests for PageFilter.normalize."""

    def test_defaults(self):
        page_filter = PageFilter.normalize()
        assert (page_filter.page, page_filter.limit, page_filter.skip) == (1, 20, 0)

    @pytest.mark.parametrize("page, expected", [(-3, 1), (0, 1), (1, 1), (7, 7), ("4", 4), ("abc", 1)])
    def test_page_is_at_least_one(self, page, expected):
        assert PageFilter.normalize(page=page).page == expected

    @pytest.mark.parametrize("limit, expected", [(-5, 1), (1, 1), (50, 50), (100, 100), (101, 100), (10_000, 100)])
    def test_limit_is_clamped(self, limit, expected):
        assert PageFilter.normalize(limit=limit).limit == expected

    def test_missing_or_zero_limit_uses_default(self):
        assert PageFilter.normalize(limit=None).limit == 20
        assert PageFilter.normalize(limit=0).limit == 20
        assert PageFilter.normalize(limit="x").limit == 20

    def test_skip(self):
        assert PageFilter.normalize(page=3, limit=10).skip == 20


class TestPage:
    """Tests for Page.build."""

    def test_total_pages_rounds_up(self):
        page = Page.build(range(10), 25, PageFilter.normalize(page=1, limit=10))
        assert page.total_pages == 3
        assert page.data == tuple(range(10))

    def test_total_pages_exact_division(self):
        assert Page.build([], 20, PageFilter.normalize(limit=10)).total_pages == 2

    def test_empty_page(self):
        page = Page.empty(PageFilter.normalize(page=2, limit=5))
        assert page.data == ()
        assert (page.total, page.total_pages, page.page, page.limit) == (0, 0, 2, 5)
