"""Tests for pagination utilities."""

import pytest

from github_recap.utils.pagination import PageCursor, collect_pages, iter_pages

PAGE_SIZE = 3


def make_fetcher(full_pages: int, calls: list[int]):
    async def fetch_page(page: int) -> list[int]:
        calls.append(page)
        if page <= full_pages:
            return list(range(PAGE_SIZE))
        return []

    return fetch_page


class TestCollectPages:
    """Tests for collect_pages."""

    @pytest.mark.asyncio
    async def test_stops_at_empty_page(self):
        """Test that N full pages then an empty one yields N * page size items."""
        calls: list[int] = []

        items, cursor = await collect_pages(make_fetcher(4, calls))

        assert len(items) == 4 * PAGE_SIZE
        assert calls == [1, 2, 3, 4, 5]
        assert cursor.exhausted is True
        assert cursor.capped is False

    @pytest.mark.asyncio
    async def test_stops_at_page_cap(self):
        """Test that the cap bounds the walk and is reported."""
        calls: list[int] = []

        items, cursor = await collect_pages(make_fetcher(10, calls), max_pages=2)

        assert len(items) == 2 * PAGE_SIZE
        assert calls == [1, 2]
        assert cursor.capped is True

    @pytest.mark.asyncio
    async def test_cap_with_empty_last_page_is_not_capped(self):
        """Test that seeing the empty page within the cap is a clean finish."""
        calls: list[int] = []

        _, cursor = await collect_pages(make_fetcher(1, calls), max_pages=2)

        assert calls == [1, 2]
        assert cursor.exhausted is True
        assert cursor.capped is False

    @pytest.mark.asyncio
    async def test_empty_listing(self):
        """Test a listing that is empty from the first page."""
        items, cursor = await collect_pages(make_fetcher(0, []))

        assert items == []
        assert cursor.pages_fetched == 1


class TestIterPages:
    """Tests for iter_pages."""

    @pytest.mark.asyncio
    async def test_cursor_keeps_progress_on_error(self):
        """Test that a failing page leaves earlier progress in the cursor."""

        async def fetch_page(page: int) -> list[int]:
            if page == 2:
                raise RuntimeError("boom")
            return [1, 2]

        cursor = PageCursor(max_pages=5)
        seen = []
        with pytest.raises(RuntimeError):
            async for items in iter_pages(fetch_page, cursor):
                seen.extend(items)

        assert seen == [1, 2]
        assert cursor.items_fetched == 2
        assert cursor.pages_fetched == 1
