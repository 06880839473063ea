"""Pagination utilities for GitHub API."""

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Optional

PageFetcher = Callable[[int], Awaitable[list[Any]]]


@dataclass
class PageCursor:
    """Progress of a page walk.

    GitHub signals the end of a listing with an empty page. ``exhausted`` is
    set once that page has been seen; ``capped`` is set when the walk stopped
    at ``max_pages`` without seeing it.
    """

    max_pages: Optional[int] = None
    pages_fetched: int = 0
    items_fetched: int = 0
    exhausted: bool = False

    @property
    def capped(self) -> bool:
        return (
            not self.exhausted
            and self.max_pages is not None
            and self.pages_fetched >= self.max_pages
        )


async def iter_pages(
    fetch_page: PageFetcher,
    cursor: PageCursor,
) -> AsyncIterator[list[Any]]:
    """Yield non-empty pages from ``fetch_page(1)``, ``fetch_page(2)``, ...

    Stops at the first empty page or once ``cursor.max_pages`` pages have been
    requested. Exceptions raised by ``fetch_page`` propagate; the cursor keeps
    whatever had been read before the failure.

    Args:
        fetch_page: Coroutine function returning the items of a 1-indexed page
        cursor: Walk state, updated in place
    """
    page = cursor.pages_fetched + 1
    while cursor.max_pages is None or page <= cursor.max_pages:
        items = await fetch_page(page)
        cursor.pages_fetched = page
        if not items:
            cursor.exhausted = True
            return
        cursor.items_fetched += len(items)
        yield items
        page += 1


async def collect_pages(
    fetch_page: PageFetcher,
    max_pages: Optional[int] = None,
) -> tuple[list[Any], PageCursor]:
    """Fetch every page and return all items with the final cursor."""
    cursor = PageCursor(max_pages=max_pages)
    all_items: list[Any] = []
    async for items in iter_pages(fetch_page, cursor):
        all_items.extend(items)
    return all_items, cursor
