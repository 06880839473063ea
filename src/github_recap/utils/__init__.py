"""Utility modules for GitHub Recap."""

from github_recap.utils.pagination import PageCursor, collect_pages, iter_pages

__all__ = [
    "PageCursor",
    "iter_pages",
    "collect_pages",
]
