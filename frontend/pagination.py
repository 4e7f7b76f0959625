"""
Page-number window for the pagination controls.

With 20 pages and the user on page 10 the controls read:

    <  1 ... 8 9 [10] 11 12 ... 20  >
"""

from dataclasses import dataclass
from typing import List

MAX_VISIBLE_PAGES = 5


@dataclass
class PageWindow:
    pages: List[int]
    current_page: int
    total_pages: int
    show_first: bool
    show_last: bool
    leading_ellipsis: bool
    trailing_ellipsis: bool
    has_previous: bool
    has_next: bool

    @property
    def visible(self) -> bool:
        return self.total_pages > 1


def page_window(current_page: int, total_pages: int, max_visible: int = MAX_VISIBLE_PAGES) -> PageWindow:
    half = max_visible // 2
    start = max(1, current_page - half)
    end = min(total_pages, start + max_visible - 1)

    # near the end: slide the window back so it stays full
    if end - start + 1 < max_visible:
        start = max(1, end - max_visible + 1)

    pages = list(range(start, end + 1))

    return PageWindow(
        pages=pages,
        current_page=current_page,
        total_pages=total_pages,
        show_first=start > 1,
        show_last=end < total_pages,
        leading_ellipsis=start > 2,
        trailing_ellipsis=end < total_pages - 1,
        has_previous=current_page > 1,
        has_next=current_page < total_pages,
    )


def change_page(requested: int, total_pages: int, current_page: int) -> int:
    """Accept a page request only when it's inside 1..total_pages."""
    if 1 <= requested <= max(total_pages, 1):
        return requested
    return current_page
