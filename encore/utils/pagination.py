"""In-memory pagination of provider result lists.

Providers return whole result sets (a SerpApi search, a Spotify artist
search capped at ten), so paging happens client-side by slicing.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from encore.models.place import Page
from encore.utils.errors import InvalidInputError

_T = TypeVar("_T")


def validate_page_request(page: int, size: int) -> None:
    if page < 0:
        raise InvalidInputError(f"Page index must be >= 0, got {page}")
    if size < 1:
        raise InvalidInputError(f"Page size must be >= 1, got {size}")


def page_bounds(total: int, page: int, size: int) -> tuple[int, int]:
    """Return the ``[start, end)`` slice for *page*; empty when past the end."""
    start = page * size
    if start >= total:
        return total, total
    return start, min(start + size, total)


def paginate(items: Sequence[_T], page: int, size: int) -> Page[_T]:
    """Slice *items* into one zero-based page.

    ``total_elements`` is ``len(items)``, whatever filtering produced them.
    """
    validate_page_request(page, size)
    start, end = page_bounds(len(items), page, size)
    return Page(
        content=list(items[start:end]),
        page=page,
        size=size,
        total_elements=len(items),
    )
