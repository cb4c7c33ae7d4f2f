"""Pagination helpers for server-side row windows."""

from __future__ import annotations

import math
from typing import Tuple


def compute_total_pages(total_rows: int, page_size: int) -> int:
    """Compute the total number of pages for the provided page size.

    An empty result has zero pages.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive.")
    return math.ceil(max(total_rows, 0) / page_size)


def is_valid_page(page_number: object, total_pages: int) -> bool:
    """Return True when ``page_number`` is an integral page within bounds."""
    if isinstance(page_number, bool) or not isinstance(page_number, (int, float)):
        return False
    if isinstance(page_number, float) and (math.isnan(page_number) or not page_number.is_integer()):
        return False
    return 1 <= page_number <= total_pages


def page_slice(page_number: int, page_size: int) -> Tuple[int, int]:
    """Return the half-open [start, end) row offsets for the selected page."""
    start = (page_number - 1) * page_size
    end = start + page_size
    return start, end


def item_range(page_number: int, page_size: int, total_rows: int) -> Tuple[int, int]:
    """Return the 1-based first/last item shown on a page, (0, 0) when empty."""
    if total_rows <= 0:
        return 0, 0
    start, end = page_slice(page_number, page_size)
    return start + 1, min(end, total_rows)
