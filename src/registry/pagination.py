"""Paged fetch adapters.

Both registry API shapes return results a page at a time. A client supplies
a ``fetch_page(position, page_size) -> Page`` callable and a pager drives it
until the registry reports no further pages:

- OffsetPager: positions are 1-based page numbers; a short page ends the walk.
- CursorPager: positions are continuation cursors (``None`` for the first
  page); ``has_next``/``cursor`` on each page drive the walk.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """One page of results plus continuation hints."""
    items: List[Any] = field(default_factory=list)
    has_next: bool = False
    cursor: Optional[str] = None


FetchPage = Callable[[Any, int], Page]


class Pager(ABC):
    """Collects every item from a paged endpoint."""

    def __init__(self, page_size: int):
        if page_size < 1:
            raise ValueError("page_size must be positive")
        self.page_size = page_size

    @abstractmethod
    def collect(self, fetch_page: FetchPage) -> List[Any]:
        """Return all items across pages."""


class OffsetPager(Pager):
    """Numbered pages of a fixed size."""

    def collect(self, fetch_page: FetchPage) -> List[Any]:
        results: List[Any] = []
        page = 1
        while True:
            batch = fetch_page(page, self.page_size)
            results.extend(batch.items)
            if len(batch.items) < self.page_size:
                break
            page += 1
        logger.debug("Collected %d items over %d page(s)", len(results), page)
        return results


class CursorPager(Pager):
    """Cursor-linked pages."""

    def collect(self, fetch_page: FetchPage) -> List[Any]:
        results: List[Any] = []
        cursor: Optional[str] = None
        pages = 0
        while True:
            batch = fetch_page(cursor, self.page_size)
            pages += 1
            results.extend(batch.items)
            if not batch.has_next:
                break
            if not batch.cursor or batch.cursor == cursor:
                logger.warning(
                    "Registry reported more pages without a new cursor; stopping after page %d",
                    pages,
                )
                break
            cursor = batch.cursor
        logger.debug("Collected %d items over %d page(s)", len(results), pages)
        return results
