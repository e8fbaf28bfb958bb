"""
Cursor pagination shared by feed, comments, notifications, my-posts and search.

Cursors are derived from the last item of the most recent page and are
omitted entirely on the first request. Two termination signals exist in the
backend and both are normalised into Page:

- length_based: a page shorter than the requested size is the last one.
- flag_based: the response carries has_more (or isLast) and the next cursor.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, AsyncIterator, Awaitable, Callable, Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, Field

from hobbyshare.config import DEFAULT_PAGE_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CursorParams(BaseModel):
    """Id cursor used by feed, comments, notifications and my-posts."""

    last_id: Optional[int] = None
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    def to_query(self, cursor_key: str, size_key: str = "pageSize") -> dict[str, str]:
        query: dict[str, str] = {}
        if self.last_id is not None:
            query[cursor_key] = str(self.last_id)
        query[size_key] = str(self.page_size)
        return query


class SearchCursor(BaseModel):
    """Search cursor: created_at breaks ties between rows with equal ids."""

    cursor_created_at: Optional[str] = None
    cursor_id: Optional[int] = None
    limit: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)

    def to_body(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus what is needed to ask for the next one."""

    items: list[T]
    has_more: bool
    next_cursor: Optional[Any] = None


def length_based(items: Sequence[T], page_size: int, cursor_of: Callable[[T], Any]) -> Page[T]:
    """A full page means there may be more; a short page is the last one."""
    items = list(items)
    if len(items) < page_size:
        return Page(items=items, has_more=False)
    return Page(items=items, has_more=True, next_cursor=cursor_of(items[-1]))


def flag_based(items: Sequence[T], has_more: Optional[bool], next_cursor: Optional[Any] = None) -> Page[T]:
    """Trust the server's flag. Missing or false has_more is terminal."""
    more = bool(has_more) and next_cursor is not None
    if has_more and next_cursor is None:
        logger.warning("Server reported more results without a next cursor; stopping")
    return Page(items=list(items), has_more=more, next_cursor=next_cursor if more else None)


PageFetcher = Callable[[Optional[Any]], Awaitable[Page[T]]]


class CursorPaginator(Generic[T]):
    """One "load more" context.

    load_more() is single-flight: while a page is being fetched further calls
    return [] without touching the network, so page N+1 is never requested
    before page N has arrived. Fetch errors are recorded on `error` and
    re-raised; nothing is retried automatically.
    """

    def __init__(self, fetch_page: PageFetcher[T]):
        self._fetch_page = fetch_page
        self._items: list[T] = []
        self._cursor: Optional[Any] = None
        self._has_more = True
        self._loading = False
        self._error: Optional[BaseException] = None
        self._sentinel_visible = False
        # Bumped by reset(); a fetch started under an older generation is discarded.
        self._generation = 0

    @property
    def items(self) -> list[T]:
        return list(self._items)

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def cursor(self) -> Optional[Any]:
        return self._cursor

    async def load_more(self) -> list[T]:
        """Fetch the next page and return its items ([] if busy or exhausted)."""
        if self._loading or not self._has_more:
            return []
        generation = self._generation
        self._loading = True
        self._error = None
        try:
            page = await self._fetch_page(self._cursor)
        except Exception as e:
            if generation == self._generation:
                self._error = e
            raise
        finally:
            if generation == self._generation:
                self._loading = False
        if generation != self._generation:
            logger.debug("Discarding page fetched before reset")
            return []
        self._items.extend(page.items)
        self._has_more = page.has_more
        self._cursor = page.next_cursor
        return page.items

    async def notify_visibility(self, visible: bool) -> list[T]:
        """Scroll-sentinel hook: fetch once per hidden-to-visible transition."""
        became_visible = visible and not self._sentinel_visible
        self._sentinel_visible = visible
        if not became_visible:
            return []
        return await self.load_more()

    def reset(self) -> None:
        """Forget all pages. A fetch still in flight is dropped when it completes."""
        self._generation += 1
        self._loading = False
        self._items = []
        self._cursor = None
        self._has_more = True
        self._error = None
        self._sentinel_visible = False

    async def reload(self) -> list[T]:
        """Start over from the first page, e.g. after an error."""
        self.reset()
        return await self.load_more()

    async def __aiter__(self) -> AsyncIterator[T]:
        index = 0
        while True:
            while index < len(self._items):
                yield self._items[index]
                index += 1
            if not self._has_more:
                return
            if self._loading:
                await asyncio.sleep(0)
                continue
            await self.load_more()
