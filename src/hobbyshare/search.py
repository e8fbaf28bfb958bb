"""
Search REST API.

The endpoint has answered in two shapes: a bare list of posts (a short list
is the last page) and an envelope with has_more and the next cursor pair.
Both are accepted and normalised to Page.
"""

from __future__ import annotations

from typing import Any, Optional

from hobbyshare.config import DEFAULT_PAGE_SIZE
from hobbyshare.models.search import SearchParams, SearchPost
from hobbyshare.pagination import CursorPaginator, Page, SearchCursor, flag_based, length_based
from hobbyshare.transport.http import HttpClient


def _cursor_of(post: SearchPost) -> SearchCursor:
    return SearchCursor(cursor_created_at=post.created_at or None, cursor_id=post.post_id)


class SearchAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def search(self, params: SearchParams, cursor: Optional[SearchCursor] = None) -> Page[SearchPost]:
        cursor = cursor or SearchCursor()
        body = {**params.to_body(), **cursor.to_body()}
        return self._to_page(await self._http.post("/search/", body), cursor.limit)

    def paginator(self, params: SearchParams, limit: int = DEFAULT_PAGE_SIZE) -> CursorPaginator[SearchPost]:
        async def fetch(cursor: Optional[SearchCursor]) -> Page[SearchPost]:
            return await self.search(params, cursor or SearchCursor(limit=limit))
        return CursorPaginator(fetch)

    @staticmethod
    def _to_page(result: Any, limit: int) -> Page[SearchPost]:
        if isinstance(result, dict):
            posts = [SearchPost.model_validate(p) for p in result.get("posts") or []]
            next_cursor = None
            if result.get("next_cursor_id") is not None:
                next_cursor = SearchCursor(
                    cursor_created_at=result.get("next_cursor_created_at"),
                    cursor_id=result["next_cursor_id"],
                    limit=limit,
                )
            elif posts:
                next_cursor = _cursor_of(posts[-1]).model_copy(update={"limit": limit})
            return flag_based(posts, result.get("has_more"), next_cursor)
        posts = [SearchPost.model_validate(p) for p in result or []]
        return length_based(posts, limit, lambda p: _cursor_of(p).model_copy(update={"limit": limit}))
