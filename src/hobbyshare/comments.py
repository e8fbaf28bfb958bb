"""
Comments REST API.
"""

from __future__ import annotations

from typing import Optional

from hobbyshare.config import DEFAULT_PAGE_SIZE
from hobbyshare.models.post import Comment
from hobbyshare.pagination import CursorPaginator, CursorParams, Page, length_based
from hobbyshare.transport.http import HttpClient


class CommentsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def list(
        self, post_id: int, last_comment_id: Optional[int] = None, page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[Comment]:
        params = {"postId": str(post_id)}
        params.update(CursorParams(last_id=last_comment_id, page_size=page_size).to_query("lastCommentId"))
        return [Comment.model_validate(c) for c in await self._http.get("/comments", params=params)]

    def paginator(self, post_id: int, page_size: int = DEFAULT_PAGE_SIZE) -> CursorPaginator[Comment]:
        async def fetch(cursor: Optional[int]) -> Page[Comment]:
            items = await self.list(post_id, last_comment_id=cursor, page_size=page_size)
            return length_based(items, page_size, lambda c: c.comment_id)
        return CursorPaginator(fetch)

    async def create(
        self, post_id: int, content: str,
        parent_comment_id: Optional[int] = None, user_id: Optional[int] = None,
    ) -> Comment:
        """Add a comment, or a reply when parent_comment_id is given."""
        return Comment.model_validate(await self._http.post("/comment", {
            "postId": post_id,
            "content": content,
            "parentCommentId": parent_comment_id,
            "userId": user_id,
        }))

    async def update(self, comment_id: int, post_id: int, content: str, user_id: Optional[int] = None) -> Comment:
        return Comment.model_validate(await self._http.put(f"/comment/{comment_id}", {
            "content": content,
            "postId": post_id,
            "userId": user_id,
        }))

    async def delete(self, comment_id: int) -> None:
        await self._http.delete(f"/comment/{comment_id}")
