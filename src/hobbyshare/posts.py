"""
Posts REST API — feed, detail, write/edit/delete and likes.
"""

from __future__ import annotations

import json
from typing import Any, Optional, Sequence

from hobbyshare.config import DEFAULT_PAGE_SIZE
from hobbyshare.models.post import PostCard, PostDetail, PostLike, PostResponse
from hobbyshare.pagination import CursorPaginator, CursorParams, Page, length_based
from hobbyshare.transport.http import HttpClient

# (filename, content, content_type)
ImageFile = tuple[str, bytes, str]


def _post_form(
    title: str, content: str, hobby_tags: Sequence[str],
    images: Sequence[ImageFile], deleted_image_urls: Sequence[str] = (),
) -> list[tuple[str, tuple[Optional[str], Any, str]]]:
    """Multipart body: a JSON `request` part followed by one `imageFiles` part per image."""
    request = {
        "title": title,
        "content": content,
        "hobbyTagNames": list(hobby_tags),
        "deletedImageUrls": list(deleted_image_urls),
    }
    parts: list[tuple[str, tuple[Optional[str], Any, str]]] = [
        ("request", (None, json.dumps(request).encode(), "application/json")),
    ]
    for filename, data, content_type in images:
        parts.append(("imageFiles", (filename, data, content_type)))
    return parts


class PostsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def feed(
        self, tag_exist: bool = False, last_post_id: Optional[int] = None, page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[PostCard]:
        """Member feed. tag_exist limits it to posts matching the user's hobby tags."""
        params = {"tagExist": str(tag_exist).lower()}
        params.update(CursorParams(last_id=last_post_id, page_size=page_size).to_query("lastPostId"))
        return [PostCard.model_validate(p) for p in await self._http.get("/post", params=params)]

    async def public_feed(self, cursor_id: Optional[int] = None, limit: int = DEFAULT_PAGE_SIZE) -> list[PostCard]:
        """Feed for visitors without an account."""
        params = CursorParams(last_id=cursor_id, page_size=limit).to_query("cursor_id", size_key="limit")
        return [PostCard.model_validate(p) for p in await self._http.get("/posts/cursor", params=params, authenticated=False)]

    def feed_paginator(self, tag_exist: bool = False, page_size: int = DEFAULT_PAGE_SIZE) -> CursorPaginator[PostCard]:
        async def fetch(cursor: Optional[int]) -> Page[PostCard]:
            items = await self.feed(tag_exist=tag_exist, last_post_id=cursor, page_size=page_size)
            return length_based(items, page_size, lambda p: p.post_id)
        return CursorPaginator(fetch)

    def public_feed_paginator(self, limit: int = DEFAULT_PAGE_SIZE) -> CursorPaginator[PostCard]:
        async def fetch(cursor: Optional[int]) -> Page[PostCard]:
            items = await self.public_feed(cursor_id=cursor, limit=limit)
            return length_based(items, limit, lambda p: p.post_id)
        return CursorPaginator(fetch)

    async def get(self, post_id: int) -> PostDetail:
        return PostDetail.model_validate(await self._http.get(f"/post/{post_id}"))

    async def get_public(self, post_id: int) -> PostDetail:
        return PostDetail.model_validate(await self._http.get(f"/posts/{post_id}", authenticated=False))

    async def write(
        self, title: str, content: str, hobby_tags: Sequence[str], images: Sequence[ImageFile] = (),
    ) -> PostResponse:
        files = _post_form(title, content, hobby_tags, images)
        return PostResponse.model_validate(await self._http.post("/post", files=files))

    async def update(
        self, post_id: int, title: str, content: str, hobby_tags: Sequence[str],
        images: Sequence[ImageFile] = (), deleted_image_urls: Sequence[str] = (),
    ) -> PostResponse:
        files = _post_form(title, content, hobby_tags, images, deleted_image_urls)
        return PostResponse.model_validate(await self._http.put(f"/post/{post_id}", files=files))

    async def delete(self, post_id: int) -> None:
        await self._http.delete(f"/post/{post_id}")

    async def like(self, post_id: int) -> PostLike:
        return PostLike.model_validate(await self._http.post(f"/like/post/{post_id}"))

    async def unlike(self, post_id: int) -> PostLike:
        return PostLike.model_validate(await self._http.post(f"/unlike/post/{post_id}"))
