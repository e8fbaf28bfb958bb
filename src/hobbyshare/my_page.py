"""
My-page REST API — own profile, own posts, account settings and rank.
"""

from __future__ import annotations

from typing import Any, Optional

from hobbyshare.config import DEFAULT_PAGE_SIZE
from hobbyshare.models.my_page import (
    MyPageInfo,
    MyPageModify,
    MyPostsResponse,
    NicknameValidation,
    UpdateUserInfo,
    UserPostCard,
    UserRank,
)
from hobbyshare.pagination import CursorPaginator, CursorParams, Page, flag_based
from hobbyshare.transport.http import HttpClient
from hobbyshare.validation import require, validate_nickname, validate_password


class MyPageAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def info(self) -> MyPageInfo:
        return MyPageInfo.model_validate(await self._http.get("/my-page"))

    async def my_posts(self, last_post_id: Optional[int] = None, page_size: int = DEFAULT_PAGE_SIZE) -> MyPostsResponse:
        params = CursorParams(last_id=last_post_id, page_size=page_size).to_query("lastPostId")
        return MyPostsResponse.model_validate(await self._http.get("/my-page/myposts", params=params))

    def my_posts_paginator(self, page_size: int = DEFAULT_PAGE_SIZE) -> CursorPaginator[UserPostCard]:
        """Own posts. This endpoint says when it is done via isLast."""
        async def fetch(cursor: Optional[int]) -> Page[UserPostCard]:
            result = await self.my_posts(last_post_id=cursor, page_size=page_size)
            next_cursor = result.posts[-1].post_id if result.posts else None
            return flag_based(result.posts, not result.is_last, next_cursor)
        return CursorPaginator(fetch)

    async def modify_page(self) -> MyPageModify:
        return MyPageModify.model_validate(await self._http.get("/my-page/my-modify-page"))

    async def validate_nickname(self, nickname: str) -> NicknameValidation:
        require(validate_nickname(nickname), "nickname")
        return NicknameValidation.model_validate(
            await self._http.post("/my-page/validation/nickname", {"nickname": nickname})
        )

    async def update_nickname(self, nickname: str) -> None:
        require(validate_nickname(nickname), "nickname")
        await self._http.put("/my-page/update/nickname", {"nickname": nickname})

    async def check_current_password(self, current_password: str) -> bool:
        result = await self._http.post("/my-page/update/password/check", {"currentPassword": current_password})
        return bool(result.get("check"))

    async def update_password(self, new_password: str, confirm_password: str) -> None:
        require(validate_password(new_password, confirm_password), "password")
        await self._http.put("/my-page/update/password", {
            "newPassword": new_password,
            "confirmPassword": confirm_password,
        })

    async def upload_profile_image(self, filename: str, data: bytes, content_type: str = "image/jpeg") -> str:
        """Returns the new image URL."""
        return await self._http.post(
            "/my-page/update/profile-image", files={"profileImage": (filename, data, content_type)},
        )

    async def update_info(self, info: UpdateUserInfo) -> None:
        await self._http.post("/my-page/update", info.to_wire())

    async def delete_account(self, reason: str) -> Any:
        return await self._http.delete("/user/delete", {"reason": reason})

    async def rank(self) -> UserRank:
        return UserRank.model_validate(await self._http.get("/user-rank/me"))

    async def level(self) -> int:
        return int(await self._http.get("/user-rank/level"))

    async def social_status(self) -> dict[str, bool]:
        """Which social accounts (kakao, google) are linked."""
        return await self._http.get("/oauth/status")
