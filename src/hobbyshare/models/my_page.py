"""
My-page models — profile, own posts, account edits, rank.
"""

from typing import Optional

from hobbyshare.models.common import ApiModel


class MyPageInfo(ApiModel):
    user_id: int
    username: str = ""
    nickname: str = ""
    mbti: str = ""
    user_image_url: Optional[str] = None
    hobby_tags: list[str] = []


class UserPostCard(ApiModel):
    post_id: int
    post_title: str = ""
    post_contents: str = ""
    post_hobby_tags: list[str] = []
    representative_image_url: list[str] = []
    created_at: str = ""
    updated_at: str = ""
    like_count: int = 0
    comment_count: int = 0


class MyPostsResponse(ApiModel):
    posts: list[UserPostCard] = []
    is_last: bool = True


class MyPageModify(ApiModel):
    username: str = ""
    email: str = ""
    nickname: str = ""
    gender: str = ""
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None
    user_image_url: Optional[str] = None
    mbti: str = ""
    hobby_tags: list[str] = []


class NicknameValidation(ApiModel):
    exists: bool
    message: str = ""


class UpdateUserInfo(ApiModel):
    username: str
    gender: str
    birth_year: int
    birth_month: int
    birth_day: int
    mbti: str = ""
    hobby_tags: list[str] = []


class UserRank(ApiModel):
    level: int = 1
    point: int = 0
