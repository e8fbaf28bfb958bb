"""
Post and comment models.
"""

from typing import Optional

from hobbyshare.models.common import ApiModel


class PostCard(ApiModel):
    """Feed item."""
    post_id: int
    nickname: str = ""
    title: str = ""
    content: str = ""
    profile_image_url: Optional[str] = None
    post_image_urls: list[str] = []
    post_hobby_tags: list[str] = []
    like_count: int = 0
    comment_count: int = 0


class PostDetail(ApiModel):
    post_id: int
    nickname: str = ""
    profile_image_url: Optional[str] = None
    title: str = ""
    content: str = ""
    post_image_urls: list[str] = []
    post_hobby_tags: list[str] = []
    created_at: str = ""
    like_count: int = 0
    is_like: bool = False
    user_id: Optional[int] = None


class PostResponse(ApiModel):
    """Returned by create/update."""
    post_id: int
    user_id: Optional[int] = None
    title: str = ""
    content: str = ""
    post_image_urls: list[str] = []
    post_hobby_tags: list[str] = []
    created_at: str = ""
    updated_at: str = ""


class PostLike(ApiModel):
    like_count: int = 0
    is_like: bool = False


class Comment(ApiModel):
    comment_id: int
    content: str = ""
    nickname: str = ""
    user_image_url: Optional[str] = None
    parent_comment_id: Optional[int] = None
    post_id: int
    user_id: Optional[int] = None
    deleted: bool = False
    created_at: str = ""
    updated_at: str = ""
