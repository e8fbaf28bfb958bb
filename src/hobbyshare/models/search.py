"""
Search models. The request body is snake_case on the wire, results are camelCase.
"""

from typing import Any, Optional

from pydantic import BaseModel

from hobbyshare.models.common import ApiModel


class SearchParams(BaseModel):
    keyword_text: str = ""
    keyword_user: str = ""
    mbti: list[str] = []
    hobby_tags: list[str] = []

    def to_body(self) -> dict[str, Any]:
        return self.model_dump()


class SearchPost(ApiModel):
    post_id: int
    user_id: Optional[int] = None
    nickname: str = ""
    user_image_url: Optional[str] = None
    title: str = ""
    content: str = ""
    created_at: str = ""
    updated_at: str = ""
    comment_count: int = 0
    like_count: int = 0
    post_image_urls: list[str] = []
    post_hobby_tags: list[str] = []
    user_level: Optional[int] = None
