"""
Auth models — login, signup, social login.
"""

from enum import Enum
from typing import Optional

from hobbyshare.models.common import ApiModel

MBTI_OPTIONS = (
    "ISTJ", "ISFJ", "INFJ", "INTJ",
    "ISTP", "ISFP", "INFP", "INTP",
    "ESTP", "ESFP", "ENFP", "ENTP",
    "ESTJ", "ESFJ", "ENFJ", "ENTJ",
)


class SocialProvider(str, Enum):
    KAKAO = "kakao"
    GOOGLE = "google"


class LoginResponse(ApiModel):
    access_token: str
    refresh_token: str
    user_id: int
    hobby_tags: list[str] = []
    nickname: Optional[str] = None


class SocialLoginResponse(ApiModel):
    access_token: str
    refresh_token: str
    user_id: int


class SignupRequest(ApiModel):
    email: str
    username: Optional[str] = None
    password: Optional[str] = None
    password_confirm: Optional[str] = None
    birth_year: int
    birth_month: int
    birth_day: int
    gender: str  # "남성" | "여성"
    nickname: str
    mbti: str = ""
    user_image_url: Optional[str] = None
    hobby_tags: list[str] = []
    social_id: Optional[str] = None
    social_provider: Optional[SocialProvider] = None
