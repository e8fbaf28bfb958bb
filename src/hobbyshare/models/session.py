"""
Client-held authentication state.
"""

from typing import Optional

from pydantic import BaseModel

# Fields written to persistent storage. Nickname and hobby tags are refetched.
PERSISTED_FIELDS = {"is_authenticated", "access_token", "refresh_token", "user_id"}


class SessionState(BaseModel):
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    is_authenticated: bool = False
    user_id: Optional[int] = None
    nickname: Optional[str] = None
    hobby_tags: list[str] = []
