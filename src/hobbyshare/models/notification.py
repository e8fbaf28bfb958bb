"""
Notification models — list items and pushed events share one shape.
"""

from enum import Enum
from typing import Optional

from hobbyshare.models.common import ApiModel


class NotificationType(str, Enum):
    COMMENT = "COMMENT"
    LIKE = "LIKE"


class Notification(ApiModel):
    notification_id: int
    receiver_id: Optional[int] = None
    target_post_id: Optional[int] = None
    sender_nickname: str = ""
    message: str = ""
    notification_type: NotificationType
    read: bool = False
    created_at: str = ""


class UnreadCount(ApiModel):
    unread_count: int = 0
