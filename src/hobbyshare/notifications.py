"""
Notifications REST API and the in-memory inbox fed by the push channel.
"""

from __future__ import annotations

from typing import Iterable, Optional

from hobbyshare.config import DEFAULT_PAGE_SIZE
from hobbyshare.models.notification import Notification, UnreadCount
from hobbyshare.pagination import CursorPaginator, CursorParams, Page, length_based
from hobbyshare.transport.http import HttpClient


class NotificationsAPI:
    def __init__(self, http: HttpClient):
        self._http = http

    async def list(
        self, last_notification_id: Optional[int] = None, page_size: int = DEFAULT_PAGE_SIZE,
    ) -> list[Notification]:
        params = CursorParams(last_id=last_notification_id, page_size=page_size).to_query("lastNotificationId")
        return [Notification.model_validate(n) for n in await self._http.get("/notifications", params=params)]

    def paginator(self, page_size: int = DEFAULT_PAGE_SIZE) -> CursorPaginator[Notification]:
        async def fetch(cursor: Optional[int]) -> Page[Notification]:
            items = await self.list(last_notification_id=cursor, page_size=page_size)
            return length_based(items, page_size, lambda n: n.notification_id)
        return CursorPaginator(fetch)

    async def get(self, notification_id: int) -> Notification:
        """Open a notification. The backend marks it read as a side effect."""
        return Notification.model_validate(await self._http.post(f"/notifications/{notification_id}"))

    async def mark_all_read(self) -> None:
        await self._http.post("/notifications/read-all")

    async def mark_read(self, notification_ids: Iterable[int]) -> None:
        await self._http.post("/notifications/read", {"notificationIds": list(notification_ids)})

    async def unread_count(self) -> int:
        return UnreadCount.model_validate(await self._http.get("/notifications/unread-count")).unread_count


class NotificationInbox:
    """Notifications received so far, newest first."""

    def __init__(self) -> None:
        self._items: list[Notification] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    @property
    def unread(self) -> list[Notification]:
        return [n for n in self._items if not n.read]

    def push(self, notification: Notification) -> None:
        """Record a live event. A repeated id replaces the older copy."""
        self._items = [n for n in self._items if n.notification_id != notification.notification_id]
        self._items.insert(0, notification)

    def extend(self, older: Iterable[Notification]) -> None:
        """Append a fetched page of older notifications."""
        seen = {n.notification_id for n in self._items}
        self._items.extend(n for n in older if n.notification_id not in seen)

    def mark_read(self, notification_ids: Optional[Iterable[int]] = None) -> None:
        """Mark the given ids read locally, or everything when ids is None."""
        ids = None if notification_ids is None else set(notification_ids)
        self._items = [
            n.model_copy(update={"read": True}) if ids is None or n.notification_id in ids else n
            for n in self._items
        ]

    def clear(self) -> None:
        self._items = []
