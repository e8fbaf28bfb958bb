"""
AsyncHobbyShare / HobbyShare — main SDK clients.
"""

import asyncio
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx

from hobbyshare.auth import Auth
from hobbyshare.challenges import ChallengesAPI
from hobbyshare.comments import CommentsAPI
from hobbyshare.config import Settings
from hobbyshare.models.notification import Notification
from hobbyshare.my_page import MyPageAPI
from hobbyshare.notifications import NotificationInbox, NotificationsAPI
from hobbyshare.posts import PostsAPI
from hobbyshare.search import SearchAPI
from hobbyshare.session import SessionStore
from hobbyshare.transport.http import HttpClient
from hobbyshare.transport.sse import ChannelState, PushChannel


class AsyncHobbyShare:
    """Async client (primary)."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        session_file: Optional[Union[str, Path]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_session_reset: Optional[Callable[[], None]] = None,
    ):
        self.settings = settings or Settings()
        if base_url:
            self.settings.base_url = base_url

        self.session = SessionStore(
            self.settings.base_url,
            storage_path=session_file,
            transport=transport,
            timeout=self.settings.http_timeout,
        )
        self.http = HttpClient(
            self.session,
            base_url=self.settings.base_url,
            timeout=self.settings.http_timeout,
            transport=transport,
            on_session_reset=on_session_reset,
        )
        self.auth = Auth(self.http, self.session, self.settings)
        self.posts = PostsAPI(self.http)
        self.comments = CommentsAPI(self.http)
        self.notifications = NotificationsAPI(self.http)
        self.search = SearchAPI(self.http)
        self.my_page = MyPageAPI(self.http)
        self.challenges = ChallengesAPI(self.http)

        self.inbox = NotificationInbox()
        self._channel: Optional[PushChannel] = None

    @property
    def is_authenticated(self) -> bool:
        return self.session.is_authenticated

    @property
    def channel_state(self) -> ChannelState:
        return self._channel.state if self._channel else ChannelState.DISCONNECTED

    def connect_notifications(self, on_notification: Optional[Callable[[Notification], None]] = None) -> PushChannel:
        """Start the live notification stream. Events also land in `inbox`."""
        if self._channel is None:
            self._channel = PushChannel(
                self.http, self.session,
                max_retries=self.settings.sse_max_retries,
                retry_delay=self.settings.sse_retry_delay,
            )
            self._channel.add_event_handler(self.inbox.push)
        if on_notification is not None:
            self._channel.add_event_handler(on_notification)
        self._channel.start()
        return self._channel

    async def disconnect_notifications(self) -> None:
        if self._channel:
            await self._channel.close()
            self._channel = None

    async def close(self) -> None:
        await self.disconnect_notifications()
        await self.http.close()
        await self.session.close()

    async def __aenter__(self) -> "AsyncHobbyShare":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


class HobbyShare:
    """Sync wrapper around AsyncHobbyShare. Runs the event loop internally.

    Push notifications need a running loop and are only available on the
    async client.
    """

    def __init__(self, **kwargs: Any):
        self._loop = asyncio.new_event_loop()
        self._async = AsyncHobbyShare(**kwargs)

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    @property
    def is_authenticated(self) -> bool:
        return self._async.is_authenticated

    @property
    def session(self) -> SessionStore:
        return self._async.session

    def login(self, email: str, password: str) -> Any:
        return self._run(self._async.auth.login(email, password))

    def logout(self) -> None:
        self._run(self._async.auth.logout())

    def feed(self, **kwargs: Any) -> Any:
        return self._run(self._async.posts.feed(**kwargs))

    def post(self, post_id: int) -> Any:
        return self._run(self._async.posts.get(post_id))

    def comments(self, post_id: int, **kwargs: Any) -> Any:
        return self._run(self._async.comments.list(post_id, **kwargs))

    def notifications(self, **kwargs: Any) -> Any:
        return self._run(self._async.notifications.list(**kwargs))

    def search(self, params: Any, **kwargs: Any) -> Any:
        return self._run(self._async.search.search(params, **kwargs))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()
