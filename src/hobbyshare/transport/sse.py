"""
Server-sent events channel for live notifications.

Connection: GET {base_url}/sse/subscribe with the bearer token.
State machine: DISCONNECTED -> CONNECTING -> CONNECTED -> ERROR -> (CONNECTING | DISCONNECTED).
"""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from hobbyshare.errors import ApiError, ConnectionError
from hobbyshare.models.notification import Notification
from hobbyshare.models.session import SessionState
from hobbyshare.session import SessionStore
from hobbyshare.transport.http import HttpClient

logger = logging.getLogger(__name__)

SSE_PATH = "/sse/subscribe"
DEFAULT_MAX_RETRIES = 5
DEFAULT_RETRY_DELAY_S = 10.0

NotificationHandler = Callable[[Notification], None]


class ChannelState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    ERROR = "error"


class PushChannel:
    def __init__(
        self,
        http: HttpClient,
        session: SessionStore,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY_S,
    ):
        self._http = http
        self._session = session
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._state = ChannelState.DISCONNECTED
        self._retry_count = 0
        self._task: Optional[asyncio.Task[None]] = None
        # Set by start(), cleared by stop(). A logged-out channel reopens on the next login.
        self._wanted = False
        self._event_handlers: list[NotificationHandler] = []
        self._remove_session_listener = session.add_listener(self._on_session_change)

    @property
    def state(self) -> ChannelState:
        return self._state

    @property
    def retry_count(self) -> int:
        return self._retry_count

    @property
    def connected(self) -> bool:
        return self._state == ChannelState.CONNECTED

    def add_event_handler(self, handler: NotificationHandler) -> Callable[[], None]:
        """Add a notification handler. Returns a cleanup function."""
        self._event_handlers.append(handler)

        def remove() -> None:
            try:
                self._event_handlers.remove(handler)
            except ValueError:
                pass
        return remove

    def start(self) -> None:
        """Open the stream in the background. No-op if already running."""
        if self._task and not self._task.done():
            return
        if not self._session.is_authenticated or not self._session.access_token:
            raise ConnectionError("Notification channel requires an authenticated session.")
        self._wanted = True
        self._retry_count = 0
        self._task = asyncio.get_running_loop().create_task(self._run())

    async def stop(self) -> None:
        self._wanted = False
        task, self._task = self._task, None
        if task and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        self._set_state(ChannelState.DISCONNECTED)

    async def wait_closed(self) -> None:
        """Wait until the channel gives up or is stopped."""
        if self._task:
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    async def close(self) -> None:
        await self.stop()
        self._remove_session_listener()

    def _on_session_change(self, state: SessionState) -> None:
        if state.is_authenticated:
            self._resume()
            return
        if self._task is None:
            return
        logger.info("Session ended; closing notification channel")
        self._task.cancel()
        self._task = None
        self._set_state(ChannelState.DISCONNECTED)

    def _resume(self) -> None:
        if not self._wanted or (self._task and not self._task.done()):
            return
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("Session started outside an event loop; call start() to reopen the channel")
            return
        logger.info("Session started; reopening notification channel")
        self.start()

    def _set_state(self, state: ChannelState) -> None:
        if state != self._state:
            logger.debug("Notification channel %s -> %s", self._state.value, state.value)
            self._state = state

    async def _run(self) -> None:
        while True:
            self._set_state(ChannelState.CONNECTING)
            try:
                await self._stream()
                logger.info("Notification stream closed by server")
            except (httpx.HTTPError, ApiError) as e:
                logger.error("Notification stream failed: %s", e)
            except Exception:
                logger.exception("Unexpected error in notification stream")
            self._set_state(ChannelState.ERROR)

            if self._retry_count >= self._max_retries:
                logger.error("Notification channel gave up after %d retries", self._max_retries)
                self._set_state(ChannelState.DISCONNECTED)
                return
            self._retry_count += 1
            logger.info("Reconnecting in %.1fs (attempt %d/%d)", self._retry_delay, self._retry_count, self._max_retries)
            await asyncio.sleep(self._retry_delay)

    async def _stream(self) -> None:
        headers = {
            **self._http.auth_headers(),
            "Accept": "text/event-stream",
            "Cache-Control": "no-cache",
        }
        timeout = httpx.Timeout(30.0, read=None)
        async with self._http.raw.stream("GET", SSE_PATH, headers=headers, timeout=timeout) as resp:
            if resp.status_code >= 400:
                await resp.aread()
                raise ApiError(resp.status_code, f"HTTP {resp.status_code}: {resp.text[:200]}")
            self._retry_count = 0
            self._set_state(ChannelState.CONNECTED)

            data_lines: list[str] = []
            async for line in resp.aiter_lines():
                if not line:
                    if data_lines:
                        self._dispatch("\n".join(data_lines))
                        data_lines = []
                    continue
                if line.startswith(":"):
                    continue
                field, _, value = line.partition(":")
                if field == "data":
                    data_lines.append(value[1:] if value.startswith(" ") else value)

    def _dispatch(self, payload: str) -> None:
        try:
            notification = Notification.model_validate_json(payload)
        except PydanticValidationError as e:
            logger.warning("Dropping unparseable notification event %r: %s", payload[:200], e.errors()[:1])
            return
        for handler in list(self._event_handlers):
            try:
                handler(notification)
            except Exception:
                logger.exception("Notification handler %r failed", handler)
