"""Shared fixtures: an in-process fake backend behind httpx.MockTransport."""

import asyncio
import json
from typing import Any, Callable, Optional, Union

import httpx
import pytest
import pytest_asyncio

from hobbyshare import AsyncHobbyShare
from hobbyshare.config import Settings

BASE_URL = "https://api.test"

Reply = Union[httpx.Response, Callable[[httpx.Request], Any]]


class FakeBackend:
    """Routes (method, path) to queued replies and records every request.

    A route's replies are consumed in order; the last one repeats.
    Replies may be responses or (sync or async) callables taking the request.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Reply]] = {}

    def on(self, method: str, path: str, *replies: Reply) -> None:
        self._routes[(method, path)] = list(replies)

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    async def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        replies = self._routes.get((request.method, request.url.path))
        if not replies:
            return httpx.Response(404, json={"message": "not found"})
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if callable(reply):
            reply = reply(request)
            if asyncio.iscoroutine(reply):
                reply = await reply
        return reply

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self._handle)


def json_body(request: httpx.Request) -> Any:
    return json.loads(request.content)


def login_payload(access: str = "T1", refresh: str = "R1", user_id: int = 7) -> dict[str, Any]:
    return {
        "accessToken": access,
        "refreshToken": refresh,
        "userId": user_id,
        "hobbyTags": ["hiking"],
        "nickname": "mountain_goat",
    }


def post_card(post_id: int) -> dict[str, Any]:
    return {
        "postId": post_id,
        "nickname": f"user{post_id}",
        "title": f"Post {post_id}",
        "content": "...",
        "postImageUrls": [],
        "postHobbyTags": ["knitting"],
        "likeCount": 0,
        "commentCount": 0,
    }


def notification(notification_id: int, read: bool = False) -> dict[str, Any]:
    return {
        "notificationId": notification_id,
        "receiverId": 7,
        "targetPostId": 100,
        "senderNickname": "alice",
        "message": "alice liked your post",
        "notificationType": "LIKE",
        "read": read,
        "createdAt": "2024-05-01T12:00:00",
    }


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def settings() -> Settings:
    return Settings(
        base_url=BASE_URL,
        public_url="https://app.test",
        kakao_client_id="kakao-id",
        google_client_id="google-id",
        sse_max_retries=5,
        sse_retry_delay=0,
    )


@pytest_asyncio.fixture
async def client(backend: FakeBackend, settings: Settings):
    resets: list[bool] = []
    c = AsyncHobbyShare(settings=settings, transport=backend.transport, on_session_reset=lambda: resets.append(True))
    c.resets = resets  # type: ignore[attr-defined]
    yield c
    await c.close()


@pytest_asyncio.fixture
async def logged_in(client: AsyncHobbyShare) -> AsyncHobbyShare:
    client.session.set_auth(login_payload())
    return client


def sse_event(payload: Union[str, dict[str, Any]]) -> bytes:
    data = payload if isinstance(payload, str) else json.dumps(payload)
    return f"data: {data}\n\n".encode()


class HangingStream(httpx.AsyncByteStream):
    """Event stream that sends `chunks` then stays open until released."""

    def __init__(self, chunks: list[bytes], release: Optional[asyncio.Event] = None):
        self._chunks = chunks
        self._release = release or asyncio.Event()

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk
        await self._release.wait()
