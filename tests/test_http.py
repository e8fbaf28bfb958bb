"""HttpClient: bearer headers and the 401 refresh-and-retry cycle."""

import asyncio

import httpx
import pytest

from hobbyshare import ApiError, CredentialError, SessionExpiredError
from conftest import login_payload


def detail(post_id: int = 1) -> dict:
    return {"postId": post_id, "title": "Sourdough", "likeCount": 3, "isLike": False}


class TestBearerHeader:
    @pytest.mark.asyncio
    async def test_attaches_current_access_token(self, backend, logged_in):
        backend.on("GET", "/post/1", httpx.Response(200, json=detail()))
        await logged_in.posts.get(1)
        (request,) = backend.calls("GET", "/post/1")
        assert request.headers["Authorization"] == "Bearer T1"

    @pytest.mark.asyncio
    async def test_no_header_without_token(self, backend, client):
        backend.on("GET", "/posts/cursor", httpx.Response(200, json=[]))
        await client.posts.public_feed()
        (request,) = backend.calls("GET", "/posts/cursor")
        assert "Authorization" not in request.headers

    @pytest.mark.asyncio
    async def test_unwraps_status_data_envelope(self, backend, logged_in):
        backend.on("GET", "/post/1", httpx.Response(200, json={"status": "success", "data": detail()}))
        post = await logged_in.posts.get(1)
        assert post.title == "Sourdough"


class TestRefreshAndRetry:
    @pytest.mark.asyncio
    async def test_one_refresh_then_retry_with_new_token(self, backend, logged_in):
        backend.on("GET", "/post/1", httpx.Response(401), httpx.Response(200, json=detail()))
        backend.on("POST", "/token/reissue", httpx.Response(200, json={"accessToken": "T2"}))

        post = await logged_in.posts.get(1)

        assert post.post_id == 1
        reissues = backend.calls("POST", "/token/reissue")
        assert len(reissues) == 1
        assert reissues[0].headers["refreshToken"] == "R1"
        first, retry = backend.calls("GET", "/post/1")
        assert first.headers["Authorization"] == "Bearer T1"
        assert retry.headers["Authorization"] == "Bearer T2"
        assert logged_in.session.access_token == "T2"

    @pytest.mark.asyncio
    async def test_retried_request_keeps_body(self, backend, logged_in):
        backend.on("POST", "/comment", httpx.Response(401), httpx.Response(200, json={
            "commentId": 5, "postId": 1, "content": "nice",
        }))
        backend.on("POST", "/token/reissue", httpx.Response(200, json={"accessToken": "T2"}))

        comment = await logged_in.comments.create(1, "nice")

        assert comment.comment_id == 5
        first, retry = backend.calls("POST", "/comment")
        assert first.content == retry.content

    @pytest.mark.asyncio
    async def test_second_401_is_not_refreshed_again(self, backend, logged_in):
        backend.on("GET", "/post/1", httpx.Response(401))
        backend.on("POST", "/token/reissue", httpx.Response(200, json={"accessToken": "T2"}))

        with pytest.raises(ApiError) as exc_info:
            await logged_in.posts.get(1)

        assert exc_info.value.status_code == 401
        assert len(backend.calls("POST", "/token/reissue")) == 1
        assert len(backend.calls("GET", "/post/1")) == 2

    @pytest.mark.parametrize("path", ["/user/login", "/user/signup"])
    @pytest.mark.asyncio
    async def test_credential_paths_never_refresh(self, backend, logged_in, path):
        backend.on("POST", path, httpx.Response(401, json={"message": "bad password"}))

        with pytest.raises(CredentialError) as exc_info:
            await logged_in.http.post(path, {"email": "a@b.co", "password": "x"}, authenticated=False)

        assert exc_info.value.status_code == 401
        assert "bad password" in str(exc_info.value)
        assert backend.calls("POST", "/token/reissue") == []
        assert logged_in.session.access_token == "T1"

    @pytest.mark.asyncio
    async def test_failed_refresh_resets_session_without_retry(self, backend, logged_in):
        backend.on("GET", "/post/1", httpx.Response(401))
        backend.on("POST", "/token/reissue", httpx.Response(401))

        with pytest.raises(SessionExpiredError) as exc_info:
            await logged_in.posts.get(1)

        assert isinstance(exc_info.value.__cause__, ApiError)
        assert len(backend.calls("GET", "/post/1")) == 1
        state = logged_in.session.state
        assert state.access_token is None
        assert state.refresh_token is None
        assert state.is_authenticated is False
        assert state.user_id is None
        assert logged_in.resets == [True]

    @pytest.mark.asyncio
    async def test_concurrent_401s_reset_session_once(self, backend, logged_in):
        async def rejected(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.05)
            return httpx.Response(401)

        backend.on("GET", "/post/1", httpx.Response(401))
        backend.on("POST", "/token/reissue", rejected)
        changes = []
        logged_in.session.add_listener(changes.append)

        results = await asyncio.gather(*(logged_in.posts.get(1) for _ in range(3)), return_exceptions=True)

        assert all(isinstance(r, SessionExpiredError) for r in results)
        assert len(backend.calls("POST", "/token/reissue")) == 1
        assert logged_in.resets == [True]
        assert len(changes) == 1
        assert not logged_in.is_authenticated

    @pytest.mark.asyncio
    async def test_refresh_without_new_token_counts_as_failure(self, backend, logged_in):
        backend.on("GET", "/post/1", httpx.Response(401))
        backend.on("POST", "/token/reissue", httpx.Response(200, json={"message": "ok"}))

        with pytest.raises(SessionExpiredError):
            await logged_in.posts.get(1)
        assert len(backend.calls("GET", "/post/1")) == 1
        assert not logged_in.is_authenticated

    @pytest.mark.asyncio
    async def test_other_errors_propagate_unchanged(self, backend, logged_in):
        backend.on("GET", "/post/1", httpx.Response(500, text="boom"))

        with pytest.raises(ApiError) as exc_info:
            await logged_in.posts.get(1)

        assert exc_info.value.status_code == 500
        assert "boom" in str(exc_info.value)
        assert backend.calls("POST", "/token/reissue") == []

    @pytest.mark.asyncio
    async def test_concurrent_401s_share_one_refresh(self, backend, logged_in):
        def post(request: httpx.Request) -> httpx.Response:
            if request.headers.get("Authorization") == "Bearer T2":
                return httpx.Response(200, json=detail())
            return httpx.Response(401)

        async def reissue(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(0.05)
            return httpx.Response(200, json={"accessToken": "T2"})

        backend.on("GET", "/post/1", post)
        backend.on("POST", "/token/reissue", reissue)

        results = await asyncio.gather(*(logged_in.posts.get(1) for _ in range(3)))

        assert [r.post_id for r in results] == [1, 1, 1]
        assert len(backend.calls("POST", "/token/reissue")) == 1
        assert len(backend.calls("GET", "/post/1")) == 6


class TestScenarios:
    @pytest.mark.asyncio
    async def test_login_then_authenticated_request(self, backend, client):
        backend.on("POST", "/user/login", httpx.Response(200, json=login_payload(access="A1", refresh="R9", user_id=42)))
        backend.on("GET", "/my-page", httpx.Response(200, json={"userId": 42, "nickname": "mountain_goat"}))

        await client.auth.login("goat@example.com", "Secret123")

        state = client.session.state
        assert (state.access_token, state.refresh_token, state.user_id) == ("A1", "R9", 42)
        assert state.is_authenticated

        info = await client.my_page.info()
        assert info.user_id == 42
        (request,) = backend.calls("GET", "/my-page")
        assert request.headers["Authorization"] == "Bearer A1"

    @pytest.mark.asyncio
    async def test_login_with_wrong_password(self, backend, client):
        backend.on("POST", "/user/login", httpx.Response(401, json={"message": "invalid credentials"}))

        with pytest.raises(CredentialError):
            await client.auth.login("goat@example.com", "wrong")

        assert not client.is_authenticated
        assert backend.calls("POST", "/token/reissue") == []
        assert client.resets == []
