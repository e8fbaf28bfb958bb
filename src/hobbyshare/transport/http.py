"""
REST HTTP client — bearer auth plus one refresh-and-retry on 401.
"""

import logging
from typing import Any, Callable, Optional, Protocol

import httpx

from hobbyshare.config import DEFAULT_BASE_URL
from hobbyshare.errors import ApiError, CredentialError, SessionExpiredError

logger = logging.getLogger(__name__)

USER_AGENT = "hobbyshare-sdk/0.1.0"

# A 401 on these means wrong credentials, not an expired token.
CREDENTIAL_PATHS = frozenset({"/user/login", "/user/signup"})


class TokenProvider(Protocol):
    """What the HTTP client needs from the session."""

    @property
    def access_token(self) -> Optional[str]: ...

    async def refresh(self) -> bool: ...

    def set_public_user(self) -> None: ...


def _default_session_reset() -> None:
    logger.warning("Session could not be refreshed; client state reset to public user")


class HttpClient:
    def __init__(
        self,
        session: TokenProvider,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        on_session_reset: Optional[Callable[[], None]] = None,
    ):
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._on_session_reset = on_session_reset or _default_session_reset
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def session(self) -> TokenProvider:
        return self._session

    @property
    def raw(self) -> httpx.AsyncClient:
        """The underlying httpx client, for streaming requests."""
        return self._client

    def auth_headers(self, token: Optional[str] = None) -> dict[str, str]:
        token = token if token is not None else self._session.access_token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    @staticmethod
    def _unwrap(resp: httpx.Response) -> Any:
        """Unwrap { "status": ..., "data": <actual_data> } when the backend uses it."""
        if not resp.content:
            return None
        try:
            json_data = resp.json()
        except ValueError:
            return resp.text
        if isinstance(json_data, dict) and "status" in json_data and "data" in json_data:
            return json_data["data"]
        return json_data

    @staticmethod
    def _error(resp: httpx.Response) -> ApiError:
        return ApiError(resp.status_code, f"HTTP {resp.status_code}: {resp.text[:200]}")

    async def _send(self, method: str, path: str, token: Optional[str], **kwargs: Any) -> httpx.Response:
        headers = self.auth_headers(token) if token else {}
        return await self._client.request(method, path, headers=headers, **kwargs)

    async def request(self, method: str, path: str, authenticated: bool = True, **kwargs: Any) -> Any:
        """Send a request and return the unwrapped JSON body.

        A 401 on any path other than login/signup triggers exactly one token
        refresh. If that succeeds the request is re-sent once with the new
        token and its outcome is final. If it fails the session is reset to
        the public user and SessionExpiredError is raised.
        """
        token = self._session.access_token if authenticated else None
        resp = await self._send(method, path, token, **kwargs)
        if resp.status_code < 400:
            return self._unwrap(resp)

        error = self._error(resp)
        if resp.status_code != 401:
            raise error
        if path.split("?", 1)[0] in CREDENTIAL_PATHS:
            raise CredentialError(str(error), resp.status_code) from error
        if not authenticated:
            raise error

        logger.debug("401 on %s %s; refreshing access token", method, path)
        refreshed = await self._session.refresh()
        new_token = self._session.access_token
        if not refreshed or not new_token:
            # Concurrent callers share one failed refresh; only the first one still
            # sees the token it sent and performs the reset.
            if self._session.access_token == token:
                self._session.set_public_user()
                self._on_session_reset()
            raise SessionExpiredError() from error

        retry = await self._send(method, path, new_token, **kwargs)
        if retry.status_code >= 400:
            raise self._error(retry)
        return self._unwrap(retry)

    async def get(self, path: str, params: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        return await self.request("GET", path, authenticated=authenticated, params=params)

    async def post(
        self,
        path: str,
        body: Optional[dict[str, Any]] = None,
        authenticated: bool = True,
        files: Optional[Any] = None,
        data: Optional[dict[str, Any]] = None,
    ) -> Any:
        if files is not None:
            return await self.request("POST", path, authenticated=authenticated, files=files, data=data)
        return await self.request("POST", path, authenticated=authenticated, json=body)

    async def put(
        self,
        path: str,
        body: Optional[dict[str, Any]] = None,
        authenticated: bool = True,
        files: Optional[Any] = None,
        data: Optional[dict[str, Any]] = None,
    ) -> Any:
        if files is not None:
            return await self.request("PUT", path, authenticated=authenticated, files=files, data=data)
        return await self.request("PUT", path, authenticated=authenticated, json=body)

    async def delete(self, path: str, body: Optional[dict[str, Any]] = None, authenticated: bool = True) -> Any:
        if body is not None:
            return await self.request("DELETE", path, authenticated=authenticated, json=body)
        return await self.request("DELETE", path, authenticated=authenticated)

    async def close(self) -> None:
        await self._client.aclose()
