"""
Session store — single source of truth for the current authentication state.

The HTTP client reads the access token and calls refresh(); it never
mutates the session itself. Concurrent refresh() calls share one in-flight
reissue request.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx
from pydantic import ValidationError as PydanticValidationError

from hobbyshare.models.auth import LoginResponse, SocialLoginResponse
from hobbyshare.models.session import PERSISTED_FIELDS, SessionState

logger = logging.getLogger(__name__)

REISSUE_PATH = "/token/reissue"
LOGOUT_PATH = "/user/logout"

SessionListener = Callable[[SessionState], None]


class SessionStore:
    def __init__(
        self,
        base_url: str,
        storage_path: Optional[Union[str, Path]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self._storage_path = Path(storage_path).expanduser() if storage_path else None
        self._state = self._load()
        self._listeners: list[SessionListener] = []
        self._refresh_lock = asyncio.Lock()
        self._refresh_task: Optional[asyncio.Task[bool]] = None
        # Reissue goes through a bare client so it never hits the 401 interceptor.
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers={"Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def access_token(self) -> Optional[str]:
        return self._state.access_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self._state.refresh_token

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def user_id(self) -> Optional[int]:
        return self._state.user_id

    def add_listener(self, listener: SessionListener) -> Callable[[], None]:
        """Register a state-change callback. Returns a cleanup function."""
        self._listeners.append(listener)

        def remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
        return remove

    def set_auth(self, result: Union[LoginResponse, SocialLoginResponse, dict[str, Any]]) -> None:
        """Store the tokens returned by login, signup or a social callback."""
        if isinstance(result, dict):
            result = LoginResponse.model_validate(result)
        self._update(SessionState(
            access_token=result.access_token,
            refresh_token=result.refresh_token,
            is_authenticated=True,
            user_id=result.user_id,
            nickname=getattr(result, "nickname", None),
            hobby_tags=getattr(result, "hobby_tags", []) or [],
        ))

    def set_public_user(self) -> None:
        """Reset every field to the unauthenticated default."""
        self._update(SessionState())

    async def logout(self) -> None:
        """Tell the backend, then reset locally even if that call fails."""
        if self._state.access_token:
            try:
                resp = await self._client.post(
                    LOGOUT_PATH, headers={"Authorization": f"Bearer {self._state.access_token}"},
                )
                if resp.status_code >= 400:
                    logger.warning("Logout returned HTTP %s", resp.status_code)
            except httpx.HTTPError as e:
                logger.error("Logout request failed: %s", e)
        self.set_public_user()

    async def refresh(self) -> bool:
        """Reissue the access token. Concurrent callers await the same request.

        Returns False on any failure and leaves the stored tokens untouched;
        the caller decides what to do next.
        """
        async with self._refresh_lock:
            if self._refresh_task is None or self._refresh_task.done():
                self._refresh_task = asyncio.ensure_future(self._reissue())
            task = self._refresh_task
        return await asyncio.shield(task)

    async def _reissue(self) -> bool:
        refresh_token = self._state.refresh_token
        if not refresh_token:
            logger.info("No refresh token; cannot reissue")
            return False
        try:
            resp = await self._client.post(REISSUE_PATH, headers={"refreshToken": refresh_token})
        except httpx.HTTPError as e:
            logger.warning("Token reissue failed: %s", e)
            return False
        if resp.status_code >= 400:
            logger.warning("Token reissue rejected with HTTP %s", resp.status_code)
            return False
        try:
            body = resp.json()
        except ValueError:
            logger.warning("Token reissue returned a non-JSON body")
            return False
        access_token = body.get("accessToken") if isinstance(body, dict) else None
        if not access_token:
            logger.warning("Token reissue response has no accessToken")
            return False
        self._update(self._state.model_copy(update={"access_token": access_token, "is_authenticated": True}))
        logger.debug("Access token reissued for user %s", self._state.user_id)
        return True

    def _update(self, state: SessionState) -> None:
        self._state = state
        self._save()
        for listener in list(self._listeners):
            listener(state)

    def _load(self) -> SessionState:
        if not self._storage_path:
            return SessionState()
        try:
            return SessionState.model_validate(json.loads(self._storage_path.read_text()))
        except FileNotFoundError:
            return SessionState()
        except (json.JSONDecodeError, PydanticValidationError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self._storage_path, e)
            return SessionState()

    def _save(self) -> None:
        if not self._storage_path:
            return
        if not self._state.is_authenticated:
            self._storage_path.unlink(missing_ok=True)
            return
        self._storage_path.parent.mkdir(parents=True, exist_ok=True)
        self._storage_path.write_text(json.dumps(self._state.model_dump(include=PERSISTED_FIELDS), indent=2))

    async def close(self) -> None:
        await self._client.aclose()
