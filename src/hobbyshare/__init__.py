"""
hobbyshare — Python SDK for the hobby-sharing community backend.

REST + server-sent events client with token refresh and cursor pagination.
"""

from hobbyshare.client import HobbyShare, AsyncHobbyShare
from hobbyshare.auth import Auth
from hobbyshare.session import SessionStore
from hobbyshare.pagination import CursorPaginator, CursorParams, SearchCursor, Page
from hobbyshare.transport.sse import ChannelState, PushChannel
from hobbyshare.errors import (
    HobbyShareError,
    ApiError,
    AuthError,
    CredentialError,
    SessionExpiredError,
    ConnectionError,
    ValidationError,
)

__version__ = "0.1.0"
__all__ = [
    "HobbyShare",
    "AsyncHobbyShare",
    "Auth",
    "SessionStore",
    "CursorPaginator",
    "CursorParams",
    "SearchCursor",
    "Page",
    "ChannelState",
    "PushChannel",
    "HobbyShareError",
    "ApiError",
    "AuthError",
    "CredentialError",
    "SessionExpiredError",
    "ConnectionError",
    "ValidationError",
]
