"""
hobbyshare error types.
"""

from typing import Any, Optional


class HobbyShareError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class ApiError(HobbyShareError):
    """Non-2xx response from the backend."""

    def __init__(self, status_code: int, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("http_error", message, details)
        self.status_code = status_code


class AuthError(HobbyShareError):
    def __init__(self, message: str, code: str = "auth_error", details: Optional[dict[str, Any]] = None):
        super().__init__(code, message, details)


class CredentialError(AuthError):
    """401 from login/signup. Never triggers a token refresh."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message, code="credential_error")
        self.status_code = status_code


class SessionExpiredError(AuthError):
    """Token refresh failed; the session has been reset."""

    def __init__(self, message: str = "Session expired. Please log in again."):
        super().__init__(message, code="session_expired")


class ConnectionError(HobbyShareError):
    def __init__(self, message: str):
        super().__init__("connection_error", message)


class ValidationError(HobbyShareError):
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__("validation_error", message, {"field": field} if field else None)
        self.field = field
