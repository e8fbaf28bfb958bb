"""
Auth module — email/password login, signup, email verification,
password reset and Kakao/Google social login.
"""

from typing import Any, Union
from urllib.parse import urlencode

from hobbyshare.config import Settings
from hobbyshare.errors import ApiError, AuthError
from hobbyshare.models.auth import LoginResponse, SignupRequest, SocialLoginResponse, SocialProvider
from hobbyshare.session import SessionStore
from hobbyshare.transport.http import HttpClient
from hobbyshare.validation import require, validate_email, validate_nickname, validate_password

KAKAO_AUTHORIZE_URL = "https://kauth.kakao.com/oauth/authorize"
GOOGLE_AUTHORIZE_URL = "https://accounts.google.com/o/oauth2/v2/auth"


class Auth:
    def __init__(self, http: HttpClient, session: SessionStore, settings: Settings):
        self._http = http
        self._session = session
        self._settings = settings

    async def login(self, email: str, password: str) -> LoginResponse:
        """Log in and populate the session. Wrong credentials raise CredentialError."""
        result = LoginResponse.model_validate(
            await self._http.post("/user/login", {"email": email, "password": password}, authenticated=False)
        )
        self._session.set_auth(result)
        return result

    async def signup(self, request: SignupRequest) -> LoginResponse:
        """Create an account. Passwords are checked locally before anything is sent."""
        require(validate_email(request.email), "email")
        require(validate_nickname(request.nickname), "nickname")
        if request.social_provider is None:
            require(validate_password(request.password or "", request.password_confirm or ""), "password")
        result = LoginResponse.model_validate(
            await self._http.post("/user/signup", request.to_wire(), authenticated=False)
        )
        self._session.set_auth(result)
        return result

    async def logout(self) -> None:
        await self._session.logout()

    async def check_email_duplicate(self, email: str) -> bool:
        result = await self._http.post("/user/validation/email", {"email": email}, authenticated=False)
        return bool(result.get("isDuplicate"))

    async def check_nickname_duplicate(self, nickname: str) -> bool:
        result = await self._http.post("/user/validation/nickname", {"nickname": nickname}, authenticated=False)
        return bool(result.get("isDuplicate"))

    async def send_verification_email(self, email: str) -> None:
        try:
            await self._http.post("/email/send", {"email": email}, authenticated=False)
        except ApiError as e:
            raise AuthError(f"Failed to send verification email: {e}") from e

    async def verify_email(self, email: str, code: str) -> None:
        try:
            await self._http.post("/email/verification/check", {"email": email, "code": code}, authenticated=False)
        except ApiError as e:
            raise AuthError(f"Failed to verify email code: {e}") from e

    async def send_password_reset_link(self, email: str) -> None:
        await self._http.post("/user/password/reset-link", {"email": email}, authenticated=False)

    async def verify_password_reset(self, token: str, email: str) -> None:
        await self._http.post("/user/password/verify/check", {"token": token, "email": email}, authenticated=False)

    async def reset_password(self, token: str, new_password: str, confirm_password: str) -> None:
        require(validate_password(new_password, confirm_password), "password")
        await self._http.post("/user/password/reset", {"token": token, "newPassword": new_password}, authenticated=False)

    async def social_login(self, provider: Union[SocialProvider, str], code: str) -> SocialLoginResponse:
        """Exchange an OAuth authorization code from the callback URL for tokens."""
        provider = SocialProvider(provider)
        result = SocialLoginResponse.model_validate(
            await self._http.request("GET", f"/oauth/login/{provider.value}", authenticated=False, params={"code": code})
        )
        self._session.set_auth(result)
        return result

    async def link_social_account(self) -> Any:
        return await self._http.post("/oauth/link")

    def redirect_uri(self, provider: Union[SocialProvider, str]) -> str:
        return f"{self._settings.public_url.rstrip('/')}/oauth/callback/{SocialProvider(provider).value}"

    def social_login_url(self, provider: Union[SocialProvider, str]) -> str:
        """Authorization URL to send the user to for the given provider."""
        provider = SocialProvider(provider)
        if provider is SocialProvider.KAKAO:
            query = {
                "client_id": self._settings.kakao_client_id,
                "redirect_uri": self.redirect_uri(provider),
                "response_type": "code",
            }
            return f"{KAKAO_AUTHORIZE_URL}?{urlencode(query)}"
        query = {
            "client_id": self._settings.google_client_id,
            "redirect_uri": self.redirect_uri(provider),
            "response_type": "code",
            "scope": "email profile",
        }
        return f"{GOOGLE_AUTHORIZE_URL}?{urlencode(query)}"
