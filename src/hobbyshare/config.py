"""
Runtime settings, read from the environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

DEFAULT_BASE_URL = "https://api.hobbyshare.app"
DEFAULT_PUBLIC_URL = "https://hobbyshare.app"
DEFAULT_PAGE_SIZE = 15


@dataclass
class Settings:
    base_url: str = field(default_factory=lambda: os.getenv("HOBBYSHARE_API_URL", DEFAULT_BASE_URL))
    public_url: str = field(default_factory=lambda: os.getenv("HOBBYSHARE_PUBLIC_URL", DEFAULT_PUBLIC_URL))
    kakao_client_id: str = field(default_factory=lambda: os.getenv("HOBBYSHARE_KAKAO_CLIENT_ID", ""))
    google_client_id: str = field(default_factory=lambda: os.getenv("HOBBYSHARE_GOOGLE_CLIENT_ID", ""))
    http_timeout: float = field(default_factory=lambda: float(os.getenv("HOBBYSHARE_HTTP_TIMEOUT", "30")))
    sse_max_retries: int = field(default_factory=lambda: int(os.getenv("HOBBYSHARE_SSE_MAX_RETRIES", "5")))
    sse_retry_delay: float = field(default_factory=lambda: float(os.getenv("HOBBYSHARE_SSE_RETRY_DELAY", "10")))
