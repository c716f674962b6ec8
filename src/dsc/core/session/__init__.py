"""Session management: token storage, resolution, expiry, refresh and login."""
from __future__ import annotations

from .expiry import (
    FALLBACK_THRESHOLD_MS,
    REFRESH_RATIO,
    extract_creation_time,
    is_near_expiry,
)
from .login import LoginOrchestrator, LoginState
from .manager import SessionManager
from .models import SessionRecord, TokenCandidate, TokenOrigin
from .refresher import SessionRefresher
from .resolver import SESSION_ENV, TokenSourceResolver
from .store import TokenStore

__all__ = [
    "FALLBACK_THRESHOLD_MS",
    "REFRESH_RATIO",
    "extract_creation_time",
    "is_near_expiry",
    "LoginOrchestrator",
    "LoginState",
    "SessionManager",
    "SessionRecord",
    "TokenCandidate",
    "TokenOrigin",
    "SessionRefresher",
    "SESSION_ENV",
    "TokenSourceResolver",
    "TokenStore",
]
