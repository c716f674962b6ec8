"""Token expiry policy.

Tokens embed their creation time (epoch milliseconds) as the first
``-``-separated segment. A token is refreshed once it has lived through
80% of its declared validity, or for more than three minutes when the
validity is unknown (tokens passed via option or environment).
"""
from __future__ import annotations

import logging
import time
from typing import Optional

from dsc.core.exceptions import InvalidAuthTokenError

logger = logging.getLogger(__name__)

REFRESH_RATIO = 0.8
FALLBACK_THRESHOLD_MS = 180_000


def now_millis() -> int:
    return int(time.time() * 1000)


def extract_creation_time(token: str) -> int:
    """Return the creation timestamp embedded in ``token``.

    Raises:
        InvalidAuthTokenError: The first segment is missing or not a base-10 integer.
    """
    head = (token or "").split("-", 1)[0]
    # str.isdigit also accepts non-ASCII digits that int() would parse.
    if not head or not (head.isascii() and head.isdigit()):
        raise InvalidAuthTokenError(token)
    return int(head)


def refresh_threshold_ms(valid_ms: Optional[int]) -> int:
    """Age in milliseconds beyond which a token counts as nearly expired."""
    if valid_ms is None:
        return FALLBACK_THRESHOLD_MS
    return int(valid_ms * REFRESH_RATIO)


def is_near_expiry(created_at_ms: int, valid_ms: Optional[int] = None, *, now_ms: Optional[int] = None) -> bool:
    """Decide whether a token created at ``created_at_ms`` should be refreshed.

    Args:
        created_at_ms: Creation time from the token.
        valid_ms: Declared validity, or None when unknown.
        now_ms: Current time; defaults to the wall clock.
    """
    current = now_millis() if now_ms is None else now_ms
    age = current - created_at_ms
    threshold = refresh_threshold_ms(valid_ms)
    logger.debug("Token age: %sms  Threshold: %sms", age, threshold)
    return age > threshold


__all__ = [
    "REFRESH_RATIO",
    "FALLBACK_THRESHOLD_MS",
    "extract_creation_time",
    "is_near_expiry",
    "now_millis",
    "refresh_threshold_ms",
]
