"""Renew a session token before it expires."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from dsc.core.exceptions import LoginRejectedError

from .models import SessionRecord, TokenOrigin, mask_token
from .store import TokenStore

if TYPE_CHECKING:
    from dsc.core.http import DocspellClient

logger = logging.getLogger(__name__)


class SessionRefresher:
    """Trade a still-valid token for a fresh one.

    The renewed record is written back only when the old token came from the
    store (or there was no prior token). Tokens supplied on the command line
    or through the environment belong to the caller, so the stored session of
    a possibly different account is left alone.
    """

    def __init__(self, client: DocspellClient, store: TokenStore) -> None:
        self.client = client
        self.store = store

    def refresh(self, token: str, origin: Optional[TokenOrigin] = None) -> SessionRecord:
        """Renew ``token`` and return the new session record.

        Raises:
            TransportError: The request failed or the response was unreadable.
            LoginRejectedError: The server refused the renewal.
            SessionStoreError: Writing the renewed record failed.
        """
        logger.debug("Renewing session token %s", mask_token(token))
        record = self.client.session_login(token)
        if not record.success or not record.usable:
            raise LoginRejectedError(record.message)

        if origin is None or origin.persists_refresh:
            self.store.save(record)
        else:
            logger.debug("Not storing renewed session for a %s token", origin.value)
        return record


__all__ = ["SessionRefresher"]
