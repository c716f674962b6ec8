"""Pick the session token for the current invocation."""
from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

from dsc.core.exceptions import NotLoggedInError

from .models import TokenCandidate, TokenOrigin
from .store import TokenStore

logger = logging.getLogger(__name__)

SESSION_ENV = "DSC_SESSION"


class TokenSourceResolver:
    """Resolve a token from exactly one source.

    Precedence: explicit value, then the ``DSC_SESSION`` environment
    variable, then the token store. Empty values count as absent. The store
    is only read when neither of the first two yields a token.
    """

    def __init__(
        self,
        store: TokenStore,
        *,
        environ: Optional[Mapping[str, str]] = None,
        env_var: str = SESSION_ENV,
    ) -> None:
        self.store = store
        self._environ = environ
        self.env_var = env_var

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def resolve(self, explicit: Optional[str] = None) -> TokenCandidate:
        if explicit:
            logger.debug("Using session token given on the command line")
            return TokenCandidate(token=explicit, origin=TokenOrigin.EXPLICIT)

        from_env = self.environ.get(self.env_var)
        if from_env:
            logger.debug("Using session token from %s", self.env_var)
            return TokenCandidate(token=from_env, origin=TokenOrigin.ENVIRONMENT)

        record = self.store.load()
        if not record.usable:
            raise NotLoggedInError()
        logger.debug("Using session token from %s", self.store.path)
        return TokenCandidate(token=record.token or "", origin=TokenOrigin.STORED, valid_ms=record.valid_ms)


__all__ = ["SESSION_ENV", "TokenSourceResolver"]
