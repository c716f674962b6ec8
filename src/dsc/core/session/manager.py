"""Single entry point for commands that need an authenticated session."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Mapping, Optional

from dsc.core.config import AuthConfig, ClientConfig, PasswordManagerConfig, SessionConfig

from .expiry import extract_creation_time, is_near_expiry
from .login import LoginOrchestrator
from .models import SessionRecord
from .refresher import SessionRefresher
from .resolver import TokenSourceResolver
from .store import TokenStore

if TYPE_CHECKING:
    from dsc.core.http import DocspellClient

logger = logging.getLogger(__name__)


class SessionManager:
    """Hand out valid tokens, log in and log out.

    Commands only ever talk to this class; the collaborators are exposed as
    attributes for tests and for callers that need finer control.
    """

    def __init__(
        self,
        store: TokenStore,
        resolver: TokenSourceResolver,
        refresher: SessionRefresher,
        login_orchestrator: LoginOrchestrator,
    ) -> None:
        self.store = store
        self.resolver = resolver
        self.refresher = refresher
        self.login_orchestrator = login_orchestrator

    @classmethod
    def from_config(
        cls,
        config: Optional[Mapping[str, Any]] = None,
        *,
        token_file: Optional[Path] = None,
        base_url: Optional[str] = None,
        client: Optional["DocspellClient"] = None,
        environ: Optional[Mapping[str, str]] = None,
        otp_prompt: Optional[Callable[[str], str]] = None,
    ) -> "SessionManager":
        """Wire all collaborators from a loaded configuration.

        Args:
            config: Loaded configuration mapping; the cached user config when None.
            token_file: Session file location, overriding ``session.token_file``.
            base_url: Server URL, overriding ``client.docspell_url``.
            client: Prebuilt client; one is created from ``client.*`` when None.
            environ: Environment used for ``DSC_SESSION``/``DSC_PASSWORD``.
            otp_prompt: Second-factor code reader.
        """

        def _domain(config_cls):
            return config_cls(config=config) if config is not None else config_cls()

        if client is None:
            from dsc.core.http import DocspellClient

            client = DocspellClient.from_config(_domain(ClientConfig), base_url=base_url)

        store = TokenStore(token_file or _domain(SessionConfig).token_file)
        return cls(
            store=store,
            resolver=TokenSourceResolver(store, environ=environ),
            refresher=SessionRefresher(client, store),
            login_orchestrator=LoginOrchestrator(
                client,
                store,
                auth=_domain(AuthConfig),
                password_manager=_domain(PasswordManagerConfig),
                environ=environ,
                otp_prompt=otp_prompt,
            ),
        )

    def get_valid_token(self, explicit: Optional[str] = None) -> str:
        """Return a token fit for an authenticated request.

        The token is renewed first when it is close to expiry; a renewed
        stored session is written back. Never falls back to a password login.

        Raises:
            NotLoggedInError: No token source is available.
            InvalidAuthTokenError: The token has no readable creation time.
            LoginRejectedError: The server refused the renewal.
            TransportError: The renewal request failed.
            SessionStoreError, SessionParseError: The session file is unusable.
        """
        candidate = self.resolver.resolve(explicit)
        created = extract_creation_time(candidate.token)
        if not is_near_expiry(created, candidate.valid_ms):
            return candidate.token

        logger.info("Token is nearly expired. Trying to refresh")
        record = self.refresher.refresh(candidate.token, candidate.origin)
        return record.token or ""

    def login(
        self,
        account: Optional[str] = None,
        password: Optional[str] = None,
        pass_entry: Optional[str] = None,
    ) -> SessionRecord:
        return self.login_orchestrator.login(account=account, password=password, pass_entry=pass_entry)

    def logout(self) -> bool:
        """Forget the stored session; False when there was none."""
        return self.store.delete()


__all__ = ["SessionManager"]
