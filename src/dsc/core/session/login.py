"""Username/password login, including the optional second factor."""
from __future__ import annotations

import getpass
import logging
import os
from enum import Enum
from typing import TYPE_CHECKING, Callable, Mapping, NoReturn, Optional

from dsc.core.config import AuthConfig, PasswordManagerConfig
from dsc.core.exceptions import LoginFailedError, NoAccountError, NoPasswordError
from dsc.core.utils.passwords import lookup_password

from .models import SessionRecord
from .store import TokenStore

if TYPE_CHECKING:
    from dsc.core.http import DocspellClient

logger = logging.getLogger(__name__)

PASSWORD_ENV = "DSC_PASSWORD"
OTP_PROMPT = "Authentication code: "


class LoginState(Enum):
    START = "start"
    AWAITING_RESULT = "awaiting_result"
    AWAITING_OTP = "awaiting_otp"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


class LoginOrchestrator:
    """Drive a login from credential resolution to the stored session.

    Args:
        client: Server client.
        store: Where the resulting session is saved.
        auth: Login defaults (account, pass entry, password, remember-me).
        password_manager: Command used for pass-entry lookups.
        environ: Environment mapping; defaults to ``os.environ``.
        otp_prompt: Reads the second-factor code; defaults to ``getpass.getpass``.
    """

    def __init__(
        self,
        client: "DocspellClient",
        store: TokenStore,
        *,
        auth: AuthConfig,
        password_manager: PasswordManagerConfig,
        environ: Optional[Mapping[str, str]] = None,
        otp_prompt: Optional[Callable[[str], str]] = None,
    ) -> None:
        self.client = client
        self.store = store
        self.auth = auth
        self.password_manager = password_manager
        self._environ = environ
        self._otp_prompt = otp_prompt or getpass.getpass
        self.state = LoginState.START

    @property
    def environ(self) -> Mapping[str, str]:
        return os.environ if self._environ is None else self._environ

    def resolve_account(self, account: Optional[str] = None) -> str:
        resolved = account or self.auth.default_account
        if not resolved:
            raise NoAccountError()
        logger.debug("Using account: %s", resolved)
        return resolved

    def resolve_password(self, password: Optional[str] = None, pass_entry: Optional[str] = None) -> str:
        """Find the password, first match wins.

        Order: ``password``, password-manager lookup of ``pass_entry`` (or
        ``auth.pass_entry``), ``DSC_PASSWORD``, ``auth.default_password``.

        Raises:
            PasswordLookupError: The password manager failed.
            NoPasswordError: No source yielded a password.
        """
        if password:
            return password

        entry = pass_entry or self.auth.pass_entry
        if entry:
            logger.debug("Looking up password for entry %s", entry)
            return lookup_password(
                entry,
                command=self.password_manager.command,
                timeout=self.password_manager.timeout_seconds,
            )

        from_env = self.environ.get(PASSWORD_ENV)
        if from_env:
            logger.debug("Using password from environment variable")
            return from_env

        if self.auth.default_password:
            logger.debug("Using password from configuration")
            return self.auth.default_password

        raise NoPasswordError()

    def login(
        self,
        account: Optional[str] = None,
        password: Optional[str] = None,
        pass_entry: Optional[str] = None,
    ) -> SessionRecord:
        """Log in and store the session.

        Raises:
            NoAccountError, NoPasswordError, PasswordLookupError: Credentials
                could not be resolved; no request is made.
            LoginFailedError: The server denied the credentials or the code.
            TransportError: The request failed.
        """
        self.state = LoginState.START
        account_name = self.resolve_account(account)
        secret = self.resolve_password(password, pass_entry)
        remember_me = self.auth.remember_me

        self.state = LoginState.AWAITING_RESULT
        record = self.client.login(account_name, secret, remember_me=remember_me)
        if not record.success:
            self._fail(record)

        if record.require_second_factor:
            self.state = LoginState.AWAITING_OTP
            record = self._second_factor(record, remember_me)

        if not record.usable:
            self._fail(record)

        self.state = LoginState.AUTHENTICATED
        self.store.save(record)
        logger.info("Logged in as %s/%s", record.collective, record.account)
        return record

    def _second_factor(self, interim: SessionRecord, remember_me: bool) -> SessionRecord:
        try:
            code = self._otp_prompt(OTP_PROMPT).strip()
        except EOFError:
            logger.debug("Input closed at the authentication code prompt")
            code = ""
        if not code:
            self.state = LoginState.FAILED
            raise LoginFailedError("No authentication code provided!")
        record = self.client.login_otp(interim.token or "", code, remember_me=remember_me)
        if not record.success:
            self._fail(record)
        return record

    def _fail(self, record: SessionRecord) -> NoReturn:
        self.state = LoginState.FAILED
        logger.debug("Login denied: %s", record.message)
        message = f"Login failed! {record.message}" if record.message else "Login failed!"
        raise LoginFailedError(message, server_message=record.message or None)


__all__ = ["LoginOrchestrator", "LoginState", "OTP_PROMPT", "PASSWORD_ENV"]
