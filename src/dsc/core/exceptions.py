from __future__ import annotations

from typing import Any, Dict, Mapping


class DscError(Exception):
    """Base exception for dsc."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ConfigError(DscError):
    """Raised when configuration files cannot be loaded or are invalid."""


class NotLoggedInError(DscError):
    """Raised when no session token is available from any source."""

    def __init__(self, message: str = "You are not logged in!", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message, context=context)


class NoAccountError(DscError):
    """Raised when login is attempted without an account name."""

    def __init__(self, message: str = "No account name provided!", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message, context=context)


class NoPasswordError(DscError):
    """Raised when login is attempted without any password source."""

    def __init__(self, message: str = "No password provided!", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message, context=context)


class PasswordLookupError(DscError):
    """Raised when the external password manager fails to return a password."""

    def __init__(self, message: str, *, entry: str | None = None, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        if entry:
            ctx["entry"] = entry
        super().__init__(message, context=ctx)


class InvalidAuthTokenError(DscError, ValueError):
    """Raised when a token carries no parseable creation timestamp."""

    def __init__(self, token: str, *, context: Mapping[str, Any] | None = None) -> None:
        ctx = dict(context or {})
        ctx["token"] = token
        message = f"Invalid authentication token: {token}"
        DscError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.token = token


class LoginFailedError(DscError):
    """Raised when the server denies a credential or second-factor login."""

    def __init__(self, message: str = "Login failed!", *, server_message: str | None = None) -> None:
        ctx: Dict[str, Any] = {}
        if server_message:
            ctx["server_message"] = server_message
        super().__init__(message, context=ctx)
        self.server_message = server_message


class LoginRejectedError(DscError):
    """Raised when the server refuses to renew an existing session."""

    def __init__(self, server_message: str = "") -> None:
        message = "Error refreshing session. Use the `login` command."
        if server_message:
            message = f"{message} {server_message}"
        super().__init__(message, context={"server_message": server_message})
        self.server_message = server_message


class TransportError(DscError):
    """Raised for network, HTTP status or response decoding failures."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status: int | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if url:
            ctx["url"] = url
        if status is not None:
            ctx["status"] = status
        super().__init__(message, context=ctx)
        self.url = url
        self.status = status


class SessionStoreError(DscError, OSError):
    """Raised when the session file cannot be read, written or removed."""

    def __init__(self, message: str, *, path: str | None = None, operation: str | None = None) -> None:
        ctx: Dict[str, Any] = {}
        if path:
            ctx["path"] = path
        if operation:
            ctx["operation"] = operation
        DscError.__init__(self, message, context=ctx)
        OSError.__init__(self, message)


class SessionParseError(DscError, ValueError):
    """Raised when the session file holds corrupt JSON or an invalid record."""

    def __init__(self, message: str, *, path: str | None = None, details: str | None = None) -> None:
        ctx: Dict[str, Any] = {}
        if path:
            ctx["path"] = path
        if details:
            ctx["details"] = details
        DscError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)


__all__ = [
    "DscError",
    "ConfigError",
    "NotLoggedInError",
    "NoAccountError",
    "NoPasswordError",
    "PasswordLookupError",
    "InvalidAuthTokenError",
    "LoginFailedError",
    "LoginRejectedError",
    "TransportError",
    "SessionStoreError",
    "SessionParseError",
]
