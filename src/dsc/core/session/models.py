"""Session data model: the persisted record, token origins and candidates."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional


class TokenOrigin(Enum):
    """Where a token candidate came from for the current invocation."""

    EXPLICIT = "explicit"
    ENVIRONMENT = "environment"
    STORED = "stored"

    @property
    def persists_refresh(self) -> bool:
        """Whether a refreshed token from this origin is written back to disk."""
        return self is TokenOrigin.STORED


@dataclass
class SessionRecord:
    """Authentication state as returned by the server and stored on disk.

    Field names follow Python conventions; ``to_dict``/``from_dict`` map them
    to the server's camelCase keys (``user``, ``validMs``,
    ``requireSecondFactor``).
    """

    account: str
    collective: str
    success: bool
    message: str
    token: Optional[str] = None
    valid_ms: int = 0
    require_second_factor: bool = False

    @property
    def usable(self) -> bool:
        """A record authenticates only when it carries a token."""
        return bool(self.token)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionRecord":
        token = data.get("token")
        return cls(
            account=str(data.get("user") or ""),
            collective=str(data.get("collective") or ""),
            success=bool(data.get("success", False)),
            message=str(data.get("message") or ""),
            token=str(token) if token else None,
            valid_ms=int(data.get("validMs") or 0),
            require_second_factor=bool(data.get("requireSecondFactor", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "user": self.account,
            "collective": self.collective,
            "success": self.success,
            "message": self.message,
            "token": self.token,
            "validMs": self.valid_ms,
            "requireSecondFactor": self.require_second_factor,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Like ``to_dict`` but with the token shortened for display."""
        data = self.to_dict()
        data["token"] = mask_token(self.token)
        return data


@dataclass(frozen=True)
class TokenCandidate:
    """A token picked by the resolver, before any expiry check."""

    token: str
    origin: TokenOrigin
    valid_ms: Optional[int] = None


def mask_token(token: Optional[str]) -> Optional[str]:
    """Shorten a token for logs and output: keep the timestamp segment only."""
    if not token:
        return token
    head = token.split("-", 1)[0]
    return f"{head}-***"


__all__ = ["SessionRecord", "TokenCandidate", "TokenOrigin", "mask_token"]
