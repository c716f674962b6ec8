"""Domain-specific configuration for the Docspell HTTP client.

Besides the server URL and timeout this covers how requests leave the
machine: the proxy (system default, ``none``, or an explicit URL with
optional basic auth) and TLS verification (an extra CA file, or no
verification at all).
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional, Union

from dsc.core.exceptions import ConfigError

from ..base import BaseDomainConfig

DEFAULT_DOCSPELL_URL = "http://localhost:7880"
NO_PROXY = "none"


class ClientConfig(BaseDomainConfig):
    """Typed access to the ``client`` section."""

    def _config_section(self) -> str:
        return "client"

    @cached_property
    def docspell_url(self) -> str:
        """Base URL of the Docspell server, without trailing slash."""
        url = self._optional_str("docspell_url") or DEFAULT_DOCSPELL_URL
        if not url.startswith(("http://", "https://")):
            raise ConfigError(f"client.docspell_url must be an http(s) URL (got {url!r})")
        return url.rstrip("/")

    @cached_property
    def timeout_seconds(self) -> float:
        return self._positive_float("timeout_seconds", 30)

    @cached_property
    def proxy(self) -> Optional[str]:
        """Proxy URL, ``"none"`` to bypass every proxy, or None for the system proxy."""
        value = self._optional_str("proxy")
        if value is None:
            return None
        if value.lower() == NO_PROXY:
            return NO_PROXY
        if "://" not in value:
            raise ConfigError(
                f"client.proxy must be a URL or 'none' (got {value!r})",
                context={"key": "client.proxy"},
            )
        return value

    @cached_property
    def proxy_user(self) -> Optional[str]:
        return self._optional_str("proxy_user")

    @cached_property
    def proxy_password(self) -> Optional[str]:
        value = self.section.get("proxy_password")
        return str(value) if value else None

    @cached_property
    def extra_certificate(self) -> Optional[Path]:
        """CA bundle (PEM) trusted for the server's certificate."""
        raw = self._optional_str("extra_certificate")
        if raw is None:
            return None
        path = Path(raw).expanduser()
        if not path.is_file():
            raise ConfigError(
                f"client.extra_certificate does not exist: {path}",
                context={"key": "client.extra_certificate", "path": str(path)},
            )
        return path

    @cached_property
    def accept_invalid_certificates(self) -> bool:
        return self._flag("accept_invalid_certificates")

    @cached_property
    def verify(self) -> Union[bool, str]:
        """Value for requests' ``verify``: a CA path, False, or True."""
        if self.accept_invalid_certificates and self.extra_certificate is not None:
            raise ConfigError(
                "client.extra_certificate and client.accept_invalid_certificates cannot be combined"
            )
        if self.extra_certificate is not None:
            return str(self.extra_certificate)
        return not self.accept_invalid_certificates


__all__ = ["ClientConfig", "DEFAULT_DOCSPELL_URL", "NO_PROXY"]
