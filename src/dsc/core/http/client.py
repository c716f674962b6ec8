"""Minimal Docspell REST client for the authentication endpoints.

Every call makes exactly one request. Connection problems, non-2xx
statuses and undecodable bodies all surface as ``TransportError``;
interpreting ``success`` in the returned record is left to the caller.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union
from urllib.parse import quote, urlsplit, urlunsplit

import requests

from dsc.core.config import ClientConfig
from dsc.core.config.domains.client import NO_PROXY
from dsc.core.exceptions import TransportError
from dsc.core.session.models import SessionRecord

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-Docspell-Auth"

LOGIN_PATH = "/api/v1/open/auth/login"
TWO_FACTOR_PATH = "/api/v1/open/auth/two-factor"
SESSION_PATH = "/api/v1/sec/auth/session"


def proxy_url_with_auth(url: str, user: Optional[str], password: Optional[str]) -> str:
    """Embed basic-auth credentials in ``url``; requests sends them as Proxy-Authorization."""
    if not user:
        return url
    parts = urlsplit(url)
    host = parts.netloc.rpartition("@")[2]
    netloc = f"{quote(user, safe='')}:{quote(password or '', safe='')}@{host}"
    return urlunsplit(parts._replace(netloc=netloc))


class DocspellClient:
    """Thin wrapper around a ``requests.Session`` bound to one server.

    Args:
        base_url: Server root, e.g. ``https://docs.example.org``.
        timeout: Seconds per request.
        session: Prebuilt ``requests.Session``.
        proxy: Proxy URL, ``"none"`` to ignore the system proxy, or None to
            use it.
        proxy_user, proxy_password: Basic auth at the proxy.
        verify: TLS verification as requests understands it: True, False or
            a CA bundle path.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
        proxy: Optional[str] = None,
        proxy_user: Optional[str] = None,
        proxy_password: Optional[str] = None,
        verify: Union[bool, str] = True,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify = verify
        self._http = session or requests.Session()
        self.proxies: Dict[str, str] = {}
        if proxy == NO_PROXY:
            logger.info("Ignoring system proxy settings")
            self._http.trust_env = False
        elif proxy:
            logger.info("Using proxy %s", proxy)
            url = proxy_url_with_auth(proxy, proxy_user, proxy_password)
            self.proxies = {"http": url, "https": url}
        if verify is False:
            logger.warning("TLS certificate verification is disabled")

    @classmethod
    def from_config(cls, config: ClientConfig, *, base_url: Optional[str] = None) -> "DocspellClient":
        """Build a client from the ``client`` section; ``base_url`` wins over the configured URL."""
        return cls(
            (base_url or config.docspell_url).rstrip("/"),
            timeout=config.timeout_seconds,
            proxy=config.proxy,
            proxy_user=config.proxy_user,
            proxy_password=config.proxy_password,
            verify=config.verify,
        )

    def login(self, account: str, password: str, *, remember_me: bool = False) -> SessionRecord:
        """Authenticate with account name and password."""
        payload = {"account": account, "password": password, "rememberMe": remember_me}
        return self._post_auth(LOGIN_PATH, json=payload)

    def login_otp(self, token: str, otp: str, *, remember_me: bool = False) -> SessionRecord:
        """Complete a two-factor login with the interim ``token``."""
        payload = {"token": token, "otp": otp, "rememberMe": remember_me}
        return self._post_auth(TWO_FACTOR_PATH, json=payload, token=token)

    def session_login(self, token: str) -> SessionRecord:
        """Renew an existing session, yielding a fresh token."""
        return self._post_auth(SESSION_PATH, token=token)

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _post_auth(
        self,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> SessionRecord:
        url = self._url(path)
        headers = {AUTH_HEADER: token} if token else {}
        logger.debug("POST %s", url)
        try:
            response = self._http.post(
                url,
                json=json,
                headers=headers,
                timeout=self.timeout,
                proxies=self.proxies or None,
                verify=self.verify,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise TransportError(f"Request to {url} failed: {exc}", url=url, status=status) from exc
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Invalid JSON response from {url}", url=url, status=response.status_code
            ) from exc
        if not isinstance(data, dict):
            raise TransportError(
                f"Unexpected response from {url}: expected a JSON object",
                url=url,
                status=response.status_code,
            )
        try:
            return SessionRecord.from_dict(data)
        except (TypeError, ValueError) as exc:
            raise TransportError(
                f"Malformed session record from {url}: {exc}", url=url, status=response.status_code
            ) from exc


__all__ = ["AUTH_HEADER", "DocspellClient", "proxy_url_with_auth"]
