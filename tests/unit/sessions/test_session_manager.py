from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional

import pytest
import responses

from dsc.core.exceptions import InvalidAuthTokenError, LoginRejectedError, NotLoggedInError
from dsc.core.http import DocspellClient
from dsc.core.session import SessionManager, TokenStore
from helpers.session import (
    BASE_URL,
    LOGIN_URL,
    SESSION_URL,
    fresh_token,
    read_token_file,
    record_payload,
    stale_token,
    write_token_file,
)


def _manager(token_file: Path, environ: Optional[Dict[str, str]] = None, **config) -> SessionManager:
    cfg = {"client": {"docspell_url": BASE_URL}, **config}
    return SessionManager.from_config(cfg, token_file=token_file, environ=environ or {})


def test_not_logged_in_without_any_source(token_file: Path) -> None:
    with responses.RequestsMock() as rsps:
        with pytest.raises(NotLoggedInError):
            _manager(token_file).get_valid_token(None)
        assert len(rsps.calls) == 0


@responses.activate
def test_stale_stored_token_is_refreshed_and_stored(token_file: Path) -> None:
    write_token_file(token_file, record_payload("1000000000000-abc", valid_ms=60_000))
    new = fresh_token("renewed")
    responses.add(responses.POST, SESSION_URL, json=record_payload(new, valid_ms=60_000), status=200)

    token = _manager(token_file).get_valid_token(None)

    assert token == new
    assert responses.calls[0].request.headers["X-Docspell-Auth"] == "1000000000000-abc"
    assert read_token_file(token_file)["token"] == new


def test_fresh_stored_token_is_returned_without_request(token_file: Path) -> None:
    token = fresh_token()
    write_token_file(token_file, record_payload(token, valid_ms=300_000))

    with responses.RequestsMock() as rsps:
        assert _manager(token_file).get_valid_token() == token
        assert len(rsps.calls) == 0


@responses.activate
def test_stale_explicit_token_is_refreshed_but_not_stored(token_file: Path) -> None:
    write_token_file(token_file, record_payload("1-stored-for-other-account"))
    before = token_file.read_bytes()
    new = fresh_token()
    responses.add(responses.POST, SESSION_URL, json=record_payload(new), status=200)

    token = _manager(token_file).get_valid_token(stale_token(age_ms=181_000))

    assert token == new
    assert token_file.read_bytes() == before


@responses.activate
def test_stale_environment_token_is_refreshed_but_not_stored(token_file: Path) -> None:
    new = fresh_token()
    responses.add(responses.POST, SESSION_URL, json=record_payload(new), status=200)

    token = _manager(token_file, environ={"DSC_SESSION": stale_token(age_ms=181_000)}).get_valid_token()

    assert token == new
    assert not token_file.exists()


def test_recent_environment_token_uses_three_minute_window(token_file: Path) -> None:
    token = stale_token(age_ms=170_000)

    with responses.RequestsMock() as rsps:
        assert _manager(token_file, environ={"DSC_SESSION": token}).get_valid_token() == token
        assert len(rsps.calls) == 0


def test_malformed_token_is_never_used(token_file: Path) -> None:
    with responses.RequestsMock() as rsps:
        with pytest.raises(InvalidAuthTokenError):
            _manager(token_file).get_valid_token("abc-xyz")
        assert len(rsps.calls) == 0


@responses.activate
def test_refused_renewal_never_falls_back_to_password_login(token_file: Path) -> None:
    write_token_file(token_file, record_payload("1000000000000-abc", valid_ms=60_000))
    before = token_file.read_bytes()
    responses.add(
        responses.POST,
        SESSION_URL,
        json=record_payload(None, success=False, message="Authentication failed."),
        status=200,
    )

    manager = _manager(token_file, environ={"DSC_PASSWORD": "pw"}, auth={"default_account": "demo"})
    with pytest.raises(LoginRejectedError):
        manager.get_valid_token()

    assert [c.request.url for c in responses.calls] == [SESSION_URL]
    assert token_file.read_bytes() == before


@responses.activate
def test_login_then_logout(token_file: Path) -> None:
    token = fresh_token()
    responses.add(responses.POST, LOGIN_URL, json=record_payload(token), status=200)
    manager = _manager(token_file)

    record = manager.login("demo", "test")

    assert record.token == token
    assert manager.get_valid_token() == token

    assert manager.logout() is True
    with pytest.raises(NotLoggedInError):
        manager.store.load()
    assert manager.logout() is False


def test_from_config_wiring(token_file: Path) -> None:
    manager = SessionManager.from_config(
        {"client": {"docspell_url": "https://docs.example.org/", "timeout_seconds": 12}},
        token_file=token_file,
    )

    client = manager.refresher.client
    assert isinstance(client, DocspellClient)
    assert client.base_url == "https://docs.example.org"
    assert client.timeout == 12.0
    assert manager.store.path == token_file
    assert manager.resolver.store is manager.store
    assert manager.login_orchestrator.store is manager.store


def test_from_config_url_override_and_session_config(tmp_path: Path) -> None:
    manager = SessionManager.from_config(
        {"session": {"token_file": str(tmp_path / "custom.json")}},
        base_url="http://override:7880/",
    )

    assert manager.refresher.client.base_url == "http://override:7880"
    assert manager.store.path == tmp_path / "custom.json"


def test_from_config_uses_user_configuration(config_dir: Path) -> None:
    (config_dir / "config.yaml").write_text(
        "client:\n  docspell_url: https://from-user-config\n", encoding="utf-8"
    )

    manager = SessionManager.from_config()

    assert manager.refresher.client.base_url == "https://from-user-config"
    assert manager.store.path == config_dir.resolve() / "dsc-token.json"
    assert isinstance(manager.store, TokenStore)


@responses.activate
def test_stored_session_survives_round_trip(token_file: Path) -> None:
    token = fresh_token()
    payload = record_payload(token, valid_ms=300_000)
    responses.add(responses.POST, LOGIN_URL, json=payload, status=200)

    _manager(token_file).login("demo", "test")

    assert json.loads(token_file.read_text(encoding="utf-8")) == payload
