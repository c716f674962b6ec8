from __future__ import annotations

from pathlib import Path

import pytest

from dsc.core.config import (
    AuthConfig,
    ClientConfig,
    LoggingConfig,
    PasswordManagerConfig,
    SessionConfig,
)
from dsc.core.exceptions import ConfigError


def test_client_config_defaults() -> None:
    cfg = ClientConfig()

    assert cfg.docspell_url == "http://localhost:7880"
    assert cfg.timeout_seconds == 30.0


def test_client_config_strips_trailing_slash() -> None:
    cfg = ClientConfig(config={"client": {"docspell_url": "https://docs.example.org/"}})

    assert cfg.docspell_url == "https://docs.example.org"


@pytest.mark.parametrize("url", ["docs.example.org", "ftp://docs.example.org"])
def test_client_config_rejects_non_http_urls(url: str) -> None:
    with pytest.raises(ConfigError):
        ClientConfig(config={"client": {"docspell_url": url}}).docspell_url


def test_client_config_rejects_non_positive_timeout() -> None:
    with pytest.raises(ConfigError):
        ClientConfig(config={"client": {"timeout_seconds": 0}}).timeout_seconds


def test_auth_config_values() -> None:
    cfg = AuthConfig(
        config={
            "auth": {
                "default_account": " family/alice ",
                "pass_entry": "docspell/alice",
                "default_password": " spaced ",
                "remember_me": True,
            }
        }
    )

    assert cfg.default_account == "family/alice"
    assert cfg.pass_entry == "docspell/alice"
    assert cfg.default_password == " spaced "
    assert cfg.remember_me is True


def test_auth_config_blank_values_are_absent() -> None:
    cfg = AuthConfig(config={"auth": {"default_account": "  ", "pass_entry": None, "default_password": ""}})

    assert cfg.default_account is None
    assert cfg.pass_entry is None
    assert cfg.default_password is None
    assert cfg.remember_me is False


def test_missing_or_malformed_section_yields_defaults() -> None:
    assert AuthConfig(config={}).default_account is None
    assert AuthConfig(config={"auth": "oops"}).section == {}


def test_session_config_defaults_to_user_config_dir(isolated_dsc_env: Path) -> None:
    assert SessionConfig().token_file == isolated_dsc_env.resolve() / "dsc-token.json"


def test_session_config_explicit_token_file(tmp_path: Path) -> None:
    cfg = SessionConfig(config={"session": {"token_file": str(tmp_path / "tok.json")}})

    assert cfg.token_file == tmp_path / "tok.json"


def test_password_manager_command_forms() -> None:
    assert PasswordManagerConfig().command == ["pass", "show"]
    assert PasswordManagerConfig(config={"password_manager": {"command": "gopass show -o"}}).command == [
        "gopass",
        "show",
        "-o",
    ]
    with pytest.raises(ConfigError):
        PasswordManagerConfig(config={"password_manager": {"command": []}}).command


def test_logging_config(tmp_path: Path) -> None:
    cfg = LoggingConfig(config={"logging": {"level": "debug", "file": str(tmp_path / "dsc.log")}})

    assert cfg.level == "DEBUG"
    assert cfg.file == tmp_path / "dsc.log"
    assert LoggingConfig().file is None
    assert LoggingConfig().level == "WARNING"


def test_domain_config_reads_user_file(config_dir: Path) -> None:
    (config_dir / "config.yaml").write_text("auth:\n  default_account: family/carol\n", encoding="utf-8")

    assert AuthConfig().default_account == "family/carol"


@pytest.mark.parametrize(
    "section, accessor",
    [
        ("client", lambda cfg: ClientConfig(config=cfg).timeout_seconds),
        ("password_manager", lambda cfg: PasswordManagerConfig(config=cfg).timeout_seconds),
    ],
)
@pytest.mark.parametrize("value", ["abc", None, True, [1], -1])
def test_invalid_timeouts_raise_config_error(section: str, accessor, value) -> None:
    with pytest.raises(ConfigError) as excinfo:
        accessor({section: {"timeout_seconds": value}})
    assert excinfo.value.context["key"] == f"{section}.timeout_seconds"


def test_numeric_string_timeout_is_accepted() -> None:
    assert PasswordManagerConfig(config={"password_manager": {"timeout_seconds": "2.5"}}).timeout_seconds == 2.5


def test_remember_me_must_be_boolean() -> None:
    with pytest.raises(ConfigError):
        AuthConfig(config={"auth": {"remember_me": "yes"}}).remember_me


def test_client_proxy_and_tls_defaults() -> None:
    cfg = ClientConfig()

    assert cfg.proxy is None
    assert cfg.proxy_user is None
    assert cfg.proxy_password is None
    assert cfg.extra_certificate is None
    assert cfg.accept_invalid_certificates is False
    assert cfg.verify is True


@pytest.mark.parametrize(
    "raw, expected",
    [("none", "none"), ("NONE", "none"), ("http://proxy:3128", "http://proxy:3128")],
)
def test_client_proxy_values(raw: str, expected: str) -> None:
    assert ClientConfig(config={"client": {"proxy": raw}}).proxy == expected


def test_client_proxy_must_be_a_url() -> None:
    with pytest.raises(ConfigError):
        ClientConfig(config={"client": {"proxy": "proxy:3128"}}).proxy


def test_client_extra_certificate_sets_verify(tmp_path: Path) -> None:
    ca = tmp_path / "ca.pem"
    ca.write_text("-----BEGIN CERTIFICATE-----\n", encoding="utf-8")

    cfg = ClientConfig(config={"client": {"extra_certificate": str(ca)}})

    assert cfg.extra_certificate == ca
    assert cfg.verify == str(ca)


def test_client_missing_extra_certificate(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        ClientConfig(config={"client": {"extra_certificate": str(tmp_path / "nope.pem")}}).verify


def test_client_accept_invalid_certificates_disables_verify() -> None:
    assert ClientConfig(config={"client": {"accept_invalid_certificates": True}}).verify is False


def test_client_tls_options_are_exclusive(tmp_path: Path) -> None:
    ca = tmp_path / "ca.pem"
    ca.write_text("pem", encoding="utf-8")
    cfg = ClientConfig(config={"client": {"extra_certificate": str(ca), "accept_invalid_certificates": True}})

    with pytest.raises(ConfigError):
        cfg.verify
