from __future__ import annotations

from dsc.core.session.models import SessionRecord, TokenOrigin, mask_token
from helpers.session import record_payload


def test_from_dict_maps_camel_case_keys() -> None:
    record = SessionRecord.from_dict(record_payload("1-abc", valid_ms=300000, require_second_factor=True))

    assert record.account == "demo"
    assert record.collective == "demo"
    assert record.success is True
    assert record.token == "1-abc"
    assert record.valid_ms == 300000
    assert record.require_second_factor is True


def test_to_dict_emits_file_format() -> None:
    record = SessionRecord(account="u", collective="c", success=True, message="ok", token="1-x", valid_ms=10)

    assert record.to_dict() == {
        "user": "u",
        "collective": "c",
        "success": True,
        "message": "ok",
        "token": "1-x",
        "validMs": 10,
        "requireSecondFactor": False,
    }


def test_missing_optional_keys_take_defaults() -> None:
    record = SessionRecord.from_dict({"user": "u", "collective": "c", "success": False, "message": "no", "validMs": 0})

    assert record.token is None
    assert record.require_second_factor is False


def test_usable_requires_a_token() -> None:
    assert SessionRecord.from_dict(record_payload("1-abc")).usable
    # success alone is not enough
    assert not SessionRecord.from_dict(record_payload(None, success=True)).usable
    assert not SessionRecord.from_dict(record_payload("", success=True)).usable


def test_only_stored_origin_persists_refresh() -> None:
    assert TokenOrigin.STORED.persists_refresh
    assert not TokenOrigin.EXPLICIT.persists_refresh
    assert not TokenOrigin.ENVIRONMENT.persists_refresh


def test_mask_token_hides_secret_part() -> None:
    assert mask_token("1626345633653-secretpart") == "1626345633653-***"
    assert mask_token(None) is None
    public = SessionRecord.from_dict(record_payload("99-secret")).to_public_dict()
    assert public["token"] == "99-***"
