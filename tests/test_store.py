from __future__ import annotations

import json
from pathlib import Path

import phonenumbers
import pytest

from addressbook_export.model import AddressLabel, PhoneLabel
from addressbook_export.store import (
    StoreError,
    UnknownLabelError,
    format_phone,
    read_records,
    record_from_dict,
)


def _dump(tmp_path: Path, doc) -> Path:
    path = tmp_path / "contacts.json"
    path.write_text(json.dumps(doc, ensure_ascii=False), encoding="utf-8")
    return path


def test_read_records_in_order(tmp_path: Path):
    path = _dump(tmp_path, {"records": [{"lastname": "A"}, {"lastname": "B"}]})
    assert [r.lastname for r in read_records(path)] == ["A", "B"]


def test_read_records_bare_list(tmp_path: Path):
    path = _dump(tmp_path, [{"firstname": "Taichi"}])
    assert read_records(path)[0].firstname == "Taichi"


def test_read_records_missing_file(tmp_path: Path):
    with pytest.raises(StoreError):
        read_records(tmp_path / "nope.json")


def test_read_records_bad_json(tmp_path: Path):
    path = tmp_path / "contacts.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StoreError):
        read_records(path)


def test_structured_phone():
    r = record_from_dict({"phones": [
        {"label": "work", "country_code": 81, "national_number": 312345678},
    ]})
    assert isinstance(r.phones[PhoneLabel.WORK], phonenumbers.PhoneNumber)
    assert format_phone(r.phones[PhoneLabel.WORK]) == "03-1234-5678"


def test_first_label_wins():
    r = record_from_dict({"phones": [
        {"label": "home", "number": "1"},
        {"label": "home", "number": "2"},
    ]})
    assert r.phones == {PhoneLabel.HOME: "1"}


def test_address_positional_form():
    r = record_from_dict({"addresses": [["実家", ["〒600-8216", "京都府"], "extra"]]})
    assert r.addresses[AddressLabel.PARENTS] == ("〒600-8216", "京都府")


def test_unknown_label_dropped(caplog):
    r = record_from_dict({"lastname": "K", "phones": [{"label": "fax", "number": "1"}]})
    assert r.phones == {}
    assert "fax" in caplog.text


def test_unknown_label_strict():
    with pytest.raises(UnknownLabelError):
        record_from_dict({"addresses": [{"label": "office", "lines": []}]}, strict_labels=True)
