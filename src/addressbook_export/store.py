"""store.py — read-only adapter over a JSON address-book dump.

The dump is a document of the form ``{"records": [...]}`` (a bare list is
accepted too). Each record looks like:

    {
      "firstname": "Taichi", "lastname": "Kawabata",
      "organization": "...", "furigana": "カワバタ タイチ",
      "emails": ["a@x.co.jp", ...],
      "phones": [
        {"label": "work", "number": "03-1234-5678"},
        {"label": "cell", "country_code": 81, "national_number": 9012345678}
      ],
      "addresses": [
        {"label": "home", "lines": ["〒150-0001", "東京都渋谷区神宮前1-2-3"]},
        ["実家", ["〒600-8216", "京都府京都市下京区"]]
      ],
      "fields": {"notes": "...", "birthday": "1980-01-01", "nenga": "yes"}
    }

Labels are checked against the closed PhoneLabel / AddressLabel sets here, so
everything downstream works on typed mappings.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, TypeVar

import phonenumbers

from .model import AddressLabel, PhoneLabel, PhoneValue, Record

logger = logging.getLogger(__name__)

L = TypeVar("L", PhoneLabel, AddressLabel)


class StoreError(Exception):
    """The address-book dump could not be read."""


class UnknownLabelError(StoreError):
    """A phone or address entry carries a label outside the known set."""


# ── Phone stringification ──────────────────────────────────────────────────────

def format_phone(number: PhoneValue) -> str:
    """Return display text for a phone value, e.g. 03-1234-5678."""
    if isinstance(number, str):
        return number
    return phonenumbers.format_number(number, phonenumbers.PhoneNumberFormat.NATIONAL)


def _parse_phone(entry: dict[str, Any]) -> PhoneValue:
    if "number" in entry:
        return entry["number"]
    return phonenumbers.PhoneNumber(
        country_code=int(entry["country_code"]),
        national_number=int(entry["national_number"]),
    )


# ── Label validation ───────────────────────────────────────────────────────────

def _labelled(
    entries: Iterable[tuple[str, Any]],
    labels: type[L],
    strict: bool,
    owner: str,
) -> dict[L, Any]:
    """Map (label, value) pairs onto a closed label enum; first entry wins."""
    out: dict[L, Any] = {}
    for raw_label, value in entries:
        try:
            label = labels(raw_label)
        except ValueError:
            if strict:
                raise UnknownLabelError(
                    f"{owner}: unknown {labels.__name__} {raw_label!r}"
                ) from None
            logger.warning("%s: dropping entry with unknown label %r", owner, raw_label)
            continue
        if label in out:
            logger.debug("%s: duplicate %r entry ignored", owner, raw_label)
            continue
        out[label] = value
    return out


def _phone_pairs(items: list[Any]) -> Iterable[tuple[str, PhoneValue]]:
    for item in items:
        yield item["label"], _parse_phone(item)


def _address_pairs(items: list[Any]) -> Iterable[tuple[str, tuple[str, ...]]]:
    for item in items:
        if isinstance(item, dict):
            yield item["label"], tuple(item.get("lines") or ())
        else:
            # positional form: [label, [lines...], ...]
            yield item[0], tuple(item[1])


def record_from_dict(data: dict[str, Any], strict_labels: bool = False) -> Record:
    owner = " ".join(filter(None, [data.get("lastname"), data.get("firstname")])) or "Unnamed"
    return Record(
        firstname=data.get("firstname"),
        lastname=data.get("lastname"),
        organization=data.get("organization"),
        furigana=data.get("furigana"),
        emails=tuple(data.get("emails") or ()),
        phones=_labelled(_phone_pairs(data.get("phones") or []), PhoneLabel, strict_labels, owner),
        addresses=_labelled(
            _address_pairs(data.get("addresses") or []), AddressLabel, strict_labels, owner
        ),
        fields=dict(data.get("fields") or {}),
    )


# ── Public API ─────────────────────────────────────────────────────────────────

def read_records(path: Path, strict_labels: bool = False) -> list[Record]:
    """Load every record from a JSON dump, in the order the dump lists them."""
    if not path.is_file():
        raise StoreError(f"Address book not found: {path}")
    try:
        doc = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StoreError(f"{path}: not valid JSON ({e})") from e

    items = doc.get("records") if isinstance(doc, dict) else doc
    if not isinstance(items, list):
        raise StoreError(f"{path}: expected a list of records")

    records = [record_from_dict(item, strict_labels=strict_labels) for item in items]
    logger.debug("%s: read %d record(s)", path, len(records))
    return records
