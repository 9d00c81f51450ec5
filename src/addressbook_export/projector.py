from __future__ import annotations

from typing import Any, Callable

from .extractors import address, classify_emails, phone, split_furigana
from .model import AddressLabel, FlatRecord, PhoneLabel, Record, make_flat_record

Projector = Callable[[Record], FlatRecord]


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


def _block(lines: tuple[str, ...] | None) -> str | None:
    return None if lines is None else "\n".join(lines)


def project(record: Record, default_name_format: str = "first-last") -> FlatRecord:
    """Flatten one record into the fixed set of export keys.

    The record's own `name-format` field wins when it is a string; anything
    else falls back to `default_name_format`.
    """
    name_format = record.custom("name-format")
    if not isinstance(name_format, str):
        name_format = default_name_format

    furigana_last, furigana_first = split_furigana(record.furigana)
    emails = classify_emails(record.emails)

    return make_flat_record({
        "lastname": record.lastname,
        "firstname": record.firstname,
        "name-format": name_format,
        "organization": record.organization,
        "furigana": record.furigana,
        "furigana-last": furigana_last,
        "furigana-first": furigana_first,
        "phone-work": phone(record, PhoneLabel.WORK),
        "phone-work2": phone(record, PhoneLabel.WORK2),
        "phone-home": phone(record, PhoneLabel.HOME),
        "phone-cell": phone(record, PhoneLabel.CELL),
        "email-home": emails.home,
        "email-work": emails.work,
        "email-cell": emails.cell,
        "address-home": _block(address(record, AddressLabel.HOME)),
        "address-work": _block(address(record, AddressLabel.WORK)),
        "address-third-class": _block(address(record, AddressLabel.PARENTS)),
        "notes": _text(record.custom("notes")),
        "birthday": _text(record.custom("birthday")),
        "nenga": _text(record.custom("nenga")),
        "www": _text(record.custom("www")),
    })


PROJECTORS: dict[str, Callable[..., FlatRecord]] = {
    "default": project,
}
