from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Union

import phonenumbers


class PhoneLabel(str, Enum):
    WORK = "work"
    WORK2 = "work2"
    HOME = "home"
    CELL = "cell"


class AddressLabel(str, Enum):
    WORK = "work"
    HOME = "home"
    PARENTS = "実家"  # parents' home


PhoneValue = Union[str, phonenumbers.PhoneNumber]


@dataclass(frozen=True)
class Record:
    firstname: str | None = None
    lastname: str | None = None
    organization: str | None = None
    furigana: str | None = None  # phonetic reading, e.g. "カワバタ タイチ"
    emails: tuple[str, ...] = ()
    phones: Mapping[PhoneLabel, PhoneValue] = field(default_factory=dict)
    addresses: Mapping[AddressLabel, tuple[str, ...]] = field(default_factory=dict)
    fields: Mapping[str, Any] = field(default_factory=dict)  # notes, birthday, nenga, www, ...

    def custom(self, name: str) -> Any:
        return self.fields.get(name)


# ── Flat export mapping ────────────────────────────────────────────────────────

FLAT_KEYS: tuple[str, ...] = (
    "lastname",
    "firstname",
    "name-format",
    "organization",
    "furigana",
    "furigana-last",
    "furigana-first",
    "phone-work",
    "phone-work2",
    "phone-home",
    "phone-cell",
    "email-home",
    "email-work",
    "email-cell",
    "address-home",
    "address-work",
    "address-third-class",
    "notes",
    "birthday",
    "nenga",
    "www",
)

FlatRecord = Mapping[str, Union[str, None]]


def make_flat_record(values: Mapping[str, str | None]) -> FlatRecord:
    """Build a read-only mapping holding every key in FLAT_KEYS, in order."""
    unknown = set(values) - set(FLAT_KEYS)
    if unknown:
        raise KeyError(f"Unknown export key(s): {', '.join(sorted(unknown))}")
    return MappingProxyType({key: values.get(key) for key in FLAT_KEYS})
