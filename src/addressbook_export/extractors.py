from __future__ import annotations

from typing import NamedTuple, Sequence, TypeVar

from .model import AddressLabel, PhoneLabel, Record
from .store import format_phone

L = TypeVar("L", PhoneLabel, AddressLabel)

# ── Label lookups ──────────────────────────────────────────────────────────────

def _label(labels: type[L], label: L | str) -> L | None:
    try:
        return labels(label)
    except ValueError:
        return None


def phone(record: Record, label: PhoneLabel | str) -> str | None:
    """Display text of the phone stored under `label`, or None.

    Labels match exactly; an unknown label is simply a miss.
    """
    value = record.phones.get(_label(PhoneLabel, label))
    if value is None:
        return None
    return format_phone(value)


def address(record: Record, label: AddressLabel | str) -> tuple[str, ...] | None:
    return record.addresses.get(_label(AddressLabel, label))


# ── Email classification ───────────────────────────────────────────────────────

WORK_EMAIL_PATTERNS = (".co.jp", ".ac.jp", ".go.jp", ".com")
CELL_EMAIL_PATTERNS = (
    "docomo.ne.jp",
    "i.softbank.jp",
    "ezweb.ne.jp",
    "auone.jp",
    "jp-t.ne.jp",
)


class EmailBuckets(NamedTuple):
    work: str | None
    cell: str | None
    home: str | None


def _first_matching(emails: Sequence[str], patterns: Sequence[str]) -> str | None:
    for email in emails:
        if any(pat in email for pat in patterns):
            return email
    return None


def classify_emails(emails: Sequence[str]) -> EmailBuckets:
    """Split an email list into work / mobile-carrier / home addresses.

    Each bucket takes the first address in list order, so the result depends
    on the order the store returns them in. Home is whatever comes first
    among the rest; an address may end up in no bucket at all.
    """
    work = _first_matching(emails, WORK_EMAIL_PATTERNS)
    cell = _first_matching(emails, CELL_EMAIL_PATTERNS)
    home = next((e for e in emails if e != work and e != cell), None)
    return EmailBuckets(work=work, cell=cell, home=home)


# ── Furigana ───────────────────────────────────────────────────────────────────

def split_furigana(furigana: str | None) -> tuple[str | None, str | None]:
    """Return (last, first) phonetic names; the tail tokens are joined as-is."""
    tokens = furigana.split() if furigana else []
    if not tokens:
        return None, None
    return tokens[0], "".join(tokens[1:]) or None
