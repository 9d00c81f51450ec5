"""Text renderers: one flat export mapping in, one text block out.

vCard 2.1 tags text properties with CHARSET/ENCODING and quoted-printable
encodes them. vCard 3.0 writes the same fields as raw text with TYPE=
parameters. CSV is a fixed one-line template for greeting-card address lists.
"""
from __future__ import annotations

import quopri
import unicodedata
from functools import partial
from typing import Callable, NamedTuple

from .model import FlatRecord

Renderer = Callable[[FlatRecord], str]

CRLF = "\r\n"


# ── Value helpers ──────────────────────────────────────────────────────────────

def _unix_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def quoted_printable(text: str) -> str:
    """Quoted-printable encode UTF-8 text on a single line (no soft breaks)."""
    # quopri switches to CRLF output when it sees "\r\n", so feed it bare LF only
    encoded = quopri.encodestring(_unix_newlines(text).encode("utf-8"))
    return encoded.replace(b"=\n", b"").replace(b"\n", b"=0A").decode("ascii")


def _raw(text: str) -> str:
    # line breaks inside a value would end the property
    return _unix_newlines(text).replace("\n", "\\n")


def _component(text: str) -> str:
    # ";" separates the parts of N and ADR
    return text.replace(";", "\\;")


def _phonetic(text: str) -> str:
    return unicodedata.normalize("NFKC", text)


def _strip_hyphens(number: str) -> str:
    return number.replace("-", "")


def _postal_code(line: str) -> str:
    # "〒150-0001" → "150-0001"
    if line and not line[0].isalnum():
        return line[1:]
    return line


def address_lines(block: str | None) -> tuple[str, list[str]]:
    """Return (postal code, remaining lines) of an address block."""
    lines = block.split("\n") if block else [""]
    return _postal_code(lines[0]), lines[1:]


def split_address(block: str | None) -> tuple[str, str, str]:
    """Return (postal code, second line, third line), blank where missing."""
    lines = block.split("\n") if block else []
    lines += [""] * (3 - len(lines))
    return _postal_code(lines[0]), lines[1], lines[2]


def full_name(flat: FlatRecord) -> str:
    first, last = flat["firstname"], flat["lastname"]
    parts = [last, first] if flat["name-format"] == "last-first" else [first, last]
    return " ".join(p for p in parts if p)


# ── vCard ──────────────────────────────────────────────────────────────────────

class VCardDialect(NamedTuple):
    version: str
    text_params: str                 # appended to text properties
    encode: Callable[[str], str]     # applied to each text component
    tel_work: str
    tel_home: str
    tel_cell: str
    email_work: str
    email_home: str
    email_cell: str
    adr_home: str
    adr_work: str


VCARD21 = VCardDialect(
    version="2.1",
    text_params=";CHARSET=UTF-8;ENCODING=QUOTED-PRINTABLE",
    encode=quoted_printable,
    tel_work="TEL;WORK;VOICE",
    tel_home="TEL;HOME;VOICE",
    tel_cell="TEL;CELL",
    email_work="EMAIL;INTERNET;WORK",
    email_home="EMAIL;INTERNET;HOME",
    email_cell="EMAIL;INTERNET;CELL",
    adr_home="ADR;HOME",
    adr_work="ADR;WORK",
)

VCARD30 = VCardDialect(
    version="3.0",
    text_params="",
    encode=_raw,
    tel_work="TEL;TYPE=WORK,VOICE",
    tel_home="TEL;TYPE=HOME,VOICE",
    tel_cell="TEL;TYPE=CELL",
    email_work="EMAIL;TYPE=INTERNET,WORK",
    email_home="EMAIL;TYPE=INTERNET,HOME",
    email_cell="EMAIL;TYPE=INTERNET,CELL",
    adr_home="ADR;TYPE=HOME",
    adr_work="ADR;TYPE=WORK",
)


def render_vcard(flat: FlatRecord, dialect: VCardDialect) -> str:
    enc = dialect.encode
    text = dialect.text_params
    lines = ["BEGIN:VCARD", f"VERSION:{dialect.version}"]

    if flat["lastname"] or flat["firstname"]:
        last = enc(_component(flat["lastname"] or ""))
        first = enc(_component(flat["firstname"] or ""))
        lines.append(f"N{text}:{last};{first};;;")
        lines.append(f"FN{text}:{enc(full_name(flat))}")
    if flat["furigana-last"]:
        lines.append(f"X-PHONETIC-LAST-NAME{text}:{enc(_phonetic(flat['furigana-last']))}")
    if flat["furigana-first"]:
        lines.append(f"X-PHONETIC-FIRST-NAME{text}:{enc(_phonetic(flat['furigana-first']))}")
    if flat["organization"]:
        lines.append(f"ORG{text}:{enc(flat['organization'])}")

    for key, prop in (
        ("phone-work", dialect.tel_work),
        ("phone-work2", dialect.tel_work),
        ("phone-home", dialect.tel_home),
        ("phone-cell", dialect.tel_cell),
    ):
        if flat[key]:
            lines.append(f"{prop}:{_strip_hyphens(flat[key])}")

    for key, prop in (
        ("email-work", dialect.email_work),
        ("email-home", dialect.email_home),
        ("email-cell", dialect.email_cell),
    ):
        if flat[key]:
            lines.append(f"{prop}:{flat[key]}")

    for key, prop in (
        ("address-home", dialect.adr_home),
        ("address-work", dialect.adr_work),
    ):
        if flat[key]:
            postal, rest = address_lines(flat[key])
            street = " ".join(p for p in rest if p)
            lines.append(f"{prop}{text}:;;{enc(_component(street))};;;{enc(_component(postal))};")

    if flat["www"]:
        lines.append(f"URL:{flat['www']}")
    if flat["birthday"]:
        lines.append(f"BDAY:{flat['birthday']}")
    if flat["notes"]:
        lines.append(f"NOTE{text}:{enc(flat['notes'])}")

    lines.append("X-CLASS:PUBLIC")
    lines.append("END:VCARD")
    return CRLF.join(lines) + CRLF


render_vcard21: Renderer = partial(render_vcard, dialect=VCARD21)
render_vcard30: Renderer = partial(render_vcard, dialect=VCARD30)


# ── CSV ────────────────────────────────────────────────────────────────────────

def render_csv(flat: FlatRecord) -> str:
    """`last first,postal,line2,line3` from the home address."""
    postal, line2, line3 = split_address(flat["address-home"])
    name = f"{flat['lastname'] or ''} {flat['firstname'] or ''}"
    return f"{name},{postal},{line2},{line3}\n"


RENDERERS: dict[str, Renderer] = {
    "vcard21": render_vcard21,
    "vcard30": render_vcard30,
    "csv": render_csv,
}
