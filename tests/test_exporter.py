from __future__ import annotations

import io
from pathlib import Path

import pytest

from addressbook_export.exporter import (
    export_records,
    export_to_path,
    has_furigana,
    has_nenga,
    presets,
    select_all,
)
from addressbook_export.model import AddressLabel, Record
from addressbook_export.projector import project
from addressbook_export.renderers import render_csv, render_vcard21, render_vcard30


def _records() -> list[Record]:
    return [
        Record(lastname="Abe", firstname="Ken", furigana="アベ ケン"),
        Record(lastname="Baba", firstname="Yui", fields={"nenga": "t"},
               addresses={AddressLabel.HOME: ("〒100-0001", "千代田区", "1-1")}),
        Record(lastname="Chiba", firstname="Rin", furigana="チバ リン", fields={"nenga": "t"}),
    ]


def test_export_records_filters_and_keeps_order():
    sink = io.StringIO()
    n = export_records(_records(), has_furigana, project, render_vcard30, sink)
    assert n == 2
    text = sink.getvalue()
    assert text.count("BEGIN:VCARD") == 2
    assert text.index("Abe") < text.index("Chiba")
    assert "Baba" not in text


def test_export_records_csv():
    sink = io.StringIO()
    n = export_records(_records(), has_nenga, project, render_csv, sink)
    assert n == 2
    assert sink.getvalue() == "Baba Yui,100-0001,千代田区,1-1\nChiba Rin,,,\n"


def test_export_records_aborts_on_fault():
    records = [
        Record(lastname="Ok"),
        Record(lastname="Bad", addresses={AddressLabel.HOME: (1, 2)}),
        Record(lastname="Never"),
    ]
    sink = io.StringIO()
    with pytest.raises(TypeError):
        export_records(records, select_all, project, render_csv, sink)
    assert "Never" not in sink.getvalue()


def test_export_to_path_writes_file(tmp_path: Path):
    out = tmp_path / "exports" / "contacts.vcf"
    n = export_to_path(out, _records(), select_all, project, render_vcard21)
    assert n == 3
    text = out.read_text(encoding="utf-8")
    assert text.count("END:VCARD") == 3
    assert "\r\n" in out.read_bytes().decode("utf-8")


def test_export_to_path_propagates_fault(tmp_path: Path):
    out = tmp_path / "out.csv"
    records = [Record(lastname="Bad", addresses={AddressLabel.HOME: (None,)})]
    with pytest.raises(TypeError):
        export_to_path(out, records, select_all, project, render_csv)
    assert out.exists()


def test_presets(tmp_path: Path):
    p = presets(tmp_path / "c.vcf", tmp_path / "n.csv", vcard_version="3.0")
    assert p["vcard"].predicate is has_furigana
    assert p["vcard"].renderer is render_vcard30
    assert p["csv"].predicate is has_nenga
    assert p["csv"].renderer is render_csv
    assert p["csv"].output == tmp_path / "n.csv"
