from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from addressbook_export.cli import app

runner = CliRunner()

_DOC = {"records": [
    {
        "lastname": "Kawabata", "firstname": "Taichi", "furigana": "カワバタ タイチ",
        "phones": [{"label": "work", "number": "03-1234-5678"}],
        "fields": {"name-format": "last-first"},
    },
    {
        "lastname": "Baba", "firstname": "Yui",
        "addresses": [{"label": "home", "lines": ["〒100-0001", "千代田区", "1-1"]}],
        "fields": {"nenga": "t"},
    },
]}


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "contacts.json").write_text(json.dumps(_DOC, ensure_ascii=False), encoding="utf-8")
    return tmp_path


def test_export_command(workspace: Path):
    out = workspace / "out.vcf"
    result = runner.invoke(app, [
        "export", "--output", str(out), "--predicate", "all", "--renderer", "vcard30",
    ])
    assert result.exit_code == 0, result.output
    text = out.read_text(encoding="utf-8")
    assert "FN:Kawabata Taichi" in text
    assert "TEL;TYPE=WORK,VOICE:0312345678" in text
    assert "FN:Yui Baba" in text


def test_export_name_format_option(workspace: Path):
    out = workspace / "out.vcf"
    result = runner.invoke(app, [
        "export", "-o", str(out), "-r", "vcard30", "--name-format", "last-first",
    ])
    assert result.exit_code == 0, result.output
    assert "FN:Baba Yui" in out.read_text(encoding="utf-8")


def test_export_unknown_renderer(workspace: Path):
    result = runner.invoke(app, ["export", "-o", "x.txt", "--renderer", "ldif"])
    assert result.exit_code == 2


def test_export_missing_store(workspace: Path):
    result = runner.invoke(app, ["export", "-o", "x.vcf", "--store", "missing.json"])
    assert result.exit_code == 2


def test_vcard_preset(workspace: Path):
    result = runner.invoke(app, ["vcard"])
    assert result.exit_code == 0, result.output
    text = (workspace / "exports" / "contacts.vcf").read_text(encoding="utf-8")
    assert text.count("BEGIN:VCARD") == 1
    assert "VERSION:2.1" in text


def test_csv_preset(workspace: Path):
    out = workspace / "nenga.csv"
    result = runner.invoke(app, ["csv", "--output", str(out)])
    assert result.exit_code == 0, result.output
    assert out.read_text(encoding="utf-8") == "Baba Yui,100-0001,千代田区,1-1\n"
