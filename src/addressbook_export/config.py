from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

NAME_FORMATS = ("first-last", "last-first")
VCARD_VERSIONS = ("2.1", "3.0")


@dataclass
class Paths:
    root: Path
    local_dir: Path
    export_dir: Path
    conf_file: Path


@dataclass
class Settings:
    default_name_format: str = "first-last"
    vcard_version: str = "2.1"
    store_file: str = "contacts.json"
    vcard_file: str = "exports/contacts.vcf"
    csv_file: str = "exports/nenga.csv"


DEFAULT_CONF = """# addressbook-export local config (TOML)
default_name_format = "first-last"   # or "last-first"
vcard_version = "2.1"                # or "3.0"
store_file = "contacts.json"
vcard_file = "exports/contacts.vcf"
csv_file = "exports/nenga.csv"
"""


def _apply(settings: Settings, data: dict, conf: Path) -> None:
    for name in ("store_file", "vcard_file", "csv_file"):
        if name in data:
            setattr(settings, name, str(data[name]))

    name_format = str(data.get("default_name_format", settings.default_name_format))
    if name_format in NAME_FORMATS:
        settings.default_name_format = name_format
    else:
        logger.warning("%s: unknown default_name_format %r, using %r",
                       conf, name_format, settings.default_name_format)

    version = str(data.get("vcard_version", settings.vcard_version))
    if version in VCARD_VERSIONS:
        settings.vcard_version = version
    else:
        logger.warning("%s: unsupported vcard_version %r, using %r",
                       conf, version, settings.vcard_version)


def load_settings(conf: Path) -> Settings:
    settings = Settings()
    if not conf.exists():
        return settings
    try:
        data = tomllib.loads(conf.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        logger.warning("%s: malformed config (%s), using defaults", conf, e)
        return settings
    _apply(settings, data, conf)
    return settings


def ensure_workspace(base: Path | None = None) -> tuple[Paths, Settings]:
    root = Path(base or os.getcwd())
    local = root / "local"
    exports = root / "exports"
    conf = local / "export.conf"

    for d in (local, exports):
        d.mkdir(parents=True, exist_ok=True)

    if not conf.exists():
        conf.write_text(DEFAULT_CONF, encoding="utf-8")

    return (
        Paths(root=root, local_dir=local, export_dir=exports, conf_file=conf),
        load_settings(conf),
    )


def resolve(paths: Paths, name: str) -> Path:
    """Resolve a configured file name against the workspace root."""
    p = Path(name).expanduser()
    return p if p.is_absolute() else paths.root / p
