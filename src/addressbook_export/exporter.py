from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Protocol

from .model import Record
from .projector import Projector
from .renderers import RENDERERS, Renderer

logger = logging.getLogger(__name__)

Predicate = Callable[[Record], bool]


class Sink(Protocol):
    def write(self, text: str, /) -> object: ...


# ── Predicates ─────────────────────────────────────────────────────────────────

def select_all(record: Record) -> bool:
    return True


def has_furigana(record: Record) -> bool:
    return bool(record.furigana)


def has_nenga(record: Record) -> bool:
    """Greeting-card (nenga) list membership."""
    return bool(record.custom("nenga"))


PREDICATES: dict[str, Predicate] = {
    "all": select_all,
    "has-furigana": has_furigana,
    "has-nenga": has_nenga,
}


# ── Driver ─────────────────────────────────────────────────────────────────────

def export_records(
    records: Iterable[Record],
    predicate: Predicate,
    projector: Projector,
    renderer: Renderer,
    sink: Sink,
) -> int:
    """Render every selected record into `sink`, in store order.

    Nothing is caught: a record that fails to project or render stops the
    whole pass.
    """
    count = 0
    for record in records:
        if not predicate(record):
            continue
        sink.write(renderer(projector(record)))
        count += 1
    return count


def export_to_path(
    path: Path,
    records: Iterable[Record],
    predicate: Predicate,
    projector: Projector,
    renderer: Renderer,
) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as sink:
        count = export_records(records, predicate, projector, renderer, sink)
    logger.info("Wrote %d record(s) to %s", count, path)
    return count


# ── Presets ────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ExportPreset:
    name: str
    output: Path
    predicate: Predicate
    renderer_name: str

    @property
    def renderer(self) -> Renderer:
        return RENDERERS[self.renderer_name]


def vcard_renderer_name(version: str) -> str:
    return {"2.1": "vcard21", "3.0": "vcard30"}[version]


def presets(vcard_file: Path, csv_file: Path, vcard_version: str = "2.1") -> dict[str, ExportPreset]:
    """The two shortcuts: phonetic-name contacts to vCard, nenga list to CSV."""
    return {
        "vcard": ExportPreset(
            name="vcard",
            output=vcard_file,
            predicate=has_furigana,
            renderer_name=vcard_renderer_name(vcard_version),
        ),
        "csv": ExportPreset(
            name="csv",
            output=csv_file,
            predicate=has_nenga,
            renderer_name="csv",
        ),
    }
