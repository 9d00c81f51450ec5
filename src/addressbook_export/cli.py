from __future__ import annotations

import logging
from functools import partial
from pathlib import Path
from typing import Callable

import typer
from rich.console import Console
from rich.logging import RichHandler

from .config import NAME_FORMATS, Paths, Settings, ensure_workspace, resolve
from .exporter import PREDICATES, Predicate, export_to_path, presets
from .model import FlatRecord
from .projector import PROJECTORS
from .renderers import RENDERERS, Renderer
from .report import print_summary
from .store import StoreError, read_records

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="addressbook-export: write address-book records out as vCard 2.1/3.0 or CSV.",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


def _choice(value: str, options: dict, what: str) -> None:
    if value not in options:
        console.print(
            f"[bold red]Unknown {what} '{value}'.[/bold red] "
            f"Choose one of: {', '.join(options)}"
        )
        raise typer.Exit(code=2)


# ── Shared pipeline ────────────────────────────────────────────────────────────

def _run_export(
    paths: Paths,
    settings: Settings,
    store: Path | None,
    output: Path,
    predicate: Predicate,
    projector: Callable[..., FlatRecord],
    renderer: Renderer,
    renderer_label: str,
    name_format: str | None,
    strict_labels: bool,
) -> None:
    """Read the store, run the export pass, print the summary."""
    store_path = store or resolve(paths, settings.store_file)
    try:
        records = read_records(store_path, strict_labels=strict_labels)
    except StoreError as e:
        console.print(f"[bold red]{e}[/bold red]")
        raise typer.Exit(code=2)

    project = partial(
        projector,
        default_name_format=name_format or settings.default_name_format,
    )
    count = export_to_path(output, records, predicate, project, renderer)

    print_summary(
        read_count=len(records),
        written_count=count,
        renderer=renderer_label,
        out_path=output,
    )


# ── `export` command ───────────────────────────────────────────────────────────

@app.command()
def export(
    output: Path = typer.Option(..., "--output", "-o", help="Destination file"),
    store: Path | None = typer.Option(
        None, "--store", "-s",
        help="Address-book JSON dump. Falls back to local/export.conf.",
    ),
    predicate: str = typer.Option("all", "--predicate", "-p", help="all | has-furigana | has-nenga"),
    projector: str = typer.Option("default", "--projector", help="Record projector"),
    renderer: str = typer.Option("vcard21", "--renderer", "-r", help="vcard21 | vcard30 | csv"),
    name_format: str | None = typer.Option(
        None, "--name-format",
        help="Default name order (first-last | last-first). Falls back to local/export.conf.",
    ),
    strict_labels: bool = typer.Option(False, "--strict-labels", help="Fail on unknown phone/address labels"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Export records with an explicit predicate, projector and renderer."""
    _setup_logging(verbose)
    _choice(predicate, PREDICATES, "predicate")
    _choice(projector, PROJECTORS, "projector")
    _choice(renderer, RENDERERS, "renderer")
    if name_format is not None and name_format not in NAME_FORMATS:
        console.print(f"[bold red]Unknown name format '{name_format}'.[/bold red]")
        raise typer.Exit(code=2)

    paths, settings = ensure_workspace()
    _run_export(
        paths, settings,
        store=store,
        output=output,
        predicate=PREDICATES[predicate],
        projector=PROJECTORS[projector],
        renderer=RENDERERS[renderer],
        renderer_label=renderer,
        name_format=name_format,
        strict_labels=strict_labels,
    )


# ── Preset commands ────────────────────────────────────────────────────────────

def _run_preset(name: str, output: Path | None, store: Path | None, verbose: bool) -> None:
    _setup_logging(verbose)
    paths, settings = ensure_workspace()
    preset = presets(
        vcard_file=resolve(paths, settings.vcard_file),
        csv_file=resolve(paths, settings.csv_file),
        vcard_version=settings.vcard_version,
    )[name]
    _run_export(
        paths, settings,
        store=store,
        output=output or preset.output,
        predicate=preset.predicate,
        projector=PROJECTORS["default"],
        renderer=preset.renderer,
        renderer_label=preset.renderer_name,
        name_format=None,
        strict_labels=False,
    )


@app.command()
def vcard(
    output: Path | None = typer.Option(None, "--output", "-o", help="Override the configured .vcf path"),
    store: Path | None = typer.Option(None, "--store", "-s"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Export every record with a phonetic name as vCard."""
    _run_preset("vcard", output, store, verbose)


@app.command()
def csv(
    output: Path | None = typer.Option(None, "--output", "-o", help="Override the configured .csv path"),
    store: Path | None = typer.Option(None, "--store", "-s"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Export the greeting-card (nenga) address list as CSV."""
    _run_preset("csv", output, store, verbose)


if __name__ == "__main__":
    app()
