from __future__ import annotations

from pathlib import Path

from rich.columns import Columns
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

console = Console()

# ── Palette ────────────────────────────────────────────────────────────────────
_ACCENT  = "#4d9fff"
_GREEN   = "#3ecf8e"
_TEXT    = "#c9d1e0"
_MID     = "#8896af"
_DIM     = "#546075"
_BORDER  = "#2a3347"


def _stat_panel(value: str, label: str, colour: str) -> Panel:
    body = Text()
    body.append(f"{value}\n", style=f"bold {colour}")
    body.append(label, style=f"dim {_DIM}")
    return Panel(body, border_style=_BORDER, padding=(0, 2), expand=True)


def print_summary(
    *,
    read_count: int,
    written_count: int,
    renderer: str,
    out_path: Path,
) -> None:
    console.print()
    console.print(Text("  EXPORT SUMMARY", style=f"dim {_DIM}"))
    console.print()

    console.print(Columns([
        _stat_panel(str(read_count),                 "records read",    _TEXT),
        _stat_panel(str(written_count),              "records written", _ACCENT),
        _stat_panel(str(read_count - written_count), "not selected",    _MID),
    ], equal=True, expand=True))
    console.print()

    body = Text()
    body.append("✓  Written successfully", style=f"bold {_GREEN}")
    body.append(f"  ({renderer})\n", style=f"dim {_MID}")
    body.append(str(out_path), style=f"dim {_MID}")
    console.print(Panel(body, border_style=_GREEN, padding=(0, 2)))
