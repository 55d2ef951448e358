"""Per-stage duration report: sorting, formatting and table output."""

from __future__ import annotations

import csv
import sys
from datetime import timedelta
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from stage_time.errors import RenderError
from stage_time.models import StageDuration

HEADER: tuple[str, str] = ("Stage", "Duration")

_BOLD = "\x1b[1m"
_RESET = "\x1b[0m"


def sort_durations(durations: Mapping[str, timedelta]) -> list[StageDuration]:
    """Sort stages by accumulated time, longest first.

    Sorted ascending (stable) and then reversed, so tied stages come out in
    reverse insertion order.
    """

    rows = [StageDuration(stage=name, duration=d) for name, d in durations.items()]
    rows.sort(key=lambda r: r.duration)
    rows.reverse()
    return rows


def format_duration(duration: timedelta) -> str:
    """Format as H:MM with unpadded total hours; seconds are truncated.

    Negative durations get a single leading minus: -90 min -> "-1:30".
    """

    sign = "-" if duration < timedelta(0) else ""
    minutes = abs(duration) // timedelta(minutes=1)
    h, m = divmod(minutes, 60)
    return f"{sign}{h}:{m:02d}"


def build_rows(durations: Mapping[str, timedelta]) -> list[list[str]]:
    """Sorted table rows of [stage, H:MM]."""

    return [[r.stage, format_duration(r.duration)] for r in sort_durations(durations)]


def render_table(
    header: Sequence[str],
    rows: Sequence[Sequence[str]],
    stream: TextIO | None = None,
    *,
    bold_header: bool = True,
) -> None:
    """Write a bordered, left-aligned table.

    Raises:
        RenderError: If the stream cannot be written.
    """

    out = sys.stdout if stream is None else stream
    widths = [len(h) for h in header]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"

    def line(cells: Sequence[str], bold: bool = False) -> str:
        parts = []
        for cell, w in zip(cells, widths):
            padded = cell.ljust(w)
            if bold:
                padded = f"{_BOLD}{padded}{_RESET}"
            parts.append(f" {padded} ")
        return "|" + "|".join(parts) + "|"

    lines = [border, line(header, bold=bold_header), border]
    for row in rows:
        lines.append(line(row))
        lines.append(border)

    try:
        out.write("\n".join(lines) + "\n")
        out.flush()
    except (OSError, ValueError) as exc:
        # ValueError: write to a closed stream
        raise RenderError(f"cannot print table: {exc}") from exc


def print_report(
    durations: Mapping[str, timedelta],
    stream: TextIO | None = None,
    *,
    bold_header: bool = True,
) -> None:
    """Render the duration report to stream (stdout by default)."""

    render_table(HEADER, build_rows(durations), stream, bold_header=bold_header)


def write_report_csv(durations: Mapping[str, timedelta], out_path: str | Path) -> None:
    """Write the sorted report to CSV."""

    p = Path(out_path)
    try:
        with p.open("w", encoding="utf-8", newline="") as f:
            w = csv.DictWriter(f, fieldnames=["stage", "duration_seconds", "duration_hmm"])
            w.writeheader()
            for r in sort_durations(durations):
                w.writerow(
                    {
                        "stage": r.stage,
                        "duration_seconds": f"{r.total_seconds:.0f}",
                        "duration_hmm": format_duration(r.duration),
                    }
                )
    except OSError as exc:
        raise RenderError(f"cannot write CSV report: {exc}", source=p) from exc
