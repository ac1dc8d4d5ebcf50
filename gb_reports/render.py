"""Deterministic text rendering for reports and report diffs.

The row builders are shared with the terminal presenters so the plain text
and the rich tables always show the same cells.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from gb_reports.models import DeltaKind, GasDelta, Report

REPORT_COLUMNS = ["Label", "Gas used", "Calls"]
DIFF_COLUMNS = ["Label", "Before", "After", "Change", "%"]


def _optional_int(value: Optional[int]) -> str:
    return "-" if value is None else str(value)


def format_change(delta: GasDelta) -> str:
    if delta.kind in (DeltaKind.ADDED, DeltaKind.REMOVED):
        return delta.kind.value
    value = delta.delta or 0
    return "0" if value == 0 else f"{value:+d}"


def format_percent(delta: GasDelta) -> str:
    percent = delta.percent
    if percent is None:
        return "-"
    return f"{percent:+.2f}%"


def report_title(report: Report) -> str:
    return f"Gas report {report.commit_id} ({report.timestamp.isoformat()})"


def diff_title(newer: Report, older: Report) -> str:
    return f"Gas changes {older.commit_id} -> {newer.commit_id}"


def report_rows(report: Report) -> List[List[str]]:
    return [
        [entry.label, str(entry.gas_used), str(entry.call_count)]
        for entry in report.sorted_entries()
    ]


def delta_rows(deltas: Sequence[GasDelta], *, only_changed: bool = False) -> List[List[str]]:
    rows = []
    for delta in sorted(deltas, key=lambda item: item.label):
        if only_changed and delta.kind is DeltaKind.UNCHANGED:
            continue
        rows.append(
            [
                delta.label,
                _optional_int(delta.gas_before),
                _optional_int(delta.gas_after),
                format_change(delta),
                format_percent(delta),
            ]
        )
    return rows


def format_table(columns: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Lay out rows as fixed-width text; the first column is left aligned."""
    widths = [len(column) for column in columns]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    def _line(cells: Sequence[str]) -> str:
        parts = [
            cell.ljust(widths[index]) if index == 0 else cell.rjust(widths[index])
            for index, cell in enumerate(cells)
        ]
        return "  ".join(parts).rstrip()

    lines = [_line(columns), "  ".join("-" * width for width in widths)]
    lines.extend(_line(row) for row in rows)
    return "\n".join(lines)


def render_report(report: Report) -> str:
    """Render one report, entries ordered by label."""
    rows = report_rows(report)
    body = format_table(REPORT_COLUMNS, rows) if rows else "No entries."
    return f"{report_title(report)}\n{body}\n"


def render_diff(
    deltas: Sequence[GasDelta],
    newer: Report,
    older: Report,
    *,
    only_changed: bool = False,
) -> str:
    """Render a diff between two reports, ordered by label."""
    rows = delta_rows(deltas, only_changed=only_changed)
    body = format_table(DIFF_COLUMNS, rows) if rows else "No changes."
    return f"{diff_title(newer, older)}\n{body}\n"
