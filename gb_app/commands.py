"""Report commands and the command table handed to the CLI layer.

Each handler maps one-to-one onto a report store operation and returns a
``CommandOutcome``; presentation is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Tuple

from gb_common.errors import GBError
from gb_reports.diff import diff_reports
from gb_reports.models import GasDelta, Report
from gb_reports.pending import PendingReports
from gb_reports.render import render_diff, render_report
from gb_reports.settings import ReportSettings
from gb_reports.store import ReportStore

WRITE_REPORTS = "write-reports"
COMPARE_REPORTS = "compare-reports"
PRINT_REPORT = "print-report"


@dataclass(frozen=True)
class ReportContext:
    """Store handles derived from the report settings."""

    settings: ReportSettings
    store: ReportStore
    pending: PendingReports

    @classmethod
    def from_settings(cls, settings: ReportSettings) -> "ReportContext":
        return cls(
            settings=settings,
            store=ReportStore(settings.reports_dir),
            pending=PendingReports(settings.pending_dir),
        )


@dataclass(frozen=True)
class CommandOutcome:
    """Text output of a command plus the data it was rendered from."""

    text: str
    reports: Tuple[Report, ...] = ()
    deltas: Tuple[GasDelta, ...] = ()
    written: Tuple[Report, ...] = ()


Handler = Callable[[ReportContext], CommandOutcome]


@dataclass(frozen=True)
class Command:
    name: str
    help: str
    handler: Handler


def write_reports(ctx: ReportContext) -> CommandOutcome:
    """Store every pending gas reporter output as a new report."""
    written = tuple(ctx.pending.write_pending(ctx.store))
    if not written:
        return CommandOutcome(text=f"No pending gas reports in {ctx.pending.pending_dir}.\n")
    lines = [
        f"Stored report for {report.commit_id} ({len(report.entries)} entries)"
        for report in written
    ]
    return CommandOutcome(text="\n".join(lines) + "\n", written=written)


def compare_reports(ctx: ReportContext) -> CommandOutcome:
    """Diff the two most recent reports."""
    newer, older = ctx.store.load_most_recent(2)
    deltas = tuple(diff_reports(newer, older))
    text = render_diff(deltas, newer, older, only_changed=ctx.settings.only_changed)
    return CommandOutcome(text=text, reports=(newer, older), deltas=deltas)


def print_report(ctx: ReportContext) -> CommandOutcome:
    """Render the most recent report."""
    (latest,) = ctx.store.load_most_recent(1)
    return CommandOutcome(text=render_report(latest), reports=(latest,))


def build_command_table(extra: Optional[Iterable[Command]] = None) -> Dict[str, Command]:
    """Return the name -> command mapping exposed to task runners."""
    commands = [
        Command(WRITE_REPORTS, "Write pending gas reports", write_reports),
        Command(COMPARE_REPORTS, "Compare last two gas reports", compare_reports),
        Command(PRINT_REPORT, "Print the last gas report", print_report),
    ]
    commands.extend(extra or ())
    return {command.name: command for command in commands}


def run_command(table: Dict[str, Command], name: str, ctx: ReportContext) -> CommandOutcome:
    command = table.get(name)
    if command is None:
        raise GBError(
            f"Unknown command {name!r}",
            context={"command": name, "known_commands": sorted(table)},
        )
    return command.handler(ctx)
