"""Turn command outcomes and resolved profiles into terminal output."""

from __future__ import annotations

import json
from typing import List, Sequence

from rich.console import Console
from rich.text import Text

from gb_app.api import CommandOutcome
from gb_build.api import CompilationJob, CompilationProfile
from gb_reports.render import (
    DIFF_COLUMNS,
    REPORT_COLUMNS,
    delta_rows,
    diff_title,
    format_table,
    report_rows,
    report_title,
)
from gb_ui.tables import TableModel, build_rich_table

PROFILE_COLUMNS = ["Source", "Compiler", "Optimizer", "Runs", "via IR", "Metadata"]
JOB_COLUMNS = ["Compiler", "Optimizer", "Runs", "via IR", "Sources"]


def _flag(value: bool) -> str:
    return "yes" if value else "no"


def profile_row(path: str, profile: CompilationProfile) -> List[str]:
    return [
        path,
        profile.compiler_version,
        _flag(profile.optimizer_enabled),
        str(profile.optimizer_runs) if profile.optimizer_enabled else "-",
        _flag(profile.via_ir),
        profile.metadata_policy.value,
    ]


def job_row(job: CompilationJob) -> List[str]:
    profile = job.profile
    return [
        profile.compiler_version,
        _flag(profile.optimizer_enabled),
        str(profile.optimizer_runs) if profile.optimizer_enabled else "-",
        _flag(profile.via_ir),
        str(len(job.sources)),
    ]


class Presenter:
    """Prints either rich tables or the deterministic plain text."""

    def __init__(self, console: Console, *, plain: bool = False) -> None:
        self.console = console
        self.plain = plain

    def table(self, model: TableModel, empty_text: str) -> None:
        if not model.rows:
            self.console.print(f"{model.title}\n{empty_text}", markup=False, highlight=False)
            return
        if self.plain:
            text = f"{model.title}\n{format_table(model.columns, model.rows)}"
            self.console.print(text, markup=False, highlight=False, soft_wrap=True)
            return
        self.console.print(build_rich_table(model, console=self.console))

    def info(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def error(self, message: str) -> None:
        self.console.print(Text.assemble(("Error: ", "bold red"), message), soft_wrap=True)

    def outcome(self, outcome: CommandOutcome, *, only_changed: bool = False) -> None:
        if self.plain or not outcome.reports:
            self.info(outcome.text.rstrip("\n"))
            return
        if len(outcome.reports) == 2:
            newer, older = outcome.reports
            rows = delta_rows(outcome.deltas, only_changed=only_changed)
            model = TableModel(title=diff_title(newer, older), columns=list(DIFF_COLUMNS), rows=rows)
            self.table(model, "No changes.")
            return
        report = outcome.reports[0]
        model = TableModel(
            title=report_title(report), columns=list(REPORT_COLUMNS), rows=report_rows(report)
        )
        self.table(model, "No entries.")

    def profiles(self, resolved: Sequence[tuple[str, CompilationProfile]]) -> None:
        model = TableModel(
            title="Resolved compilation profiles",
            columns=list(PROFILE_COLUMNS),
            rows=[profile_row(path, profile) for path, profile in resolved],
        )
        self.table(model, "No sources.")

    def solc_settings(self, resolved: Sequence[tuple[str, CompilationProfile]]) -> None:
        payload = {
            path: {"version": profile.compiler_version, "settings": profile.to_solc_settings()}
            for path, profile in resolved
        }
        self.info(json.dumps(payload, indent=2, sort_keys=True))

    def jobs(self, jobs: Sequence[CompilationJob], *, verbose: bool = False) -> None:
        model = TableModel(
            title="Compilation jobs",
            columns=list(JOB_COLUMNS),
            rows=[job_row(job) for job in jobs],
        )
        self.table(model, "No sources to compile.")
        if verbose:
            for index, job in enumerate(jobs, start=1):
                self.info(f"job {index} ({job.profile.compiler_version}):")
                for source in job.sources:
                    self.info(f"  {source}")

    def paths(self, title: str, paths: Sequence[str]) -> None:
        self.info(title)
        for path in paths:
            self.info(path)
