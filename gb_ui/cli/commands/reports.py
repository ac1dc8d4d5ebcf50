from __future__ import annotations

from typing import Callable, Dict, Optional

import typer

from gb_app.api import Command
from gb_reports.api import report_path_for_commit
from gb_ui.tables import TableModel
from gb_ui.wiring import UIContext, cli_errors


def create_reports_app(ctx: UIContext) -> typer.Typer:
    """Build the reports Typer app (list/pending-path)."""
    app = typer.Typer(help="Inspect stored gas reports.", no_args_is_help=True)

    @app.command("list")
    def reports_list() -> None:
        """List stored reports, newest first."""
        with cli_errors(ctx):
            store = ctx.report_context.store
            stored = list(reversed(store.index()))
            if not stored:
                ctx.presenter.info(f"No reports found under {store.root}")
                return
            rows = [[item.commit_id, str(item.sequence), item.path.name] for item in stored]
            ctx.presenter.table(
                TableModel(title="Gas reports", columns=["Commit", "Sequence", "File"], rows=rows),
                "No reports.",
            )

    @app.command("pending-path")
    def reports_pending_path(
        commit: Optional[str] = typer.Option(
            None, "--commit", help="Commit id; defaults to the checked-out commit."
        ),
    ) -> None:
        """Print where the gas reporter should write the current run."""
        with cli_errors(ctx):
            path = report_path_for_commit(ctx.config.reports.pending_dir, commit)
            ctx.presenter.info(str(path))

    return app


def _make_task(command: Command, ctx: UIContext) -> Callable[[], None]:
    def _task() -> None:
        with cli_errors(ctx):
            outcome = command.handler(ctx.report_context)
            ctx.presenter.outcome(outcome, only_changed=ctx.config.reports.only_changed)

    _task.__name__ = command.name.replace("-", "_")
    _task.__doc__ = command.help
    return _task


def register_report_tasks(app: typer.Typer, ctx: UIContext, table: Dict[str, Command]) -> None:
    """Register every command of the table as a top-level task."""
    for name, command in table.items():
        app.command(name, help=command.help)(_make_task(command, ctx))
