"""
Command-line interface for gasbench-lib.

Exposes compiler profile resolution and the gas report tasks
(write-reports, compare-reports, print-report).
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import typer

from gb_app.api import Command, build_command_table
from gb_common.api import configure_logging
from gb_ui.cli.commands.build import create_build_app
from gb_ui.cli.commands.config import create_config_app
from gb_ui.cli.commands.reports import create_reports_app, register_report_tasks
from gb_ui.wiring import UIContext


def create_app(ctx: UIContext, table: Dict[str, Command]) -> typer.Typer:
    """Assemble the Typer app around an explicit command table."""
    app = typer.Typer(help="Resolve contract compiler profiles and track gas reports.", no_args_is_help=True)

    @app.callback(invoke_without_command=True)
    def entry(
        typer_ctx: typer.Context,
        config: Optional[Path] = typer.Option(
            None,
            "--config",
            "-c",
            help="Project config file (YAML or JSON).",
        ),
        plain: bool = typer.Option(
            False,
            "--plain",
            help="Print plain text instead of tables (stable for CI logs).",
        ),
        debug: bool = typer.Option(False, "--debug", help="Enable debug logging."),
    ) -> None:
        """Global options shared by every command."""
        configure_logging(debug=debug, force=True)
        ctx.reset(config_path=config, plain=plain)
        if typer_ctx.invoked_subcommand is None:
            typer.echo(typer_ctx.get_help())
            raise typer.Exit()

    app.add_typer(create_build_app(ctx), name="build")
    app.add_typer(create_config_app(ctx), name="config")
    app.add_typer(create_reports_app(ctx), name="reports")
    register_report_tasks(app, ctx, table)
    return app


ctx_store = UIContext()
app = create_app(ctx_store, build_command_table())


def main() -> None:
    """Console script entrypoint (Typer app)."""
    app()


if __name__ == "__main__":
    main()
