from __future__ import annotations

from pathlib import Path

import typer

from gb_app.api import ProjectConfig
from gb_common.errors import ConfigurationError
from gb_ui.wiring import UIContext, cli_errors


def create_config_app(ctx: UIContext) -> typer.Typer:
    """Build the config Typer app (init)."""
    app = typer.Typer(help="Manage the project configuration file.", no_args_is_help=True)

    @app.command("init")
    def config_init(
        path: Path = typer.Option(
            Path("gasbench.yaml"),
            "--path",
            "-p",
            help="Where to write the config (.yaml, .yml or .json).",
        ),
        force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file."),
    ) -> None:
        """Write the built-in defaults to a config file."""
        with cli_errors(ctx):
            target = path.expanduser()
            if target.exists() and not force:
                raise ConfigurationError(
                    f"Config file already exists: {target} (use --force to overwrite)",
                    context={"path": target},
                )
            target.parent.mkdir(parents=True, exist_ok=True)
            ProjectConfig().save(target)
            ctx.presenter.info(f"Wrote default configuration to {target}")

    return app
