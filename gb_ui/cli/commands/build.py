from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from gb_build.api import discover_sources, plan_build, resolve_inclusion_set, resolve_profile
from gb_ui.wiring import UIContext, cli_errors


def create_build_app(ctx: UIContext) -> typer.Typer:
    """Build the build Typer app (resolve/sources/plan/check)."""
    app = typer.Typer(help="Inspect compiler profiles and compilation units.", no_args_is_help=True)

    @app.command("resolve")
    def build_resolve(
        paths: List[str] = typer.Argument(..., help="Source paths, relative to the project root."),
        solc_json: bool = typer.Option(
            False,
            "--json",
            help="Print the compiler standard-JSON settings instead of a table.",
        ),
    ) -> None:
        """Show the effective compiler profile for each source file."""
        with cli_errors(ctx):
            build = ctx.config.build
            defaults = build.defaults
            resolved = [(path, resolve_profile(path, defaults, build.overrides)) for path in paths]
            if solc_json:
                ctx.presenter.solc_settings(resolved)
            else:
                ctx.presenter.profiles(resolved)

    @app.command("sources")
    def build_sources(
        root: Path = typer.Option(Path("."), "--root", "-r", help="Project root directory."),
        sources_dir: str = typer.Option("contracts", "--sources", "-s", help="Source directory under the root."),
        group: Optional[str] = typer.Option(None, "--group", "-g", help="Compilation group to filter for."),
    ) -> None:
        """List the source files a compilation group hands to the compiler."""
        with cli_errors(ctx):
            all_paths = discover_sources(root, sources_dir)
            included = resolve_inclusion_set(all_paths, ctx.config.build.exclusions_for(group))
            ctx.presenter.paths(
                f"{len(included)} of {len(all_paths)} source(s) included", included
            )

    @app.command("plan")
    def build_plan(
        root: Path = typer.Option(Path("."), "--root", "-r", help="Project root directory."),
        sources_dir: str = typer.Option("contracts", "--sources", "-s", help="Source directory under the root."),
        group: Optional[str] = typer.Option(None, "--group", "-g", help="Compilation group to plan."),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="List the sources of every job."),
    ) -> None:
        """Group included sources into compiler jobs by effective profile."""
        with cli_errors(ctx):
            jobs = plan_build(ctx.config.build, discover_sources(root, sources_dir), group)
            ctx.presenter.jobs(jobs, verbose=verbose)

    @app.command("check")
    def build_check() -> None:
        """Validate the build configuration."""
        with cli_errors(ctx):
            build = ctx.config.build
            build.check()
            ctx.presenter.info(
                f"Build configuration OK: {len(build.compilers)} compiler(s), "
                f"{len(build.overrides)} override(s), {len(build.exclusions)} exclusion(s)"
            )

    return app
