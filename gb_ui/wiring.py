from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console

from gb_app.api import ConfigRepository, ProjectConfig, ReportContext
from gb_common.errors import GBError, error_to_payload
from gb_ui.presenters import Presenter

logger = logging.getLogger(__name__)


@dataclass
class UIContext:
    """Container for CLI services and state, initialized lazily."""

    config_path: Optional[Path] = None
    plain: bool = False

    _console: Optional[Console] = None
    _repository: Optional[ConfigRepository] = None
    _config: Optional[ProjectConfig] = None

    @property
    def console(self) -> Console:
        if self._console is None:
            self._console = Console()
        return self._console

    @console.setter
    def console(self, value: Console) -> None:
        self._console = value

    @property
    def repository(self) -> ConfigRepository:
        if self._repository is None:
            self._repository = ConfigRepository()
        return self._repository

    @repository.setter
    def repository(self, value: ConfigRepository) -> None:
        self._repository = value

    @property
    def config(self) -> ProjectConfig:
        if self._config is None:
            self._config = self.repository.load(self.config_path)
        return self._config

    @config.setter
    def config(self, value: ProjectConfig) -> None:
        self._config = value

    @property
    def presenter(self) -> Presenter:
        return Presenter(self.console, plain=self.plain)

    @property
    def report_context(self) -> ReportContext:
        return ReportContext.from_settings(self.config.reports)

    def reset(self, *, config_path: Optional[Path], plain: bool) -> None:
        """Start a fresh invocation: forget any previously loaded config."""
        self.config_path = config_path
        self.plain = plain
        self._config = None
        self._repository = None


@contextmanager
def cli_errors(ctx: UIContext) -> Iterator[None]:
    """Abort the command with exit code 1 on a typed error."""
    try:
        yield
    except GBError as exc:
        logger.debug("Command failed: %s", json.dumps(error_to_payload(exc), sort_keys=True))
        ctx.presenter.error(str(exc))
        raise typer.Exit(1) from exc
