"""File-system repository for project configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from gb_app.project_config import ProjectConfig
from gb_build.models import OptimizerDetails
from gb_common.config.env import parse_bool_env
from gb_common.errors import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "GB_CONFIG_PATH"
NO_SPECIALIZER_ENV = "GB_NO_SPECIALIZER"
DEFAULT_CONFIG_NAMES = ("gasbench.yaml", "gasbench.yml", "gasbench.json")


class ConfigRepository:
    """Resolve and load the project configuration file."""

    def __init__(self, project_root: Optional[Path] = None) -> None:
        self.project_root = (project_root or Path.cwd()).resolve()

    def resolve_config_path(self, config_path: Optional[Path]) -> Optional[Path]:
        """Explicit path, then ``GB_CONFIG_PATH``, then a file in the project root."""
        if config_path is not None:
            return Path(config_path).expanduser()

        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path).expanduser()

        for name in DEFAULT_CONFIG_NAMES:
            candidate = self.project_root / name
            if candidate.exists():
                return candidate
        return None

    def read_project_config(self, path: Path) -> ProjectConfig:
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}", context={"path": path})
        try:
            return ProjectConfig.load(path)
        except (OSError, yaml.YAMLError, ValidationError) as exc:
            raise ConfigurationError(
                f"Invalid config file {path}: {exc}",
                context={"path": path},
                cause=exc,
            ) from exc

    def load(self, config_path: Optional[Path] = None) -> ProjectConfig:
        """Load, anchor and validate the project configuration.

        Overrides pinning an unknown compiler version fail here, before any
        command runs.
        """
        path = self.resolve_config_path(config_path)
        if path is None:
            logger.debug("No config file found; using built-in defaults")
            config = ProjectConfig()
            base = self.project_root
        else:
            logger.debug("Loading config from %s", path)
            config = self.read_project_config(path)
            base = path.resolve().parent

        if parse_bool_env(os.environ.get(NO_SPECIALIZER_ENV)):
            logger.info("%s set; using detailed optimizer steps", NO_SPECIALIZER_ENV)
            config = config.model_copy(
                update={"build": config.build.with_optimizer_details(OptimizerDetails())}
            )

        config.build.check()
        return config.anchored_at(base)
