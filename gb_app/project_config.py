"""Project configuration (build + reports), the single explicit config value."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field

from gb_build.config import BuildConfig, default_build_config
from gb_reports.settings import ReportSettings

YAML_SUFFIXES = {".yaml", ".yml"}


class ProjectConfig(BaseModel):
    """Main configuration, constructed once and passed to every command."""

    model_config = ConfigDict(frozen=True)

    build: BuildConfig = Field(default_factory=default_build_config, description="Compiler profiles and source filters")
    reports: ReportSettings = Field(default_factory=ReportSettings, description="Report store locations")

    def anchored_at(self, base: Path) -> "ProjectConfig":
        """Return a copy whose relative report paths are resolved against ``base``."""
        reports = self.reports.model_copy(
            update={
                "reports_dir": base / self.reports.reports_dir,
                "pending_dir": base / self.reports.pending_dir,
            }
        )
        return self.model_copy(update={"reports": reports})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectConfig":
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, json_str: str) -> "ProjectConfig":
        return cls.model_validate_json(json_str)

    @classmethod
    def load(cls, filepath: Path) -> "ProjectConfig":
        text = filepath.read_text(encoding="utf-8")
        if filepath.suffix.lower() in YAML_SUFFIXES:
            return cls.from_dict(yaml.safe_load(text) or {})
        return cls.from_json(text)

    def save(self, filepath: Path) -> None:
        data = self.model_dump(mode="json")
        if filepath.suffix.lower() in YAML_SUFFIXES:
            filepath.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        else:
            filepath.write_text(json.dumps(data, indent=2), encoding="utf-8")
