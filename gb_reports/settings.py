"""Report storage settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class ReportSettings(BaseModel):
    """Where reports live and where the gas reporter drops pending output."""

    model_config = ConfigDict(frozen=True)

    reports_dir: Path = Field(default=Path("reports"), description="Directory holding stored reports")
    pending_dir: Path = Field(
        default=Path("reports/.pending"), description="Directory the gas reporter writes to"
    )
    only_changed: bool = Field(default=False, description="Hide unchanged labels when comparing reports")
