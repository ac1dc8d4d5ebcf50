"""Stable application-layer API surface."""

from gb_app.commands import (
    COMPARE_REPORTS,
    PRINT_REPORT,
    WRITE_REPORTS,
    Command,
    CommandOutcome,
    ReportContext,
    build_command_table,
    compare_reports,
    print_report,
    run_command,
    write_reports,
)
from gb_app.config_repository import ConfigRepository
from gb_app.project_config import ProjectConfig

__all__ = [
    "COMPARE_REPORTS",
    "PRINT_REPORT",
    "WRITE_REPORTS",
    "Command",
    "CommandOutcome",
    "ConfigRepository",
    "ProjectConfig",
    "ReportContext",
    "build_command_table",
    "compare_reports",
    "print_report",
    "run_command",
    "write_reports",
]
