"""Public API surface for gb_reports."""

from gb_reports.diff import diff_reports
from gb_reports.gas_reporter import parse_gas_reporter_output
from gb_reports.models import DeltaKind, GasDelta, GasEntry, Report
from gb_reports.pending import PendingReports, current_commit, report_path_for_commit
from gb_reports.render import render_diff, render_report
from gb_reports.settings import ReportSettings
from gb_reports.store import ReportStore, StoredReport, decode_report, encode_report

__all__ = [
    "DeltaKind",
    "GasDelta",
    "GasEntry",
    "PendingReports",
    "Report",
    "ReportSettings",
    "ReportStore",
    "StoredReport",
    "current_commit",
    "decode_report",
    "diff_reports",
    "encode_report",
    "parse_gas_reporter_output",
    "render_diff",
    "render_report",
    "report_path_for_commit",
]
