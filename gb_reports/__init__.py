"""Commit-keyed gas report storage, diffing and rendering."""

from gb_reports.api import Report, ReportStore, diff_reports, render_report

__all__ = ["Report", "ReportStore", "diff_reports", "render_report"]
