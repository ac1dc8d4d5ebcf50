"""Pending gas reporter output awaiting import into the report store."""

from __future__ import annotations

import logging
import subprocess
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from gb_common.errors import ReportParseError, StoreError
from gb_reports.gas_reporter import parse_gas_reporter_output
from gb_reports.models import Report
from gb_reports.store import ReportStore, validate_commit_id

logger = logging.getLogger(__name__)

PENDING_SUFFIX = ".txt"


def current_commit(cwd: Optional[Path] = None) -> str:
    """Return the full hash of the checked-out commit."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=str(cwd) if cwd else None,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise StoreError("Unable to determine the current git commit", cause=exc) from exc
    return result.stdout.strip()


def report_path_for_commit(pending_dir: Path, commit: Optional[str] = None) -> Path:
    """Path the gas reporter should write the current run's table to."""
    commit_id = validate_commit_id(commit or current_commit())
    return Path(pending_dir) / f"{commit_id}{PENDING_SUFFIX}"


class PendingReports:
    """Gas reporter outputs named ``<commit>.txt`` waiting to be stored."""

    def __init__(self, pending_dir: Path) -> None:
        self.pending_dir = Path(pending_dir)

    def list_pending(self) -> List[Path]:
        """Pending files, oldest modification first."""
        if not self.pending_dir.exists():
            return []
        files = [
            item
            for item in self.pending_dir.iterdir()
            if item.is_file() and item.suffix == PENDING_SUFFIX
        ]
        files.sort(key=lambda item: (item.stat().st_mtime, item.name))
        return files

    def load(self, path: Path) -> Report:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Failed to read pending report {path}", cause=exc) from exc
        try:
            entries = parse_gas_reporter_output(text)
        except ReportParseError as exc:
            raise ReportParseError(
                f"{exc} ({path.name})", context={"path": path}, cause=exc
            ) from exc
        timestamp = datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc)
        return Report(commit_id=path.stem, timestamp=timestamp, entries=tuple(entries))

    def write_pending(self, store: ReportStore) -> List[Report]:
        """Move every pending output into ``store``; stop at the first failure.

        A pending file is removed only after its report was stored.
        """
        written: List[Report] = []
        for path in self.list_pending():
            report = self.load(path)
            store.write(report)
            path.unlink()
            written.append(report)
        if not written:
            logger.info("No pending gas reports under %s", self.pending_dir)
        return written
