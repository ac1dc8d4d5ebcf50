"""Append-only, commit-keyed report store.

Each report is one JSONL file named ``{sequence:06d}_{commit_id}.jsonl``.
The sequence prefix totally orders reports by write time, so "most recent"
never needs the file contents. The first line is a header record, then one
record per gas entry in label order.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

from gb_common.errors import DuplicateCommit, InsufficientHistory, ReportParseError, StoreError
from gb_reports.diff import diff_reports
from gb_reports.models import GasDelta, GasEntry, Report
from gb_reports.render import render_report

logger = logging.getLogger(__name__)

REPORT_SUFFIX = ".jsonl"
REPORT_FORMAT_VERSION = 1
SEQUENCE_WIDTH = 6

COMMIT_ID_RE = re.compile(r"^[A-Za-z0-9._-]+$")
_FILENAME_RE = re.compile(r"^(?P<sequence>\d+)_(?P<commit>[A-Za-z0-9._-]+)\.jsonl$")


def _dump_line(record: Dict[str, Any]) -> str:
    return json.dumps(record, sort_keys=True, separators=(",", ":"))


def encode_report(report: Report) -> str:
    """Serialize a report to its on-disk text form."""
    lines = [
        _dump_line(
            {
                "commit_id": report.commit_id,
                "format": REPORT_FORMAT_VERSION,
                "timestamp": report.timestamp.isoformat(),
            }
        )
    ]
    for entry in report.sorted_entries():
        lines.append(
            _dump_line(
                {
                    "call_count": entry.call_count,
                    "gas_used": entry.gas_used,
                    "label": entry.label,
                }
            )
        )
    return "\n".join(lines) + "\n"


def decode_report(text: str, *, source: str = "<memory>") -> Report:
    """Parse the on-disk text form of a report."""
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        raise ReportParseError(f"Empty report file {source}", context={"source": source})
    try:
        header = json.loads(lines[0])
        entries = tuple(
            GasEntry(
                label=record["label"],
                gas_used=int(record["gas_used"]),
                call_count=int(record.get("call_count", 0)),
            )
            for record in map(json.loads, lines[1:])
        )
        return Report(
            commit_id=header["commit_id"],
            timestamp=datetime.fromisoformat(header["timestamp"]),
            entries=entries,
        )
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ReportParseError(
            f"Malformed report file {source}: {exc}",
            context={"source": source},
            cause=exc,
        ) from exc


@dataclass(frozen=True)
class StoredReport:
    """Location of one stored report, known from its filename alone."""

    sequence: int
    commit_id: str
    path: Path


def validate_commit_id(commit_id: str) -> str:
    if not COMMIT_ID_RE.match(commit_id or ""):
        raise StoreError(
            f"Invalid commit id {commit_id!r}; expected [A-Za-z0-9._-]+",
            context={"commit_id": commit_id},
        )
    return commit_id


class ReportStore:
    """File-backed append log of gas reports, ordered by write time."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def index(self) -> List[StoredReport]:
        """Return stored reports oldest first."""
        if not self.root.exists():
            return []
        stored: List[StoredReport] = []
        for item in self.root.iterdir():
            match = _FILENAME_RE.match(item.name)
            if not match or not item.is_file():
                continue
            stored.append(
                StoredReport(
                    sequence=int(match.group("sequence")),
                    commit_id=match.group("commit"),
                    path=item,
                )
            )
        stored.sort(key=lambda item: (item.sequence, item.commit_id))
        return stored

    def count(self) -> int:
        return len(self.index())

    def path_for(self, sequence: int, commit_id: str) -> Path:
        return self.root / f"{sequence:0{SEQUENCE_WIDTH}d}_{commit_id}{REPORT_SUFFIX}"

    def write(self, report: Report) -> Path:
        """Append ``report`` as the newest entry; refuse to replace a commit's report."""
        validate_commit_id(report.commit_id)
        stored = self.index()
        for existing in stored:
            if existing.commit_id == report.commit_id:
                raise DuplicateCommit(report.commit_id, existing=str(existing.path))

        sequence = (stored[-1].sequence + 1) if stored else 1
        target = self.path_for(sequence, report.commit_id)
        payload = encode_report(report)
        self.root.mkdir(parents=True, exist_ok=True)
        tmp_path = self.root / f".{target.name}.tmp"
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            # Hard link publishes the complete file and refuses to replace one.
            target.hardlink_to(tmp_path)
        except FileExistsError as exc:
            raise StoreError(
                f"Report file {target.name} already exists",
                context={"path": target},
                cause=exc,
            ) from exc
        except OSError as exc:
            raise StoreError(
                f"Failed to write report for commit {report.commit_id}",
                context={"path": target},
                cause=exc,
            ) from exc
        finally:
            tmp_path.unlink(missing_ok=True)
        logger.info("Wrote gas report for %s to %s", report.commit_id, target)
        return target

    def load(self, stored: StoredReport) -> Report:
        try:
            text = stored.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StoreError(
                f"Failed to read report {stored.path}",
                context={"path": stored.path},
                cause=exc,
            ) from exc
        report = decode_report(text, source=str(stored.path))
        if report.commit_id != stored.commit_id:
            raise ReportParseError(
                f"Report file {stored.path.name} holds commit {report.commit_id}",
                context={"path": stored.path, "commit_id": report.commit_id},
            )
        return report

    def load_most_recent(self, n: int) -> List[Report]:
        """Return exactly ``n`` reports, newest first."""
        if n < 1:
            raise ValueError("load_most_recent: n must be a positive integer")
        stored = self.index()
        if len(stored) < n:
            raise InsufficientHistory(needed=n, available=len(stored))
        return [self.load(item) for item in reversed(stored[-n:])]

    @staticmethod
    def diff(newer: Report, older: Report) -> List[GasDelta]:
        return diff_reports(newer, older)

    @staticmethod
    def render_single(report: Report) -> str:
        return render_report(report)
