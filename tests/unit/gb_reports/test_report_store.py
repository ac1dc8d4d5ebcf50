"""Tests for the commit-keyed report store."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from gb_common.errors import DuplicateCommit, InsufficientHistory, ReportParseError, StoreError
from gb_reports import store as store_module
from gb_reports.api import GasEntry, Report, ReportStore, decode_report, encode_report


pytestmark = pytest.mark.unit_reports


def _report(commit: str, *entries: tuple[str, int], minute: int = 0) -> Report:
    return Report(
        commit_id=commit,
        timestamp=datetime(2024, 1, 1, 12, minute, tzinfo=timezone.utc),
        entries=tuple(GasEntry(label=label, gas_used=gas, call_count=1) for label, gas in entries),
    )


@pytest.fixture
def store(tmp_path: Path) -> ReportStore:
    return ReportStore(tmp_path / "reports")


def test_write_then_load_most_recent_returns_written_report(store: ReportStore) -> None:
    report = _report("a", ("transfer", 21000))
    store.write(report)
    assert store.load_most_recent(1) == [report]


def test_most_recent_is_ordered_by_write_time_not_commit_or_timestamp(store: ReportStore) -> None:
    # Written in this order; commit names and timestamps deliberately disagree.
    first = _report("zzz", ("mint", 1), minute=30)
    second = _report("aaa", ("mint", 2), minute=10)
    third = _report("mmm", ("mint", 3), minute=0)
    for report in (first, second, third):
        store.write(report)

    assert store.load_most_recent(2) == [third, second]
    assert store.load_most_recent(3) == [third, second, first]


def test_filenames_carry_sequence_and_commit(store: ReportStore) -> None:
    path_a = store.write(_report("abc123"))
    path_b = store.write(_report("def456"))
    assert path_a.name == "000001_abc123.jsonl"
    assert path_b.name == "000002_def456.jsonl"
    assert [item.commit_id for item in store.index()] == ["abc123", "def456"]


def test_duplicate_commit_is_rejected_and_store_unchanged(store: ReportStore) -> None:
    original = _report("a", ("transfer", 21000))
    store.write(original)
    with pytest.raises(DuplicateCommit) as excinfo:
        store.write(_report("a", ("transfer", 1)))
    assert excinfo.value.commit_id == "a"
    assert store.count() == 1
    assert store.load_most_recent(1) == [original]


def test_insufficient_history_leaves_store_untouched(store: ReportStore) -> None:
    store.write(_report("a"))
    before = sorted(p.name for p in store.root.iterdir())
    with pytest.raises(InsufficientHistory) as excinfo:
        store.load_most_recent(2)
    assert excinfo.value.needed == 2
    assert excinfo.value.available == 1
    assert sorted(p.name for p in store.root.iterdir()) == before


def test_empty_store_has_no_history(store: ReportStore) -> None:
    assert store.count() == 0
    with pytest.raises(InsufficientHistory):
        store.load_most_recent(1)


def test_load_most_recent_requires_positive_count(store: ReportStore) -> None:
    with pytest.raises(ValueError):
        store.load_most_recent(0)


def test_invalid_commit_id_is_rejected(store: ReportStore) -> None:
    with pytest.raises(StoreError):
        store.write(_report("../escape"))
    assert not store.root.exists() or store.count() == 0


def test_unrelated_files_are_ignored(store: ReportStore) -> None:
    store.root.mkdir(parents=True)
    (store.root / "README.md").write_text("notes")
    (store.root / "000009_tmp.jsonl.partial").write_text("")
    store.write(_report("a"))
    assert [item.commit_id for item in store.index()] == ["a"]


def test_file_format_is_stable() -> None:
    report = _report("b", ("transfer", 23000), ("mint", 50000))
    assert encode_report(report) == (
        '{"commit_id":"b","format":1,"timestamp":"2024-01-01T12:00:00+00:00"}\n'
        '{"call_count":1,"gas_used":50000,"label":"mint"}\n'
        '{"call_count":1,"gas_used":23000,"label":"transfer"}\n'
    )
    decoded = decode_report(encode_report(report))
    assert decoded.commit_id == "b"
    assert decoded.by_label() == report.by_label()


def test_malformed_report_raises_parse_error(store: ReportStore) -> None:
    store.root.mkdir(parents=True)
    (store.root / "000001_bad.jsonl").write_text('{"commit_id": "bad"}\n')
    with pytest.raises(ReportParseError):
        store.load_most_recent(1)


def test_report_rejects_duplicate_labels() -> None:
    with pytest.raises(ValueError):
        _report("a", ("transfer", 1), ("transfer", 2))


def test_store_exposes_diff_and_render(store: ReportStore) -> None:
    older = _report("a", ("transfer", 21000))
    newer = _report("b", ("transfer", 23000), ("mint", 50000))
    store.write(older)
    store.write(newer)
    latest, previous = store.load_most_recent(2)
    assert [(d.label, d.change) for d in store.diff(latest, previous)] == [
        ("mint", "added"),
        ("transfer", 2000),
    ]
    assert store.render_single(latest).startswith("Gas report b ")


def test_failed_write_leaves_no_report_behind(store: ReportStore, monkeypatch: pytest.MonkeyPatch) -> None:
    store.write(_report("a"))
    before = store.index()

    def broken_fsync(fd: int) -> None:
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(store_module.os, "fsync", broken_fsync)
    with pytest.raises(StoreError):
        store.write(_report("b", ("transfer", 21000)))

    assert store.index() == before
    assert sorted(p.name for p in store.root.iterdir()) == ["000001_a.jsonl"]


def test_leftover_temp_file_is_not_a_report(store: ReportStore) -> None:
    store.root.mkdir(parents=True)
    (store.root / ".000001_a.jsonl.tmp").write_text('{"commit_id":"a"')
    assert store.index() == []
    store.write(_report("a"))
    assert store.load_most_recent(1)[0].commit_id == "a"
    assert sorted(p.name for p in store.root.iterdir()) == ["000001_a.jsonl"]


def test_header_commit_must_match_filename(store: ReportStore) -> None:
    path = store.write(_report("a"))
    path.rename(store.root / "000001_b.jsonl")
    with pytest.raises(ReportParseError):
        store.load_most_recent(1)
