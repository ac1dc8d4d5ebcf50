"""Compare two gas reports label by label."""

from __future__ import annotations

from typing import List

from gb_reports.models import DeltaKind, GasDelta, Report


def diff_reports(newer: Report, older: Report) -> List[GasDelta]:
    """Return one delta per label found in either report, ordered by label.

    Labels only in ``newer`` are ADDED, labels only in ``older`` are REMOVED.
    """
    after = newer.by_label()
    before = older.by_label()
    deltas: List[GasDelta] = []
    for label in sorted(after.keys() | before.keys()):
        new_entry = after.get(label)
        old_entry = before.get(label)
        if old_entry is None:
            kind = DeltaKind.ADDED
        elif new_entry is None:
            kind = DeltaKind.REMOVED
        elif new_entry.gas_used == old_entry.gas_used:
            kind = DeltaKind.UNCHANGED
        else:
            kind = DeltaKind.CHANGED
        deltas.append(
            GasDelta(
                label=label,
                gas_before=old_entry.gas_used if old_entry else None,
                gas_after=new_entry.gas_used if new_entry else None,
                kind=kind,
            )
        )
    return deltas

