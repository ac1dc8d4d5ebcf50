"""Gas report data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class GasEntry:
    """Gas usage of one labeled method call or deployment."""

    label: str
    gas_used: int
    call_count: int = 0

    def __post_init__(self) -> None:
        if not self.label:
            raise ValueError("GasEntry: 'label' must be non-empty")
        if self.gas_used < 0 or self.call_count < 0:
            raise ValueError(f"GasEntry {self.label}: gas_used and call_count must be >= 0")


@dataclass(frozen=True)
class Report:
    """Gas benchmark snapshot for one commit. Immutable once written."""

    commit_id: str
    timestamp: datetime
    entries: Tuple[GasEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.commit_id:
            raise ValueError("Report: 'commit_id' must be non-empty")
        entries = tuple(self.entries)
        labels = [entry.label for entry in entries]
        if len(labels) != len(set(labels)):
            raise ValueError(f"Report {self.commit_id}: entry labels must be unique")
        object.__setattr__(self, "entries", entries)
        if self.timestamp.tzinfo is None:
            object.__setattr__(self, "timestamp", self.timestamp.replace(tzinfo=timezone.utc))

    def by_label(self) -> Dict[str, GasEntry]:
        return {entry.label: entry for entry in self.entries}

    def sorted_entries(self) -> Tuple[GasEntry, ...]:
        return tuple(sorted(self.entries, key=lambda entry: entry.label))


class DeltaKind(str, Enum):
    CHANGED = "changed"
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"


@dataclass(frozen=True)
class GasDelta:
    """Difference in gas usage for one label between two reports."""

    label: str
    gas_before: Optional[int]
    gas_after: Optional[int]
    kind: DeltaKind

    @property
    def delta(self) -> Optional[int]:
        if self.gas_before is None or self.gas_after is None:
            return None
        return self.gas_after - self.gas_before

    @property
    def change(self) -> Union[int, str]:
        """Signed gas difference, or ``"added"``/``"removed"``."""
        delta = self.delta
        return self.kind.value if delta is None else delta

    @property
    def percent(self) -> Optional[float]:
        delta = self.delta
        if delta is None or not self.gas_before:
            return None
        return delta * 100.0 / self.gas_before
