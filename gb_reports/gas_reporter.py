"""Parse the gas reporter's plain (no-color) table output."""

from __future__ import annotations

from typing import Dict, List, Optional

from gb_common.errors import ReportParseError
from gb_reports.models import GasEntry

DEPLOYMENT_SUFFIX = " (deployment)"

_CELL_SEPARATOR = "·"
_BORDER_CHARS = "|│"
_SECTION_METHODS = "methods"
_SECTION_DEPLOYMENTS = "deployments"


def _split_row(line: str) -> Optional[List[str]]:
    stripped = line.strip()
    if not stripped or stripped[0] not in _BORDER_CHARS:
        return None
    body = stripped.strip(_BORDER_CHARS)
    return [cell.strip() for cell in body.split(_CELL_SEPARATOR)]


def _to_int(value: str) -> Optional[int]:
    cleaned = value.replace(",", "").strip()
    if not cleaned.isdigit():
        return None
    return int(cleaned)


def _add_entry(entries: Dict[str, GasEntry], entry: GasEntry) -> None:
    if entry.label in entries:
        raise ReportParseError(
            f"Gas reporter output lists {entry.label} more than once",
            context={"label": entry.label},
        )
    entries[entry.label] = entry


def parse_gas_reporter_output(text: str) -> List[GasEntry]:
    """Extract gas entries from a gas reporter table.

    Method rows become ``Contract.method`` entries (average gas, call count).
    Deployment rows become ``Contract (deployment)`` entries with one call.
    Rows without an average (methods never called) are skipped.
    """
    section: Optional[str] = None
    entries: Dict[str, GasEntry] = {}
    for line in text.splitlines():
        cells = _split_row(line)
        if cells is None:
            continue
        title = cells[0].lower()
        if title == _SECTION_METHODS:
            section = _SECTION_METHODS
            continue
        if title == _SECTION_DEPLOYMENTS:
            section = _SECTION_DEPLOYMENTS
            continue
        if title in ("contract", "") or title.startswith("solc version"):
            continue

        if section == _SECTION_METHODS and len(cells) >= 6:
            contract, method, average, calls = cells[0], cells[1], cells[4], cells[5]
            gas = _to_int(average)
            if gas is None:
                continue
            label = f"{contract}.{method}"
            _add_entry(entries, GasEntry(label=label, gas_used=gas, call_count=_to_int(calls) or 0))
        elif section == _SECTION_DEPLOYMENTS and len(cells) >= 4:
            gas = _to_int(cells[3])
            if gas is None:
                continue
            label = f"{cells[0]}{DEPLOYMENT_SUFFIX}"
            _add_entry(entries, GasEntry(label=label, gas_used=gas, call_count=1))

    if section is None and text.strip():
        raise ReportParseError("No gas reporter table found in pending output")
    return list(entries.values())
