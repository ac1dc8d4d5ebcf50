"""Shared error taxonomy for gasbench-lib."""

from __future__ import annotations

from typing import Any, Mapping


def _normalize_context_value(value: Any) -> Any:
    if isinstance(value, Mapping):
        return normalize_context(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value) if isinstance(value, (set, frozenset)) else value
        return [_normalize_context_value(item) for item in items]
    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    return str(value)


def normalize_context(context: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of an error context mapping."""
    return {key: _normalize_context_value(val) for key, val in context.items()}


class GBError(Exception):
    """Base error type for typed failure handling."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = normalize_context(context or {})
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.error_type, "message": str(self), "context": self.context}


class ConfigurationError(GBError):
    """Failure due to invalid build or project configuration."""


class UnknownCompilerVersion(ConfigurationError):
    """An override pins a compiler version that no default profile declares."""

    def __init__(
        self,
        version: str,
        *,
        path: str | None = None,
        known_versions: tuple[str, ...] = (),
    ) -> None:
        where = f" (override for {path})" if path else ""
        known = ", ".join(known_versions) or "none"
        super().__init__(
            f"Unknown compiler version {version}{where}; configured versions: {known}",
            context={"version": version, "path": path, "known_versions": known_versions},
        )
        self.version = version
        self.path = path


class StoreError(GBError):
    """Failure reading or writing the report store."""


class DuplicateCommit(StoreError):
    """A report for the commit already exists and would be overwritten."""

    def __init__(self, commit_id: str, *, existing: str | None = None) -> None:
        super().__init__(
            f"A report for commit {commit_id} already exists",
            context={"commit_id": commit_id, "existing": existing},
        )
        self.commit_id = commit_id


class InsufficientHistory(StoreError):
    """Fewer reports are stored than an operation needs."""

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(
            f"Need {needed} report(s) but only {available} available",
            context={"needed": needed, "available": available},
        )
        self.needed = needed
        self.available = available


class ReportParseError(GBError):
    """Failure parsing a stored report or pending gas reporter output."""


def error_to_payload(error: GBError) -> dict[str, Any]:
    """Convert a GBError to a machine-readable payload."""
    return {
        "error_type": error.error_type,
        "error": str(error),
        "error_context": error.context,
    }
