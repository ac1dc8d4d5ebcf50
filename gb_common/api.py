"""Public API surface for gb_common."""

from gb_common.errors import (
    ConfigurationError,
    DuplicateCommit,
    GBError,
    InsufficientHistory,
    ReportParseError,
    StoreError,
    UnknownCompilerVersion,
    error_to_payload,
)
from gb_common.logging import configure_logging

__all__ = [
    "configure_logging",
    "ConfigurationError",
    "DuplicateCommit",
    "GBError",
    "InsufficientHistory",
    "ReportParseError",
    "StoreError",
    "UnknownCompilerVersion",
    "error_to_payload",
]
