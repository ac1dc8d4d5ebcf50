"""Shared helpers for gasbench-lib."""

from gb_common.api import GBError, configure_logging

__all__ = ["configure_logging", "GBError"]
