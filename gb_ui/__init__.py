"""Terminal interface for gasbench-lib."""
