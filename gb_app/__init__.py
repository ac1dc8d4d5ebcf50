"""Application layer wiring configuration to the report commands."""
