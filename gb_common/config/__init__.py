"""Configuration helpers shared across packages."""

from gb_common.config.env import parse_bool_env

__all__ = ["parse_bool_env"]
