"""Public API surface for gb_build."""

from gb_build.config import BuildConfig, DefaultProfileSet, GroupConfig, default_build_config
from gb_build.models import (
    CompilationJob,
    CompilationProfile,
    MetadataPolicy,
    OptimizerDetails,
    OverrideRule,
    ProfileOverride,
    YulDetails,
)
from gb_build.resolver import find_override, plan_build, resolve_inclusion_set, resolve_profile
from gb_build.sources import discover_sources

__all__ = [
    "BuildConfig",
    "CompilationJob",
    "CompilationProfile",
    "DefaultProfileSet",
    "GroupConfig",
    "MetadataPolicy",
    "OptimizerDetails",
    "OverrideRule",
    "ProfileOverride",
    "YulDetails",
    "default_build_config",
    "discover_sources",
    "find_override",
    "plan_build",
    "resolve_inclusion_set",
    "resolve_profile",
]
