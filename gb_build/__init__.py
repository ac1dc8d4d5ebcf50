"""Compilation unit resolution for multi-compiler contract builds."""

from gb_build.api import BuildConfig, CompilationProfile, resolve_inclusion_set, resolve_profile

__all__ = ["BuildConfig", "CompilationProfile", "resolve_inclusion_set", "resolve_profile"]
