"""Compilation unit resolution.

Pure functions: the effective profile of a source file, and the set of
source files a compilation group hands to the compiler. Overrides match by
exact path, exclusions by path prefix.
"""

from __future__ import annotations

import logging
from typing import AbstractSet, Iterable, List, Optional, Sequence

from gb_common.errors import UnknownCompilerVersion
from gb_build.config import BuildConfig, DefaultProfileSet
from gb_build.models import CompilationJob, CompilationProfile, OverrideRule

logger = logging.getLogger(__name__)


def find_override(path: str, overrides: Sequence[OverrideRule]) -> Optional[OverrideRule]:
    """Return the rule targeting ``path`` exactly; the last registered rule wins."""
    for rule in reversed(overrides):
        if rule.path == path:
            return rule
    return None


def resolve_profile(
    path: str,
    defaults: DefaultProfileSet,
    overrides: Sequence[OverrideRule],
) -> CompilationProfile:
    """Return the effective compilation profile for one source file.

    Without a matching override the first default profile is returned as is.
    With one, its explicit fields replace those of the default profile for the
    override's pinned compiler version (the first default when it pins none).
    """
    rule = find_override(path, overrides)
    if rule is None:
        return defaults.first

    version = rule.profile.compiler_version
    if version is None:
        base = defaults.first
    else:
        base = defaults.for_version(version)
        if base is None:
            raise UnknownCompilerVersion(version, path=path, known_versions=defaults.versions)

    explicit = rule.profile.explicit_fields()
    if not explicit:
        return base
    return base.model_copy(update=explicit)


def is_excluded(path: str, exclusions: AbstractSet[str]) -> bool:
    return any(path.startswith(prefix) for prefix in exclusions)


def resolve_inclusion_set(all_paths: Iterable[str], exclusions: AbstractSet[str]) -> List[str]:
    """Drop paths starting with any excluded prefix, preserving input order."""
    return [path for path in all_paths if not is_excluded(path, exclusions)]


def plan_build(
    config: BuildConfig,
    all_paths: Iterable[str],
    group: Optional[str] = None,
) -> List[CompilationJob]:
    """Group the included sources of a compilation group into compiler jobs.

    Files resolving to the same profile share a job; jobs keep the order in
    which their first file appears.
    """
    config.check()
    included = resolve_inclusion_set(all_paths, config.exclusions_for(group))
    defaults = config.defaults
    buckets: dict[CompilationProfile, List[str]] = {}
    for path in included:
        profile = resolve_profile(path, defaults, config.overrides)
        buckets.setdefault(profile, []).append(path)
    logger.debug(
        "Planned %d compilation job(s) for %d source(s)", len(buckets), len(included)
    )
    return [CompilationJob(profile=profile, sources=sources) for profile, sources in buckets.items()]
