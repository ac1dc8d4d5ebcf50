"""Build configuration: default profiles, per-file overrides, exclusions and groups."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from gb_common.errors import ConfigurationError, UnknownCompilerVersion
from gb_build.models import (
    CompilationProfile,
    OptimizerDetails,
    OverrideRule,
    ProfileOverride,
)

logger = logging.getLogger(__name__)

_SOLC_KEYS = ("version", "settings")


def _flatten_solc_entry(data: Any) -> Any:
    """Accept the ``{version, settings}`` standard-JSON shape for a profile."""
    if not isinstance(data, Mapping) or not any(key in data for key in _SOLC_KEYS):
        return data
    flat: Dict[str, Any] = {key: value for key, value in data.items() if key not in _SOLC_KEYS}
    if "version" in data:
        flat["compiler_version"] = data["version"]
    settings = data.get("settings") or {}
    if "viaIR" in settings:
        flat["via_ir"] = settings["viaIR"]
    optimizer = settings.get("optimizer") or {}
    if "enabled" in optimizer:
        flat["optimizer_enabled"] = optimizer["enabled"]
    if "runs" in optimizer:
        flat["optimizer_runs"] = optimizer["runs"]
    if "details" in optimizer:
        flat["optimizer_details"] = optimizer["details"]
    metadata = settings.get("metadata") or {}
    if "bytecodeHash" in metadata:
        flat["metadata_policy"] = metadata["bytecodeHash"]
    selection = settings.get("outputSelection")
    if isinstance(selection, Mapping):
        artifacts = set()
        for per_file in selection.values():
            for kinds in (per_file or {}).values():
                artifacts.update(kinds or [])
        flat["output_artifacts"] = sorted(artifacts)
    return flat


def _normalize_overrides(raw: Any) -> Any:
    if isinstance(raw, Mapping):
        raw = [{"path": path, "profile": profile} for path, profile in raw.items()]
    if not isinstance(raw, list):
        return raw
    rules = []
    for item in raw:
        if isinstance(item, Mapping) and "profile" not in item:
            body = {key: value for key, value in item.items() if key != "path"}
            item = {"path": item.get("path"), "profile": body}
        if isinstance(item, Mapping):
            item = {**item, "profile": _flatten_solc_entry(item.get("profile") or {})}
        rules.append(item)
    return rules


@dataclass(frozen=True)
class DefaultProfileSet:
    """Ordered, non-empty default profiles, unique by compiler version."""

    profiles: Tuple[CompilationProfile, ...]

    def __post_init__(self) -> None:
        if not self.profiles:
            raise ConfigurationError("At least one default compiler profile is required")
        versions = self.versions
        if len(versions) != len(set(versions)):
            raise ConfigurationError(
                "Default compiler profiles must have unique versions",
                context={"versions": versions},
            )

    @classmethod
    def of(cls, *profiles: CompilationProfile) -> "DefaultProfileSet":
        return cls(tuple(profiles))

    @property
    def first(self) -> CompilationProfile:
        return self.profiles[0]

    @property
    def versions(self) -> Tuple[str, ...]:
        return tuple(profile.compiler_version for profile in self.profiles)

    def for_version(self, version: str) -> Optional[CompilationProfile]:
        for profile in self.profiles:
            if profile.compiler_version == version:
                return profile
        return None

    def __getitem__(self, index: int) -> CompilationProfile:
        return self.profiles[index]

    def __len__(self) -> int:
        return len(self.profiles)


class GroupConfig(BaseModel):
    """Named compilation group with its own extra exclusions."""

    model_config = ConfigDict(frozen=True)

    exclude: FrozenSet[str] = Field(default_factory=frozenset, description="Extra excluded path prefixes")


class BuildConfig(BaseModel):
    """Immutable build configuration, loaded once per invocation."""

    model_config = ConfigDict(frozen=True)

    compilers: Tuple[CompilationProfile, ...] = Field(description="Default profiles; the first is the fallback")
    overrides: Tuple[OverrideRule, ...] = Field(default=(), description="Per-file profile overrides")
    exclusions: FrozenSet[str] = Field(default_factory=frozenset, description="Path prefixes never compiled")
    groups: Dict[str, GroupConfig] = Field(default_factory=dict, description="Named compilation groups")

    @field_validator("compilers", mode="before")
    @classmethod
    def _accept_solc_compilers(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_flatten_solc_entry(item) for item in value]
        return value

    @field_validator("overrides", mode="before")
    @classmethod
    def _accept_override_map(cls, value: Any) -> Any:
        return _normalize_overrides(value)

    @model_validator(mode="after")
    def _validate_compilers(self) -> "BuildConfig":
        if not self.compilers:
            raise ValueError("BuildConfig: at least one compiler profile is required")
        versions = [profile.compiler_version for profile in self.compilers]
        if len(versions) != len(set(versions)):
            raise ValueError("BuildConfig: compiler versions must be unique")
        seen: set[str] = set()
        for rule in self.overrides:
            if rule.path in seen:
                logger.warning("Multiple overrides target %s; the last one wins", rule.path)
            seen.add(rule.path)
        return self

    @property
    def defaults(self) -> DefaultProfileSet:
        return DefaultProfileSet(self.compilers)

    def check(self) -> None:
        """Fail fast on overrides pinning a compiler version with no default."""
        known = self.defaults.versions
        for rule in self.overrides:
            version = rule.profile.compiler_version
            if version is not None and version not in known:
                raise UnknownCompilerVersion(version, path=rule.path, known_versions=known)

    def exclusions_for(self, group: Optional[str] = None) -> FrozenSet[str]:
        """Return the exclusion prefixes that apply to a compilation group."""
        if group is None:
            return self.exclusions
        if group not in self.groups:
            raise ConfigurationError(
                f"Unknown compilation group {group!r}",
                context={"group": group, "known_groups": sorted(self.groups)},
            )
        return self.exclusions | self.groups[group].exclude

    def with_optimizer_details(self, details: OptimizerDetails) -> "BuildConfig":
        """Return a copy whose default profiles use the given optimizer details."""
        compilers = tuple(
            profile.model_copy(update={"optimizer_details": details}) for profile in self.compilers
        )
        return self.model_copy(update={"compilers": compilers})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BuildConfig":
        return cls.model_validate(data)


DEFAULT_OVERRIDES: Tuple[Tuple[str, str], ...] = (
    ("contracts/conduit/Conduit.sol", "0.8.14"),
    ("contracts/conduit/ConduitController.sol", "0.8.14"),
    ("contracts/helper/TransferHelper.sol", "0.8.14"),
    ("contracts/zone/SignedZone.sol", "0.8.19"),
    ("contracts/zone/SignedZoneCaptain.sol", "0.8.19"),
    ("contracts/zone/OpenSeaSignedZoneCaptain.sol", "0.8.19"),
    ("contracts/zone/SignedZoneController.sol", "0.8.19"),
)

OVERRIDE_OPTIMIZER_RUNS = 1_000_000


def default_build_config() -> BuildConfig:
    """Defaults used when no project configuration file is present.

    0.8.14 is only pinned by overrides; it is never the fallback profile.
    """
    artifacts = frozenset({"evm.assembly", "irOptimized", "devdoc"})

    def profile(version: str, runs: int) -> CompilationProfile:
        return CompilationProfile(
            compiler_version=version,
            optimizer_enabled=True,
            optimizer_runs=runs,
            via_ir=True,
            output_artifacts=artifacts,
            metadata_policy="none",
        )

    overrides = tuple(
        OverrideRule(
            path=path,
            profile=ProfileOverride(
                compiler_version=version,
                optimizer_enabled=True,
                optimizer_runs=OVERRIDE_OPTIMIZER_RUNS,
                via_ir=True,
            ),
        )
        for path, version in DEFAULT_OVERRIDES
    )
    return BuildConfig(
        compilers=(
            profile("0.8.17", 4_294_967_295),
            profile("0.8.19", 9_999_999),
            profile("0.8.14", OVERRIDE_OPTIMIZER_RUNS),
        ),
        overrides=overrides,
        exclusions=frozenset({"contracts/reference/"}),
    )
