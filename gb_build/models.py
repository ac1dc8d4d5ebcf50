"""Compilation profile models (compiler version + optimizer settings)."""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

MAX_OPTIMIZER_RUNS = 2**32 - 1

_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")

DEFAULT_OUTPUT_ARTIFACTS: FrozenSet[str] = frozenset(
    {
        "abi",
        "evm.bytecode",
        "evm.deployedBytecode",
        "evm.methodIdentifiers",
        "metadata",
    }
)

NO_SPECIALIZER_STEPS = (
    "dhfoDgvulfnTUtnIf[xa[r]EscLMcCTUtTOntnfDIulLculVcul [j]Tpeulxa[rul]xa[r]"
    "cLgvifCTUca[r]LSsTOtfDnca[r]Iulc]jmul[jul] VcTOcul jmul"
)


def _check_semver(value: str) -> str:
    value = value.strip()
    if not _SEMVER_RE.match(value):
        raise ValueError(f"compiler version must look like MAJOR.MINOR.PATCH, got {value!r}")
    return value


class MetadataPolicy(str, Enum):
    """Hash appended to the bytecode metadata (solc ``bytecodeHash``)."""

    IPFS = "ipfs"
    BZZR1 = "bzzr1"
    NONE = "none"


class YulDetails(BaseModel):
    """Yul optimizer tuning."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    stack_allocation: bool = Field(default=True, description="Try to free stack slots early")
    optimizer_steps: str = Field(default=NO_SPECIALIZER_STEPS, description="Yul optimizer step sequence")


class OptimizerDetails(BaseModel):
    """Fine-grained optimizer component switches."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    peephole: bool = True
    inliner: bool = True
    jumpdest_remover: bool = True
    order_literals: bool = True
    deduplicate: bool = True
    cse: bool = True
    constant_optimizer: bool = True
    yul_details: YulDetails = Field(default_factory=YulDetails)

    def to_solc(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class CompilationProfile(BaseModel):
    """Effective compiler version and optimizer settings for a compilation unit.

    ``optimizer_runs`` only matters when ``optimizer_enabled`` is True.
    """

    model_config = ConfigDict(frozen=True)

    compiler_version: str = Field(description="Semantic version of the compiler")
    optimizer_enabled: bool = Field(default=False, description="Enable the bytecode optimizer")
    optimizer_runs: int = Field(
        default=200,
        ge=0,
        le=MAX_OPTIMIZER_RUNS,
        description="Expected number of executions per opcode over the contract lifetime",
    )
    via_ir: bool = Field(default=False, description="Compile through the intermediate representation")
    output_artifacts: FrozenSet[str] = Field(
        default=DEFAULT_OUTPUT_ARTIFACTS,
        description="Artifact kinds requested from the compiler",
    )
    metadata_policy: MetadataPolicy = Field(default=MetadataPolicy.IPFS, description="Bytecode metadata hash")
    optimizer_details: Optional[OptimizerDetails] = Field(
        default=None, description="Optimizer component switches; compiler defaults when unset"
    )

    @field_validator("compiler_version")
    @classmethod
    def _validate_version(cls, value: str) -> str:
        return _check_semver(value)

    def to_solc_settings(self) -> Dict[str, Any]:
        """Render the standard-JSON ``settings`` block for this profile."""
        optimizer: Dict[str, Any] = {"enabled": self.optimizer_enabled, "runs": self.optimizer_runs}
        if self.optimizer_details is not None:
            optimizer["details"] = self.optimizer_details.to_solc()
        return {
            "viaIR": self.via_ir,
            "optimizer": optimizer,
            "metadata": {"bytecodeHash": self.metadata_policy.value},
            "outputSelection": {"*": {"*": sorted(self.output_artifacts)}},
        }


class ProfileOverride(BaseModel):
    """Partial profile: a field left as None inherits from the default profile."""

    model_config = ConfigDict(frozen=True)

    compiler_version: Optional[str] = None
    optimizer_enabled: Optional[bool] = None
    optimizer_runs: Optional[int] = Field(default=None, ge=0, le=MAX_OPTIMIZER_RUNS)
    via_ir: Optional[bool] = None
    output_artifacts: Optional[FrozenSet[str]] = None
    metadata_policy: Optional[MetadataPolicy] = None
    optimizer_details: Optional[OptimizerDetails] = None

    @field_validator("compiler_version")
    @classmethod
    def _validate_version(cls, value: Optional[str]) -> Optional[str]:
        return None if value is None else _check_semver(value)

    def explicit_fields(self) -> Dict[str, Any]:
        """Return the fields this override sets, keyed by profile field name."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }


class OverrideRule(BaseModel):
    """Profile override for one source path (exact match)."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Source path the override applies to")
    profile: ProfileOverride = Field(default_factory=ProfileOverride)

    @field_validator("path")
    @classmethod
    def _validate_path(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("OverrideRule: 'path' must be non-empty")
        return value


class CompilationJob(BaseModel):
    """Source files that share one effective profile."""

    model_config = ConfigDict(frozen=True)

    profile: CompilationProfile
    sources: List[str] = Field(default_factory=list)
