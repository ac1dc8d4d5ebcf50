"""Tests for project config resolution and loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gb_app.api import ConfigRepository, ProjectConfig
from gb_build.models import NO_SPECIALIZER_STEPS
from gb_common.errors import ConfigurationError, UnknownCompilerVersion


pytestmark = pytest.mark.unit_app

YAML_CONFIG = """\
build:
  compilers:
    - version: 0.8.17
      settings:
        viaIR: true
        optimizer: {enabled: true, runs: 4294967295}
    - version: 0.8.14
      settings:
        optimizer: {enabled: true, runs: 200}
  overrides:
    contracts/conduit/Conduit.sol:
      version: 0.8.14
      settings:
        optimizer: {runs: 1000000}
  exclusions:
    - contracts/reference/
reports:
  reports_dir: gas
  pending_dir: gas/.pending
"""


def test_defaults_when_no_config_file(tmp_path: Path) -> None:
    config = ConfigRepository(tmp_path).load()
    assert [p.compiler_version for p in config.build.compilers] == ["0.8.17", "0.8.19", "0.8.14"]
    assert config.reports.reports_dir == tmp_path.resolve() / "reports"


def test_loads_yaml_from_project_root(tmp_path: Path) -> None:
    (tmp_path / "gasbench.yaml").write_text(YAML_CONFIG)
    config = ConfigRepository(tmp_path).load()

    assert config.build.compilers[1].compiler_version == "0.8.14"
    assert config.build.overrides[0].profile.optimizer_runs == 1_000_000
    assert config.reports.reports_dir == tmp_path.resolve() / "gas"
    assert config.reports.pending_dir == tmp_path.resolve() / "gas" / ".pending"


def test_explicit_path_wins_over_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    explicit = tmp_path / "explicit.json"
    ProjectConfig().save(explicit)
    other = tmp_path / "other" / "gasbench.yaml"
    other.parent.mkdir()
    other.write_text(YAML_CONFIG)
    monkeypatch.setenv("GB_CONFIG_PATH", str(other))

    repo = ConfigRepository(tmp_path)
    assert repo.resolve_config_path(explicit) == explicit
    assert repo.resolve_config_path(None) == other
    assert repo.load().reports.reports_dir == other.parent.resolve() / "gas"


def test_saved_config_round_trips(tmp_path: Path) -> None:
    source = tmp_path / "gasbench.yaml"
    source.write_text(YAML_CONFIG)
    loaded = ProjectConfig.load(source)
    target = tmp_path / "copy.json"
    loaded.save(target)
    assert json.loads(target.read_text())["build"]["compilers"][0]["compiler_version"] == "0.8.17"
    assert ProjectConfig.load(target).model_dump() == loaded.model_dump()


def test_missing_explicit_file_is_configuration_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        ConfigRepository(tmp_path).load(tmp_path / "absent.yaml")


def test_invalid_file_is_configuration_error(tmp_path: Path) -> None:
    path = tmp_path / "gasbench.yaml"
    path.write_text("build:\n  compilers: []\n")
    with pytest.raises(ConfigurationError) as excinfo:
        ConfigRepository(tmp_path).load()
    assert excinfo.value.context["path"] == str(path)


def test_unknown_override_version_fails_at_load(tmp_path: Path) -> None:
    path = tmp_path / "gasbench.yaml"
    path.write_text(
        "build:\n"
        "  compilers:\n"
        "    - compiler_version: 0.8.17\n"
        "  overrides:\n"
        "    contracts/A.sol: {compiler_version: 0.8.14}\n"
    )
    with pytest.raises(UnknownCompilerVersion):
        ConfigRepository(tmp_path).load()


def test_no_specializer_env_sets_optimizer_details(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GB_NO_SPECIALIZER", "true")
    config = ConfigRepository(tmp_path).load()
    for profile in config.build.compilers:
        details = profile.to_solc_settings()["optimizer"]["details"]
        assert details["yulDetails"]["optimizerSteps"] == NO_SPECIALIZER_STEPS


def test_documented_example_config_loads(tmp_path: Path) -> None:
    path = tmp_path / "gasbench.yaml"
    path.write_text(
        "build:\n"
        "  compilers:\n"
        '    - {compiler_version: "0.8.17", optimizer_runs: 4294967295}\n'
        '    - {compiler_version: "0.8.14", optimizer_runs: 200}\n'
        "  overrides:\n"
        '    contracts/conduit/Conduit.sol: {compiler_version: "0.8.14", optimizer_runs: 1000000}\n'
        '  exclusions: ["contracts/reference/"]\n'
        "reports:\n"
        "  reports_dir: reports\n"
        "  pending_dir: reports/.pending\n"
    )
    config = ConfigRepository(tmp_path).load()
    assert config.build.defaults.versions == ("0.8.17", "0.8.14")
    assert config.build.overrides[0].profile.optimizer_runs == 1_000_000
    assert config.reports.pending_dir == tmp_path.resolve() / "reports" / ".pending"
