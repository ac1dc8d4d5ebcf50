"""Source discovery for compilation groups."""

from __future__ import annotations

from pathlib import Path
from typing import List

DEFAULT_SOURCE_SUFFIX = ".sol"


def discover_sources(project_root: Path, sources_dir: str = "contracts", suffix: str = DEFAULT_SOURCE_SUFFIX) -> List[str]:
    """Return project-relative POSIX paths of every source file, sorted."""
    root = project_root / sources_dir
    if not root.exists():
        return []
    return sorted(
        path.relative_to(project_root).as_posix()
        for path in root.rglob(f"*{suffix}")
        if path.is_file()
    )
