"""
Shared fixtures: a throwaway project with an empty .planning/ tree.
"""

import json
from pathlib import Path

import pytest


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root with .planning/ created."""
    (tmp_path / ".planning").mkdir()
    return tmp_path


@pytest.fixture
def write_config(project: Path):
    """Write a dict as .planning/config.json."""
    def _write(data) -> Path:
        path = project / ".planning" / "config.json"
        path.write_text(json.dumps(data, indent=2))
        return path
    return _write


@pytest.fixture
def write_roadmap(project: Path):
    """Write .planning/ROADMAP.md."""
    def _write(content: str) -> Path:
        path = project / ".planning" / "ROADMAP.md"
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def make_phase(project: Path):
    """Create .planning/phases/<name>/ with the given (empty-ish) files."""
    def _make(name: str, *files: str) -> Path:
        phase_dir = project / ".planning" / "phases" / name
        phase_dir.mkdir(parents=True, exist_ok=True)
        for filename in files:
            (phase_dir / filename).write_text(f"# {filename}\n")
        return phase_dir
    return _make
