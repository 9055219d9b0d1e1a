"""
gsdtools core - Resolution logic behind the gsd-tools commands.

The CLI layer lives in cli_commands/ and commands/.

Modules:
- text: Phase name normalization, slugs, phase number ordering
- config: .planning/config.json loading with defaults
- models: Agent -> model resolution via profiles and overrides
- phases: Phase directory search and roadmap reconciliation
- roadmap: ROADMAP.md section parsing and milestone info
- todos: Pending todo scan
- milestones: Phase completion and archive scan
- state: STATE.md field extraction
"""

import logging
from datetime import datetime, timezone
from pathlib import Path, PurePath
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

PLANNING_DIR = ".planning"

# Fixed locations, relative to the project root
STATE_PATH = ".planning/STATE.md"
ROADMAP_PATH = ".planning/ROADMAP.md"
PROJECT_PATH = ".planning/PROJECT.md"
REQUIREMENTS_PATH = ".planning/REQUIREMENTS.md"
CONFIG_PATH = ".planning/config.json"
PHASES_DIR = ".planning/phases"
MILESTONES_DIR = ".planning/milestones"
ARCHIVE_DIR = ".planning/archive"
TODOS_DIR = ".planning/todos"
PENDING_TODOS_DIR = ".planning/todos/pending"


def get_planning_dir(project_path: Optional[PathLike] = None) -> Path:
    """Get the .planning directory for a project."""
    if project_path is None:
        project_path = Path.cwd()
    return Path(project_path) / PLANNING_DIR


def path_exists(project_path: PathLike, rel_path: str) -> bool:
    """Check whether a path relative to the project root exists."""
    return (Path(project_path) / rel_path).exists()


def safe_read_file(path: PathLike) -> Optional[str]:
    """Read a text file, returning None if it is absent or undecodable.

    Other I/O errors (permissions, a directory in place of a file)
    propagate to the caller.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except UnicodeDecodeError as e:
        logger.warning(f"Could not decode {path}: {e}")
        return None


def list_subdirs(path: PathLike) -> List[str]:
    """Names of the immediate subdirectories of path, sorted.

    An absent directory yields an empty list.
    """
    directory = Path(path)
    if not directory.is_dir():
        return []
    return sorted(entry.name for entry in directory.iterdir() if entry.is_dir())


def list_files(path: PathLike) -> List[str]:
    """Names of the regular files directly inside path, sorted."""
    directory = Path(path)
    if not directory.is_dir():
        return []
    return sorted(entry.name for entry in directory.iterdir() if entry.is_file())


def to_posix_path(path: PathLike) -> str:
    """Render a relative path with forward slashes on every platform."""
    return PurePath(path).as_posix()


def today() -> str:
    """Current date as YYYY-MM-DD."""
    return datetime.now().strftime("%Y-%m-%d")


def timestamp() -> str:
    """Current time as ISO 8601 UTC."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
