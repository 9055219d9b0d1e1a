"""
Pending todo scan.

Todos are captured one per file in .planning/todos/pending/*.md with
simple "key: value" lines (usually inside YAML frontmatter):

    ---
    created: 2026-02-25
    title: Fix login redirect
    area: backend
    ---

Only title, area and created are read. A file missing any of them, or
one that cannot be decoded at all, still counts, with defaults filled in.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from gsdtools.core import PENDING_TODOS_DIR, TODOS_DIR, PathLike, list_files, safe_read_file, to_posix_path

logger = logging.getLogger(__name__)

TODO_EXTENSION = ".md"

DEFAULT_TITLE = "Untitled"
DEFAULT_AREA = "general"
DEFAULT_CREATED = "unknown"

_FIELD_RES = {
    name: re.compile(rf"^{name}:[ \t]*(\S.*?)[ \t\r]*$", re.MULTILINE)
    for name in ("title", "area", "created")
}


@dataclass
class TodoRecord:
    """One pending todo file."""
    file: str
    path: str  # Relative to the project root
    title: str = DEFAULT_TITLE
    area: str = DEFAULT_AREA
    created: str = DEFAULT_CREATED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.file,
            "created": self.created,
            "title": self.title,
            "area": self.area,
            "path": self.path,
        }


@dataclass
class TodoScan:
    """Result of scanning the pending todos directory."""
    todos: List[TodoRecord] = field(default_factory=list)
    area_filter: Optional[str] = None
    todos_dir_exists: bool = False
    pending_dir_exists: bool = False

    @property
    def todo_count(self) -> int:
        return len(self.todos)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "todo_count": self.todo_count,
            "todos": [t.to_dict() for t in self.todos],
            "area_filter": self.area_filter,
            "todos_dir_exists": self.todos_dir_exists,
            "pending_dir_exists": self.pending_dir_exists,
        }


def parse_todo(content: Optional[str], filename: str, rel_path: str) -> TodoRecord:
    """Pull title/area/created out of a todo file's text.

    Args:
        content: File text, or None if it could not be read
        filename: Bare file name
        rel_path: Path relative to the project root

    Returns:
        TodoRecord with a default for every field not found
    """
    todo = TodoRecord(file=filename, path=rel_path)
    if not content:
        return todo

    for name, pattern in _FIELD_RES.items():
        match = pattern.search(content)
        if match:
            setattr(todo, name, match.group(1))
    return todo


def scan_todos(project_path: PathLike, area: Optional[str] = None) -> TodoScan:
    """Read every pending todo, optionally keeping one area.

    Args:
        project_path: Project root
        area: Exact area to keep; None keeps all

    Returns:
        TodoScan; an absent pending directory is an empty scan, not an error
    """
    root = Path(project_path)
    pending_dir = root / PENDING_TODOS_DIR
    scan = TodoScan(
        area_filter=area or None,
        todos_dir_exists=(root / TODOS_DIR).is_dir(),
        pending_dir_exists=pending_dir.is_dir(),
    )

    for filename in list_files(pending_dir):
        if not filename.endswith(TODO_EXTENSION):
            continue
        rel_path = to_posix_path(Path(PENDING_TODOS_DIR) / filename)
        todo = parse_todo(safe_read_file(pending_dir / filename), filename, rel_path)
        if scan.area_filter and todo.area != scan.area_filter:
            continue
        scan.todos.append(todo)

    logger.debug(f"Found {scan.todo_count} pending todos (area={scan.area_filter!r})")
    return scan
