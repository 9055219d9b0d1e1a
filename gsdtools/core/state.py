"""
STATE.md field extraction.

STATE.md may carry YAML frontmatter and/or bold "**Field:** value" lines
in its body:

    ---
    status: executing
    ---
    **Current Phase:** 03
    **Paused At:** Plan 03-02, task 3

Both are flattened into one dict with snake_case keys; frontmatter keys
win over body fields. Nothing here writes STATE.md.
"""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from gsdtools.core import PLANNING_DIR, STATE_PATH, PathLike, safe_read_file

logger = logging.getLogger(__name__)

_BOLD_FIELD_RE = re.compile(r"^[ \t]*(?:[-*][ \t]+)?\*\*([^*:]+):\*\*[ \t]*(.*?)[ \t\r]*$", re.MULTILINE)
_KEY_RE = re.compile(r"[^a-z0-9]+")

# Written by the orchestrator while an agent runs; left behind if interrupted
AGENT_ID_FILE = "current-agent-id.txt"


def _field_key(label: str) -> str:
    return _KEY_RE.sub("_", label.strip().lower()).strip("_")


def parse_frontmatter(content: str) -> Dict[str, Any]:
    """YAML frontmatter as a dict; empty if absent or malformed."""
    if not content.startswith("---"):
        return {}
    parts = content.split("---", 2)
    if len(parts) < 3:
        return {}
    try:
        data = yaml.safe_load(parts[1])
    except yaml.YAMLError as e:
        logger.debug(f"Malformed STATE.md frontmatter: {e}")
        return {}
    return data if isinstance(data, dict) else {}


def parse_state(content: str) -> Dict[str, Any]:
    """Flatten STATE.md text into a field dict."""
    fields: Dict[str, Any] = {}
    for match in _BOLD_FIELD_RE.finditer(content):
        key = _field_key(match.group(1))
        if key and key not in fields and match.group(2):
            fields[key] = match.group(2)
    fields.update(parse_frontmatter(content))
    return fields


def read_state_fields(project_path: PathLike) -> Dict[str, Any]:
    """Fields of .planning/STATE.md; empty if the file is absent."""
    content = safe_read_file(Path(project_path) / STATE_PATH)
    if content is None:
        return {}
    return parse_state(content)


def get_paused_at(project_path: PathLike) -> Optional[str]:
    """Where work was paused, from STATE.md's "Paused At" field."""
    value = read_state_fields(project_path).get("paused_at")
    return str(value) if value not in (None, "") else None


def get_interrupted_agent_id(project_path: PathLike) -> Optional[str]:
    """ID of an agent that was running when the last session ended."""
    content = safe_read_file(Path(project_path) / PLANNING_DIR / AGENT_ID_FILE)
    if content is None:
        return None
    return content.strip() or None
