"""
ROADMAP.md reading for phase lookup.

ROADMAP.md is free text written by humans and agents. We only rely on a
few conventions:

    ## v1.0 Core Platform

    ### Phase 3: API Layer
    **Goal:** Build the public API
    **Requirements**: API-01, API-02
    **Plans:** 2 plans

A phase section runs from its header to the next phase header, the next
heading at the same or a higher level, or the end of the document.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from gsdtools.core import ROADMAP_PATH, PathLike, safe_read_file
from gsdtools.core.text import compare_phase_number, generate_slug

logger = logging.getLogger(__name__)

_PHASE_HEADER_RE = re.compile(r"^(#{2,4})\s*Phase\s+(\d+[A-Za-z]?(?:\.\d+)*)\s*:\s*(.+?)\s*$", re.IGNORECASE)
_HEADING_RE = re.compile(r"^(#{1,6})\s")

# "**Goal:** x" and "**Goal**: x" are both in the wild
_GOAL_RE = re.compile(r"^\*\*Goal(?::\*\*|\*\*:)\s*(.*)$", re.IGNORECASE)
_REQUIREMENTS_RE = re.compile(r"^\*\*Requirements(?::\*\*|\*\*:)\s*(.*)$", re.IGNORECASE)
_PLANS_RE = re.compile(r"^\*\*Plans(?::\*\*|\*\*:)\s*(.*)$", re.IGNORECASE)
_LEADING_INT_RE = re.compile(r"^(\d+)")

REQUIREMENTS_PLACEHOLDER = "TBD"

_IN_PROGRESS_RE = re.compile(r"🚧\s*\*\*v(\d+\.\d+)\s+([^*]+)\*\*")
_DETAILS_RE = re.compile(r"<details>.*?</details>", re.IGNORECASE | re.DOTALL)
_MILESTONE_HEADING_RE = re.compile(r"^##\s.*v(\d+\.\d+)[:\s]+([^\n(]+)", re.MULTILINE)
_VERSION_RE = re.compile(r"v(\d+\.\d+)")

DEFAULT_MILESTONE_VERSION = "v1.0"
DEFAULT_MILESTONE_NAME = "milestone"


@dataclass
class RoadmapPhase:
    """One "### Phase N: Title" section of ROADMAP.md."""
    phase_number: str  # As written in the header ("3", "2.1")
    phase_name: str
    goal: Optional[str] = None
    requirements: Optional[str] = None  # Raw requirements line value
    plan_count: Optional[int] = None  # None for "TBD" or missing
    section: str = ""

    @property
    def phase_slug(self) -> Optional[str]:
        return generate_slug(self.phase_name)

    @property
    def requirement_ids(self) -> Optional[str]:
        return extract_requirement_ids(self.requirements)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": True,
            "phase_number": self.phase_number,
            "phase_name": self.phase_name,
            "phase_slug": self.phase_slug,
            "goal": self.goal,
            "requirement_ids": self.requirement_ids,
            "plan_count": self.plan_count,
            "section": self.section,
        }


@dataclass
class MilestoneInfo:
    """Current milestone as named in ROADMAP.md."""
    version: str = DEFAULT_MILESTONE_VERSION
    name: str = DEFAULT_MILESTONE_NAME

    @property
    def slug(self) -> str:
        return generate_slug(self.name) or DEFAULT_MILESTONE_NAME

    def to_dict(self) -> Dict[str, Any]:
        return {
            "milestone_version": self.version,
            "milestone_name": self.name,
            "milestone_slug": self.slug,
        }


def extract_requirement_ids(value: Optional[str]) -> Optional[str]:
    """Requirement IDs from the value of a **Requirements** line.

    Brackets are stripped and the rest is returned trimmed, as one string.
    A missing value, an empty one, or the TBD placeholder gives None.

    Examples:
        "CP-01, CP-02"    -> "CP-01, CP-02"
        "[CP-01, CP-02]"  -> "CP-01, CP-02"
        "TBD"             -> None
    """
    if value is None:
        return None
    ids = value.replace("[", "").replace("]", "").strip()
    if not ids or ids == REQUIREMENTS_PLACEHOLDER:
        return None
    return ids


def _build_phase(number: str, title: str, lines: List[str]) -> RoadmapPhase:
    """Pick the typed fields out of a section's lines. First match wins."""
    phase = RoadmapPhase(
        phase_number=number,
        phase_name=title,
        section="\n".join(lines).strip(),
    )
    goal_seen = requirements_seen = plans_seen = False

    for line in lines[1:]:
        text = line.strip()
        if not goal_seen:
            match = _GOAL_RE.match(text)
            if match:
                phase.goal = match.group(1).strip() or None
                goal_seen = True
                continue
        if not requirements_seen:
            match = _REQUIREMENTS_RE.match(text)
            if match:
                phase.requirements = match.group(1).strip()
                requirements_seen = True
                continue
        if not plans_seen:
            match = _PLANS_RE.match(text)
            if match:
                count = _LEADING_INT_RE.match(match.group(1).strip())
                phase.plan_count = int(count.group(1)) if count else None
                plans_seen = True

    return phase


def iter_roadmap_phases(content: str) -> Iterator[RoadmapPhase]:
    """Walk ROADMAP.md content and yield each phase section in order."""
    current = None  # (number, title, header level)
    lines: List[str] = []

    for line in content.splitlines():
        header = _PHASE_HEADER_RE.match(line)
        heading = _HEADING_RE.match(line)

        if current is not None and (header or (heading and len(heading.group(1)) <= current[2])):
            yield _build_phase(current[0], current[1], lines)
            current = None

        if header:
            current = (header.group(2), header.group(3), len(header.group(1)))
            lines = [line]
        elif current is not None:
            lines.append(line)

    if current is not None:
        yield _build_phase(current[0], current[1], lines)


def get_roadmap_path(project_path: PathLike) -> Path:
    return Path(project_path) / ROADMAP_PATH


def get_roadmap_phase(project_path: PathLike, phase) -> Optional[RoadmapPhase]:
    """Find the ROADMAP.md section for a phase number.

    Args:
        project_path: Project root
        phase: Phase number; "3" and "03" both find "### Phase 3: ..."

    Returns:
        RoadmapPhase, or None if ROADMAP.md or the section is missing
    """
    if phase is None or str(phase).strip() == "":
        return None

    content = safe_read_file(get_roadmap_path(project_path))
    if content is None:
        return None

    for entry in iter_roadmap_phases(content):
        if compare_phase_number(entry.phase_number, phase) == 0:
            return entry

    logger.debug(f"No roadmap section for phase {phase!r}")
    return None


def get_milestone_info(project_path: PathLike) -> MilestoneInfo:
    """Current milestone version and name from ROADMAP.md.

    Checks, in order: an in-progress marker ("🚧 **v1.1 Name**"), the first
    "## ... vX.Y Name" heading outside collapsed <details> blocks (shipped
    milestones), then any "vX.Y" token. Falls back to v1.0 / milestone.
    """
    content = safe_read_file(get_roadmap_path(project_path))
    if content is None:
        return MilestoneInfo()

    in_progress = _IN_PROGRESS_RE.search(content)
    if in_progress:
        return MilestoneInfo(version=f"v{in_progress.group(1)}", name=in_progress.group(2).strip())

    visible = _DETAILS_RE.sub("", content)
    heading = _MILESTONE_HEADING_RE.search(visible)
    if heading:
        return MilestoneInfo(version=f"v{heading.group(1)}", name=heading.group(2).strip())

    version = _VERSION_RE.search(visible)
    if version:
        return MilestoneInfo(version=version.group(0))

    return MilestoneInfo()
