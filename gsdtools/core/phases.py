"""
Phase lookup across the phases directory and ROADMAP.md.

Two sources describe a phase:
- .planning/phases/NN-slug/ holds its working files (CONTEXT, RESEARCH,
  PLAN, SUMMARY, VERIFICATION, UAT)
- ROADMAP.md holds its title, goal and requirement IDs

A phase that has been planned in the roadmap but not started has no
directory yet. match_phase() reconciles the two: the directory is
authoritative for paths and file flags, the roadmap fills in the rest.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from gsdtools.core import (
    MILESTONES_DIR,
    PHASES_DIR,
    PathLike,
    list_files,
    list_subdirs,
    to_posix_path,
)
from gsdtools.core.roadmap import RoadmapPhase, get_roadmap_phase
from gsdtools.core.text import (
    format_phase_number,
    generate_slug,
    normalize_phase_name,
    parse_phase_number,
    phase_sort_key,
)

logger = logging.getLogger(__name__)

# Same number grammar as text._PHASE_NUMBER_RE: "03api" is phase 03 named "api"
_DIR_NAME_RE = re.compile(r"^(\d+(?:[A-Za-z](?![A-Za-z]))?(?:\.\d+)*)-?(.*)$", re.ASCII)
_ARCHIVED_PHASES_RE = re.compile(r"^v(\d+(?:\.\d+)*)-phases$")

# Companion files: "03-CONTEXT.md" or a bare "CONTEXT.md"
CONTEXT = "CONTEXT"
RESEARCH = "RESEARCH"
VERIFICATION = "VERIFICATION"
UAT = "UAT"
PLAN = "PLAN"
SUMMARY = "SUMMARY"


def _is_kind(filename: str, kind: str) -> bool:
    return filename.endswith(f"-{kind}.md") or filename == f"{kind}.md"


def _first_of_kind(files: List[str], kind: str) -> Optional[str]:
    return next((f for f in files if _is_kind(f, kind)), None)


def _artifact_id(filename: str, kind: str) -> str:
    """Plan/summary id shared by a PLAN and its SUMMARY (03-01-PLAN.md -> 03-01)."""
    return filename[: -len(f"{kind}.md")].rstrip("-")


@dataclass
class PhaseInfo:
    """A phase directory and what it contains."""
    directory: str  # Relative to the project root, forward slashes
    phase_number: str
    phase_name: Optional[str] = None
    plans: List[str] = field(default_factory=list)
    summaries: List[str] = field(default_factory=list)
    incomplete_plans: List[str] = field(default_factory=list)
    context_file: Optional[str] = None
    research_file: Optional[str] = None
    verification_file: Optional[str] = None
    uat_file: Optional[str] = None
    archived: Optional[str] = None  # Milestone version for archived phases

    @property
    def phase_slug(self) -> Optional[str]:
        return generate_slug(self.phase_name)

    @property
    def has_context(self) -> bool:
        return self.context_file is not None

    @property
    def has_research(self) -> bool:
        return self.research_file is not None

    @property
    def has_verification(self) -> bool:
        return self.verification_file is not None

    @property
    def has_uat(self) -> bool:
        return self.uat_file is not None

    @property
    def is_complete(self) -> bool:
        return len(self.summaries) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "found": True,
            "directory": self.directory,
            "phase_number": self.phase_number,
            "phase_name": self.phase_name,
            "phase_slug": self.phase_slug,
            "plans": self.plans,
            "summaries": self.summaries,
            "incomplete_plans": self.incomplete_plans,
            "has_research": self.has_research,
            "has_context": self.has_context,
            "has_verification": self.has_verification,
            "has_uat": self.has_uat,
            "archived": self.archived,
        }


def load_phase_info(base_dir: PathLike, rel_base: str, dirname: str) -> PhaseInfo:
    """Read a phase directory's listing into a PhaseInfo.

    Args:
        base_dir: Absolute directory holding the phase directories
        rel_base: Same directory relative to the project root
        dirname: Phase directory name ("03-api")
    """
    match = _DIR_NAME_RE.match(dirname)
    phase_number = match.group(1) if match else dirname
    phase_name = match.group(2) if match and match.group(2) else None

    files = list_files(Path(base_dir) / dirname)
    plans = [f for f in files if _is_kind(f, PLAN)]
    summaries = [f for f in files if _is_kind(f, SUMMARY)]
    completed = {_artifact_id(s, SUMMARY) for s in summaries}

    return PhaseInfo(
        directory=to_posix_path(Path(rel_base) / dirname),
        phase_number=phase_number,
        phase_name=phase_name,
        plans=plans,
        summaries=summaries,
        incomplete_plans=[p for p in plans if _artifact_id(p, PLAN) not in completed],
        context_file=_first_of_kind(files, CONTEXT),
        research_file=_first_of_kind(files, RESEARCH),
        verification_file=_first_of_kind(files, VERIFICATION),
        uat_file=_first_of_kind(files, UAT),
    )


def _matches(dirname: str, identifier: str) -> bool:
    """Does a phase directory name answer to an identifier?

    Bare numbers compare by value ("3" == "03", "3" != "3.1"). Anything
    else compares normalized, against the full name or the part after
    the number ("api" and "03-API" both find "03-api").
    """
    target = normalize_phase_name(identifier)
    if target == format_phase_number(identifier):
        return parse_phase_number(dirname) == parse_phase_number(identifier)

    normalized = normalize_phase_name(dirname)
    if normalized == target:
        return True
    match = _DIR_NAME_RE.match(dirname)
    return bool(match and match.group(2)) and normalize_phase_name(match.group(2)) == target


def search_phase_in_dir(base_dir: PathLike, rel_base: str, identifier: str) -> Optional[PhaseInfo]:
    """Find the phase directory for an identifier under base_dir.

    Returns:
        PhaseInfo for the first match in phase order, or None
    """
    for dirname in sorted(list_subdirs(base_dir), key=phase_sort_key):
        if _matches(dirname, identifier):
            return load_phase_info(base_dir, rel_base, dirname)
    return None


def _archived_phase_dirs(project_path: Path) -> List[str]:
    """Archived milestone phase directories ("v1.0-phases"), newest first."""
    names = [n for n in list_subdirs(project_path / MILESTONES_DIR) if _ARCHIVED_PHASES_RE.match(n)]

    def version(name: str):
        return tuple(int(p) for p in _ARCHIVED_PHASES_RE.match(name).group(1).split("."))

    return sorted(names, key=version, reverse=True)


def find_phase(project_path: PathLike, identifier) -> Optional[PhaseInfo]:
    """Find a phase directory, falling back to archived milestones.

    Args:
        project_path: Project root
        identifier: Phase number or name ("3", "03", "api", "03-api")

    Returns:
        PhaseInfo, with archived set when found in .planning/milestones
    """
    if identifier is None or str(identifier).strip() == "":
        return None
    identifier = str(identifier).strip()
    root = Path(project_path)

    info = search_phase_in_dir(root / PHASES_DIR, PHASES_DIR, identifier)
    if info:
        return info

    for archive_name in _archived_phase_dirs(root):
        rel_base = f"{MILESTONES_DIR}/{archive_name}"
        info = search_phase_in_dir(root / rel_base, rel_base, identifier)
        if info:
            info.archived = archive_name[: -len("-phases")]
            logger.debug(f"Phase {identifier!r} found in archived milestone {info.archived}")
            return info

    return None


def list_phases(project_path: PathLike) -> List[PhaseInfo]:
    """Every current phase directory, in phase order."""
    base_dir = Path(project_path) / PHASES_DIR
    return [
        load_phase_info(base_dir, PHASES_DIR, dirname)
        for dirname in sorted(list_subdirs(base_dir), key=phase_sort_key)
    ]


@dataclass
class PhaseMatch:
    """Reconciled view of a phase from its directory and its roadmap entry."""
    identifier: str
    info: Optional[PhaseInfo] = None
    roadmap: Optional[RoadmapPhase] = None

    @property
    def found(self) -> bool:
        return self.info is not None or self.roadmap is not None

    @property
    def phase_dir(self) -> Optional[str]:
        return self.info.directory if self.info else None

    @property
    def phase_number(self) -> Optional[str]:
        if self.info:
            return self.info.phase_number
        return self.roadmap.phase_number if self.roadmap else None

    @property
    def padded_phase(self) -> Optional[str]:
        return format_phase_number(self.phase_number) if self.phase_number else None

    @property
    def phase_name(self) -> Optional[str]:
        if self.info and self.info.phase_name:
            return self.info.phase_name
        return self.roadmap.phase_name if self.roadmap else None

    @property
    def phase_slug(self) -> Optional[str]:
        if self.info and self.info.phase_slug:
            return self.info.phase_slug
        return self.roadmap.phase_slug if self.roadmap else None

    @property
    def goal(self) -> Optional[str]:
        return self.roadmap.goal if self.roadmap else None

    @property
    def phase_req_ids(self) -> Optional[str]:
        return self.roadmap.requirement_ids if self.roadmap else None

    @property
    def roadmap_plan_count(self) -> Optional[int]:
        """Plan count announced in ROADMAP.md; None for TBD or no entry."""
        return self.roadmap.plan_count if self.roadmap else None

    @property
    def plans(self) -> List[str]:
        return list(self.info.plans) if self.info else []

    @property
    def summaries(self) -> List[str]:
        return list(self.info.summaries) if self.info else []

    @property
    def incomplete_plans(self) -> List[str]:
        return list(self.info.incomplete_plans) if self.info else []

    @property
    def plan_count(self) -> int:
        return len(self.plans)

    @property
    def has_context(self) -> bool:
        return bool(self.info and self.info.has_context)

    @property
    def has_research(self) -> bool:
        return bool(self.info and self.info.has_research)

    @property
    def has_verification(self) -> bool:
        return bool(self.info and self.info.has_verification)

    @property
    def has_uat(self) -> bool:
        return bool(self.info and self.info.has_uat)

    @property
    def has_plans(self) -> bool:
        return self.plan_count > 0

    def optional_paths(self) -> Dict[str, str]:
        """Paths of companion files that exist; absent ones are left out."""
        if not self.info:
            return {}
        paths = {}
        for key, filename in (
            ("context_path", self.info.context_file),
            ("research_path", self.info.research_file),
            ("verification_path", self.info.verification_file),
            ("uat_path", self.info.uat_file),
        ):
            if filename:
                paths[key] = to_posix_path(Path(self.info.directory) / filename)
        return paths

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase_found": self.found,
            "phase_dir": self.phase_dir,
            "phase_number": self.phase_number,
            "phase_name": self.phase_name,
            "phase_slug": self.phase_slug,
            "padded_phase": self.padded_phase,
            "phase_goal": self.goal,
            "phase_req_ids": self.phase_req_ids,
            "roadmap_plan_count": self.roadmap_plan_count,
            "phase_archived": self.info.archived if self.info else None,
        }


def match_phase(project_path: PathLike, identifier) -> PhaseMatch:
    """Look a phase up in both sources and reconcile.

    Args:
        project_path: Project root
        identifier: Phase number or name

    Returns:
        PhaseMatch; found is False only when neither source knows the phase
    """
    identifier = "" if identifier is None else str(identifier).strip()
    info = find_phase(project_path, identifier)

    # The roadmap is keyed by number only
    number = info.phase_number if info else identifier
    roadmap = None
    if parse_phase_number(number) is not None:
        roadmap = get_roadmap_phase(project_path, number)

    if info is None and roadmap is None:
        logger.debug(f"Phase {identifier!r} not found in phases directory or roadmap")

    return PhaseMatch(identifier=identifier, info=info, roadmap=roadmap)
