"""
Milestone scan: how far the current phases are, and what has been archived.

A phase is complete once its directory holds at least one SUMMARY file.
Archived milestones are the subdirectories of .planning/archive/.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from gsdtools.core import ARCHIVE_DIR, PHASES_DIR, PathLike, list_subdirs
from gsdtools.core.phases import list_phases


@dataclass
class MilestoneSummary:
    """Phase completion counts plus archived milestone names."""
    phase_count: int = 0
    completed_phases: int = 0
    archived_milestones: List[str] = field(default_factory=list)
    phases_dir_exists: bool = False
    archive_exists: bool = False

    @property
    def all_phases_complete(self) -> bool:
        return self.phase_count > 0 and self.completed_phases == self.phase_count

    @property
    def archive_count(self) -> int:
        return len(self.archived_milestones)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase_count": self.phase_count,
            "completed_phases": self.completed_phases,
            "all_phases_complete": self.all_phases_complete,
            "archived_milestones": self.archived_milestones,
            "archive_count": self.archive_count,
            "phases_dir_exists": self.phases_dir_exists,
            "archive_exists": self.archive_exists,
        }


def scan_milestones(project_path: PathLike) -> MilestoneSummary:
    """Count phases and completed phases, list archived milestones.

    Absent directories count as empty.
    """
    root = Path(project_path)
    phases = list_phases(root)

    return MilestoneSummary(
        phase_count=len(phases),
        completed_phases=sum(1 for phase in phases if phase.is_complete),
        archived_milestones=list_subdirs(root / ARCHIVE_DIR),
        phases_dir_exists=(root / PHASES_DIR).is_dir(),
        archive_exists=(root / ARCHIVE_DIR).is_dir(),
    )
