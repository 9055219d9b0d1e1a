"""
`gsd-tools init <workflow>` - everything a workflow needs, in one record.

Workflows:
- execute-phase: models, branching, plans left to execute
- plan-phase: models, workflow toggles, phase files to read
- phase-op: phase files for discuss/research style operations
- verify-work: models and verification state for a phase
- progress: per-phase status across the milestone
- todos: pending todos, optionally for one area
- milestone-op: phase completion and archived milestones
- resume: what was running when the last session ended

Optional *_path fields are only present when the file exists.
"""

from typing import Any, Dict, List, Optional

from gsdtools.core import (
    CONFIG_PATH,
    PLANNING_DIR,
    PROJECT_PATH,
    REQUIREMENTS_PATH,
    ROADMAP_PATH,
    STATE_PATH,
    PathLike,
    path_exists,
    timestamp,
    today,
)
from gsdtools.core.config import ResolvedConfig, load_config
from gsdtools.core.milestones import scan_milestones
from gsdtools.core.models import resolve_model_for_config
from gsdtools.core.phases import PhaseInfo, PhaseMatch, list_phases, match_phase
from gsdtools.core.roadmap import MilestoneInfo, get_milestone_info
from gsdtools.core.state import get_interrupted_agent_id, get_paused_at
from gsdtools.core.todos import scan_todos


def _branch_name(config: ResolvedConfig, match: PhaseMatch, milestone: MilestoneInfo) -> Optional[str]:
    """Branch to work on under the configured strategy, if any."""
    if config.branching_strategy == "phase" and match.found:
        return (
            config.phase_branch_template
            .replace("{phase}", match.padded_phase or match.phase_number or "")
            .replace("{slug}", match.phase_slug or "phase")
        )
    if config.branching_strategy == "milestone":
        return (
            config.milestone_branch_template
            .replace("{milestone}", milestone.version)
            .replace("{slug}", milestone.slug)
        )
    return None


def _existence(project_path: PathLike) -> Dict[str, bool]:
    return {
        "planning_exists": path_exists(project_path, PLANNING_DIR),
        "state_exists": path_exists(project_path, STATE_PATH),
        "roadmap_exists": path_exists(project_path, ROADMAP_PATH),
        "project_exists": path_exists(project_path, PROJECT_PATH),
        "config_exists": path_exists(project_path, CONFIG_PATH),
    }


def init_execute_phase(project_path: PathLike, phase: str) -> Dict[str, Any]:
    """Record for executing a phase's plans."""
    config = load_config(project_path)
    match = match_phase(project_path, phase)
    milestone = get_milestone_info(project_path)

    result: Dict[str, Any] = {
        "executor_model": resolve_model_for_config(config, "gsd-executor"),
        "verifier_model": resolve_model_for_config(config, "gsd-verifier"),
        "commit_docs": config.commit_docs,
        "parallelization": config.parallelization,
        "verifier_enabled": config.verifier,
        "branching_strategy": config.branching_strategy,
        "branch_name": _branch_name(config, match, milestone),
    }
    result.update(match.to_dict())
    result.update({
        "plans": match.plans,
        "summaries": match.summaries,
        "incomplete_plans": match.incomplete_plans,
        "plan_count": match.plan_count,
        "incomplete_count": len(match.incomplete_plans),
    })
    result.update(milestone.to_dict())
    result.update(_existence(project_path))
    result.update({
        "state_path": STATE_PATH,
        "roadmap_path": ROADMAP_PATH,
        "config_path": CONFIG_PATH,
    })
    return result


def _phase_files(match: PhaseMatch) -> Dict[str, Any]:
    """Phase record fields shared by plan-phase and phase-op."""
    result = match.to_dict()
    result.update({
        "has_research": match.has_research,
        "has_context": match.has_context,
        "has_plans": match.has_plans,
        "has_verification": match.has_verification,
        "has_uat": match.has_uat,
        "plan_count": match.plan_count,
    })
    return result


def _core_paths() -> Dict[str, str]:
    return {
        "state_path": STATE_PATH,
        "roadmap_path": ROADMAP_PATH,
        "requirements_path": REQUIREMENTS_PATH,
    }


def init_plan_phase(project_path: PathLike, phase: str) -> Dict[str, Any]:
    """Record for planning a phase."""
    config = load_config(project_path)
    match = match_phase(project_path, phase)

    result: Dict[str, Any] = {
        "researcher_model": resolve_model_for_config(config, "gsd-phase-researcher"),
        "planner_model": resolve_model_for_config(config, "gsd-planner"),
        "checker_model": resolve_model_for_config(config, "gsd-plan-checker"),
        "research_enabled": config.research,
        "plan_checker_enabled": config.plan_checker,
        "commit_docs": config.commit_docs,
    }
    result.update(_phase_files(match))
    result.update({
        "planning_exists": path_exists(project_path, PLANNING_DIR),
        "roadmap_exists": path_exists(project_path, ROADMAP_PATH),
    })
    result.update(_core_paths())
    result.update(match.optional_paths())
    return result


def init_phase_op(project_path: PathLike, phase: str) -> Dict[str, Any]:
    """Record for generic phase operations (discuss, research, list assumptions)."""
    config = load_config(project_path)
    match = match_phase(project_path, phase)

    result: Dict[str, Any] = {
        "commit_docs": config.commit_docs,
        "brave_search": config.brave_search,
    }
    result.update(_phase_files(match))
    result.update({
        "planning_exists": path_exists(project_path, PLANNING_DIR),
        "roadmap_exists": path_exists(project_path, ROADMAP_PATH),
    })
    result.update(_core_paths())
    result.update(match.optional_paths())
    return result


def init_verify_work(project_path: PathLike, phase: str) -> Dict[str, Any]:
    """Record for verifying a phase's delivered work."""
    config = load_config(project_path)
    match = match_phase(project_path, phase)

    result: Dict[str, Any] = {
        "planner_model": resolve_model_for_config(config, "gsd-planner"),
        "checker_model": resolve_model_for_config(config, "gsd-plan-checker"),
        "commit_docs": config.commit_docs,
    }
    result.update(match.to_dict())
    result.update({
        "has_verification": match.has_verification,
        "has_uat": match.has_uat,
        "summaries": match.summaries,
    })
    result.update(match.optional_paths())
    return result


def phase_status(info: PhaseInfo) -> str:
    """complete / in_progress / researched / pending, from a phase's files."""
    if info.plans and len(info.summaries) >= len(info.plans):
        return "complete"
    if info.plans or info.summaries:
        return "in_progress"
    if info.has_research:
        return "researched"
    return "pending"


def init_progress(project_path: PathLike) -> Dict[str, Any]:
    """Record for the progress report across all current phases."""
    config = load_config(project_path)
    milestone = get_milestone_info(project_path)

    phases: List[Dict[str, Any]] = []
    for info in list_phases(project_path):
        phases.append({
            "number": info.phase_number,
            "name": info.phase_name,
            "directory": info.directory,
            "status": phase_status(info),
            "plan_count": len(info.plans),
            "summary_count": len(info.summaries),
            "has_research": info.has_research,
        })

    current = next((p for p in phases if p["status"] in ("in_progress", "researched")), None)
    upcoming = next((p for p in phases if p["status"] == "pending"), None)
    paused_at = get_paused_at(project_path)

    result: Dict[str, Any] = {
        "executor_model": resolve_model_for_config(config, "gsd-executor"),
        "planner_model": resolve_model_for_config(config, "gsd-planner"),
        "commit_docs": config.commit_docs,
    }
    result.update(milestone.to_dict())
    result.update({
        "phases": phases,
        "phase_count": len(phases),
        "completed_count": sum(1 for p in phases if p["status"] == "complete"),
        "in_progress_count": sum(1 for p in phases if p["status"] == "in_progress"),
        "current_phase": current,
        "next_phase": upcoming,
        "paused_at": paused_at,
        "has_work_in_progress": current is not None,
    })
    result.update(_existence(project_path))
    result.update({
        "state_path": STATE_PATH,
        "roadmap_path": ROADMAP_PATH,
        "project_path": PROJECT_PATH,
        "config_path": CONFIG_PATH,
    })
    return result


def init_todos(project_path: PathLike, area: Optional[str] = None) -> Dict[str, Any]:
    """Record listing pending todos."""
    config = load_config(project_path)
    scan = scan_todos(project_path, area)

    result: Dict[str, Any] = {
        "commit_docs": config.commit_docs,
        "date": today(),
        "timestamp": timestamp(),
    }
    result.update(scan.to_dict())
    result["planning_exists"] = path_exists(project_path, PLANNING_DIR)
    return result


def init_milestone_op(project_path: PathLike) -> Dict[str, Any]:
    """Record for completing or starting a milestone."""
    config = load_config(project_path)
    milestone = get_milestone_info(project_path)

    result: Dict[str, Any] = {"commit_docs": config.commit_docs}
    result.update(milestone.to_dict())
    result.update(scan_milestones(project_path).to_dict())
    result.update({
        "project_exists": path_exists(project_path, PROJECT_PATH),
        "roadmap_exists": path_exists(project_path, ROADMAP_PATH),
        "state_exists": path_exists(project_path, STATE_PATH),
    })
    return result


def init_resume(project_path: PathLike) -> Dict[str, Any]:
    """Record for resuming after an interrupted session."""
    config = load_config(project_path)
    agent_id = get_interrupted_agent_id(project_path)

    result: Dict[str, Any] = _existence(project_path)
    result.update({
        "has_interrupted_agent": agent_id is not None,
        "interrupted_agent_id": agent_id,
        "paused_at": get_paused_at(project_path),
        "commit_docs": config.commit_docs,
        "state_path": STATE_PATH,
        "roadmap_path": ROADMAP_PATH,
        "project_path": PROJECT_PATH,
    })
    return result
