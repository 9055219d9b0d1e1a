"""
Tests for the `init` workflow commands.

Each test builds a .planning/ tree under tmp_path and runs the CLI
against it with --cwd, then checks the JSON record.
"""

import json

import pytest
from click.testing import CliRunner

from gsdtools.cli import cli

ROADMAP = """# Roadmap

## v1.2 Billing Suite

### Phase 1: Setup
**Goal:** Set up
**Requirements**: SET-01

### Phase 3: API
**Goal:** Build the API
**Requirements**: [CP-01, CP-02]
**Plans:** 2 plans

### Phase 4: Docs
**Goal:** Write docs
**Requirements**: TBD

### Phase 5: Widget Builder
**Goal:** Build widgets
"""


@pytest.fixture
def run(project):
    """Run gsd-tools against the fixture project and parse its JSON."""
    runner = CliRunner()

    def _run(*args):
        result = runner.invoke(cli, ["--cwd", str(project), *args])
        assert result.exit_code == 0, result.output
        return json.loads(result.stdout)
    return _run


class TestExecutePhase:
    """init execute-phase."""

    def test_record(self, run, make_phase, write_roadmap):
        write_roadmap(ROADMAP)
        make_phase("03-api", "03-01-PLAN.md", "03-02-PLAN.md", "03-01-SUMMARY.md")

        data = run("init", "execute-phase", "3")
        assert data["phase_found"] is True
        assert data["phase_dir"] == ".planning/phases/03-api"
        assert data["phase_number"] == "03"
        assert data["plans"] == ["03-01-PLAN.md", "03-02-PLAN.md"]
        assert data["incomplete_plans"] == ["03-02-PLAN.md"]
        assert data["plan_count"] == 2
        assert data["incomplete_count"] == 1
        assert data["executor_model"] == "sonnet"
        assert data["verifier_model"] == "sonnet"
        assert data["milestone_version"] == "v1.2"
        assert data["milestone_slug"] == "billing-suite"
        assert data["branch_name"] is None
        assert data["state_path"] == ".planning/STATE.md"
        assert data["roadmap_exists"] is True
        assert data["config_exists"] is False

    def test_phase_branch(self, run, make_phase, write_config):
        write_config({"git": {"branching_strategy": "phase"}})
        make_phase("03-api")
        assert run("init", "execute-phase", "3")["branch_name"] == "gsd/phase-03-api"

    def test_milestone_branch(self, run, write_config, write_roadmap):
        write_config({"git": {"branching_strategy": "milestone"}})
        write_roadmap(ROADMAP)
        assert run("init", "execute-phase", "3")["branch_name"] == "gsd/v1.2-billing-suite"

    def test_quality_profile(self, run, write_config):
        write_config({"model_profile": "quality"})
        assert run("init", "execute-phase", "1")["executor_model"] == "inherit"


class TestPlanPhase:
    """init plan-phase."""

    def test_paths_for_existing_files(self, run, make_phase):
        make_phase("03-api", "03-CONTEXT.md", "03-RESEARCH.md", "03-VERIFICATION.md", "03-UAT.md")

        data = run("init", "plan-phase", "03")
        assert data["context_path"] == ".planning/phases/03-api/03-CONTEXT.md"
        assert data["research_path"] == ".planning/phases/03-api/03-RESEARCH.md"
        assert data["verification_path"] == ".planning/phases/03-api/03-VERIFICATION.md"
        assert data["uat_path"] == ".planning/phases/03-api/03-UAT.md"
        assert data["requirements_path"] == ".planning/REQUIREMENTS.md"

    def test_absent_paths_omitted(self, run, make_phase):
        make_phase("03-api")

        data = run("init", "plan-phase", "3")
        for key in ("context_path", "research_path", "verification_path", "uat_path"):
            assert key not in data
        assert data["has_context"] is False

    def test_models_and_toggles(self, run, write_config):
        write_config({"workflow": {"research": False}})
        data = run("init", "plan-phase", "1")
        assert data["planner_model"] == "inherit"
        assert data["checker_model"] == "sonnet"
        assert data["research_enabled"] is False
        assert data["plan_checker_enabled"] is True

    @pytest.mark.parametrize("phase,expected", [
        ("1", "SET-01"),
        ("3", "CP-01, CP-02"),
        ("4", None),
        ("5", None),
    ])
    def test_requirement_ids(self, run, write_roadmap, phase, expected):
        write_roadmap(ROADMAP)
        assert run("init", "plan-phase", phase)["phase_req_ids"] == expected

    def test_missing_roadmap(self, run, make_phase):
        make_phase("03-api")
        data = run("init", "plan-phase", "3")
        assert data["phase_req_ids"] is None
        assert data["roadmap_exists"] is False


class TestPhaseOp:
    """init phase-op, including the roadmap fallback."""

    def test_roadmap_fallback(self, run, write_roadmap):
        write_roadmap(ROADMAP)

        data = run("init", "phase-op", "5")
        assert data["phase_found"] is True
        assert data["phase_dir"] is None
        assert data["phase_slug"] == "widget-builder"
        assert data["phase_name"] == "Widget Builder"
        assert data["padded_phase"] == "05"
        assert data["phase_goal"] == "Build widgets"
        assert data["has_research"] is False
        assert data["has_context"] is False
        assert data["has_plans"] is False
        assert data["plan_count"] == 0
        assert data["roadmap_plan_count"] is None

    def test_roadmap_plan_count(self, run, write_roadmap):
        write_roadmap(ROADMAP)
        assert run("init", "phase-op", "3")["roadmap_plan_count"] == 2

    def test_directory_wins(self, run, make_phase, write_roadmap):
        write_roadmap(ROADMAP)
        make_phase("03-api", "03-CONTEXT.md")

        data = run("init", "phase-op", "3")
        assert data["phase_dir"] == ".planning/phases/03-api"
        assert data["has_context"] is True
        assert data["context_path"] == ".planning/phases/03-api/03-CONTEXT.md"
        assert data["phase_req_ids"] == "CP-01, CP-02"

    def test_not_found_anywhere(self, run, write_roadmap):
        write_roadmap(ROADMAP)
        data = run("init", "phase-op", "42")
        assert data["phase_found"] is False
        assert data["phase_dir"] is None

    def test_brave_search(self, run, write_config):
        write_config({"brave_search": True})
        assert run("init", "phase-op", "1")["brave_search"] is True


class TestVerifyWork:
    """init verify-work."""

    def test_record(self, run, make_phase):
        make_phase("03-api", "03-01-SUMMARY.md", "03-UAT.md")
        data = run("init", "verify-work", "3")
        assert data["phase_found"] is True
        assert data["has_uat"] is True
        assert data["has_verification"] is False
        assert data["uat_path"] == ".planning/phases/03-api/03-UAT.md"
        assert data["summaries"] == ["03-01-SUMMARY.md"]


class TestProgress:
    """init progress."""

    def test_phase_statuses(self, run, make_phase, write_roadmap):
        write_roadmap(ROADMAP)
        make_phase("01-setup", "01-01-PLAN.md", "01-01-SUMMARY.md")
        make_phase("02-auth", "02-01-PLAN.md")
        make_phase("03-api", "03-RESEARCH.md")
        make_phase("04-docs")

        data = run("init", "progress")
        statuses = {p["number"]: p["status"] for p in data["phases"]}
        assert statuses == {
            "01": "complete",
            "02": "in_progress",
            "03": "researched",
            "04": "pending",
        }
        assert data["phase_count"] == 4
        assert data["completed_count"] == 1
        assert data["in_progress_count"] == 1
        assert data["current_phase"]["number"] == "02"
        assert data["next_phase"]["number"] == "04"
        assert data["has_work_in_progress"] is True
        assert data["milestone_version"] == "v1.2"

    def test_empty(self, run):
        data = run("init", "progress")
        assert data["phases"] == []
        assert data["current_phase"] is None
        assert data["next_phase"] is None
        assert data["paused_at"] is None

    def test_paused_at(self, run, project):
        (project / ".planning" / "STATE.md").write_text("**Paused At:** Plan 02-01\n")
        assert run("init", "progress")["paused_at"] == "Plan 02-01"


class TestTodos:
    """init todos."""

    def _write(self, project, filename, content):
        pending = project / ".planning" / "todos" / "pending"
        pending.mkdir(parents=True, exist_ok=True)
        (pending / filename).write_text(content)

    def test_empty(self, run):
        data = run("init", "todos")
        assert data["todo_count"] == 0
        assert data["todos"] == []
        assert data["area_filter"] is None

    def test_lists_todos(self, run, project):
        self._write(project, "task-1.md", "title: Fix bug\narea: backend\ncreated: 2026-01-01\n")
        data = run("init", "todos")
        assert data["todo_count"] == 1
        assert data["todos"][0]["title"] == "Fix bug"
        assert data["todos"][0]["path"] == ".planning/todos/pending/task-1.md"
        assert data["pending_dir_exists"] is True

    def test_area_argument(self, run, project):
        self._write(project, "a.md", "title: A\narea: backend\n")
        self._write(project, "b.md", "title: B\narea: frontend\n")
        data = run("init", "todos", "backend")
        assert data["todo_count"] == 1
        assert data["area_filter"] == "backend"

    def test_date_fields(self, run):
        data = run("init", "todos")
        assert len(data["date"]) == 10
        assert data["timestamp"].endswith("Z")


class TestMilestoneOp:
    """init milestone-op."""

    def test_counts(self, run, project, make_phase, write_roadmap):
        write_roadmap(ROADMAP)
        make_phase("01-setup", "01-01-SUMMARY.md")
        make_phase("02-auth")
        (project / ".planning" / "archive" / "v1.0").mkdir(parents=True)

        data = run("init", "milestone-op")
        assert data["phase_count"] == 2
        assert data["completed_phases"] == 1
        assert data["all_phases_complete"] is False
        assert data["archived_milestones"] == ["v1.0"]
        assert data["archive_count"] == 1
        assert data["milestone_name"] == "Billing Suite"

    def test_all_complete(self, run, make_phase):
        make_phase("01-setup", "01-01-SUMMARY.md")
        assert run("init", "milestone-op")["all_phases_complete"] is True

    def test_no_phases(self, run):
        data = run("init", "milestone-op")
        assert data["phase_count"] == 0
        assert data["all_phases_complete"] is False


class TestResume:
    """init resume."""

    def test_interrupted_agent(self, run, project):
        (project / ".planning" / "current-agent-id.txt").write_text("agent-7\n")
        data = run("init", "resume")
        assert data["has_interrupted_agent"] is True
        assert data["interrupted_agent_id"] == "agent-7"

    def test_clean(self, run):
        data = run("init", "resume")
        assert data["has_interrupted_agent"] is False
        assert data["interrupted_agent_id"] is None
        assert data["planning_exists"] is True
        assert data["state_exists"] is False
