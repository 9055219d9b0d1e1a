"""
Init Commands - One-shot context records for GSD workflows.

Commands:
- init execute-phase <phase>
- init plan-phase <phase>
- init phase-op <phase>
- init verify-work <phase>
- init progress
- init todos [area]
- init milestone-op
- init resume
"""

from pathlib import Path

import click

from gsdtools.cli_commands import echo_json
from gsdtools.commands import init as init_records


def register(cli):
    """Register the init group with CLI."""

    @cli.group("init")
    def init_group():
        """Gather everything a workflow needs in one JSON record.

        \b
            init execute-phase <phase>  - Plans to run, models, branch
            init plan-phase <phase>     - Phase files, planner models
            init phase-op <phase>       - Phase files (roadmap fallback)
            init verify-work <phase>    - Verification state
            init progress               - Status of every phase
            init todos [area]           - Pending todos
            init milestone-op           - Phase completion, archives
            init resume                 - Interrupted session state
        """
        pass

    @init_group.command("execute-phase")
    @click.argument("phase")
    @click.pass_obj
    def execute_phase_cmd(project: Path, phase: str):
        """Context for executing PHASE's plans.

        \b
        Example:
            gsd-tools init execute-phase 3
        """
        echo_json(init_records.init_execute_phase(project, phase))

    @init_group.command("plan-phase")
    @click.argument("phase")
    @click.pass_obj
    def plan_phase_cmd(project: Path, phase: str):
        """Context for planning PHASE."""
        echo_json(init_records.init_plan_phase(project, phase))

    @init_group.command("phase-op")
    @click.argument("phase")
    @click.pass_obj
    def phase_op_cmd(project: Path, phase: str):
        """Context for a generic operation on PHASE.

        Falls back to the ROADMAP.md entry when the phase has no
        directory yet.
        """
        echo_json(init_records.init_phase_op(project, phase))

    @init_group.command("verify-work")
    @click.argument("phase")
    @click.pass_obj
    def verify_work_cmd(project: Path, phase: str):
        """Context for verifying PHASE's delivered work."""
        echo_json(init_records.init_verify_work(project, phase))

    @init_group.command("progress")
    @click.pass_obj
    def progress_cmd(project: Path):
        """Status of every phase in the current milestone."""
        echo_json(init_records.init_progress(project))

    @init_group.command("todos")
    @click.argument("area", required=False)
    @click.pass_obj
    def todos_cmd(project: Path, area: str):
        """Pending todos, optionally only those in AREA.

        \b
        Examples:
            gsd-tools init todos
            gsd-tools init todos backend
        """
        echo_json(init_records.init_todos(project, area))

    @init_group.command("milestone-op")
    @click.pass_obj
    def milestone_op_cmd(project: Path):
        """Phase completion and archived milestones."""
        echo_json(init_records.init_milestone_op(project))

    @init_group.command("resume")
    @click.pass_obj
    def resume_cmd(project: Path):
        """State left behind by the previous session."""
        echo_json(init_records.init_resume(project))
