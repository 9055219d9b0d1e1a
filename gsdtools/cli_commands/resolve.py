"""
Resolve Commands - Single lookups.

Commands:
- resolve-model: Model for an agent type under the project's config
- find-phase: Phase directory for a phase number or name
- roadmap-phase: ROADMAP.md section for a phase number
- generate-slug: Directory-safe slug for a title
- config-get: One resolved config value
"""

import sys
from pathlib import Path

import click

from gsdtools.cli_commands import echo_json


def register(cli):
    """Register resolve commands with CLI."""

    @cli.command("resolve-model")
    @click.argument("agent_type")
    @click.option("--raw", is_flag=True, help="Print only the model name")
    @click.pass_obj
    def resolve_model_cmd(project: Path, agent_type: str, raw: bool):
        """Resolve the model for AGENT_TYPE.

        Overrides in config.json beat the profile; "opus" is reported as
        "inherit".

        \b
        Examples:
            gsd-tools resolve-model gsd-planner
            gsd-tools resolve-model gsd-executor --raw
        """
        from gsdtools.core.config import load_config
        from gsdtools.core.models import AGENT_TYPES, resolve_model

        config = load_config(project)
        model = resolve_model(project, agent_type, config=config)
        if raw:
            echo_json(model, raw=True)
            return

        result = {"model": model, "profile": config.model_profile}
        if agent_type not in AGENT_TYPES:
            result["unknown_agent"] = True
        echo_json(result)

    @cli.command("find-phase")
    @click.argument("phase")
    @click.pass_obj
    def find_phase_cmd(project: Path, phase: str):
        """Find the directory for PHASE (number or name).

        \b
        Examples:
            gsd-tools find-phase 3
            gsd-tools find-phase api
        """
        from gsdtools.core.phases import find_phase

        info = find_phase(project, phase)
        if info is None:
            echo_json({"found": False, "directory": None, "phase_number": None,
                       "phase_name": None, "plans": [], "summaries": []})
            return
        echo_json(info.to_dict())

    @cli.command("roadmap-phase")
    @click.argument("phase")
    @click.pass_obj
    def roadmap_phase_cmd(project: Path, phase: str):
        """Show the ROADMAP.md section for PHASE."""
        from gsdtools.core.roadmap import get_roadmap_phase

        entry = get_roadmap_phase(project, phase)
        if entry is None:
            echo_json({"found": False, "phase_number": phase})
            return
        echo_json(entry.to_dict())

    @cli.command("generate-slug")
    @click.argument("text")
    @click.option("--raw", is_flag=True, help="Print only the slug")
    def generate_slug_cmd(text: str, raw: bool):
        """Turn TEXT into a directory-safe slug."""
        from gsdtools.core.text import generate_slug

        slug = generate_slug(text)
        echo_json(slug if raw else {"slug": slug}, raw=raw)

    @cli.command("config-get")
    @click.argument("key")
    @click.option("--raw", is_flag=True, help="Print only the value")
    @click.pass_obj
    def config_get_cmd(project: Path, key: str, raw: bool):
        """Print one resolved config value.

        \b
        Examples:
            gsd-tools config-get model_profile
            gsd-tools config-get model_overrides.gsd-executor --raw
        """
        from gsdtools.core.config import get_config_value, load_config

        config = load_config(project)
        if key.partition(".")[0] not in config.to_dict():
            click.echo(f"Error: Unknown config key '{key}'", err=True)
            sys.exit(1)

        echo_json(get_config_value(config, key), raw=raw)
