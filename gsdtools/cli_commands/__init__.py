"""
gsd-tools CLI commands.

Each submodule has a `register(cli)` function that adds its commands to
the click group.

Structure:
    cli_commands/
    ├── __init__.py      # This file - registration, JSON output
    ├── init_cmd.py      # init execute-phase|plan-phase|phase-op|verify-work|
    │                    #      progress|todos|milestone-op|resume
    └── resolve.py       # resolve-model, find-phase, roadmap-phase,
                         # generate-slug, config-get
"""

import json
from typing import Any

import click


def echo_json(data: Any, raw: bool = False) -> None:
    """Print a result record as JSON, or a bare scalar with --raw."""
    if raw and not isinstance(data, (dict, list)):
        if isinstance(data, bool):
            data = str(data).lower()
        click.echo("" if data is None else str(data))
        return
    click.echo(json.dumps(data, indent=2))


def register_all(cli: click.Group) -> None:
    """Register all command modules with the CLI group.

    Args:
        cli: The Click group to register commands with
    """
    from . import init_cmd
    from . import resolve

    init_cmd.register(cli)
    resolve.register(cli)
