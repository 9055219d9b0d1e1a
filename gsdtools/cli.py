"""
gsd-tools CLI - Resolution helper for GSD planning workflows.

Every command prints one JSON record on stdout. Agents call it instead of
globbing and grepping .planning/ themselves.

Commands:
- init <workflow>: Everything a workflow needs in one record
- resolve-model: Model for an agent type
- find-phase / roadmap-phase: Phase lookup
- generate-slug: Directory-safe slug for a title
- config-get: One resolved config value
"""

import logging
import sys
from pathlib import Path

import click

from gsdtools import __version__
from gsdtools.cli_commands import register_all


@click.group()
@click.version_option(version=__version__)
@click.option("--cwd", "project", default=".", type=click.Path(file_okay=False),
              help="Project root containing .planning/ (default: current directory)")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging on stderr")
@click.pass_context
def cli(ctx: click.Context, project: str, verbose: bool):
    """gsd-tools - Resolve phases, models and todos for GSD workflows."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )
    ctx.obj = Path(project)


register_all(cli)


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
