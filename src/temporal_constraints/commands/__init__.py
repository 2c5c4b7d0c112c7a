"""Subcommand modules for temporal-constraints.

``register_commands()`` uses deferred imports so ``--help`` does not
load the validator catalog.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from temporal_constraints.commands.check import check
    from temporal_constraints.commands.constraints import constraints

    cli.add_command(check)
    cli.add_command(constraints)
