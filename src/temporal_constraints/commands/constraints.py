"""Command: list the constraint catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from temporal_constraints.commands._base import TcCommand

if TYPE_CHECKING:
    from temporal_constraints.commands._context import AppContext


@click.command(
    cls=TcCommand,
    examples="""\
  temporal-constraints constraints
  temporal-constraints constraints MonthIn
  temporal-constraints -v constraints
  temporal-constraints -q constraints
  temporal-constraints --json constraints DateMinAfter""",
)
@click.argument("name", required=False)
@click.pass_obj
def constraints(app: AppContext, name: str | None) -> None:
    """List constraints and the kinds they support (or show NAME)."""
    app.emit(app.check_service().list_constraints(name))
