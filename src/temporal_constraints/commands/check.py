"""Command: validate one value against one constraint."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

import click

from temporal_constraints.commands._base import TcCommand
from temporal_constraints.domain.types import TemporalKind

if TYPE_CHECKING:
    from temporal_constraints.commands._context import AppContext


def _parse_now(_ctx: click.Context, _param: click.Parameter, value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        msg = f"{value!r} is not an ISO-8601 date-time"
        raise click.BadParameter(msg) from exc


def _coerce_values(values: tuple[str, ...]) -> Any:
    """Numbers become ints; a single ``--value`` is a scalar, several are a list."""
    coerced = [int(v) if v.lstrip("+-").isdigit() else v for v in values]
    if not coerced:
        return None
    return coerced[0] if len(coerced) == 1 else coerced


@click.command(
    cls=TcCommand,
    examples="""\
  temporal-constraints check DateNotBefore 2007-12-03T10:15:30 --kind local_date_time --moment 2007-12-03
  temporal-constraints check Before 2024-01-01T00:00:00Z --kind instant --moment now
  temporal-constraints check TimeMinBefore 2024-05-01T10:00:00Z --kind offset_date_time \\
      --moment now --duration PT1H --zone-id UTC --now 2024-05-01T12:00:00Z
  temporal-constraints check MonthIn 2020-06 --kind year_month --value JANUARY --value JUNE
  temporal-constraints check MinuteModulo 2024-05-01T10:45:00 --kind local_date_time \\
      --value 0 --modulo 15
  temporal-constraints --json check DayOfWeekNotAfter THURSDAY --kind day_of_week --value WEDNESDAY""",
)
@click.argument("constraint")
@click.argument("value")
@click.option(
    "--kind",
    "kind",
    required=True,
    type=click.Choice([kind.value for kind in TemporalKind]),
    help="Temporal kind of VALUE.",
)
@click.option("--moment", default=None, help='ISO-8601 literal of the kind, or "now".')
@click.option("--duration", default=None, help="ISO-8601 duration (Min/Max constraints).")
@click.option(
    "--zone-id",
    default="system",
    show_default=True,
    help='"system", "provided", or a zone id.',
)
@click.option(
    "--value",
    "values",
    multiple=True,
    help="Boundary or allowed value; repeat for lists.",
)
@click.option("--modulo", type=int, default=None, help="Divisor for MinuteModulo.")
@click.option("--message", default=None, help="Custom message template.")
@click.option(
    "--now",
    default=None,
    callback=_parse_now,
    help="Pin the clock to this ISO-8601 date-time.",
)
@click.pass_obj
def check(
    app: AppContext,
    constraint: str,
    value: str,
    kind: str,
    moment: str | None,
    duration: str | None,
    zone_id: str,
    values: tuple[str, ...],
    modulo: int | None,
    message: str | None,
    now: datetime | None,
) -> None:
    """Check VALUE against CONSTRAINT."""
    from temporal_constraints.services.contracts import ConstraintConfig

    config = ConstraintConfig(
        message=message,
        moment=moment,
        duration=duration,
        zone_id=zone_id,
        value=_coerce_values(values),
        modulo=modulo,
    )

    app.emit(app.check_service().check(constraint, kind, value, config, now=now))
