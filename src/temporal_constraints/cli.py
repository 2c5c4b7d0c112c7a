"""Root CLI group for temporal-constraints with global flags and command registration."""

from __future__ import annotations

import click

from temporal_constraints import __version__
from temporal_constraints.commands import register_commands
from temporal_constraints.commands._base import TcGroup
from temporal_constraints.commands._context import AppContext
from temporal_constraints.config.settings import TcSettings


@click.group(
    cls=TcGroup,
    invoke_without_command=True,
    examples="""\
  temporal-constraints constraints
  temporal-constraints check Before 2024-01-01 --kind local_date --moment now
  temporal-constraints -c ./temporal-constraints.toml check MonthIs 2024-05 --kind year_month --value MAY""",
)
@click.version_option(version=__version__, prog_name="temporal-constraints")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug logs and timings.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """temporal-constraints — validate temporal values against declarative constraints."""
    ctx.ensure_object(dict)
    settings = TcSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
