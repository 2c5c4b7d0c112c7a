"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds services from settings and centralizes
result emission (stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from temporal_constraints.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from temporal_constraints.config.settings import TcSettings
    from temporal_constraints.services.check import CheckService
    from temporal_constraints.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: TcSettings) -> None:
        self.settings = settings

        from temporal_constraints.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from temporal_constraints.services.telemetry import enable_telemetry

            enable_telemetry()

    def check_service(self) -> CheckService:
        """A CheckService configured from ``[zones]`` and ``[messages]``.

        Raises:
            click.ClickException: If ``zones.system`` is not a valid zone id.
        """
        from temporal_constraints.domain.errors import ConfigurationError
        from temporal_constraints.services.check import CheckService

        try:
            system_zone = self.settings.zones.system_zone()
        except ConfigurationError as exc:
            msg = f"Invalid [zones] system setting: {exc}"
            raise click.ClickException(msg) from exc
        return CheckService(
            system_zone=system_zone,
            message_overrides=self.settings.messages.overrides,
        )

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure, including a violated constraint: writes to stderr,
          exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
