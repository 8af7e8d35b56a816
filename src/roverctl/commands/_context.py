"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``. The mission store is built lazily so ``--help``
and ``--version`` never touch the grid configuration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from roverctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from roverctl.config.settings import RoverSettings
    from roverctl.infrastructure.store import MissionStore
    from roverctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: RoverSettings) -> None:
        self.settings = settings
        self._store: MissionStore | None = None

        from roverctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from roverctl.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> MissionStore:
        """The in-memory mission store (created on first access)."""
        if self._store is None:
            from roverctl.infrastructure.store import MissionStore

            self._store = MissionStore.from_settings(self.settings)
        return self._store

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def show(self, result: ServiceResult) -> None:
        """Write a result without ending the process.

        Successes go to stdout, failures to stderr. Warnings go to stderr
        unless they are already part of the JSON payload.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)

    def emit(self, result: ServiceResult) -> None:
        """Write a result with exit semantics: a failure exits with code 1."""
        self.show(result)
        if not result.ok:
            raise SystemExit(1)
