"""AppContext — the object behind ``@click.pass_obj``.

Built once by the root group.  It applies logging and telemetry
settings, opens the backend on demand, hands out services, and turns a
ServiceResult into output plus an exit code.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from hasoneproduct.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from hasoneproduct.config.settings import RuleSettings
    from hasoneproduct.infrastructure.backend import Backend
    from hasoneproduct.services.lifecycle import LifecycleService
    from hasoneproduct.services.requirement import RequirementService
    from hasoneproduct.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by every subcommand.

    Nothing touches the database until :attr:`backend` is first read, so
    ``--help``, ``--version`` and ``--examples`` stay side-effect free.
    """

    def __init__(self, settings: RuleSettings) -> None:
        from hasoneproduct.config.logging import configure_logging
        from hasoneproduct.services.telemetry import enable_telemetry

        self.settings = settings
        self._backend: Backend | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        if settings.verbose:
            enable_telemetry()

    @property
    def backend(self) -> Backend:
        if self._backend is None:
            from hasoneproduct.infrastructure.backend import Backend

            self._backend = Backend(self.settings)
        return self._backend

    def requirement_service(self) -> RequirementService:
        from hasoneproduct.services.requirement import RequirementService

        return RequirementService(self.backend)

    def lifecycle_service(self) -> LifecycleService:
        from hasoneproduct.services.lifecycle import LifecycleService

        return LifecycleService(self.backend)

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def close(self) -> None:
        """Release the backend; registered with ``ctx.call_on_close``."""
        if self._backend is not None:
            self._backend.close()
            self._backend = None

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exit with status 1 if it is a failure.

        Successful output goes to stdout.  Failures and, outside JSON
        mode, warnings go to stderr.
        """
        output_settings = self.output_settings
        rendered = format_result(result, settings=output_settings)
        if not result.ok:
            click.echo(rendered, err=True)
            raise SystemExit(1)

        click.echo(rendered)
        if output_settings.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
