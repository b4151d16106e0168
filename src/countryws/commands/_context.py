"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. The repository is opened lazily so ``--help`` and
``--version`` never touch storage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from countryws.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from countryws.config.settings import CountrySettings
    from countryws.services.lookup import LookupService
    from countryws.services.ports import CountryRepository
    from countryws.services.result import ServiceResult
    from countryws.soap.endpoint import CountryEndpoint


class AppContext:
    """Shared state flowing through Click's command hierarchy."""

    def __init__(self, settings: CountrySettings) -> None:
        self.settings = settings
        self._repository: CountryRepository | None = None

        from countryws.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def repository(self) -> CountryRepository:
        """The configured backend, seeded on first open when enabled."""
        if self._repository is None:
            from countryws.infrastructure.repositories import open_repository
            from countryws.services.bootstrap import seed_if_empty

            self._repository = open_repository(self.settings)
            if self.settings.storage.seed_on_start:
                seed_if_empty(self._repository)
        return self._repository

    @property
    def service(self) -> LookupService:
        from countryws.services.lookup import LookupService

        return LookupService(self.repository)

    def endpoint(self, *, pretty: bool | None = None) -> CountryEndpoint:
        from countryws.soap.endpoint import CountryEndpoint

        return CountryEndpoint(
            self.service,
            namespace=self.settings.soap.namespace,
            pretty=self.settings.soap.pretty if pretty is None else pretty,
        )

    def close(self) -> None:
        if self._repository is not None:
            self._repository.close()
            self._repository = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr outside JSON mode.
        * Failure: stderr and exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
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
