"""init — create the country table and load the seed countries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from countryws.commands._base import CountryCommand

if TYPE_CHECKING:
    from countryws.commands._context import AppContext


@click.command(
    "init",
    cls=CountryCommand,
    examples="""\
  # Create countryws.db in the current directory and seed it
  countryws init

  # Schema only
  countryws init --no-seed

  # Somewhere else
  countryws --db /var/lib/countryws/countries.db init""",
)
@click.option("--no-seed", is_flag=True, help="Create the schema without loading seed data.")
@click.pass_obj
def init_cmd(app: AppContext, no_seed: bool) -> None:
    """Create the store and load the 20 seed countries if it is empty."""
    from countryws.infrastructure.repositories import open_repository
    from countryws.services.bootstrap import seed_if_empty
    from countryws.services.result import ServiceResult

    repository = open_repository(app.settings)
    try:
        if no_seed:
            result = ServiceResult(
                ok=True, op="seed", data={"seeded": 0, "count": repository.count()}
            )
        else:
            result = seed_if_empty(repository)
    finally:
        repository.close()
    app.emit(result)
