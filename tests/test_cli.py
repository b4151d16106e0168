"""Tests for the root countryws CLI."""

import pytest
from click.testing import CliRunner

from countryws import __version__
from countryws.cli import cli


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "countryws" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


# --- Global flags ---


@pytest.mark.parametrize(
    "flags",
    [
        ["--json"],
        ["-q"],
        ["-v"],
        ["--log-json"],
        ["-c", "/tmp/missing.toml"],
        ["--db", "countries.db"],
        ["--backend", "memory"],
    ],
)
def test_global_flags_accepted(cli_runner: CliRunner, flags: list[str]) -> None:
    result = cli_runner.invoke(cli, [*flags, "--version"])
    assert result.exit_code == 0


def test_unknown_backend_rejected(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--backend", "postgres", "country", "count"])
    assert result.exit_code == 2


# --- Commands registered ---


@pytest.mark.parametrize("name", ["country", "init", "soap", "serve"])
def test_command_registered(cli_runner: CliRunner, name: str) -> None:
    assert name in cli.commands
    result = cli_runner.invoke(cli, [name, "--help"])
    assert result.exit_code == 0


@pytest.mark.parametrize(
    "name", ["get", "capital", "list", "above", "stats", "count", "add", "update", "delete"]
)
def test_country_subcommands(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, ["country", name, "--help"])
    assert result.exit_code == 0
