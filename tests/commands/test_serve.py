"""Tests for ``countryws serve``."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from click.testing import CliRunner

import countryws.mcp.server as server_module
from countryws.cli import cli


@pytest.mark.usefixtures("_isolated_store")
class TestServeCommand:
    def test_missing_extra(self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(server_module, "mcp_available", False)
        result = cli_runner.invoke(cli, ["serve"])
        assert result.exit_code == 1
        assert "pip install countryws[mcp]" in result.output

    def test_runs_server_with_transport(
        self, cli_runner: CliRunner, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        fake_server = MagicMock()
        create = MagicMock(return_value=fake_server)
        monkeypatch.setattr(server_module, "mcp_available", True)
        monkeypatch.setattr(server_module, "create_server", create)

        result = cli_runner.invoke(
            cli, ["--backend", "memory", "serve", "--transport", "sse", "--port", "9100"]
        )

        assert result.exit_code == 0, result.output
        fake_server.run.assert_called_once_with(transport="sse")
        assert create.call_args.kwargs == {"host": "127.0.0.1", "port": 9100}
