"""Tests for main CLI module."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from kube_account_validator.cli.main import app


@pytest.fixture
def mock_configure_logging() -> Generator[MagicMock]:
    """Keep the CLI callback from reconfiguring global logging."""
    with patch("kube_account_validator.cli.main.configure_logging") as mock:
        yield mock


class TestCLIMain:
    """Test main CLI entry point."""

    @pytest.mark.unit
    def test_help_option(self, cli_runner: CliRunner) -> None:
        """Test --help option displays help text."""
        result = cli_runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Validate Kubernetes account credentials" in result.stdout
        assert "validate" in result.stdout

    @pytest.mark.unit
    def test_version_option(self, cli_runner: CliRunner) -> None:
        """Test --version option displays version."""
        result = cli_runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "kav version" in result.stdout

    @pytest.mark.unit
    def test_logging_flags(
        self, cli_runner: CliRunner, mock_configure_logging: MagicMock, tmp_path: Path
    ) -> None:
        """Test global flags are passed to logging configuration."""
        accounts = tmp_path / "accounts.yaml"
        accounts.write_text("[]")
        log_file = tmp_path / "kav.log"

        result = cli_runner.invoke(
            app,
            ["--debug", "--json-logs", "--log-file", str(log_file), "validate", str(accounts)],
        )

        assert result.exit_code == 0
        mock_configure_logging.assert_called_once_with(
            verbose=False, debug=True, json_output=True, log_file=log_file
        )

    @pytest.mark.unit
    def test_default_logging(
        self, cli_runner: CliRunner, mock_configure_logging: MagicMock, tmp_path: Path
    ) -> None:
        """Test default logging configuration."""
        accounts = tmp_path / "accounts.yaml"
        accounts.write_text("[]")

        result = cli_runner.invoke(app, ["validate", str(accounts)])

        assert result.exit_code == 0
        mock_configure_logging.assert_called_once_with(
            verbose=False, debug=False, json_output=False, log_file=None
        )
