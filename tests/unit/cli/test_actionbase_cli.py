"""Tests for the actionbase command line interface."""

from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from actionbase.cli import cli


def _settings(**overrides):
    settings = MagicMock()
    settings.host = "0.0.0.0"
    settings.port = 8000
    settings.workers = 2
    settings.log_level = "INFO"
    settings.environment = "testing"
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def test_serve_runs_app_factory():
    runner = CliRunner()

    with patch("actionbase.cli.get_settings", return_value=_settings()), \
         patch("actionbase.cli.configure_logging"), \
         patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    args, kwargs = mock_run.call_args
    assert args == ("actionbase.infrastructure.api.app:create_app",)
    assert kwargs["factory"] is True
    assert kwargs["port"] == 9000
    assert kwargs["workers"] == 2
    assert kwargs["log_level"] == "info"


def test_serve_reload_forces_single_worker():
    runner = CliRunner()

    with patch("actionbase.cli.get_settings", return_value=_settings()), \
         patch("actionbase.cli.configure_logging"), \
         patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--reload"])

    assert result.exit_code == 0
    assert mock_run.call_args.kwargs["workers"] == 1


def test_init_db_aborts_without_confirmation():
    runner = CliRunner()

    with patch("actionbase.cli.configure_logging"), \
         patch("actionbase.infrastructure.persistence.database.init_database") as mock_init:
        result = runner.invoke(cli, ["init-db"], input="n\n")

    assert result.exit_code == 1
    mock_init.assert_not_called()


def test_info_shows_configuration():
    runner = CliRunner()

    result = runner.invoke(cli, ["info"])

    assert result.exit_code == 0
    assert "ActionBase v" in result.output
    assert "Fan-out:" in result.output
