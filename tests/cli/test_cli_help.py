from typer.testing import CliRunner
from dirhash.cli.app import app

runner = CliRunner()

def test_cli_help_runs():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "Usage" in result.stdout


def test_hash_help_lists_options():
    result = runner.invoke(app, ["hash", "--help"])
    assert result.exit_code == 0
    for opt in ("--hash-algo", "--squash", "--follow-symlink", "--ignore-dot-dir"):
        assert opt in result.stdout
