# tests/cli/test_cli_help.py
from typer.testing import CliRunner

from ffsearch.cli.app import app

runner = CliRunner()


def test_help_lists_search_flags():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for flag in ("--file", "--string", "--hex", "--meta", "--links", "--depth", "--global"):
        assert flag in result.stdout
