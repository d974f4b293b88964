"""Unit tests for the rules CLI commands."""

from hdfsprune.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestRulesList:
    """Tests for 'hdfsprune rules list'."""

    def test_lists_all_rules(self) -> None:
        result = runner.invoke(app, ["rules", "list"])

        assert result.exit_code == 0
        assert "Safety Exclusions" in result.stdout
        assert "trash" in result.stdout
        assert "hive-warehouse" in result.stdout


class TestRulesCheck:
    """Tests for 'hdfsprune rules check'."""

    def test_protected_path(self) -> None:
        result = runner.invoke(app, ["rules", "check", "/user/a/.Trash/x"])

        assert result.exit_code == 0
        assert "protected" in result.stdout
        assert "trash" in result.stdout

    def test_prunable_path(self) -> None:
        result = runner.invoke(app, ["rules", "check", "/tmp/x.log"])

        assert result.exit_code == 0
        assert "prunable" in result.stdout

    def test_requires_path(self) -> None:
        result = runner.invoke(app, ["rules", "check"])

        assert result.exit_code != 0
