"""Unit tests for console formatting helpers."""

import logging

import pytest
from hdfsprune.utils.formatting import print_command, print_error, setup_logging


class TestPrintCommand:
    """Tests for print_command."""

    def test_prints_verbatim(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Brackets and quotes are not treated as markup."""
        print_command("hadoop fs -rm '/tmp/[bold]x'")

        assert "hadoop fs -rm '/tmp/[bold]x'" in capsys.readouterr().out


class TestPrintError:
    """Tests for print_error."""

    def test_goes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Errors are printed on stderr with a prefix."""
        print_error("boom")

        captured = capsys.readouterr()
        assert "Error:" in captured.err
        assert "boom" in captured.err
        assert captured.out == ""


class TestSetupLogging:
    """Tests for setup_logging."""

    def teardown_method(self) -> None:
        logging.getLogger().setLevel(logging.WARNING)

    def test_default_level(self) -> None:
        setup_logging()
        assert logging.getLogger().level == logging.WARNING

    def test_verbose(self) -> None:
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG

    def test_quiet(self) -> None:
        setup_logging(quiet=True)
        assert logging.getLogger().level == logging.ERROR

    def test_verbose_wins_over_quiet(self) -> None:
        setup_logging(verbose=True, quiet=True)
        assert logging.getLogger().level == logging.DEBUG


class TestPrintErrorEscaping:
    """User text in errors is never parsed as markup."""

    def test_regex_brackets_survive(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_error("invalid include regex '[a-z'")

        assert "[a-z" in capsys.readouterr().err
