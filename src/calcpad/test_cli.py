"""
Tests for the command-line interface.
"""

from typer.testing import CliRunner

from calcpad.cli import app, split_keys

runner = CliRunner()


class TestSplitKeys:

    def test_characters(self):
        assert split_keys("12+3=") == ["1", "2", "+", "3", "="]

    def test_named_keys_kept_whole(self):
        assert split_keys("5 * 2 Enter") == ["5", "*", "2", "Enter"]

    def test_memory_buttons(self):
        assert split_keys("M+ 3 MR") == ["M+", "3", "MR"]

    def test_blank_line(self):
        assert split_keys("   ") == []


class TestPressCommand:

    def test_prints_result_and_history(self):
        result = runner.invoke(app, ["press", "1", "+", "2", "Enter"])
        assert result.exit_code == 0
        assert "3" in result.output
        assert "1+2 = 3" in result.output

    def test_subtraction_key(self):
        result = runner.invoke(app, ["press", "9", "-", "4", "="])
        assert result.exit_code == 0
        assert "9-4 = 5" in result.output

    def test_error_display(self):
        result = runner.invoke(app, ["press", "8", "/", "0", "Enter"])
        assert result.exit_code == 0
        assert "Error" in result.output

    def test_unknown_key(self):
        result = runner.invoke(app, ["press", "1", "x"])
        assert result.exit_code == 1
        assert "Unknown key: x" in result.output

    def test_log_level_option(self):
        result = runner.invoke(app, ["--log-level", "WARNING", "press", "5"])
        assert result.exit_code == 0


class TestReplCommand:

    def test_evaluates_lines(self):
        result = runner.invoke(app, ["repl"], input="12+3=\nquit\n")
        assert result.exit_code == 0
        assert "15" in result.output

    def test_history_command(self):
        result = runner.invoke(app, ["repl"], input="2*3 Enter\nhistory\nexit\n")
        assert result.exit_code == 0
        assert "2*3 = 6" in result.output

    def test_ends_on_eof(self):
        result = runner.invoke(app, ["repl"], input="7\n")
        assert result.exit_code == 0
        assert "7" in result.output
