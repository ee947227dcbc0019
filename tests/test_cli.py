"""
Tests for cli.py — commands, exit codes, output routing.

Covers:
- Each PericopeError subtype maps to its own exit code
- Error messages go to stderr with an "Error:" prefix
- Output of every command on worked examples
- PERICOPE_FORMAT default and --full-name override
"""
import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from pericope.cli import (
    EXIT_INVALID_BOOK,
    EXIT_INVALID_CHAPTER,
    EXIT_INVALID_RANGE,
    EXIT_INVALID_VERSE,
    EXIT_PARSE_FAILURE,
    app,
)
from pericope.errors import PericopeError

runner = CliRunner()


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    @pytest.mark.parametrize(
        "reference, code",
        [
            ("Maccabees 1:1", EXIT_INVALID_BOOK),
            ("GEN 51:1", EXIT_INVALID_CHAPTER),
            ("GEN 1:32", EXIT_INVALID_VERSE),
            ("GEN 1:a", EXIT_PARSE_FAILURE),
            ("GEN 1:5-3", EXIT_INVALID_RANGE),
        ],
    )
    def test_error_kind_exit_code(self, reference, code):
        result = runner.invoke(app, ["show", reference])
        assert result.exit_code == code

    def test_base_error_exit_code_1(self):
        with patch("pericope.cli.Pericope.from_reference", side_effect=PericopeError("boom")):
            result = runner.invoke(app, ["show", "GEN 1:1"])
        assert result.exit_code == 1

    def test_success_exit_code_0(self):
        assert runner.invoke(app, ["show", "GEN 1:1"]).exit_code == 0

    def test_error_message_in_output(self):
        # CliRunner mixes stderr into output by default
        result = runner.invoke(app, ["show", "GEN 1:32"])
        assert "Error:" in result.output
        assert "1:32" in result.output

    def test_errors_from_second_operand(self):
        result = runner.invoke(app, ["combine", "union", "GEN 1:1", "GEN 99:1"])
        assert result.exit_code == EXIT_INVALID_CHAPTER


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------

class TestShow:
    def test_canonical(self):
        result = runner.invoke(app, ["show", "Genesis 1:1-3"])
        assert result.output.splitlines()[0] == "GEN 1:1-3"
        assert "verses:   3" in result.output

    def test_full_name_flag(self):
        result = runner.invoke(app, ["show", "GEN 1:1-3", "--full-name"])
        assert result.output.splitlines()[0] == "Genesis 1:1-3"

    def test_format_from_env(self, monkeypatch):
        monkeypatch.setenv("PERICOPE_FORMAT", "full_name")
        result = runner.invoke(app, ["show", "MAT 5:3"])
        assert result.output.splitlines()[0] == "Matthew 5:3"

    def test_unknown_format_env_warns(self, monkeypatch):
        monkeypatch.setenv("PERICOPE_FORMAT", "fancy")
        result = runner.invoke(app, ["show", "MAT 5:3"])
        assert result.exit_code == 0
        assert "[WARN]" in result.output
        assert "MAT 5:3" in result.output

    def test_json(self):
        result = runner.invoke(app, ["show", "GEN 1:1-31", "--json"])
        data = json.loads(result.output)
        assert data["reference"] == "GEN 1:1-31"
        assert data["verse_count"] == 31
        assert data["density"] == 1.0


# ---------------------------------------------------------------------------
# Other commands
# ---------------------------------------------------------------------------

class TestCommands:
    def test_scan(self):
        result = runner.invoke(app, ["scan", "See GEN 1:1 and MAT 5:3-12 for examples"])
        assert result.output.splitlines() == ["GEN 1:1", "MAT 5:3-12"]

    def test_suggest(self):
        result = runner.invoke(app, ["suggest", "John 3"])
        assert result.output.splitlines() == ["John 3:"]

    @pytest.mark.parametrize(
        "operation, expected",
        [
            ("union", "GEN 1:1-15"),
            ("intersection", "GEN 1:5-10"),
            ("subtract", "GEN 1:1-4"),
        ],
    )
    def test_combine(self, operation, expected):
        result = runner.invoke(app, ["combine", operation, "GEN 1:1-10", "GEN 1:5-15"])
        assert result.output.strip() == expected

    def test_combine_other_book_warns(self):
        result = runner.invoke(app, ["combine", "intersection", "GEN 1:1", "EXO 1:1"])
        assert result.exit_code == 0
        assert "[WARN]" in result.output
        assert "(empty)" in result.output

    def test_combine_unknown_operation(self):
        result = runner.invoke(app, ["combine", "xor", "GEN 1:1", "GEN 1:2"])
        assert result.exit_code != 0

    def test_complement_with_scope(self):
        result = runner.invoke(app, ["complement", "GEN 1:3-5", "--scope", "GEN 1:1-10"])
        assert result.output.strip() == "GEN 1:1-2,1:6-10"

    def test_expand(self):
        result = runner.invoke(app, ["expand", "GEN 2:1", "--before", "1", "--after", "2"])
        assert result.output.strip() == "GEN 1:31-2:3"

    def test_expand_rejects_negative(self):
        result = runner.invoke(app, ["expand", "GEN 2:1", "--before", "-1"])
        assert result.exit_code != 0

    def test_contract(self):
        result = runner.invoke(app, ["contract", "GEN 1:1-10", "--start", "2", "--end", "3"])
        assert result.output.strip() == "GEN 1:3-7"

    def test_gaps(self):
        result = runner.invoke(app, ["gaps", "GEN 1:1,3,5"])
        assert result.output.splitlines() == ["GEN 1:2", "GEN 1:4"]

    def test_split(self):
        result = runner.invoke(app, ["split", "GEN 1:1-3,5-7,10"])
        assert result.output.splitlines() == ["GEN 1:1-3", "GEN 1:5-7", "GEN 1:10"]
